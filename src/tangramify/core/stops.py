"""Expand zoom-dependent ``stops`` functions into per-zoom tables.

Tangram interpolates linearly between the rows it is given, so exponential
Mapbox functions are approximated by emitting one row per integer zoom
between each pair of breakpoints.
"""

from __future__ import annotations

from numbers import Real
from typing import Any, Callable, Optional

Transform = Callable[[Any], Any]

# Distance between emitted rows.  Smaller steps approximate steep curves more
# closely at the cost of longer tables.
ZOOM_STEP = 1


def exponential_factor(zoom: float, base: float, lower: float, upper: float) -> float:
    """Return the normalised interpolation factor of *zoom* in ``[lower, upper]``.

    The factor is ``0`` at *lower* and ``1`` at *upper*; ``base == 1`` is a
    plain linear ramp.  A zero-width interval contributes ``0``.
    """

    difference = upper - lower
    progress = zoom - lower
    if difference == 0:
        return 0
    if base == 1:
        return progress / difference
    return (base ** progress - 1) / (base ** difference - 1)


def is_zoom_function(value: Any) -> bool:
    """Return ``True`` when *value* is a ``{"stops": [...]}`` function."""

    return isinstance(value, dict) and isinstance(value.get("stops"), list)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def interpolate_stops(
    value: Any,
    transform: Optional[Transform] = None,
    no_interpolate: bool = False,
) -> Any:
    """Convert a literal or zoom function through *transform*.

    ``{"stops": [[12, 2], [16, 6]]}`` becomes
    ``[[12, t(2)], [13, t(3)], [14, t(4)], [15, t(5)], [16, t(6)]]``.

    Literals are returned as ``transform(value)``.  With *no_interpolate* only
    the first stop's value is kept, for properties the target cannot vary by
    zoom.  Stops holding non-numeric values are mapped one by one.
    """

    if transform is None:
        transform = _identity
    if value is None:
        return None
    if not is_zoom_function(value):
        return transform(value)

    stops = value["stops"]
    if not stops:
        return []
    if no_interpolate:
        return transform(stops[0][1])
    zooms = [stop[0] for stop in stops]
    values = [stop[1] for stop in stops]
    # Zoom-and-property stops key on objects, and colours or arrays cannot be
    # blended, so those are carried over one stop at a time.
    if not all(_is_number(item) for item in zooms + values):
        return [[zoom, transform(stop_value)] for zoom, stop_value in zip(zooms, values)]

    base = value.get("base") or 1
    rows: list[list[Any]] = []
    for index in range(len(stops) - 1):
        lower, upper = zooms[index], zooms[index + 1]
        start, end = values[index], values[index + 1]
        zoom = lower
        while zoom < upper:
            factor = exponential_factor(zoom, base, lower, upper)
            interpolated = round(start + (end - start) * factor, 2)
            rows.append([zoom, transform(interpolated)])
            zoom += ZOOM_STEP
    rows.append([zooms[-1], transform(values[-1])])
    return rows


def _identity(value: Any) -> Any:
    return value


# Operators of the newer expression syntax.  Values written with them are
# copied through untouched, which Tangram cannot interpret.
_EXPRESSION_OPERATORS = frozenset({
    "literal", "get", "has", "zoom", "step", "interpolate", "match", "case",
    "coalesce", "to-number", "to-string", "to-color", "concat", "format", "var", "let",
})


def is_unconvertible(value: Any) -> bool:
    """Return ``True`` for data-driven functions and expressions.

    Property and zoom-and-property functions carry a ``property`` key;
    expressions are arrays led by an operator name.
    """

    if isinstance(value, dict):
        return "property" in value
    if isinstance(value, list) and value and isinstance(value[0], str):
        return value[0] in _EXPRESSION_OPERATORS
    return False


__all__ = ["ZOOM_STEP", "exponential_factor", "interpolate_stops", "is_unconvertible", "is_zoom_function"]
