"""Declarative property rules and the value transforms they reference."""

from __future__ import annotations

import re
from dataclasses import dataclass
from numbers import Real
from typing import Any, Callable, Mapping, Optional

from ..config import MIN_DASH_LENGTH
from .stops import Transform, interpolate_stops

_FIELD_BRACES = re.compile(r"[{}]")
_ANCHOR_FLIPS = {"top": "bottom", "bottom": "top", "left": "right", "right": "left"}


@dataclass(frozen=True)
class PropertyRule:
    """How a single Mapbox property lands in a Tangram property bag."""

    target: str
    transform: Optional[Transform] = None
    no_interpolate: bool = False


def rule(target: str, transform: Optional[Transform] = None, no_interpolate: bool = False) -> PropertyRule:
    return PropertyRule(target=target, transform=transform, no_interpolate=no_interpolate)


def map_properties(bag: Mapping[str, Any], table: Mapping[str, PropertyRule]) -> tuple[dict[str, Any], set[str]]:
    """Convert the keys of *bag* recognised by *table*.

    Returns the converted bag together with the keys *table* knows about, so
    the caller can work out which source properties nothing handled.  When
    several source keys map to the same target the one encountered last in
    *bag* wins.
    """

    converted: dict[str, Any] = {}
    for key, value in bag.items():
        property_rule = table.get(key)
        if property_rule is None:
            continue
        converted[property_rule.target] = interpolate_stops(
            value, property_rule.transform, property_rule.no_interpolate
        )
    return converted, set(table)


# ---------------------------------------------------------------------------
# Value transforms
# ---------------------------------------------------------------------------

def format_number(value: Any) -> str:
    """Render *value* the way a JSON number would print, without ``.0``."""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def each(transform: Callable[[Any], Any]) -> Transform:
    """Lift a scalar *transform* so it also applies across arrays."""

    def apply(value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [transform(item) for item in value]
        return transform(value)

    return apply


def _suffix_px(value: Any) -> Any:
    if _is_number(value):
        return f"{format_number(value)}px"
    if isinstance(value, str):
        return f"{value}px"
    return value


# Pixel units, element-wise for arrays such as offsets.
px = each(_suffix_px)


def invert(value: Any) -> bool:
    return not value


def percent(value: Any) -> Any:
    """Express a scale factor such as ``0.5`` as ``"50%"``."""

    try:
        scaled = float(value) * 100
    except (TypeError, ValueError):
        return value
    return f"{format_number(round(scaled, 2))}%"


def square_buffer(value: Any) -> Any:
    """Expand a single padding value into an ``[x, y]`` pixel pair."""

    return [px(value), px(value)]


def flip_anchor(value: Any) -> Any:
    """Swap the vertical and horizontal keywords of an anchor.

    Mapbox anchors name the side of the label touching the point while
    Tangram anchors name the side of the point the label sits on, so
    ``top-left`` becomes ``bottom-right``.
    """

    if isinstance(value, list):
        return [flip_anchor(item) for item in value]
    if not isinstance(value, str):
        return value
    return "-".join(_ANCHOR_FLIPS.get(part, part) for part in value.split("-"))


def strip_field_template(value: Any) -> Any:
    """Turn a ``{name_en}`` template into a bare feature property name."""

    if not isinstance(value, str):
        return value
    return _FIELD_BRACES.sub("", value).replace("name_en", "name", 1)


def clamp_dash(value: Any) -> Any:
    """Raise zero-length dash segments, which Tangram cannot draw."""

    if not isinstance(value, (list, tuple)):
        return value
    return [max(length, MIN_DASH_LENGTH) if _is_number(length) else length for length in value]


def placement_mode(value: Any) -> str:
    return "vertex" if value == "point" else "spaced"


def is_visible(value: Any) -> bool:
    return value == "visible"


def is_map(value: Any) -> bool:
    return value == "map"


def rotation_angle(value: Any) -> Any:
    return "auto" if value == "map" else 0


__all__ = [
    "PropertyRule",
    "clamp_dash",
    "each",
    "flip_anchor",
    "format_number",
    "invert",
    "is_map",
    "is_visible",
    "map_properties",
    "percent",
    "placement_mode",
    "px",
    "rotation_angle",
    "rule",
    "square_buffer",
    "strip_field_template",
]
