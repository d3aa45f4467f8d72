"""Translate Mapbox filter expressions into Tangram filter objects."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from ..config import GEOMETRY_TYPES
from ..diagnostics import DiagnosticsCollector, report_or_log

GEOMETRY_KEY = "$geometry"
ZOOM_KEY = "$zoom"
_COMBINATORS = frozenset({"any", "all", "none"})
_LOGGER = logging.getLogger(__name__)


def _coerce(value: Any) -> Any:
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def _equals(key: str, values: list[Any]) -> dict[str, Any]:
    return {key: values[0]}


def _not_equals(key: str, values: list[Any]) -> dict[str, Any]:
    return {"not": {key: values[0]}}


def _in(key: str, values: list[Any]) -> dict[str, Any]:
    return {key: values}


def _not_in(key: str, values: list[Any]) -> dict[str, Any]:
    return {"not": {key: values}}


def _has(key: str, values: list[Any]) -> dict[str, Any]:
    return {key: True}


def _not_has(key: str, values: list[Any]) -> dict[str, Any]:
    return {key: False}


# Strict and inclusive bounds collapse onto the same Tangram range.
def _maximum(key: str, values: list[Any]) -> dict[str, Any]:
    return {key: {"max": values[0]}}


def _minimum(key: str, values: list[Any]) -> dict[str, Any]:
    return {key: {"min": values[0]}}


_COMPARISONS: dict[str, Callable[[str, list[Any]], dict[str, Any]]] = {
    "==": _equals,
    "!=": _not_equals,
    "in": _in,
    "!in": _not_in,
    "has": _has,
    "!has": _not_has,
    "<": _maximum,
    "<=": _maximum,
    ">": _minimum,
    ">=": _minimum,
}


def translate_filter(
    node: Optional[Sequence[Any]],
    diagnostics: Optional[DiagnosticsCollector] = None,
    layer_id: Optional[str] = None,
) -> Optional[dict[str, Any]]:
    """Recursively convert *node* into the Tangram filter form.

    ``["all", ["==", "class", "park"], ["$type", ...]]`` becomes
    ``{"all": [{"class": "park"}, ...]}``.  Unsupported operators are
    reported to *diagnostics* and yield an empty filter so the rest of the
    expression still converts.  A missing filter yields ``None``.
    """

    if not node:
        return None

    operator = node[0]
    if operator in _COMBINATORS:
        return {operator: [translate_filter(child, diagnostics, layer_id) for child in node[1:]]}

    comparison = _COMPARISONS.get(operator) if isinstance(operator, str) else None
    if comparison is None:
        report_or_log(diagnostics, layer_id, f"Unrecognised filter operator: {operator!r}", logger=_LOGGER)
        return {}
    if len(node) < 2 or not isinstance(node[1], str):
        report_or_log(diagnostics, layer_id, f"Unsupported filter expression: {list(node)!r}", logger=_LOGGER)
        return {}

    key = node[1]
    values = [_coerce(value) for value in node[2:]]
    if key == "$type":
        key = GEOMETRY_KEY
        values = [GEOMETRY_TYPES.get(value, value) if isinstance(value, str) else value for value in values]
    if not values and operator not in ("has", "!has"):
        report_or_log(diagnostics, layer_id, f"Filter {operator!r} on {key!r} has no value", logger=_LOGGER)
        return {}
    return comparison(key, values)


def zoom_range(minzoom: Optional[float] = None, maxzoom: Optional[float] = None) -> dict[str, Any]:
    """Return a ``$zoom`` filter bounded by *minzoom* and *maxzoom*."""

    bounds: dict[str, Any] = {}
    if minzoom is not None:
        bounds["min"] = minzoom
    if maxzoom is not None:
        bounds["max"] = maxzoom
    return {ZOOM_KEY: bounds}


def with_zoom_range(
    layer_filter: Optional[dict[str, Any]],
    minzoom: Optional[float] = None,
    maxzoom: Optional[float] = None,
) -> Optional[dict[str, Any]]:
    """Fold a layer's zoom window into its filter.

    The ``$zoom`` test goes first in an ``all`` combinator, reusing the
    filter's own ``all`` list when it has one.
    """

    if minzoom is None and maxzoom is None:
        return layer_filter
    window = zoom_range(minzoom, maxzoom)
    if layer_filter is None:
        return {"all": [window]}
    if isinstance(layer_filter.get("all"), list):
        layer_filter["all"].insert(0, window)
        return layer_filter
    return {"all": [window, layer_filter]}


__all__ = ["GEOMETRY_KEY", "ZOOM_KEY", "translate_filter", "with_zoom_range", "zoom_range"]
