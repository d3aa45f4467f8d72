"""Build the Tangram draw block for a single Mapbox layer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..config import (
    DEFAULT_FONT_SIZE,
    DEFAULT_LINE_WIDTH,
    DEFAULT_OUTLINE_WIDTH,
    DEFAULT_TEXT_ANCHOR,
    DRAW_KINDS,
    INLAY_BLEND,
    LINES_INLAY_STYLE,
    ORDERED_KINDS,
    POLYGONS_INLAY_STYLE,
)
from ..diagnostics import DiagnosticSeverity, DiagnosticsCollector, report_or_log
from .properties import map_properties
from .stops import is_unconvertible
from .tables import (
    DRAW_PROPERTIES,
    FONT_PROPERTIES,
    FONT_STROKE_PROPERTIES,
    OUTLINE_PROPERTIES,
    STYLE_PROPERTIES,
    TEXT_PROPERTIES,
    RuleTable,
    unsupported_reason,
)

_LOGGER = logging.getLogger(__name__)

# Tangram refuses draw blocks that leave these unset.
_DRAW_DEFAULTS: Dict[str, tuple[tuple[str, Any], ...]] = {
    "lines": (("width", DEFAULT_LINE_WIDTH),),
    "polygons": (),
    "points": (),
    "text": (),
    "raster": (),
}

_INLAY_STYLES = {"lines": LINES_INLAY_STYLE, "polygons": POLYGONS_INLAY_STYLE}


@dataclass
class StyleDescriptor:
    """Converted style of one layer: its draw kind, draw bag and style flags."""

    kind: Optional[str]
    draw: Dict[str, Any] = field(default_factory=dict)
    dash: Any = None
    blend: Optional[str] = None

    @property
    def needs_named_style(self) -> bool:
        """``True`` when the draw bag cannot be embedded inline in a layer."""

        return self.blend is not None or self.dash is not None

    def to_style(self) -> Dict[str, Any]:
        style: Dict[str, Any] = {"base": self.kind}
        if self.dash is not None:
            style["dash"] = self.dash
        if self.blend is not None:
            style["blend"] = self.blend
        style["draw"] = self.draw
        return style


def merge_properties(layer: Mapping[str, Any]) -> Dict[str, Any]:
    """Flatten ``paint`` and ``layout`` into one bag, layout winning clashes."""

    bag = dict(layer.get("paint") or {})
    bag.update(layer.get("layout") or {})
    return bag


def is_translucent(alpha: Any) -> bool:
    """Return ``True`` unless *alpha* is absent or reads as the number ``1``.

    Zoom functions and arrays never read as a number, so they count as
    translucent even when every stop is ``1``.
    """

    if alpha is None:
        return False
    try:
        return float(alpha) != 1
    except (TypeError, ValueError):
        return True


class _LayerWalk:
    """State of a single :func:`walk_layer` call."""

    def __init__(self, layer: Mapping[str, Any], diagnostics: Optional[DiagnosticsCollector]) -> None:
        self.layer = layer
        self.layer_id = layer.get("id")
        self.layer_type = layer.get("type")
        self.bag = merge_properties(layer)
        self.known: set[str] = set()
        self.passed_through: list[str] = []
        self.diagnostics = diagnostics

    def convert(self, table: RuleTable) -> Dict[str, Any]:
        converted, keys = map_properties(self.bag, table)
        self.known.update(keys)
        for name in table:
            if is_unconvertible(self.bag.get(name)) and name not in self.passed_through:
                self.passed_through.append(name)
        return converted

    def report(self, message: str, severity: DiagnosticSeverity = DiagnosticSeverity.WARNING) -> None:
        report_or_log(self.diagnostics, self.layer_id, message, severity, logger=_LOGGER)

    def report_unhandled(self) -> None:
        unhandled = []
        for name in self.bag:
            if name in self.known:
                continue
            reason = unsupported_reason(name)
            if reason is None:
                unhandled.append(name)
            else:
                _LOGGER.debug("[%s] Skipping %s: %s", self.layer_id, name, reason)
        if unhandled:
            self.report(f"Unhandled style properties: {','.join(unhandled)}")
        if self.passed_through:
            self.report(f"Data-driven values copied unconverted: {','.join(self.passed_through)}")


def walk_layer(
    layer: Mapping[str, Any],
    order: int,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> StyleDescriptor:
    """Convert *layer* into a :class:`StyleDescriptor`.

    *order* is the layer's position in the source style and becomes the
    explicit draw order of line and polygon layers.  Problems such as an
    unknown layer type or unhandled properties are reported to *diagnostics*
    and never abort the conversion.
    """

    walk = _LayerWalk(layer, diagnostics)

    style_properties = walk.convert(STYLE_PROPERTIES)
    dash = style_properties.get("dash")

    kind = DRAW_KINDS.get(walk.layer_type)
    if kind is None:
        walk.report(f"Unrecognised layer type: {walk.layer_type!r}", DiagnosticSeverity.ERROR)

    draw = walk.convert(DRAW_PROPERTIES)
    text = walk.convert(TEXT_PROPERTIES)
    font = walk.convert(FONT_PROPERTIES)
    font_stroke = walk.convert(FONT_STROKE_PROPERTIES)
    if font:
        if font_stroke:
            font["stroke"] = font_stroke
        if not font.get("size"):
            font["size"] = DEFAULT_FONT_SIZE
        text["font"] = font

    if walk.layer_type == "symbol":
        kind = _place_symbol(draw, text)
    elif text:
        walk.report("Ignoring text properties set on non-symbol layer")

    outline = walk.convert(OUTLINE_PROPERTIES)
    if outline:
        if not outline.get("width"):
            outline["width"] = DEFAULT_OUTLINE_WIDTH
        draw["outline"] = outline

    if walk.layer_type == "fill-extrusion":
        draw["extrude"] = True

    if kind in ORDERED_KINDS:
        draw["order"] = order

    blend = None
    if is_translucent(draw.get("alpha")):
        if dash is not None:
            blend = INLAY_BLEND
        elif kind in _INLAY_STYLES:
            draw["style"] = _INLAY_STYLES[kind]

    walk.report_unhandled()

    for name, default in _DRAW_DEFAULTS.get(kind, ()):
        if draw.get(name) is None:
            draw[name] = default

    return StyleDescriptor(kind=kind, draw=draw, dash=dash, blend=blend)


def _place_symbol(draw: Dict[str, Any], text: Dict[str, Any]) -> str:
    """Decide whether a symbol layer draws icons or free-standing labels.

    Icons become ``points`` with the label nested under ``text``.  Without an
    icon the text block is merged into a ``text`` draw, where spacing turns
    into ``repeat_distance`` and vertex/spaced placement does not apply.
    """

    if text and not text.get("anchor"):
        text["anchor"] = DEFAULT_TEXT_ANCHOR

    if draw.get("sprite"):
        if text:
            draw["text"] = text
        return "points"

    spacing = draw.pop("placement_spacing", None)
    if spacing is not None:
        draw["repeat_distance"] = spacing
    draw.pop("placement", None)
    draw.update(text)
    return "text"


__all__ = ["StyleDescriptor", "is_translucent", "merge_properties", "walk_layer"]
