"""Mapbox to Tangram property tables.

Each table feeds one region of the converted layer: the style object itself,
the draw block, the text block and its font and stroke, and the outline.
The same merged paint/layout bag is run through all of them.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from .properties import (
    PropertyRule,
    clamp_dash,
    flip_anchor,
    invert,
    is_map,
    is_visible,
    percent,
    placement_mode,
    px,
    rotation_angle,
    rule,
    square_buffer,
    strip_field_template,
)

RuleTable = Mapping[str, PropertyRule]

# Properties stored on the style object rather than inside ``draw``.
STYLE_PROPERTIES: RuleTable = MappingProxyType({
    "line-dasharray": rule("dash", clamp_dash, no_interpolate=True),
})

DRAW_PROPERTIES: RuleTable = MappingProxyType({
    "line-cap": rule("cap"),
    "line-join": rule("join"),
    "line-miter-limit": rule("miter_limit"),
    "line-color": rule("color"),
    "line-opacity": rule("alpha"),
    "line-width": rule("width", px),
    "fill-color": rule("color"),
    "fill-opacity": rule("alpha"),
    "fill-extrusion-color": rule("color"),
    "fill-extrusion-opacity": rule("alpha"),
    "circle-radius": rule("size", px),
    "circle-color": rule("color"),
    "icon-size": rule("size", percent),
    "icon-image": rule("sprite"),
    # ``collide`` asks Tangram to check for collisions, the opposite polarity.
    "icon-allow-overlap": rule("collide", invert),
    "icon-ignore-placement": rule("collide", invert),
    "icon-padding": rule("buffer", square_buffer),
    "icon-rotation-alignment": rule("angle", rotation_angle),
    "icon-color": rule("color"),
    "icon-opacity": rule("alpha"),
    "icon-translate": rule("offset", px),
    "symbol-placement": rule("placement", placement_mode),
    "symbol-spacing": rule("placement_spacing", px),
    "visibility": rule("visible", is_visible),
})

TEXT_PROPERTIES: RuleTable = MappingProxyType({
    "text-field": rule("text_source", strip_field_template),
    # Mapbox measures ems, Tangram characters; close enough.
    "text-max-width": rule("text_wrap"),
    "text-optional": rule("optional"),
    "text-offset": rule("offset", px),
    "text-anchor": rule("anchor", flip_anchor),
    "text-padding": rule("buffer", square_buffer),
    "text-allow-overlap": rule("collide", invert),
    "text-pitch-alignment": rule("flat", is_map),
    "text-justify": rule("align"),
})

FONT_PROPERTIES: RuleTable = MappingProxyType({
    "text-font": rule("family"),
    "text-size": rule("size", px),
    "text-transform": rule("transform"),
    "text-color": rule("fill"),
    "text-opacity": rule("alpha"),
})

FONT_STROKE_PROPERTIES: RuleTable = MappingProxyType({
    "text-halo-width": rule("width", px),
    "text-halo-color": rule("color"),
})

OUTLINE_PROPERTIES: RuleTable = MappingProxyType({
    "fill-outline-color": rule("color"),
    "icon-halo-color": rule("color"),
    "icon-halo-width": rule("width", px),
})

# ---------------------------------------------------------------------------
# Known-unsupported properties
# ---------------------------------------------------------------------------

# Properties Tangram has no equivalent for.  They are skipped quietly instead
# of being reported as unhandled.
UNSUPPORTED_PROPERTIES: Mapping[str, str] = MappingProxyType({
    "line-gap-width": "Casing gaps would need a separate outline pass.",
    "line-blur": "Blur is not supported.",
    "line-offset": "Line offsets are not supported.",
    "line-pattern": "Line patterns are not supported.",
    "fill-pattern": "Fill patterns would need textures.",
    "fill-antialias": "Antialiasing is always on.",
    "fill-translate": "Translation is not supported.",
    "fill-translate-anchor": "Translation is not supported.",
    "circle-opacity": "Circle opacity is not supported.",
    "circle-blur": "Blur is not supported.",
    "circle-stroke-opacity": "Circle opacity is not supported.",
    "raster-opacity": "Raster opacity is not supported.",
    "text-line-height": "Line height is fixed.",
    "text-letter-spacing": "Letter spacing is not supported.",
    "text-max-angle": "Curved label angles are not limited.",
    "text-halo-blur": "Blur is not supported.",
    "icon-halo-blur": "Blur is not supported.",
})

UNSUPPORTED_PREFIXES: Mapping[str, str] = MappingProxyType({
    "line-translate": "Translation is not supported.",
})


def unsupported_reason(name: str) -> Optional[str]:
    """Return why *name* is not converted, or ``None`` if it should be."""

    reason = UNSUPPORTED_PROPERTIES.get(name)
    if reason is not None:
        return reason
    for prefix, prefix_reason in UNSUPPORTED_PREFIXES.items():
        if name.startswith(prefix):
            return prefix_reason
    return None


__all__ = [
    "DRAW_PROPERTIES",
    "FONT_PROPERTIES",
    "FONT_STROKE_PROPERTIES",
    "OUTLINE_PROPERTIES",
    "RuleTable",
    "STYLE_PROPERTIES",
    "TEXT_PROPERTIES",
    "UNSUPPORTED_PREFIXES",
    "UNSUPPORTED_PROPERTIES",
    "unsupported_reason",
]
