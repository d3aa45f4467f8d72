"""Default configuration values for tangramify."""

from __future__ import annotations

from typing import Final

# Draw block each Mapbox layer type lands in.  ``symbol`` is provisional: the
# layer walker switches it to ``points`` when an icon is present.
DRAW_KINDS: Final[dict[str, str]] = {
    "line": "lines",
    "fill": "polygons",
    "fill-extrusion": "polygons",
    "circle": "points",
    "symbol": "text",
    "raster": "raster",
}

# Only these draw kinds take an explicit ``order``.
ORDERED_KINDS: Final[frozenset[str]] = frozenset({"lines", "polygons"})

BACKGROUND_LAYER_TYPE: Final[str] = "background"

GEOMETRY_TYPES: Final[dict[str, str]] = {
    "Polygon": "polygon",
    "LineString": "line",
    "Point": "point",
}

# Data source used when a top-level layer does not name one.
DEFAULT_DATA_SOURCE: Final[str] = "mapfit"

LINES_INLAY_STYLE: Final[str] = "lines-inlay"
POLYGONS_INLAY_STYLE: Final[str] = "polygons-inlay"
INLAY_BLEND: Final[str] = "inlay"

# Shared named styles every converted scene starts with.
BASE_STYLES: Final[dict[str, dict[str, str]]] = {
    LINES_INLAY_STYLE: {"base": "lines", "blend": INLAY_BLEND},
    POLYGONS_INLAY_STYLE: {"base": "polygons", "blend": INLAY_BLEND},
}

# Prefix of palette references written when global colours are enabled.
GLOBAL_COLOR_PREFIX: Final[str] = "global.color."
GLOBAL_REFERENCE_PREFIX: Final[str] = "global."

# Top-level blocks of a Tangram scene, in output order.
SCENE_SECTIONS: Final[tuple[str, ...]] = (
    "global",
    "sources",
    "scene",
    "lights",
    "textures",
    "fonts",
    "styles",
    "layers",
)

DEFAULT_FONT_SIZE: Final[str] = "14px"
DEFAULT_LINE_WIDTH: Final[str] = "1px"
DEFAULT_OUTLINE_WIDTH: Final[str] = "1px"
DEFAULT_TEXT_ANCHOR: Final[str] = "center"
MIN_DASH_LENGTH: Final[float] = 0.1

# ---------------------------------------------------------------------------
# Scene dump preset
# ---------------------------------------------------------------------------

# Nesting depth at which the scene writer switches to inline notation.
SCENE_FLOW_LEVEL: Final[int] = 8
SCENE_EXTRA_LINES: Final[int] = 2
# Keys whose values read better on a single line whatever their depth.
SCENE_ALWAYS_FLOW: Final[tuple[str, ...]] = (
    "size",
    "width",
    "dash",
    "buffer",
    "offset",
    "placement",
    "alpha",
    "data",
)
