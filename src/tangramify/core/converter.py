"""Convert a whole Mapbox GL style into a Tangram scene tree."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..config import (
    BACKGROUND_LAYER_TYPE,
    BASE_STYLES,
    DEFAULT_DATA_SOURCE,
    GLOBAL_COLOR_PREFIX,
    GLOBAL_REFERENCE_PREFIX,
    SCENE_SECTIONS,
)
from ..diagnostics import DiagnosticsCollector, report_or_log
from ..io.style_loader import validate_style_document
from .filters import translate_filter, with_zoom_range
from .layers import StyleDescriptor, walk_layer
from .stops import interpolate_stops

_LOGGER = logging.getLogger(__name__)


@dataclass
class ConvertOptions:
    """Switches for a single :func:`convert` run."""

    # Lift literal colours into ``global.color`` so scenes can be re-themed.
    global_colors: bool = False
    default_source: str = DEFAULT_DATA_SOURCE


def convert(
    document: Mapping[str, Any],
    options: Optional[ConvertOptions] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> Dict[str, Any]:
    """Return the Tangram scene equivalent of the Mapbox style *document*.

    The conversion is best effort: unknown layer types, filter operators and
    properties are reported to *diagnostics* while the rest of the style is
    still converted.  Only a document without a usable ``layers`` list is
    rejected, with :class:`~tangramify.errors.StyleDocumentError`.
    """

    validate_style_document(document)
    if options is None:
        options = ConvertOptions()
    source_layers = copy.deepcopy(document["layers"])

    scene: Dict[str, Any] = {section: {} for section in SCENE_SECTIONS}
    palette: Optional[Dict[str, Any]] = None
    if options.global_colors:
        palette = scene["global"]["color"] = {}
    scene["styles"].update(copy.deepcopy(BASE_STYLES))

    layers_by_id = {layer["id"]: layer for layer in source_layers}
    # Parent id -> sub-layers in source order, attached once every parent exists.
    sublayers: Dict[str, List[Tuple[str, Dict[str, Any]]]] = {}

    for order, layer in enumerate(source_layers):
        layer_id = layer["id"]
        if layer.get("type") == BACKGROUND_LAYER_TYPE:
            paint = layer.get("paint") or {}
            scene["scene"]["background"] = {"color": interpolate_stops(paint.get("background-color"))}
            continue

        # ``ref`` layers borrow the type and data binding of another layer and
        # become Tangram sub-layers of it.
        parent_id = layer.get("ref")
        if parent_id and not layer.get("type"):
            parent = layers_by_id.get(parent_id)
            if parent is not None:
                layer["type"] = parent.get("type")

        entry: Dict[str, Any] = {}
        if not parent_id:
            data_source = layer.get("source") or options.default_source
            scene["sources"].setdefault(data_source, {})
            entry["data"] = {"source": data_source, "layer": layer.get("source-layer")}
        elif layer.get("source"):
            scene["sources"].setdefault(layer["source"], {})

        layer_filter = translate_filter(layer.get("filter"), diagnostics, layer_id)
        layer_filter = with_zoom_range(layer_filter, layer.get("minzoom"), layer.get("maxzoom"))
        if layer_filter is not None:
            entry["filter"] = layer_filter

        style = walk_layer(layer, order, diagnostics)
        if palette is not None:
            _lift_colors(palette, layer_id, style.draw)
        entry["draw"] = _draw_block(scene["styles"], layer_id, style)

        if parent_id:
            sublayers.setdefault(parent_id, []).append((layer_id, entry))
        else:
            scene["layers"][layer_id] = entry

    _attach_sublayers(scene["layers"], sublayers, diagnostics)
    return prune_none(scene)


def _draw_block(styles: Dict[str, Any], layer_id: str, style: StyleDescriptor) -> Dict[str, Any]:
    """Embed the draw bag, or register a named style and point at it."""

    if style.needs_named_style:
        styles[layer_id] = style.to_style()
        return {layer_id: {}}
    if style.kind is None:
        return {}
    return {style.kind: style.draw}


def _attach_sublayers(
    layers: Dict[str, Any],
    sublayers: Mapping[str, List[Tuple[str, Dict[str, Any]]]],
    diagnostics: Optional[DiagnosticsCollector],
) -> None:
    for parent_id, children in sublayers.items():
        parent = layers.get(parent_id)
        for child_id, child in children:
            if parent is None:
                message = f"Sub-layer references unknown layer {parent_id!r}; dropped"
                report_or_log(diagnostics, child_id, message, logger=_LOGGER)
                continue
            parent[child_id] = child


# ---------------------------------------------------------------------------
# Global colour palette
# ---------------------------------------------------------------------------

def _lift_colors(palette: Dict[str, Any], layer_id: str, draw: Dict[str, Any]) -> None:
    _lift(palette, draw, "color", layer_id)
    text = draw.get("text")
    font = text.get("font") if isinstance(text, dict) else draw.get("font")
    if not isinstance(font, dict):
        return
    _lift(palette, font, "fill", f"{layer_id}_text")
    stroke = font.get("stroke")
    if isinstance(stroke, dict):
        _lift(palette, stroke, "color", f"{layer_id}_halo")


def _lift(palette: Dict[str, Any], bag: Dict[str, Any], key: str, name: str) -> None:
    value = bag.get(key)
    # Zoom tables stay in place; only literal colours join the palette.
    if value is None or isinstance(value, (list, dict)):
        return
    palette[name] = value
    bag[key] = GLOBAL_COLOR_PREFIX + name


def resolve_global_references(scene: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of *scene* with ``global.*`` strings replaced by their values.

    References that do not resolve are left untouched.
    """

    globals_ = scene.get("global") or {}

    def resolve(node: Any) -> Any:
        if isinstance(node, dict):
            return {key: resolve(value) for key, value in node.items()}
        if isinstance(node, list):
            return [resolve(item) for item in node]
        if isinstance(node, str) and node.startswith(GLOBAL_REFERENCE_PREFIX):
            found, value = _lookup(globals_, node[len(GLOBAL_REFERENCE_PREFIX):].split("."))
            if found:
                return copy.deepcopy(value)
        return node

    resolved = {key: resolve(value) for key, value in scene.items() if key != "global"}
    if "global" in scene:
        resolved = {"global": copy.deepcopy(scene["global"]), **resolved}
    return resolved


def _lookup(node: Any, parts: List[str]) -> Tuple[bool, Any]:
    # Keys may themselves contain dots, so try the longest match first.
    if not isinstance(node, dict):
        return False, None
    joined = ".".join(parts)
    if joined in node:
        return True, node[joined]
    for split in range(len(parts) - 1, 0, -1):
        head = ".".join(parts[:split])
        if head in node:
            found, value = _lookup(node[head], parts[split:])
            if found:
                return True, value
    return False, None


# ---------------------------------------------------------------------------
# Tree helpers
# ---------------------------------------------------------------------------

def merge_scene_extras(scene: Mapping[str, Any], extras: Mapping[str, Any]) -> Dict[str, Any]:
    """Deep-merge hand-written scene blocks (lights, textures, fonts...) into *scene*."""

    merged = copy.deepcopy(dict(scene))
    for key, value in extras.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = merge_scene_extras(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def prune_none(node: Any) -> Any:
    """Drop mapping entries whose value is ``None``, recursively."""

    if isinstance(node, dict):
        return {key: prune_none(value) for key, value in node.items() if value is not None}
    if isinstance(node, list):
        return [prune_none(item) for item in node]
    return node


__all__ = [
    "ConvertOptions",
    "convert",
    "merge_scene_extras",
    "prune_none",
    "resolve_global_references",
]
