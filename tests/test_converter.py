"""Tests for whole-style conversion."""

from __future__ import annotations

from copy import deepcopy

import pytest

from tangramify.core.converter import (
    ConvertOptions,
    convert,
    merge_scene_extras,
    prune_none,
    resolve_global_references,
)
from tangramify.errors import StyleDocumentError


def test_scene_sections(sample_style):
    scene = convert(sample_style)
    assert list(scene) == ["global", "sources", "scene", "lights", "textures", "fonts", "styles", "layers"]
    assert scene["global"] == {}
    assert scene["styles"]["lines-inlay"] == {"base": "lines", "blend": "inlay"}
    assert scene["styles"]["polygons-inlay"] == {"base": "polygons", "blend": "inlay"}


def test_background_sets_scene_colour(sample_style):
    scene = convert(sample_style)
    assert scene["scene"]["background"] == {"color": "#f8f4f0"}
    assert "background" not in scene["layers"]


def test_sources_are_registered_without_config(sample_style):
    scene = convert(sample_style)
    assert scene["sources"] == {"openmaptiles": {}}


def test_layer_entries(sample_style):
    scene = convert(sample_style)
    water = scene["layers"]["water"]
    assert water["data"] == {"source": "openmaptiles", "layer": "water"}
    assert water["filter"] == {"all": [{"$geometry": "polygon"}, {"not": {"brunnel": "tunnel"}}]}
    assert water["draw"] == {"polygons": {"color": "#a0c8f0", "order": 1}}


def test_layer_order_follows_source_position(sample_style):
    scene = convert(sample_style)
    assert list(scene["layers"]) == ["water", "road", "place-label"]
    assert scene["layers"]["road"]["draw"]["lines"]["order"] == 2


def test_minzoom_wraps_filter(sample_style):
    scene = convert(sample_style)
    assert scene["layers"]["road"]["filter"] == {
        "all": [{"$zoom": {"min": 5}}, {"class": ["primary", "secondary"]}]
    }


def test_minzoom_without_filter():
    document = {"layers": [{"id": "a", "type": "line", "source": "s", "minzoom": 10}]}
    scene = convert(document)
    assert scene["layers"]["a"]["filter"] == {"all": [{"$zoom": {"min": 10}}]}


def test_zoom_window_joins_existing_all():
    document = {
        "layers": [
            {
                "id": "a",
                "type": "line",
                "source": "s",
                "minzoom": 4,
                "maxzoom": 9,
                "filter": ["all", ["==", "class", "river"]],
            }
        ]
    }
    scene = convert(document)
    assert scene["layers"]["a"]["filter"] == {"all": [{"$zoom": {"min": 4, "max": 9}}, {"class": "river"}]}


def test_missing_source_uses_default():
    document = {"layers": [{"id": "a", "type": "fill"}]}
    scene = convert(document, ConvertOptions(default_source="tiles"))
    assert scene["layers"]["a"]["data"] == {"source": "tiles"}
    assert scene["sources"] == {"tiles": {}}


def test_dash_registers_named_style():
    document = {
        "layers": [
            {
                "id": "boundary",
                "type": "line",
                "source": "s",
                "paint": {"line-dasharray": [3, 1], "line-color": "#999"},
            }
        ]
    }
    scene = convert(document)
    assert scene["layers"]["boundary"]["draw"] == {"boundary": {}}
    assert scene["styles"]["boundary"] == {
        "base": "lines",
        "dash": [3, 1],
        "draw": {"color": "#999", "order": 0, "width": "1px"},
    }


def test_expressions_and_property_functions_convert(diagnostics):
    document = {
        "layers": [
            {"id": "fence", "type": "line", "source": "s", "paint": {"line-dasharray": ["literal", [2, 1]]}},
            {
                "id": "trail",
                "type": "line",
                "source": "s",
                "paint": {"line-dasharray": ["step", ["zoom"], ["literal", [1, 1]], 14, ["literal", [0, 2]]]},
            },
            {
                "id": "river",
                "type": "line",
                "source": "s",
                "paint": {
                    "line-width": {
                        "property": "rank",
                        "stops": [[{"zoom": 8, "value": 1}, 1], [{"zoom": 12, "value": 1}, 3]],
                    }
                },
            },
        ]
    }
    scene = convert(document, diagnostics=diagnostics)
    assert scene["styles"]["fence"]["dash"] == ["literal", [2, 1]]
    assert scene["styles"]["trail"]["dash"][0] == "step"
    assert scene["layers"]["river"]["draw"]["lines"]["width"] == [
        [{"zoom": 8, "value": 1}, "1px"],
        [{"zoom": 12, "value": 1}, "3px"],
    ]
    assert diagnostics.messages() == [
        "[fence] Data-driven values copied unconverted: line-dasharray",
        "[trail] Data-driven values copied unconverted: line-dasharray",
        "[river] Data-driven values copied unconverted: line-width",
    ]


def test_ref_layers_become_sublayers(diagnostics):
    document = {
        "layers": [
            {"id": "road", "type": "line", "source": "s", "source-layer": "roads", "paint": {"line-color": "#fff"}},
            {"id": "road-casing", "ref": "road", "paint": {"line-color": "#000", "line-width": 3}},
        ]
    }
    scene = convert(document, diagnostics=diagnostics)
    assert list(scene["layers"]) == ["road"]
    casing = scene["layers"]["road"]["road-casing"]
    assert "data" not in casing
    assert casing["draw"] == {"lines": {"color": "#000", "width": "3px", "order": 1}}
    assert len(diagnostics) == 0


def test_ref_to_unknown_layer_is_reported(diagnostics):
    document = {"layers": [{"id": "orphan", "ref": "missing", "type": "line"}]}
    scene = convert(document, diagnostics=diagnostics)
    assert scene["layers"] == {}
    assert diagnostics.items[0].layer_id == "orphan"


def test_unknown_type_still_converts(diagnostics):
    document = {"layers": [{"id": "heat", "type": "heatmap", "source": "s"}, {"id": "a", "type": "line", "source": "s"}]}
    scene = convert(document, diagnostics=diagnostics)
    assert scene["layers"]["heat"]["draw"] == {}
    assert "lines" in scene["layers"]["a"]["draw"]
    assert len(diagnostics) == 1


def test_input_document_is_not_mutated(sample_style):
    original = deepcopy(sample_style)
    convert(sample_style, ConvertOptions(global_colors=True))
    assert sample_style == original


@pytest.mark.parametrize("document", [{}, {"layers": {}}, {"layers": [{"type": "line"}]}, []])
def test_malformed_documents_are_rejected(document):
    with pytest.raises(StyleDocumentError):
        convert(document)


class TestGlobalColors:
    def test_palette_and_references(self, sample_style):
        scene = convert(sample_style, ConvertOptions(global_colors=True))
        palette = scene["global"]["color"]
        assert palette["water"] == "#a0c8f0"
        assert palette["road"] == "#fea"
        assert palette["place-label_text"] == "#333"
        assert palette["place-label_halo"] == "#fff"
        assert scene["layers"]["water"]["draw"]["polygons"]["color"] == "global.color.water"
        font = scene["layers"]["place-label"]["draw"]["text"]["font"]
        assert font["fill"] == "global.color.place-label_text"
        assert font["stroke"]["color"] == "global.color.place-label_halo"

    def test_palette_is_value_preserving(self, sample_style):
        plain = convert(sample_style)
        themed = resolve_global_references(convert(sample_style, ConvertOptions(global_colors=True)))
        themed.pop("global")
        plain.pop("global")
        assert themed == plain

    def test_zoom_dependent_colours_stay_inline(self):
        colour = {"stops": [[5, "#000"], [10, "#fff"]]}
        document = {"layers": [{"id": "a", "type": "line", "source": "s", "paint": {"line-color": colour}}]}
        scene = convert(document, ConvertOptions(global_colors=True))
        assert scene["global"]["color"] == {}
        assert scene["layers"]["a"]["draw"]["lines"]["color"] == [[5, "#000"], [10, "#fff"]]


def test_resolve_dotted_keys():
    scene = {"global": {"color": {"a.b": "#123"}, "font_sans": "Noto"}, "layers": {"x": ["global.color.a.b", "global.font_sans", "global.nope"]}}
    resolved = resolve_global_references(scene)
    assert resolved["layers"]["x"] == ["#123", "Noto", "global.nope"]


def test_merge_scene_extras():
    scene = {"global": {"color": {"a": "#000"}}, "lights": {}}
    extras = {"global": {"font_sans": "Noto Sans"}, "lights": {"light1": {"type": "directional"}}}
    merged = merge_scene_extras(scene, extras)
    assert merged == {
        "global": {"color": {"a": "#000"}, "font_sans": "Noto Sans"},
        "lights": {"light1": {"type": "directional"}},
    }
    assert scene["lights"] == {}


def test_prune_none():
    assert prune_none({"a": None, "b": {"c": None, "d": 1}, "e": [None, 2]}) == {"b": {"d": 1}, "e": [None, 2]}
