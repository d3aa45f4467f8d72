"""Tests for the scene text writer."""

from __future__ import annotations

import pytest

from tangramify.io.serializer import DumpOptions, dump_scene


def test_scalar_entries_one_per_line():
    assert dump_scene({"a": 1, "b": "word", "c": True, "d": None}) == "a: 1\nb: word\nc: true\nd: null"


def test_nested_block_uses_indent():
    assert dump_scene({"a": {"b": {"c": 1}}}) == "a:\n  b:\n    c: 1"
    assert dump_scene({"a": {"b": 1}}, DumpOptions(indent="    ")) == "a:\n    b: 1"


def test_block_arrays():
    assert dump_scene({"a": {"b": [1, 2]}}) == "a:\n  b:\n    - 1\n    - 2"


def test_always_flow_keys_stay_inline_at_any_depth():
    tree = {"a": {"b": {"width": [[10, "1px"], [12, "2px"]]}}}
    options = DumpOptions(always_flow=("width",))
    assert dump_scene(tree, options) == "a:\n  b:\n    width: [[10, 1px], [12, 2px]]"


def test_flow_level_switches_to_inline():
    tree = {"a": {"b": 1, "c": [1, 2], "d": {"e": "f"}}}
    assert dump_scene(tree, DumpOptions(flow_level=1)) == "a: { b: 1, c: [1, 2], d: { e: f } }"


def test_array_items_are_written_inline():
    assert dump_scene({"a": [{"x": 1}, [1, 2]]}) == "a:\n  - { x: 1 }\n  - [1, 2]"


def test_empty_containers_are_inline():
    assert dump_scene({"a": [], "b": {}, "c": {"d": {}}}) == "a: []\nb: {}\nc:\n  d: {}"
    assert dump_scene({}) == "{}"


def test_blank_lines_shrink_with_depth():
    tree = {"a": {"b": 1, "c": 2}, "d": 3}
    assert dump_scene(tree, DumpOptions(extra_lines=2)) == "a:\n  b: 1\n\n  c: 2\n\n\nd: 3"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("$geometry", "$geometry"),
        ("global.color.road-major", "global.color.road-major"),
        ("#fff", '"#fff"'),
        ("two words", '"two words"'),
        ("", '""'),
        ('say "hi"', '"say \\"hi\\""'),
        ("a\nb", '"a\\nb"'),
        ("café", '"café"'),
    ],
)
def test_string_quoting(value, expected):
    assert dump_scene({"k": value}) == f"k: {expected}"


def test_single_quote_option():
    assert dump_scene({"k": "it's"}, DumpOptions(quote="'")) == "k: 'it''s'"


def test_keys_are_quoted_like_values():
    assert dump_scene({"road casing": 1}) == '"road casing": 1'


def test_numbers():
    assert dump_scene({"a": 2.0, "b": 0.25, "c": -3}) == "a: 2\nb: 0.25\nc: -3"


def test_small_floats_avoid_exponents():
    assert dump_scene({"a": 1e-05, "b": 0.000123, "c": -2.5e-07}) == "a: 0.00001\nb: 0.000123\nc: -0.00000025"
    assert dump_scene({"a": 1e16}) == "a: 10000000000000000"


def test_json_text_input():
    assert dump_scene('{"a": {"b": [1]}}') == "a:\n  b:\n    - 1"


def test_scene_preset():
    options = DumpOptions.scene_preset()
    assert options.flow_level == 8
    assert "width" in options.always_flow
    tree = {"layers": {"road": {"data": {"source": "s", "layer": "roads"}}}}
    assert dump_scene(tree, options) == "layers:\n  road:\n    data: { source: s, layer: roads }"
