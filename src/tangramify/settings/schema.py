"""Schema helpers for conversion option files.

An options file is a small JSON document::

    {
        "schema": "tangramify/options@1",
        "global_colors": true,
        "dump": {"flow_level": 8, "always_flow": ["size", "width"]}
    }

Missing keys fall back to :data:`DEFAULT_OPTIONS`, which mirrors the scene
preset used by the command line.
"""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator, ValidationError

from ..config import DEFAULT_DATA_SOURCE, SCENE_ALWAYS_FLOW, SCENE_EXTRA_LINES, SCENE_FLOW_LEVEL
from ..core.converter import ConvertOptions
from ..errors import SettingsLoadError, SettingsValidationError
from ..io.serializer import DumpOptions

OPTIONS_SCHEMA: dict[str, Any] = {
    "$id": "tangramify/options.schema.json",
    "type": "object",
    "required": ["schema", "global_colors", "default_source", "dump"],
    "properties": {
        "schema": {"const": "tangramify/options@1"},
        "global_colors": {"type": "boolean"},
        "default_source": {"type": "string", "minLength": 1},
        "dump": {
            "type": "object",
            "properties": {
                "flow_level": {"type": "integer", "minimum": 0},
                "always_flow": {
                    "type": "array",
                    "items": {"type": "string"},
                },
                "extra_lines": {"type": "integer", "minimum": 0},
                "indent": {"type": "string", "pattern": "^ +$"},
                "quote": {"type": "string", "enum": ['"', "'"]},
            },
            "additionalProperties": False,
        },
        "extras": {"type": "object"},
    },
    "additionalProperties": False,
}

DEFAULT_OPTIONS: dict[str, Any] = {
    "schema": "tangramify/options@1",
    "global_colors": False,
    "default_source": DEFAULT_DATA_SOURCE,
    "dump": {
        "flow_level": SCENE_FLOW_LEVEL,
        "always_flow": list(SCENE_ALWAYS_FLOW),
        "extra_lines": SCENE_EXTRA_LINES,
        "indent": "  ",
        "quote": '"',
    },
}

_validator = Draft202012Validator(OPTIONS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_OPTIONS` and validate the result."""

    merged = deepcopy(DEFAULT_OPTIONS)
    if data:
        for key, value in data.items():
            if key == "dump" and isinstance(value, dict):
                target = merged.setdefault("dump", {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    validate_options(merged)
    return merged


def validate_options(data: dict[str, Any]) -> None:
    """Validate *data* against the options schema."""

    try:
        _validator.validate(data)
    except ValidationError as exc:
        raise SettingsValidationError(exc.message) from exc


def load_options(path: Path | str | None) -> dict[str, Any]:
    """Read the options file at *path*; ``None`` returns the defaults."""

    if path is None:
        return merge_with_defaults(None)
    options_path = Path(path)
    try:
        payload = json.loads(options_path.read_text(encoding="utf8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SettingsLoadError(f"Unable to load options file '{options_path}': {exc}") from exc
    if not isinstance(payload, dict):
        raise SettingsValidationError(f"Options file '{options_path}' must hold a JSON object")
    return merge_with_defaults(payload)


def convert_options(data: dict[str, Any]) -> ConvertOptions:
    return ConvertOptions(
        global_colors=data["global_colors"],
        default_source=data["default_source"],
    )


def dump_options(data: dict[str, Any]) -> DumpOptions:
    dump = data["dump"]
    return DumpOptions(
        flow_level=dump["flow_level"],
        always_flow=tuple(dump["always_flow"]),
        extra_lines=dump["extra_lines"],
        indent=dump["indent"],
        quote=dump["quote"],
    )


__all__ = [
    "DEFAULT_OPTIONS",
    "OPTIONS_SCHEMA",
    "convert_options",
    "dump_options",
    "load_options",
    "merge_with_defaults",
    "validate_options",
]
