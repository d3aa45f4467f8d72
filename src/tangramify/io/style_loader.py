"""Load Mapbox GL style documents from disk.

Only the structure the converter walks is validated: a ``layers`` list whose
entries carry a string ``id``.  Everything inside a layer is interpreted
leniently by the converter itself.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from ..errors import StyleDocumentError, StyleLoadError

_LOGGER = logging.getLogger(__name__)

STYLE_SCHEMA: Dict[str, Any] = {
    "$id": "tangramify/mapbox-style.schema.json",
    "type": "object",
    "required": ["layers"],
    "properties": {
        "version": {"type": "integer"},
        "sources": {"type": "object"},
        "layers": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id"],
                "properties": {
                    "id": {"type": "string"},
                    "type": {"type": "string"},
                    "ref": {"type": "string"},
                    "source": {"type": "string"},
                    "source-layer": {"type": "string"},
                    "minzoom": {"type": "number"},
                    "maxzoom": {"type": "number"},
                    "filter": {"type": "array"},
                    "paint": {"type": "object"},
                    "layout": {"type": "object"},
                },
                "additionalProperties": True,
            },
        },
    },
    "additionalProperties": True,
}

_validator = Draft202012Validator(STYLE_SCHEMA)


def validate_style_document(document: Any) -> None:
    """Raise :class:`StyleDocumentError` if *document* cannot be converted."""

    if not isinstance(document, Mapping):
        raise StyleDocumentError("Style document must be a JSON object")
    error = best_match(_validator.iter_errors(dict(document)))
    if error is not None:
        location = "/".join(str(part) for part in error.absolute_path) or "<root>"
        raise StyleDocumentError(f"Invalid style document at {location}: {error.message}")


def load_style(style_path: Path | str) -> Dict[str, Any]:
    """Read and validate the style JSON stored at *style_path*."""

    path = Path(style_path)
    try:
        raw_data = path.read_text(encoding="utf8")
    except OSError as exc:
        raise StyleLoadError(f"Unable to read style file '{path}'") from exc

    try:
        document = json.loads(raw_data)
    except json.JSONDecodeError as exc:
        raise StyleLoadError(f"Style file '{path}' is not valid JSON") from exc

    validate_style_document(document)
    _LOGGER.debug("Loaded %d layers from %s", len(document["layers"]), path)
    return document


__all__ = ["STYLE_SCHEMA", "load_style", "validate_style_document"]
