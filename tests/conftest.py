import sys
from copy import deepcopy
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without installing the package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tangramify.diagnostics import DiagnosticsCollector  # noqa: E402


_SAMPLE_STYLE = {
    "version": 8,
    "sources": {"openmaptiles": {"type": "vector"}},
    "layers": [
        {
            "id": "background",
            "type": "background",
            "paint": {"background-color": "#f8f4f0"},
        },
        {
            "id": "water",
            "type": "fill",
            "source": "openmaptiles",
            "source-layer": "water",
            "filter": ["all", ["==", "$type", "Polygon"], ["!=", "brunnel", "tunnel"]],
            "paint": {"fill-color": "#a0c8f0"},
        },
        {
            "id": "road",
            "type": "line",
            "source": "openmaptiles",
            "source-layer": "transportation",
            "minzoom": 5,
            "filter": ["in", "class", "primary", "secondary"],
            "layout": {"line-cap": "round", "line-join": "round"},
            "paint": {
                "line-color": "#fea",
                "line-width": {"base": 1.2, "stops": [[5, 0.5], [8, 2]]},
            },
        },
        {
            "id": "place-label",
            "type": "symbol",
            "source": "openmaptiles",
            "source-layer": "place",
            "layout": {"text-field": "{name_en}", "text-size": 12, "symbol-spacing": 250},
            "paint": {"text-color": "#333", "text-halo-color": "#fff", "text-halo-width": 1},
        },
    ],
}


@pytest.fixture
def sample_style() -> dict:
    return deepcopy(_SAMPLE_STYLE)


@pytest.fixture
def diagnostics() -> DiagnosticsCollector:
    return DiagnosticsCollector()
