"""Convert Mapbox GL styles into Tangram scene files."""

from __future__ import annotations

from .core.converter import ConvertOptions, convert, merge_scene_extras, resolve_global_references
from .diagnostics import Diagnostic, DiagnosticSeverity, DiagnosticsCollector
from .io.serializer import DumpOptions, dump_scene
from .io.style_loader import load_style

__version__ = "0.3.0"

__all__ = [
    "ConvertOptions",
    "Diagnostic",
    "DiagnosticSeverity",
    "DiagnosticsCollector",
    "DumpOptions",
    "convert",
    "dump_scene",
    "load_style",
    "merge_scene_extras",
    "resolve_global_references",
]
