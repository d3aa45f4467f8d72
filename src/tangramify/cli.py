"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core.converter import convert, merge_scene_extras
from .diagnostics import DiagnosticSeverity, DiagnosticsCollector
from .errors import SettingsError, StyleDocumentError, StyleLoadError, TangramifyError
from .io.serializer import dump_scene
from .io.style_loader import load_style
from .settings.schema import convert_options, dump_options, load_options

app = typer.Typer(help="Convert Mapbox GL styles into Tangram scene files")

_SEVERITY_COLOURS = {
    DiagnosticSeverity.DEBUG: "dim",
    DiagnosticSeverity.INFO: "cyan",
    DiagnosticSeverity.WARNING: "yellow",
    DiagnosticSeverity.ERROR: "red",
}

# The check table replaces the per-diagnostic log lines.
_CHECK_LOGGER = logging.getLogger("tangramify.check")
_CHECK_LOGGER.addHandler(logging.NullHandler())
_CHECK_LOGGER.propagate = False


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (StyleLoadError, StyleDocumentError, SettingsError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except TangramifyError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _read_extras(path: Optional[Path]) -> dict[str, Any]:
    if path is None:
        return {}
    try:
        extras = json.loads(path.read_text(encoding="utf8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise StyleLoadError(f"Unable to read scene extras '{path}': {exc}") from exc
    if not isinstance(extras, dict):
        raise StyleLoadError(f"Scene extras '{path}' must hold a JSON object")
    return extras


@app.command("convert")
@_handle_errors
def convert_command(
    style_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Mapbox GL style.json"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the scene here instead of stdout"),
    global_colors: Optional[bool] = typer.Option(
        None, "--global-colors/--no-global-colors", help="Lift literal colours into global.color"
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Options file (JSON)"),
    extras: Optional[Path] = typer.Option(None, "--extras", help="JSON blocks merged into the scene"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log skipped properties too"),
) -> None:
    """Convert a Mapbox GL style into a Tangram scene."""

    _setup_logging(verbose)
    settings = load_options(config)
    options = convert_options(settings)
    if global_colors is not None:
        options.global_colors = global_colors

    diagnostics = DiagnosticsCollector()
    scene = convert(load_style(style_path), options, diagnostics)
    for block in (settings.get("extras"), _read_extras(extras)):
        if block:
            scene = merge_scene_extras(scene, block)

    if as_json:
        text = json.dumps(scene, indent=2, ensure_ascii=False)
    else:
        text = dump_scene(scene, dump_options(settings))

    if output is None:
        typer.echo(text)
    else:
        output.write_text(text + "\n", encoding="utf8")
        print(f"[green]Wrote {output} ({len(diagnostics)} diagnostics)")


@app.command("check")
@_handle_errors
def check_command(
    style_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Mapbox GL style.json"),
) -> None:
    """List the properties, filters and layers that do not convert cleanly."""

    diagnostics = DiagnosticsCollector(logger=_CHECK_LOGGER)
    document = load_style(style_path)
    convert(document, diagnostics=diagnostics)

    if not diagnostics:
        print(f"[green]{len(document['layers'])} layers converted without diagnostics")
        return

    table = Table(title=str(style_path))
    table.add_column("Layer")
    table.add_column("Severity")
    table.add_column("Message")
    for item in diagnostics:
        colour = _SEVERITY_COLOURS[item.severity]
        table.add_row(item.layer_id or "-", f"[{colour}]{item.severity.value}", item.message)
    Console().print(table)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
