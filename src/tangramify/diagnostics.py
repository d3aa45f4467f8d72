"""Collect non-fatal problems found while converting a style."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, Optional

_LOGGER = logging.getLogger(__name__)


class DiagnosticSeverity(Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """A single message tied to the source layer that produced it."""

    layer_id: Optional[str]
    message: str
    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING

    def __str__(self) -> str:
        if self.layer_id is None:
            return self.message
        return f"[{self.layer_id}] {self.message}"


@dataclass
class DiagnosticsCollector:
    """Sink receiving ``(layer_id, message)`` pairs during one conversion run.

    Every report is logged through *logger* at the matching level and kept in
    :attr:`items` so callers can inspect the outcome after the run.  An
    optional *callback* mirrors each diagnostic to a host application.
    """

    logger: logging.Logger = field(default=_LOGGER)
    callback: Optional[Callable[[Diagnostic], None]] = None
    items: list[Diagnostic] = field(default_factory=list)

    def report(
        self,
        layer_id: Optional[str],
        message: str,
        severity: DiagnosticSeverity = DiagnosticSeverity.WARNING,
    ) -> Diagnostic:
        diagnostic = Diagnostic(layer_id=layer_id, message=message, severity=severity)
        log_method = getattr(self.logger, severity.value, self.logger.warning)
        log_method("%s", diagnostic)
        self.items.append(diagnostic)
        if self.callback is not None:
            self.callback(diagnostic)
        return diagnostic

    def for_layer(self, layer_id: str) -> list[Diagnostic]:
        return [item for item in self.items if item.layer_id == layer_id]

    def messages(self) -> list[str]:
        return [str(item) for item in self.items]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def report_or_log(
    diagnostics: Optional[DiagnosticsCollector],
    layer_id: Optional[str],
    message: str,
    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Send *message* to *diagnostics*, or straight to *logger* without one."""

    if diagnostics is not None:
        diagnostics.report(layer_id, message, severity)
        return
    logger = logger or _LOGGER
    getattr(logger, severity.value, logger.warning)("%s", Diagnostic(layer_id, message, severity))


__all__ = ["Diagnostic", "DiagnosticSeverity", "DiagnosticsCollector", "report_or_log"]
