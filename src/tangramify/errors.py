"""Custom exception hierarchy for tangramify."""

from __future__ import annotations


class TangramifyError(Exception):
    """Base class for all custom errors raised by tangramify."""


# --- Source style errors ---

class StyleLoadError(TangramifyError):
    """Raised when the style sheet cannot be read or parsed."""


class StyleDocumentError(TangramifyError):
    """Raised when a style document lacks the structure needed for conversion."""


# --- Settings errors ---

class SettingsError(TangramifyError):
    """Base class for conversion option failures."""


class SettingsLoadError(SettingsError):
    """Raised when the options file cannot be read or parsed."""


class SettingsValidationError(SettingsError):
    """Raised when options data fails schema validation."""
