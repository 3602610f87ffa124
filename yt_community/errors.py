from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when configuration is missing or invalid."""


class FetchError(RuntimeError):
    """Raised when a channel page cannot be downloaded."""


class ExtractionError(RuntimeError):
    """Base class for failures while extracting a post from page HTML."""


class NotFoundError(ExtractionError):
    """Raised when no inline script carries the ytInitialData marker."""


class ParseError(ExtractionError):
    """Raised when the ytInitialData object cannot be captured or decoded."""


class StructureError(ExtractionError):
    """Raised when the browse tabs cannot be resolved, even by position."""


class InputError(RuntimeError):
    """Raised when a saved HTML page cannot be read."""
