"""Error types raised by Poster Designer."""

from __future__ import annotations


class PosterDesignerError(RuntimeError):
    pass


class ConfigurationError(PosterDesignerError):
    """Raised before any work starts when a request cannot be served."""


class ProviderError(PosterDesignerError):
    """A single provider call failed (bad status, transport error or missing image)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
