"""Error types shared across the client."""

from __future__ import annotations

from typing import Iterable


class LogsheetError(RuntimeError):
    """Base class for errors surfaced to the user."""


class FormValidationError(LogsheetError):
    """Input rejected before anything is sent to the API."""

    def __init__(self, message: str, *, fields: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.fields = list(fields)


class InvalidSessionError(LogsheetError):
    """The stored token cannot be decoded into a session."""


__all__ = ["FormValidationError", "InvalidSessionError", "LogsheetError"]
