"""Exceptions raised by the capture pipeline."""

from __future__ import annotations


class CaptureError(Exception):
    """Base class for failures that abandon the rest of a target's pipeline."""


class TransportError(CaptureError):
    """The HTTP request failed before a response was received."""


class HTTPStatusError(CaptureError):
    """The server answered with a status other than 200."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(self.status_line)

    @property
    def status_line(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


class ExtractionError(CaptureError):
    """The stored markup could not be parsed or the base URL is malformed."""


class CaptureTimeout(CaptureError):
    """The screenshot deadline expired."""


class RenderError(CaptureError):
    """Navigation or capture failed within the deadline."""


class FilesystemError(CaptureError):
    """A run folder or artifact could not be written."""
