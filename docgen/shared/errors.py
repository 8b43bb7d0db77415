"""
Error types for the document generation service.

Every error that reaches the HTTP layer is a DocGenError subclass; the
application exception handler turns it into ``{"error": <message>}`` with
``http_status`` as the response code.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    """A single failed validation rule for one input field."""

    field: str
    message: str


class DocGenError(Exception):
    """Base error with an HTTP status and a display-ready message."""

    http_status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(DocGenError):
    """Malformed, missing, oversized or mistyped input (HTTP 400)."""

    http_status = 400

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(e.message for e in self.errors) or "Invalid request")

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]


class GenerationError(DocGenError):
    """Renderer-internal failure: navigation, timeout, transform, empty output (HTTP 500)."""

    http_status = 500


class RenderTimeoutError(GenerationError):
    """A render did not finish within the configured timeout (HTTP 500)."""

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        super().__init__(f"Document generation timed out after {seconds:g}s")


class PayloadTooLargeError(DocGenError):
    """Request body exceeds the configured size limit (HTTP 413)."""

    http_status = 413

    def __init__(self, message: str = "Request entity too large") -> None:
        super().__init__(message)
