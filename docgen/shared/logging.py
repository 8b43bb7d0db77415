"""
Logging setup with request-scoped context.

Modules call ``get_logger(__name__)``; the HTTP middleware sets the request
context so every record emitted while handling a request carries its ID.
"""

import logging
import sys
from contextvars import ContextVar

from docgen.shared.types import RequestContext

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_request_context: ContextVar[RequestContext | None] = ContextVar(
    "docgen_request_context", default=None
)


class RequestContextFilter(logging.Filter):
    """Inject the current request ID (or '-') into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = _request_context.get()
        record.request_id = ctx.request_id if ctx else "-"
        return True


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger.

    Safe to call more than once: the handler installed by a previous call
    is replaced, handlers installed by others (pytest, uvicorn) are kept.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_docgen", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(RequestContextFilter())
    handler._docgen = True  # type: ignore[attr-defined]

    root.addHandler(handler)
    root.setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)


def set_request_context(ctx: RequestContext) -> None:
    _request_context.set(ctx)


def get_request_context() -> RequestContext | None:
    return _request_context.get()


def clear_request_context() -> None:
    _request_context.set(None)
