"""Sanitize module - make caller HTML safe to embed in generated documents."""

from .service import HtmlSanitizer

__all__ = ["HtmlSanitizer"]
