"""Render module - HTML to PDF rendering using Playwright."""

from .limiter import RenderLimiter
from .service import PdfRenderer

__all__ = ["PdfRenderer", "RenderLimiter"]
