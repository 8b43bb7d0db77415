"""DOCX module - HTML to Office Open XML rendering."""

from .service import DocxRenderer

__all__ = ["DocxRenderer"]
