"""
Document Generation Service - HTML to PDF/DOCX over HTTP.
"""

__version__ = "0.1.0"
