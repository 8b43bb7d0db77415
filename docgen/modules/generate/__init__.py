"""Generate module - validate requests and dispatch to the PDF/DOCX renderers."""

from .router import router
from .schemas import DocumentType, GenerationRequest, RenderResult
from .service import DocumentService
from .validation import validate_generate_input

__all__ = [
    "router",
    "DocumentService",
    "DocumentType",
    "GenerationRequest",
    "RenderResult",
    "validate_generate_input",
]
