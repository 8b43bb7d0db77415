"""
Generate module router.
"""

from fastapi import APIRouter, Depends, Request, Response

from docgen.shared.errors import FieldError, ValidationError
from docgen.shared.logging import get_logger

from .service import DocumentService
from .validation import validate_generate_input

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["generate"])


def get_service(request: Request) -> DocumentService:
    """Dependency injection for service."""
    return DocumentService(
        settings=request.app.state.settings,
        limiter=request.app.state.render_limiter,
    )


@router.post(
    "/generate",
    response_class=Response,
    responses={
        200: {
            "description": "Document generated successfully",
            "content": {
                "application/pdf": {},
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document": {},
            },
        },
        400: {"description": "Invalid input data"},
        500: {"description": "Document generation failed"},
    },
)
async def generate_document(
    request: Request,
    service: DocumentService = Depends(get_service),
) -> Response:
    """
    Generate a PDF or DOCX document from HTML content.

    Body: ``{contentHtml, headerHtml?, footerHtml?, documentType, watermark?,
    footerOnLastPageOnly?}``. Returns the document as an attachment.
    """
    try:
        body = await request.json()
    except ValueError as e:
        raise ValidationError([FieldError("body", "Request body must be valid JSON")]) from e

    try:
        generation_request = validate_generate_input(body)
    except ValidationError as e:
        logger.warning(f"Rejected generate request (fields: {', '.join(e.fields)}): {e.message}")
        raise

    result = await service.generate(generation_request)

    return Response(
        content=result.content,
        media_type=result.content_type,
        headers={
            "Content-Disposition": f"attachment; filename={result.filename}",
            "Content-Length": str(result.size_bytes),
        },
    )
