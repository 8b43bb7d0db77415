"""
Generate service - the document dispatcher.

Sanitizes a validated request, runs the renderer for its document type and
packages the bytes with download metadata.
"""

import asyncio
import time

from docgen.config import Settings, get_settings
from docgen.modules.docx.service import DocxRenderer
from docgen.modules.render.limiter import RenderLimiter
from docgen.modules.render.service import PdfRenderer
from docgen.modules.sanitize.service import HtmlSanitizer
from docgen.shared.errors import DocGenError, GenerationError, RenderTimeoutError
from docgen.shared.logging import get_logger
from docgen.shared.types import DocumentParts

from .schemas import DocumentType, GenerationRequest, RenderResult

logger = get_logger(__name__)


class DocumentService:
    """Dispatches generation requests to the PDF or DOCX renderer."""

    def __init__(
        self,
        settings: Settings | None = None,
        limiter: RenderLimiter | None = None,
        sanitizer: HtmlSanitizer | None = None,
        pdf_renderer: PdfRenderer | None = None,
        docx_renderer: DocxRenderer | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.sanitizer = sanitizer or HtmlSanitizer()
        self.pdf_renderer = pdf_renderer or PdfRenderer(self.settings, limiter)
        self.docx_renderer = docx_renderer or DocxRenderer(self.settings)

    def prepare(self, request: GenerationRequest) -> DocumentParts:
        """Sanitize every markup field; reduce the watermark to text."""
        return DocumentParts(
            content_html=self.sanitizer.sanitize(request.content_html),
            header_html=self.sanitizer.sanitize(request.header_html),
            footer_html=self.sanitizer.sanitize(request.footer_html),
            watermark_text=self.sanitizer.extract_text(request.watermark),
            footer_on_last_page_only=request.footer_on_last_page_only,
        )

    async def generate(self, request: GenerationRequest) -> RenderResult:
        """
        Generate a document.

        The PDF renderer applies ``render_timeout_seconds`` itself, once it
        holds a render slot. DOCX conversion runs in a worker thread under
        the same timeout; a thread that overruns cannot be interrupted and
        finishes in the background, its result discarded.

        Raises:
            GenerationError: renderer failure, timeout or empty output
        """
        doc_type = request.document_type
        timeout = self.settings.render_timeout_seconds
        parts = self.prepare(request)

        logger.info(
            f"Generating {doc_type.value.upper()} document "
            f"(content={len(parts.content_html)} chars, "
            f"header={bool(parts.header_html)}, footer={bool(parts.footer_html)}, "
            f"watermark={bool(parts.watermark_text)}, "
            f"footer_last_page_only={parts.footer_on_last_page_only})"
        )
        start = time.monotonic()

        try:
            if doc_type is DocumentType.PDF:
                content = await self.pdf_renderer.render(parts)
            else:
                content = await asyncio.wait_for(
                    asyncio.to_thread(self.docx_renderer.render, parts), timeout
                )
        except asyncio.TimeoutError as e:
            logger.error(f"{doc_type.value.upper()} generation timed out after {timeout}s")
            raise RenderTimeoutError(timeout) from e
        except DocGenError:
            raise
        except Exception as e:
            logger.error(f"Document generation failed: {e}", exc_info=True)
            raise GenerationError(f"Failed to generate document: {e}") from e

        if not content:
            raise GenerationError("Failed to generate document")

        logger.info(
            f"Generated {doc_type.filename} ({len(content)} bytes) "
            f"in {time.monotonic() - start:.2f}s"
        )
        return RenderResult(
            content=content,
            filename=doc_type.filename,
            content_type=doc_type.content_type,
        )
