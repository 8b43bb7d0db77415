"""Render service - HTML to PDF using Playwright."""

import asyncio
from typing import Any

from playwright.async_api import async_playwright

from docgen.config import Settings, get_settings
from docgen.shared.errors import DocGenError, GenerationError, RenderTimeoutError
from docgen.shared.logging import get_logger
from docgen.shared.types import DocumentParts

from .limiter import RenderLimiter
from .pages import splice_last_page
from .templates import EMPTY_DECORATION, render_page_decoration, render_pdf_document

logger = get_logger(__name__)


PAGE_FORMAT = "A4"

# A4 at 96 DPI
VIEWPORT = {"width": 794, "height": 1123}

PAGE_MARGINS = {
    "top": "100px",
    "bottom": "100px",
    "left": "50px",
    "right": "50px",
}


class PdfRenderer:
    """Renders sanitized document parts to PDF with headless Chromium."""

    def __init__(
        self,
        settings: Settings | None = None,
        limiter: RenderLimiter | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.limiter = limiter or RenderLimiter(self.settings.max_concurrent_renders)

    async def render(self, parts: DocumentParts) -> bytes:
        """
        Render document parts to PDF bytes.

        A fresh browser is launched for every call and closed before
        returning, whatever the outcome. ``render_timeout_seconds`` starts
        once a render slot is acquired; time spent queuing does not count.

        Footer placement:
            footer_on_last_page_only=False: footer on every page.
            footer_on_last_page_only=True: the loaded page is printed twice,
            without and with the footer. Margins are identical, so both
            prints paginate the same way; the final document takes every
            page but the last from the first print and the last page from
            the second.

        Raises:
            RenderTimeoutError: the print did not finish in time
            GenerationError: on any browser, navigation or assembly failure
        """
        html = render_pdf_document(parts.content_html, parts.watermark_text)
        header_template = render_page_decoration(parts.header_html)
        footer_template = render_page_decoration(parts.footer_html)
        last_page_only = parts.footer_on_last_page_only and bool(parts.footer_html)

        timeout = self.settings.render_timeout_seconds

        try:
            async with self.limiter.slot():
                pdf_bytes = await asyncio.wait_for(
                    self._print(html, header_template, footer_template, last_page_only),
                    timeout,
                )
        except asyncio.TimeoutError as e:
            logger.error(f"PDF render timed out after {timeout}s")
            raise RenderTimeoutError(timeout) from e
        except DocGenError:
            raise
        except Exception as e:
            reason = str(e) or type(e).__name__
            logger.error(f"PDF render failed: {reason}")
            raise GenerationError(f"Failed to generate PDF: {reason}") from e

        logger.info(f"Generated PDF: {len(pdf_bytes)} bytes")
        return pdf_bytes

    async def _print(
        self,
        html: str,
        header_template: str,
        footer_template: str,
        last_page_only: bool,
    ) -> bytes:
        async with async_playwright() as p:
            browser = await p.chromium.launch(
                headless=self.settings.browser_headless,
                args=self.settings.browser_args,
            )

            try:
                # Scripts never run in the print context.
                context = await browser.new_context(
                    java_script_enabled=False,
                    viewport=VIEWPORT,
                )
                page = await context.new_page()

                await page.set_content(html, wait_until="networkidle")

                pdf_options: dict[str, Any] = {
                    "format": PAGE_FORMAT,
                    "margin": PAGE_MARGINS,
                    "print_background": True,
                    "display_header_footer": True,
                    "header_template": header_template,
                }

                if not last_page_only:
                    return await page.pdf(footer_template=footer_template, **pdf_options)

                body_pdf = await page.pdf(footer_template=EMPTY_DECORATION, **pdf_options)
                decorated_pdf = await page.pdf(footer_template=footer_template, **pdf_options)
                return splice_last_page(body_pdf, decorated_pdf)

            finally:
                await browser.close()
