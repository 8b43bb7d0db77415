"""
DOCX service - HTML to Office Open XML using htmldocx + python-docx.

Layout mapping:
    header  -> default section header (every page)
    footer  -> default section footer (every page), or, when the footer is
               restricted to the last page, trailing paragraphs after a
               forced page break. Word has first/even/default footer slots
               but no "last page" slot.
    watermark -> VML WordArt shape anchored in the default header, which is
               how Word itself stores text watermarks, so it repeats on
               every page behind the body text.
"""

import base64
import binascii
import os
import tempfile
from io import BytesIO
from pathlib import Path
from xml.sax.saxutils import quoteattr

from bs4 import BeautifulSoup
from docx import Document
from docx.enum.section import WD_ORIENT
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_BREAK
from docx.image.exceptions import UnrecognizedImageError
from docx.image.image import Image
from docx.oxml import OxmlElement, parse_xml
from docx.oxml.ns import nsdecls, qn
from docx.shared import Emu, Inches, Mm
from htmldocx import HtmlToDocx

from docgen.config import DocxWatermarkStyle, Settings, get_settings
from docgen.shared.errors import GenerationError
from docgen.shared.logging import get_logger
from docgen.shared.types import DocumentParts

logger = get_logger(__name__)


DOCUMENT_TITLE = "Generated Document"
PAGE_WIDTH = Mm(210)
PAGE_HEIGHT = Mm(297)
PAGE_MARGIN = Inches(1)  # 1440 twips

IMAGE_SUFFIXES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/gif": ".gif",
    "image/bmp": ".bmp",
}

# Word's built-in "text plain" WordArt shape type.
_TEXT_SHAPETYPE = """<v:shapetype id="_x0000_t136" coordsize="21600,21600" o:spt="136" adj="10800" path="m@7,l@8,m@5,21600l@6,21600e">
<v:formulas>
<v:f eqn="sum #0 0 10800"/><v:f eqn="prod #0 2 1"/><v:f eqn="sum 21600 0 @1"/>
<v:f eqn="sum 0 0 @2"/><v:f eqn="sum 21600 0 @3"/><v:f eqn="if @0 @3 0"/>
<v:f eqn="if @0 21600 @1"/><v:f eqn="if @0 0 @2"/><v:f eqn="if @0 @4 21600"/>
<v:f eqn="mid @5 @6"/><v:f eqn="mid @8 @5"/><v:f eqn="mid @7 @8"/>
<v:f eqn="mid @6 @7"/><v:f eqn="sum @6 0 @5"/>
</v:formulas>
<v:path textpathok="t" o:connecttype="custom" o:connectlocs="@9,0;@10,10800;@11,21600;@12,10800" o:connectangles="270,180,90,0"/>
<v:textpath on="t" fitshape="t"/>
<v:handles><v:h position="#0,bottomRight" xrange="6629,14971"/></v:handles>
<o:lock v:ext="edit" text="t" shapetype="t"/>
</v:shapetype>"""


def watermark_pict_xml(text: str, style: DocxWatermarkStyle, max_width_pt: float) -> str:
    """Build the <w:pict> element XML for a text watermark."""
    width = min(max_width_pt, max(len(text), 1) * style.font_size_pt * 0.6)
    height = style.font_size_pt * 1.2
    shape_style = (
        f"position:absolute;margin-left:0;margin-top:0;"
        f"width:{width:.1f}pt;height:{height:.1f}pt;rotation:{style.rotation};"
        f"z-index:-251657216;"
        f"mso-position-horizontal:center;mso-position-horizontal-relative:margin;"
        f"mso-position-vertical:center;mso-position-vertical-relative:margin"
    )
    font = f'font-family:"{style.font_family}";font-size:1pt'
    return (
        f'<w:pict {nsdecls("w")} '
        f'xmlns:v="urn:schemas-microsoft-com:vml" '
        f'xmlns:o="urn:schemas-microsoft-com:office:office">'
        f"{_TEXT_SHAPETYPE}"
        f'<v:shape id="DocGenWatermark" o:spid="_x0000_s2049" type="#_x0000_t136" '
        f"style={quoteattr(shape_style)} o:allowincell=\"f\" "
        f"fillcolor={quoteattr(style.color)} stroked=\"f\">"
        f'<v:fill opacity="{style.opacity:g}"/>'
        f"<v:textpath style={quoteattr(font)} string={quoteattr(text)}/>"
        f"</v:shape></w:pict>"
    )


def _clear(container) -> None:
    """Remove all block content from a header/footer."""
    element = container._element
    for child in list(element):
        element.remove(child)


def _ensure_trailing_paragraph(container) -> None:
    # Word rejects a header/footer (or cell) that does not end in a paragraph.
    children = list(container._element)
    if not children or children[-1].tag != qn("w:p"):
        container.add_paragraph()


def _append_page_field(paragraph) -> None:
    """Append a PAGE field (current page number) to a paragraph."""
    run = paragraph.add_run()
    begin = OxmlElement("w:fldChar")
    begin.set(qn("w:fldCharType"), "begin")
    instr = OxmlElement("w:instrText")
    instr.set(qn("xml:space"), "preserve")
    instr.text = "PAGE"
    end = OxmlElement("w:fldChar")
    end.set(qn("w:fldCharType"), "end")
    run._r.append(begin)
    run._r.append(instr)
    run._r.append(end)


class DocxRenderer:
    """Renders sanitized document parts to a DOCX package."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def render(self, parts: DocumentParts) -> bytes:
        """
        Render document parts to DOCX bytes.

        Raises:
            GenerationError: on any conversion failure
        """
        try:
            with tempfile.TemporaryDirectory(prefix="docgen_") as workdir:
                return self._build(parts, Path(workdir))
        except Exception as e:
            reason = str(e) or type(e).__name__
            logger.error(f"DOCX render failed: {reason}")
            raise GenerationError(f"Failed to generate DOCX: {reason}") from e

    def _build(self, parts: DocumentParts, workdir: Path) -> bytes:
        document = Document()
        document.core_properties.title = DOCUMENT_TITLE

        section = document.sections[0]
        section.orientation = WD_ORIENT.PORTRAIT
        section.page_width = PAGE_WIDTH
        section.page_height = PAGE_HEIGHT
        section.top_margin = PAGE_MARGIN
        section.bottom_margin = PAGE_MARGIN
        section.left_margin = PAGE_MARGIN
        section.right_margin = PAGE_MARGIN
        usable_width = Emu(section.page_width - section.left_margin - section.right_margin)

        content = self._prepare_images(parts.content_html, workdir)
        header = self._prepare_images(parts.header_html, workdir)
        footer = self._prepare_images(parts.footer_html, workdir)

        HtmlToDocx().add_html_to_document(content, document)

        # Header: caller markup, then the watermark anchor paragraph
        page_header = section.header
        page_header.is_linked_to_previous = False
        _clear(page_header)
        if header:
            self._add_html_block(page_header, header, usable_width)
        anchor = page_header.add_paragraph()
        if parts.watermark_text:
            pict = parse_xml(
                watermark_pict_xml(
                    parts.watermark_text,
                    self.settings.docx_watermark,
                    max_width_pt=usable_width.pt,
                )
            )
            anchor.add_run()._r.append(pict)

        # Footer: caller markup (every page) and/or page number
        page_footer = section.footer
        page_footer.is_linked_to_previous = False
        _clear(page_footer)
        if footer and not parts.footer_on_last_page_only:
            self._add_html_block(page_footer, footer, usable_width)
        if self.settings.docx_page_numbers:
            number = page_footer.add_paragraph()
            number.alignment = WD_ALIGN_PARAGRAPH.CENTER
            _append_page_field(number)
        _ensure_trailing_paragraph(page_footer)

        if footer and parts.footer_on_last_page_only:
            document.add_paragraph().add_run().add_break(WD_BREAK.PAGE)
            HtmlToDocx().add_html_to_document(footer, document)

        out = BytesIO()
        document.save(out)
        data = out.getvalue()
        logger.info(f"Generated DOCX: {len(data)} bytes")
        return data

    def _add_html_block(self, container, markup: str, width) -> None:
        """
        Convert markup into a header/footer.

        htmldocx only targets documents and table cells, so the markup goes
        into a borderless single-cell table.
        """
        table = container.add_table(rows=1, cols=1, width=width)
        HtmlToDocx().add_html_to_cell(markup, table.cell(0, 0))

    def _prepare_images(self, markup: str, workdir: Path) -> str:
        """
        Make <img> elements digestible for htmldocx.

        htmldocx treats a non-URL src as a file path and fails on a missing
        src, so base64 data: URIs are written to files under ``workdir``.
        Images whose source was blanked (or never set), or whose bytes
        python-docx cannot read as an image, are dropped.
        """
        if not markup or "<img" not in markup.lower():
            return markup

        soup = BeautifulSoup(markup, "html.parser")
        for img in soup.find_all("img"):
            src = (img.get("src") or "").strip()
            if not src:
                img.decompose()
                continue
            if not src.lower().startswith("data:"):
                continue

            header, _, payload = src.partition(",")
            mime = header[5:].split(";")[0].lower()
            if ";base64" not in header.lower() or mime not in IMAGE_SUFFIXES:
                logger.warning(f"Dropping unsupported data: image ({mime or 'unknown'})")
                img.decompose()
                continue

            try:
                raw = base64.b64decode(payload, validate=True)
            except (binascii.Error, ValueError):
                logger.warning(f"Dropping undecodable data: image ({mime})")
                img.decompose()
                continue

            try:
                Image.from_blob(raw)
            except UnrecognizedImageError:
                logger.warning(f"Dropping data: image with unrecognized content ({mime})")
                img.decompose()
                continue

            fd, path = tempfile.mkstemp(dir=workdir, suffix=IMAGE_SUFFIXES[mime], prefix="img_")
            with os.fdopen(fd, "wb") as f:
                f.write(raw)
            img["src"] = path

        return soup.decode_contents()
