"""Tests for the PDF wrapper templates and page assembly helpers."""

from io import BytesIO

import pytest
from pypdf import PdfReader

from conftest import make_pdf
from docgen.modules.render.pages import splice_last_page
from docgen.modules.render.templates import (
    EMPTY_DECORATION,
    render_page_decoration,
    render_pdf_document,
)
from docgen.shared.errors import GenerationError


class TestPdfDocumentTemplate:

    def test_content_is_embedded_as_markup(self) -> None:
        html = render_pdf_document("<p>Hello <b>world</b></p>")
        assert '<div class="content">' in html
        assert "<p>Hello <b>world</b></p>" in html
        assert "size: A4" in html

    def test_no_watermark_layer_without_text(self) -> None:
        html = render_pdf_document("<p>x</p>")
        assert 'class="watermark"' not in html

    def test_watermark_layer(self) -> None:
        html = render_pdf_document("<p>x</p>", watermark_text="CONFIDENTIAL")
        assert '<div class="watermark"><span>CONFIDENTIAL</span></div>' in html
        assert "rotate(-45deg)" in html
        assert "z-index: -1000" in html

    def test_watermark_text_is_escaped(self) -> None:
        html = render_pdf_document("<p>x</p>", watermark_text='<img src=x onerror="a()">')
        assert "<img src=x" not in html
        assert "&lt;img src=x" in html


class TestPageDecoration:

    def test_empty_markup_gives_empty_div(self) -> None:
        assert render_page_decoration("") == EMPTY_DECORATION

    def test_markup_is_wrapped(self) -> None:
        html = render_page_decoration("<em>Page footer</em>")
        assert html.startswith('<div style="width: 100%; font-size: 10px;')
        assert "<em>Page footer</em>" in html


class TestSpliceLastPage:

    def test_last_page_comes_from_decorated_print(self) -> None:
        body = make_pdf(pages=3, width=100, height=100)
        decorated = make_pdf(pages=3, width=200, height=200)

        result = PdfReader(BytesIO(splice_last_page(body, decorated)))

        widths = [float(page.mediabox.width) for page in result.pages]
        assert widths == [100, 100, 200]

    def test_single_page_document(self) -> None:
        body = make_pdf(pages=1, width=100, height=100)
        decorated = make_pdf(pages=1, width=200, height=200)

        result = PdfReader(BytesIO(splice_last_page(body, decorated)))

        assert len(result.pages) == 1
        assert float(result.pages[0].mediabox.width) == 200

    def test_pagination_mismatch_is_a_generation_error(self) -> None:
        with pytest.raises(GenerationError, match="Page count mismatch"):
            splice_last_page(make_pdf(pages=2), make_pdf(pages=3))
