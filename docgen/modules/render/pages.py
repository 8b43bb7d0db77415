"""PDF page assembly helpers (pypdf)."""

from io import BytesIO

from pypdf import PdfReader, PdfWriter

from docgen.shared.errors import GenerationError


def splice_last_page(body_pdf: bytes, decorated_pdf: bytes) -> bytes:
    """
    Take pages 1..n-1 from ``body_pdf`` and page n from ``decorated_pdf``.

    Both inputs must be prints of the same loaded document, differing only
    in their page decorations, so their page counts match.

    Raises:
        GenerationError: if the two prints paginated differently
    """
    body = PdfReader(BytesIO(body_pdf))
    decorated = PdfReader(BytesIO(decorated_pdf))

    if len(body.pages) != len(decorated.pages):
        raise GenerationError(
            f"Page count mismatch between render passes "
            f"({len(body.pages)} vs {len(decorated.pages)})"
        )
    if not decorated.pages:
        raise GenerationError("Rendered PDF has no pages")

    writer = PdfWriter()
    for page in body.pages[:-1]:
        writer.add_page(page)
    writer.add_page(decorated.pages[-1])

    out = BytesIO()
    writer.write(out)
    return out.getvalue()
