"""
Shared fixtures: settings, application, test client and fake renderers.
"""

from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from pypdf import PdfWriter

from docgen.app import build_app
from docgen.config import Settings, init_settings, reset_settings
from docgen.modules.generate.router import get_service
from docgen.modules.generate.service import DocumentService
from docgen.shared.types import DocumentParts


def make_pdf(pages: int = 1, width: float = 595, height: float = 842) -> bytes:
    """Build a blank PDF with the given number of pages."""
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=width, height=height)
    out = BytesIO()
    writer.write(out)
    return out.getvalue()


class FakePdfRenderer:
    """Stands in for PdfRenderer; records what it was asked to render."""

    def __init__(self, result: bytes | None = None, error: Exception | None = None) -> None:
        self.result = make_pdf() if result is None else result
        self.error = error
        self.calls: list[DocumentParts] = []

    async def render(self, parts: DocumentParts) -> bytes:
        self.calls.append(parts)
        if self.error is not None:
            raise self.error
        return self.result


class FakeDocxRenderer:
    """Stands in for DocxRenderer."""

    def __init__(self, result: bytes = b"PK\x03\x04fake-docx", error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[DocumentParts] = []

    def render(self, parts: DocumentParts) -> bytes:
        self.calls.append(parts)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def settings() -> Settings:
    """Test settings, installed as the process settings."""
    reset_settings()
    s = Settings(
        environment="production",
        max_concurrent_renders=2,
        render_timeout_seconds=5,
    )
    init_settings(s)
    yield s
    reset_settings()


@pytest.fixture
def pdf_renderer() -> FakePdfRenderer:
    return FakePdfRenderer()


@pytest.fixture
def docx_renderer() -> FakeDocxRenderer:
    return FakeDocxRenderer()


@pytest.fixture
def app(settings, pdf_renderer, docx_renderer):
    """Application with the renderers replaced by fakes."""
    application = build_app(settings)

    def _service() -> DocumentService:
        return DocumentService(
            settings=settings,
            pdf_renderer=pdf_renderer,
            docx_renderer=docx_renderer,
        )

    application.dependency_overrides[get_service] = _service
    return application


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
