"""Generate module schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

MAX_CONTENT_LENGTH = 10_000_000
MAX_DECORATION_LENGTH = 100_000


class DocumentType(str, Enum):
    """Supported output formats."""

    PDF = "pdf"
    DOCX = "docx"

    @property
    def filename(self) -> str:
        return f"document.{self.value}"

    @property
    def content_type(self) -> str:
        return CONTENT_TYPES[self]


CONTENT_TYPES = {
    DocumentType.PDF: "application/pdf",
    DocumentType.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class GenerationRequest(BaseModel):
    """A validated document generation request. Built by validate_generate_input()."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content_html: str = Field(
        ..., alias="contentHtml", min_length=1, max_length=MAX_CONTENT_LENGTH
    )
    header_html: str = Field(default="", alias="headerHtml", max_length=MAX_DECORATION_LENGTH)
    footer_html: str = Field(default="", alias="footerHtml", max_length=MAX_DECORATION_LENGTH)
    document_type: DocumentType = Field(..., alias="documentType")
    watermark: str = Field(default="", max_length=MAX_DECORATION_LENGTH)
    footer_on_last_page_only: bool = Field(default=False, alias="footerOnLastPageOnly")


class RenderResult(BaseModel):
    """Rendered document bytes plus download metadata."""

    content: bytes
    filename: str
    content_type: str

    @property
    def size_bytes(self) -> int:
        return len(self.content)
