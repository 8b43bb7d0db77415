"""
Shared types used across modules.
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class RequestContext:
    """Per-request context attached by the HTTP middleware."""

    request_id: str
    method: str = ""
    path: str = ""


class DocumentParts(BaseModel):
    """Sanitized document inputs handed to a renderer."""

    model_config = ConfigDict(frozen=True)

    content_html: str
    header_html: str = ""
    footer_html: str = ""
    watermark_text: str = ""
    footer_on_last_page_only: bool = False
