"""
Input validation for POST /api/generate.

Each field is checked independently and reports its first failing rule, so
a single response names every offending field. Types are never coerced:
``"true"`` is not a boolean, and ``1`` and ``null`` are not strings. Only a
missing key counts as absent.
"""

from typing import Any

from docgen.shared.errors import FieldError, ValidationError

from .schemas import (
    MAX_CONTENT_LENGTH,
    MAX_DECORATION_LENGTH,
    DocumentType,
    GenerationRequest,
)

_MISSING = object()

# Optional markup fields: wire name -> (model field, display label)
OPTIONAL_TEXT_FIELDS = {
    "headerHtml": ("header_html", "Header HTML"),
    "footerHtml": ("footer_html", "Footer HTML"),
    "watermark": ("watermark", "Watermark"),
}

# Declaration order; errors are reported in this order.
KNOWN_FIELDS = (
    "contentHtml",
    "headerHtml",
    "footerHtml",
    "documentType",
    "watermark",
    "footerOnLastPageOnly",
)


def _check_content(value: Any) -> str | None:
    if value is _MISSING or value == "":
        return "Content HTML is required"
    if not isinstance(value, str):
        return "Content HTML must be a string"
    if len(value) > MAX_CONTENT_LENGTH:
        return f"Content HTML exceeds maximum size of {MAX_CONTENT_LENGTH} characters"
    return None


def _check_optional_text(value: Any, label: str) -> str | None:
    if value is _MISSING:
        return None
    if not isinstance(value, str):
        return f"{label} must be a string"
    if len(value) > MAX_DECORATION_LENGTH:
        return f"{label} exceeds maximum size of {MAX_DECORATION_LENGTH} characters"
    return None


def _check_document_type(value: Any) -> str | None:
    if value is _MISSING or value == "":
        return "Document type is required"
    if not isinstance(value, str):
        return "Document type must be a string"
    if value not in {t.value for t in DocumentType}:
        return 'Document type must be either "pdf" or "docx"'
    return None


def _check_flag(value: Any) -> str | None:
    if value is _MISSING:
        return None
    if not isinstance(value, bool):
        return "Footer on last page flag must be a boolean"
    return None


def validate_generate_input(data: Any) -> GenerationRequest:
    """
    Validate a decoded JSON body and build a GenerationRequest.

    Raises:
        ValidationError: listing every offending field
    """
    if not isinstance(data, dict):
        raise ValidationError([FieldError("body", "Request body must be a JSON object")])

    errors: list[FieldError] = []
    values: dict[str, Any] = {}

    for name in KNOWN_FIELDS:
        value = data.get(name, _MISSING)

        if name == "contentHtml":
            message = _check_content(value)
            values["content_html"] = value
        elif name == "documentType":
            message = _check_document_type(value)
            values["document_type"] = value
        elif name == "footerOnLastPageOnly":
            message = _check_flag(value)
            values["footer_on_last_page_only"] = False if value is _MISSING else value
        else:
            field, label = OPTIONAL_TEXT_FIELDS[name]
            message = _check_optional_text(value, label)
            values[field] = "" if value is _MISSING else value

        if message:
            errors.append(FieldError(name, message))

    for name in data:
        if name not in KNOWN_FIELDS:
            errors.append(FieldError(name, f'"{name}" is not allowed'))

    if errors:
        raise ValidationError(errors)

    return GenerationRequest(
        content_html=values["content_html"],
        header_html=values["header_html"],
        footer_html=values["footer_html"],
        document_type=DocumentType(values["document_type"]),
        watermark=values["watermark"],
        footer_on_last_page_only=values["footer_on_last_page_only"],
    )
