"""Tests for generate request validation."""

import pytest

from docgen.modules.generate.schemas import DocumentType, GenerationRequest
from docgen.modules.generate.validation import validate_generate_input
from docgen.shared.errors import ValidationError


def _errors(data) -> dict[str, str]:
    with pytest.raises(ValidationError) as exc_info:
        validate_generate_input(data)
    return {e.field: e.message for e in exc_info.value.errors}


class TestValidGenerateInput:
    """Accepted bodies produce normalized requests."""

    def test_minimal_request_gets_defaults(self) -> None:
        req = validate_generate_input({"contentHtml": "<p>Hello</p>", "documentType": "pdf"})

        assert isinstance(req, GenerationRequest)
        assert req.content_html == "<p>Hello</p>"
        assert req.document_type is DocumentType.PDF
        assert req.header_html == ""
        assert req.footer_html == ""
        assert req.watermark == ""
        assert req.footer_on_last_page_only is False

    def test_full_request(self) -> None:
        req = validate_generate_input({
            "contentHtml": "<p>Body</p>",
            "headerHtml": "<b>Head</b>",
            "footerHtml": "Foot",
            "documentType": "docx",
            "watermark": "DRAFT",
            "footerOnLastPageOnly": True,
        })

        assert req.document_type is DocumentType.DOCX
        assert req.header_html == "<b>Head</b>"
        assert req.footer_html == "Foot"
        assert req.watermark == "DRAFT"
        assert req.footer_on_last_page_only is True

    def test_empty_optional_strings_are_allowed(self) -> None:
        req = validate_generate_input({
            "contentHtml": "x", "documentType": "pdf", "footerHtml": "", "watermark": "",
        })
        assert req.footer_html == ""

    def test_limits_are_inclusive(self) -> None:
        req = validate_generate_input({
            "contentHtml": "a" * 10_000_000,
            "headerHtml": "h" * 100_000,
            "documentType": "pdf",
        })
        assert len(req.content_html) == 10_000_000

    def test_request_is_immutable(self) -> None:
        req = validate_generate_input({"contentHtml": "x", "documentType": "pdf"})
        with pytest.raises(Exception):
            req.content_html = "changed"


class TestInvalidGenerateInput:
    """Each field reports its first failing rule."""

    def test_missing_content_and_type(self) -> None:
        errors = _errors({})
        assert errors == {
            "contentHtml": "Content HTML is required",
            "documentType": "Document type is required",
        }

    def test_empty_content_is_required_error_not_size_error(self) -> None:
        errors = _errors({"contentHtml": "", "documentType": "pdf"})
        assert errors["contentHtml"] == "Content HTML is required"

    def test_content_too_long(self) -> None:
        errors = _errors({"contentHtml": "a" * 10_000_001, "documentType": "pdf"})
        assert "exceeds maximum size" in errors["contentHtml"]
        assert "10000000" in errors["contentHtml"]

    def test_content_wrong_type(self) -> None:
        errors = _errors({"contentHtml": 42, "documentType": "pdf"})
        assert errors["contentHtml"] == "Content HTML must be a string"

    @pytest.mark.parametrize("value", ["bogus", "PDF", "Docx", " pdf"])
    def test_document_type_must_match_exactly(self, value) -> None:
        errors = _errors({"contentHtml": "x", "documentType": value})
        assert errors["documentType"] == 'Document type must be either "pdf" or "docx"'

    def test_document_type_wrong_type(self) -> None:
        errors = _errors({"contentHtml": "x", "documentType": ["pdf"]})
        assert errors["documentType"] == "Document type must be a string"

    @pytest.mark.parametrize(
        "field,label",
        [("headerHtml", "Header HTML"), ("footerHtml", "Footer HTML"), ("watermark", "Watermark")],
    )
    def test_optional_text_fields(self, field, label) -> None:
        errors = _errors({"contentHtml": "x", "documentType": "pdf", field: 1})
        assert errors[field] == f"{label} must be a string"

        errors = _errors({"contentHtml": "x", "documentType": "pdf", field: "a" * 100_001})
        assert errors[field] == f"{label} exceeds maximum size of 100000 characters"

    @pytest.mark.parametrize("value", ["true", 1, 0, "yes"])
    def test_flag_is_not_coerced(self, value) -> None:
        errors = _errors({"contentHtml": "x", "documentType": "pdf", "footerOnLastPageOnly": value})
        assert errors["footerOnLastPageOnly"] == "Footer on last page flag must be a boolean"

    @pytest.mark.parametrize(
        "field,message",
        [
            ("headerHtml", "Header HTML must be a string"),
            ("footerHtml", "Footer HTML must be a string"),
            ("watermark", "Watermark must be a string"),
            ("footerOnLastPageOnly", "Footer on last page flag must be a boolean"),
        ],
    )
    def test_null_optional_is_a_type_error(self, field, message) -> None:
        errors = _errors({"contentHtml": "x", "documentType": "pdf", field: None})
        assert errors == {field: message}

    def test_null_required_fields_are_type_errors(self) -> None:
        errors = _errors({"contentHtml": None, "documentType": None})
        assert errors == {
            "contentHtml": "Content HTML must be a string",
            "documentType": "Document type must be a string",
        }

    def test_unknown_keys_rejected(self) -> None:
        errors = _errors({"contentHtml": "x", "documentType": "pdf", "title": "t"})
        assert errors == {"title": '"title" is not allowed'}

    def test_all_fields_are_checked(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_generate_input({
                "contentHtml": 1,
                "headerHtml": 2,
                "documentType": "bogus",
                "footerOnLastPageOnly": "no",
            })

        exc = exc_info.value
        assert exc.fields == ["contentHtml", "headerHtml", "documentType", "footerOnLastPageOnly"]
        assert exc.message.startswith("Content HTML must be a string; Header HTML must be a string")
        assert exc.http_status == 400

    @pytest.mark.parametrize("body", [None, [], "contentHtml", 3])
    def test_non_object_body(self, body) -> None:
        errors = _errors(body)
        assert errors == {"body": "Request body must be a JSON object"}
