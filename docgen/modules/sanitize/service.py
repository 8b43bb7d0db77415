"""Sanitize service - strip executable content and unsafe image sources."""

from bs4 import BeautifulSoup

from docgen.shared.logging import get_logger

logger = get_logger(__name__)


# Elements dropped with their contents. Layout CSS comes only from our own
# wrapper templates, so caller <style> blocks go too.
STRIPPED_TAGS = ("script", "style")

SAFE_IMAGE_PREFIXES = ("http://", "https://", "data:")

# Candidate lists are not vetted; print output uses <img src> only.
SRCSET_TAGS = ("img", "source")


def is_safe_image_source(src: str) -> bool:
    """True for absolute http(s) URLs and data: URIs."""
    return src.strip().lower().startswith(SAFE_IMAGE_PREFIXES)


class HtmlSanitizer:
    """Best-effort HTML sanitizer. Never fails the request."""

    def sanitize(self, html: str) -> str:
        """
        Return markup safe for embedding into a generated document.

        - <script> and <style> elements are removed with their contents
        - inline event handlers (on*) are removed
        - <img> sources that are not http(s) or data: are blanked
        - srcset is removed from <img> and <source>

        If the input is a full document, only the <body> contents are
        returned. On any parse/transform failure the original input is
        returned unchanged.
        """
        if not html:
            return ""

        try:
            soup = BeautifulSoup(html, "html.parser")

            for tag in soup.find_all(STRIPPED_TAGS):
                tag.decompose()

            for tag in soup.find_all(True):
                handlers = [name for name in tag.attrs if name.lower().startswith("on")]
                for name in handlers:
                    del tag[name]

            for img in soup.find_all("img"):
                src = img.get("src")
                if src is not None and not is_safe_image_source(src):
                    img["src"] = ""

            for tag in soup.find_all(SRCSET_TAGS):
                if tag.has_attr("srcset"):
                    del tag["srcset"]

            body = soup.body
            if body is not None:
                return body.decode_contents()
            return soup.decode_contents()

        except Exception as e:
            logger.warning(f"HTML sanitization failed, passing markup through: {e}")
            return html

    def extract_text(self, html: str) -> str:
        """Sanitize, then reduce to whitespace-collapsed text content."""
        cleaned = self.sanitize(html)
        if not cleaned:
            return ""
        text = BeautifulSoup(cleaned, "html.parser").get_text(" ")
        return " ".join(text.split())
