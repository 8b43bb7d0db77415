"""
Wrapper templates for the PDF renderer.

Templates autoescape. Sanitized markup is passed in as ``Markup`` so it is
embedded as-is; plain text such as the watermark is escaped.
"""

from jinja2 import DictLoader, Environment
from markupsafe import Markup

# Chromium needs a non-empty template, otherwise it prints its default
# date/title/url decorations.
EMPTY_DECORATION = "<div></div>"

WATERMARK_OPACITY = 0.15

_TEMPLATES = {
    "pdf_document.html": """<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{{ title }}</title>
<style>
  @page { size: A4; }
  body {
    font-family: Arial, sans-serif;
    line-height: 1.6;
    margin: 0;
    padding: 0;
  }
  .content {
    position: relative;
    margin: 0 auto;
    padding: 20px 0;
  }
{% if watermark %}
  .watermark {
    position: fixed;
    top: 0;
    left: 0;
    width: 100%;
    height: 100%;
    z-index: -1000;
    opacity: {{ watermark_opacity }};
    pointer-events: none;
    display: flex;
    align-items: center;
    justify-content: center;
    overflow: hidden;
  }
  .watermark span {
    transform: rotate(-45deg);
    font-size: 72px;
    font-weight: bold;
    color: #888888;
    white-space: nowrap;
  }
{% endif %}
  @media print {
    .page-break { page-break-after: always; }
  }
</style>
</head>
<body>
{% if watermark %}
<div class="watermark"><span>{{ watermark }}</span></div>
{% endif %}
<div class="content">
{{ content }}
</div>
</body>
</html>
""",
    "page_decoration.html": """<div style="width: 100%; font-size: 10px; padding: 10px 50px; box-sizing: border-box;">
{{ markup }}
</div>""",
}

_env = Environment(
    loader=DictLoader(_TEMPLATES),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_pdf_document(
    content_html: str,
    watermark_text: str = "",
    title: str = "Generated Document",
) -> str:
    """Compose the full print document around sanitized content."""
    return _env.get_template("pdf_document.html").render(
        title=title,
        content=Markup(content_html),
        watermark=watermark_text,
        watermark_opacity=WATERMARK_OPACITY,
    )


def render_page_decoration(markup: str) -> str:
    """Wrap sanitized header/footer markup for Chromium's per-page templates."""
    if not markup:
        return EMPTY_DECORATION
    return _env.get_template("page_decoration.html").render(markup=Markup(markup))
