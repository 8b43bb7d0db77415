"""
Document generation service entrypoint - runs uvicorn server.
"""

import argparse

import uvicorn

from docgen.app import build_app
from docgen.config import get_settings


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docgen",
        description="Serve the HTML to PDF/DOCX document generation API.",
    )
    parser.add_argument("--host", help="Bind host (default: settings.host)")
    parser.add_argument("--port", type=int, help="Bind port (default: settings.port)")
    parser.add_argument("--log-level", help="Log level (default: settings.log_level)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run the document generation server."""
    args = parse_args(argv)
    settings = get_settings()

    overrides = {
        key: value
        for key, value in (("host", args.host), ("port", args.port), ("log_level", args.log_level))
        if value is not None
    }
    if overrides:
        settings = settings.model_copy(update=overrides)

    app = build_app(settings)

    print(f"Starting document generation service on http://{settings.host}:{settings.port}")
    print(f"Docs: http://{settings.host}:{settings.port}/docs")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
