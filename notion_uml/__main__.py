"""
Command line entry point.

Usage:
  python -m notion_uml serve --port 8080
  python -m notion_uml encode diagram.puml            # prints the encoded token
  python -m notion_uml encode --backend plantuml < diagram.puml
  python -m notion_uml url --format svg diagram.puml  # prints the render URL
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import Settings, configure_logging
from .encoding import ENCODERS, get_encoder
from .errors import ConfigError
from .render_client import DEFAULT_RENDER_URLS, SUPPORTED_FORMATS, RenderClient


def _read_source(path: str | None) -> str:
    if path:
        return Path(path).read_text(encoding="utf-8")
    return sys.stdin.read()


def _cmd_serve(args) -> int:
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"notion-uml: {e}", file=sys.stderr)
        return 2
    configure_logging(settings.log_level)
    from .routes import serve

    serve(settings.build_pipeline(), host=args.host, port=args.port)
    return 0


def _cmd_encode(args) -> int:
    print(get_encoder(args.backend).encode(_read_source(args.input)))
    return 0


def _cmd_url(args) -> int:
    token = get_encoder(args.backend).encode(_read_source(args.input))
    client = RenderClient(args.render_url or DEFAULT_RENDER_URLS[args.backend])
    print(client.get_render_url(token, args.format))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notion-uml",
        description="Render PlantUML stored in Notion code blocks.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP server (reads settings from the environment)")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8080)
    serve.set_defaults(func=_cmd_serve)

    for name, func, help_text in (
        ("encode", _cmd_encode, "Print the encoded token for diagram source"),
        ("url", _cmd_url, "Print the render URL for diagram source"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("input", nargs="?", default=None, help="Diagram source file (default: stdin)")
        p.add_argument("--backend", choices=sorted(ENCODERS), default="kroki")
        p.set_defaults(func=func)
        if name == "url":
            p.add_argument("--format", choices=SUPPORTED_FORMATS, default="svg")
            p.add_argument("--render-url", default=None, help="Override the render server base URL")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
