"""slideclaw command-line interface.

Commands::

    slideclaw serve [--port N] [--open]          - Start the API server
    slideclaw create "<prompt>" [--presentation ID]
                                                 - Generate (or edit) a deck with the agent
    slideclaw list                               - List presentations
    slideclaw show <id>                          - Show a presentation's slides
    slideclaw open <id>                          - Open a presentation in the web editor
    slideclaw export <id> [-f pdf|pptx] [-o PATH]
                                                 - Download a PDF/PPTX export
    slideclaw design [--set KEY]                 - Show or change the CSS library preference

Every command except ``serve`` and ``open`` talks to a running server at
SLIDECLAW_URL (default http://localhost:3001), overridable with --url.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import threading
import webbrowser
from collections.abc import Awaitable, Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import httpx

from slideclaw import __version__
from slideclaw.client import SlideclawAPIError, SlideclawClient
from slideclaw.config import get_settings

# ------------------------------------------------------------------ #
# Formatting helpers
# ------------------------------------------------------------------ #

_RESET = "\033[0m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_BOLD = "\033[1m"
_CYAN = "\033[36m"


def _ok(msg: str) -> None:
    print(f"{_GREEN}  [OK]{_RESET}  {msg}")


def _err(msg: str) -> None:
    print(f"{_RED}[ERROR]{_RESET} {msg}", file=sys.stderr)


def _info(msg: str) -> None:
    print(f"{_CYAN} [INFO]{_RESET} {msg}")


def _header(msg: str) -> None:
    print(f"\n{_BOLD}{msg}{_RESET}")


def _run_with_client(
    args: argparse.Namespace,
    action: Callable[[SlideclawClient], Awaitable[int]],
) -> int:
    """Run *action* against the server, turning API/transport errors into exit code 1."""

    async def runner() -> int:
        async with SlideclawClient(args.url) as client:
            return await action(client)

    try:
        return asyncio.run(runner())
    except SlideclawAPIError as exc:
        _err(exc.message)
    except httpx.HTTPError as exc:
        _err(f"Could not reach slideclaw server at {args.url}: {exc}")
    return 1


def _format_date(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).strftime("%Y-%m-%d")
    except ValueError:
        return timestamp


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the API server in this process."""
    from slideclaw.main import run

    settings = get_settings()
    port = args.port or settings.port
    _info(f"Starting slideclaw server on port {port}...")
    if args.open:
        threading.Timer(2.0, webbrowser.open, args=[settings.web_url]).start()
    run(port=port)
    return 0


def cmd_create(args: argparse.Namespace) -> int:
    async def action(client: SlideclawClient) -> int:
        _info("Generating presentation...")
        result = await client.generate(args.prompt, args.presentation)
        if not result.get("presentationId"):
            _err("Failed to create presentation")
            if result.get("message"):
                print(f"   {result['message']}")
            return 1
        _ok(f"Presentation: {result['presentationId']}")
        print(f"   {result.get('message', '')}")
        return 0

    return _run_with_client(args, action)


def cmd_list(args: argparse.Namespace) -> int:
    async def action(client: SlideclawClient) -> int:
        presentations = await client.list_presentations()
        if not presentations:
            print("No presentations found.")
            return 0
        _header("Presentations:")
        for p in presentations:
            print(
                f"  {p['id']}  {p['title']}  "
                f"({p['slideCount']} slides, {_format_date(p['createdAt'])})"
            )
        return 0

    return _run_with_client(args, action)


def cmd_show(args: argparse.Namespace) -> int:
    async def action(client: SlideclawClient) -> int:
        presentation = await client.get_presentation(args.id)
        _header(presentation["title"])
        if presentation.get("description"):
            print(f"  {presentation['description']}")
        slides: list[dict[str, Any]] = sorted(presentation["slides"], key=lambda s: s["order"])
        if not slides:
            print("  (no slides)")
        for slide in slides:
            print(f"  {slide['order'] + 1:>3}. {slide['title']}  [{slide['id']}]")
        return 0

    return _run_with_client(args, action)


def cmd_open(args: argparse.Namespace) -> int:
    url = f"{get_settings().web_url}?presentation={args.id}"
    _info(f"Opening {url}")
    webbrowser.open(url)
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    fmt = args.format.lower()
    output = Path(args.output or f"presentation-{args.id}.{fmt}")

    async def action(client: SlideclawClient) -> int:
        _info(f"Exporting {args.id} as {fmt.upper()}...")
        content = await client.export(args.id, fmt)
        output.write_bytes(content)
        _ok(f"Exported to: {output.resolve()}")
        return 0

    return _run_with_client(args, action)


def cmd_design(args: argparse.Namespace) -> int:
    async def action(client: SlideclawClient) -> int:
        if args.set:
            config = await client.set_design_config(args.set)
            _ok(f"Preferred library: {config['library']}")
            return 0

        data = await client.get_design_config()
        _header(f"Preferred library: {data['config']['library']}")
        for entry in data["catalog"]:
            print(f"  {entry['key']:<10} {entry['name']}")
        return 0

    return _run_with_client(args, action)


# ------------------------------------------------------------------ #
# Argument parser
# ------------------------------------------------------------------ #


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slideclaw",
        description="AI-powered presentation tool",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--url",
        default=None,
        help="Server base URL (default: SLIDECLAW_URL or http://localhost:3001)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Start the slideclaw server")
    serve.add_argument("-p", "--port", type=int, default=None, help="Port to listen on")
    serve.add_argument("--open", action="store_true", help="Open the web editor once started")
    serve.set_defaults(func=cmd_serve)

    create = sub.add_parser("create", help="Generate a presentation from a prompt")
    create.add_argument("prompt")
    create.add_argument("--presentation", default=None, help="Edit this presentation instead")
    create.set_defaults(func=cmd_create)

    list_ = sub.add_parser("list", help="List all presentations")
    list_.set_defaults(func=cmd_list)

    show = sub.add_parser("show", help="Show a presentation's slides")
    show.add_argument("id")
    show.set_defaults(func=cmd_show)

    open_ = sub.add_parser("open", help="Open a presentation in the browser")
    open_.add_argument("id")
    open_.set_defaults(func=cmd_open)

    export = sub.add_parser("export", help="Export a presentation to PDF or PPTX")
    export.add_argument("id")
    export.add_argument("-f", "--format", choices=["pdf", "pptx"], default="pdf")
    export.add_argument("-o", "--output", default=None, help="Output file path")
    export.set_defaults(func=cmd_export)

    design = sub.add_parser("design", help="Show or set the preferred CSS library")
    design.add_argument(
        "--set", default=None, metavar="KEY", help="Library key (tailwind, bootstrap, bulma, pico, none)"
    )
    design.set_defaults(func=cmd_design)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.url is None:
        args.url = get_settings().server_url
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
