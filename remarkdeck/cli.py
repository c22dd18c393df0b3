#!/usr/bin/env python3
"""
RemarkDeck CLI

Usage:
    remarkdeck generate "The history of tea"          # Markdown to stdout
    remarkdeck generate "..." --html deck.html        # Standalone presentation
    remarkdeck render deck.json --output deck.md      # Compile a saved deck
    remarkdeck cache list                             # Cached decks, newest first
    remarkdeck cache show                             # Newest cached deck
    remarkdeck cache remove "The history of tea"
    remarkdeck cache clear
    remarkdeck quota                                  # Advisory requests left
    remarkdeck serve --port 7005                      # Run the API server
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from remarkdeck.client import DeckClient, DeckClientError
from remarkdeck.core import Settings, get_settings, setup_logging
from remarkdeck.core.storage import MemoryStore
from remarkdeck.models.deck import Deck
from remarkdeck.services.compiler import RenderedDeck, render_deck
from remarkdeck.services.generation import RateLimitExceededError
from remarkdeck.web import render_presentation_html

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_RATE_LIMITED = 2


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = get_settings()
    updates = {}
    if args.data_dir:
        updates["data_dir"] = Path(args.data_dir)
    if getattr(args, "api_url", None):
        updates["api_base_url"] = args.api_url
    return settings.model_copy(update=updates) if updates else settings


def _build_client(args: argparse.Namespace, settings: Settings) -> DeckClient:
    store = MemoryStore() if args.ephemeral else None
    return DeckClient.from_settings(settings, store=store)


def _write_outputs(
    rendered: RenderedDeck,
    settings: Settings,
    output: Optional[str],
    html: Optional[str],
    title: str,
) -> None:
    if output:
        Path(output).write_text(rendered.markdown, encoding="utf-8")
        print(f"Markdown written to {output}", file=sys.stderr)
    if html:
        page = render_presentation_html(rendered, title, settings.remark_script_url)
        Path(html).write_text(page, encoding="utf-8")
        print(f"Presentation written to {html}", file=sys.stderr)
    if not output and not html:
        sys.stdout.write(rendered.markdown)


def cmd_generate(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    client = _build_client(args, settings)

    try:
        result = asyncio.run(client.fetch_deck(args.text))
    except RateLimitExceededError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RATE_LIMITED
    except DeckClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    source = "cache" if result.from_cache else "generation API"
    print(
        f"Deck with {len(result.deck.slides)} slides from {source} "
        f"({result.remaining_requests} requests remaining)",
        file=sys.stderr,
    )

    if args.json:
        sys.stdout.write(json.dumps(result.deck.to_wire(), indent=2) + "\n")
        return EXIT_OK

    _write_outputs(render_deck(result.deck), settings, args.output, args.html, settings.app_name)
    return EXIT_OK


def cmd_render(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    try:
        deck = Deck.model_validate_json(Path(args.deck).read_text(encoding="utf-8"))
    except OSError as e:
        print(f"Error: cannot read {args.deck}: {e}", file=sys.stderr)
        return EXIT_ERROR
    except ValidationError as e:
        print(f"Error: {args.deck} is not a valid deck:\n{e}", file=sys.stderr)
        return EXIT_ERROR

    _write_outputs(render_deck(deck), settings, args.output, args.html, Path(args.deck).stem)
    return EXIT_OK


def cmd_cache(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    cache = _build_client(args, settings).cache

    if args.action == "list":
        entries = cache.list()
        if not entries:
            print("No cached decks")
        for entry in entries:
            when = datetime.fromtimestamp(entry.timestamp / 1000).strftime("%Y-%m-%d %H:%M:%S")
            topic = entry.input if len(entry.input) <= 60 else entry.input[:57] + "..."
            print(f"{when}  {len(entry.deck.slides):>3} slides  {topic}")
        return EXIT_OK

    if args.action == "clear":
        cache.clear()
        print("Cache cleared")
        return EXIT_OK

    if args.action == "show":
        deck = cache.get(args.key) if args.key else cache.latest()
        if deck is None:
            print("Error: no cached deck for that input", file=sys.stderr)
            return EXIT_ERROR
        sys.stdout.write(render_deck(deck).markdown)
        return EXIT_OK

    if not args.key:
        print("Error: 'cache remove' needs the input text of an entry", file=sys.stderr)
        return EXIT_ERROR

    if args.key not in cache:
        print("Error: no cached deck for that input", file=sys.stderr)
        return EXIT_ERROR
    cache.remove(args.key)
    print("Entry removed")
    return EXIT_OK


def cmd_quota(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    client = _build_client(args, settings)
    print(
        f"{client.remaining()} of {settings.rate_limit_max_requests} requests remaining "
        f"in the current {settings.rate_limit_window_seconds:g}s window"
    )
    return EXIT_OK


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "remarkdeck.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
    )
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="remarkdeck",
        description="Generate and render remark.js slide decks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--data-dir", help="Directory holding the local cache and quota")
    parser.add_argument("--ephemeral", action="store_true", help="Keep cache and quota in memory only")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate a deck from a topic")
    generate.add_argument("text", help="Topic description")
    generate.add_argument("--api-url", help="Base URL of the generation API")
    generate.add_argument("--output", "-o", help="Write Markdown to this file")
    generate.add_argument("--html", help="Write a standalone presentation page to this file")
    generate.add_argument("--json", action="store_true", help="Print the deck JSON instead of Markdown")
    generate.set_defaults(func=cmd_generate)

    render = subparsers.add_parser("render", help="Compile a deck JSON file to Markdown")
    render.add_argument("deck", help="Path to a deck JSON file")
    render.add_argument("--output", "-o", help="Write Markdown to this file")
    render.add_argument("--html", help="Write a standalone presentation page to this file")
    render.set_defaults(func=cmd_render)

    cache = subparsers.add_parser("cache", help="Inspect or manage cached decks")
    cache.add_argument("action", choices=["list", "show", "remove", "clear"])
    cache.add_argument("key", nargs="?", help="Input text of the entry (show defaults to the newest)")
    cache.set_defaults(func=cmd_cache)

    quota = subparsers.add_parser("quota", help="Show the advisory request quota")
    quota.set_defaults(func=cmd_quota)

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", help="Bind address")
    serve.add_argument("--port", type=int, help="Port")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    # stdout carries Markdown and JSON output
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
