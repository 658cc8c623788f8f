#!/usr/bin/env python3
"""Design event posters from the command line (Poster Designer).

Usage:
  python scripts/poster_designer.py generate "Outdoor concert, 2025-03-22 15:30" \
    --style tjc-style --size instagram --provider gemini
  python scripts/poster_designer.py styles
  python scripts/poster_designer.py sizes
  python scripts/poster_designer.py providers

Notes:
- Loads the nearest .env (walking up from the current directory) without
  overriding variables that are already set.
- The first Ctrl-C finishes the poster in progress and skips the rest; a
  second Ctrl-C aborts immediately.
"""

from __future__ import annotations

import argparse
import json
import logging
import signal
import sys
import threading
from pathlib import Path
from types import FrameType
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from poster_image_api import design_poster, list_providers, list_sizes, list_styles
from poster_image_api.core.contracts import ImageContent, TextContent, ToolResult, ToolUpdate


logger = logging.getLogger("poster_designer")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def _load_repo_dotenv() -> Optional[Path]:
    dotenv_path = find_dotenv(usecwd=True)
    if not dotenv_path:
        return None
    load_dotenv(dotenv_path=dotenv_path, override=False)
    return Path(dotenv_path)


def _supports_color() -> bool:
    return sys.stdout.isatty()


def _style(text: str, code: str, enabled: bool) -> str:
    if not enabled:
        return text
    return f"\033[{code}m{text}\033[0m"


class _CancelOnInterrupt:
    """Turn the first SIGINT into a cancellation request."""

    def __init__(self) -> None:
        self.event = threading.Event()
        self._previous = None

    def __enter__(self) -> threading.Event:
        self._previous = signal.signal(signal.SIGINT, self._handle)
        return self.event

    def __exit__(self, exc_type, exc, tb) -> None:
        previous = self._previous if self._previous is not None else signal.default_int_handler
        signal.signal(signal.SIGINT, previous)

    def _handle(self, signum: int, frame: Optional[FrameType]) -> None:
        if self.event.is_set():
            raise KeyboardInterrupt
        self.event.set()
        print("\nCancelling after the current poster (Ctrl-C again to abort)...", file=sys.stderr)


def _print_update(update: ToolUpdate) -> None:
    print(update.text, flush=True)


def _print_result(result: ToolResult, show_details: bool) -> None:
    color = _supports_color()
    for block in result.content:
        if isinstance(block, TextContent):
            code = "31" if result.is_error else "1"
            print(_style(block.text, code, color))
        elif isinstance(block, ImageContent):
            logger.debug("Inline image block: %s, %d base64 chars", block.mime_type, len(block.data))
    if show_details:
        print(json.dumps(result.details, ensure_ascii=False, indent=2))


def _run_generation(args: argparse.Namespace) -> int:
    with _CancelOnInterrupt() as cancel_event:
        result = design_poster(
            args.event_info,
            styles=args.style,
            size=args.size,
            provider=args.provider,
            model=args.model,
            on_update=_print_update,
            signal=cancel_event,
            output_root=Path(args.out).expanduser() if args.out else None,
        )
    _print_result(result, args.show_details)
    if result.is_error:
        return EXIT_CONFIG
    return EXIT_OK if result.details.get("successful") else EXIT_FAILED


def _notify(text: str, level: str) -> None:
    print(text)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Poster Designer: generate event poster drafts in several styles.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate poster drafts for an event.")
    generate.add_argument("event_info", help="Event details: theme, speaker, time, place, programme")
    generate.add_argument(
        "--style",
        action="append",
        default=None,
        help="Style id (repeatable; default: every style)",
    )
    generate.add_argument("--size", default=None, help="Size key (default: a4)")
    generate.add_argument("--provider", default=None, help="Provider id or 'auto' (default: gemini)")
    generate.add_argument("--model", default=None, help="Optional model override")
    generate.add_argument(
        "--out",
        default=None,
        help="Output root (default: $POSTER_DESIGNER_OUTPUTS or the system temp dir)",
    )
    generate.add_argument("--show-details", action="store_true", help="Print the details payload as JSON.")

    subparsers.add_parser("styles", help="List available poster styles.")
    subparsers.add_parser("sizes", help="List available poster sizes.")
    subparsers.add_parser("providers", help="List image providers and whether they are configured.")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    dotenv_path = _load_repo_dotenv()
    if dotenv_path is not None:
        logger.debug("Loaded environment from %s", dotenv_path)

    if args.command == "styles":
        list_styles(notify=_notify)
        return EXIT_OK
    if args.command == "sizes":
        list_sizes(notify=_notify)
        return EXIT_OK
    if args.command == "providers":
        list_providers(notify=_notify)
        return EXIT_OK
    try:
        return _run_generation(args)
    except KeyboardInterrupt:
        print("\nCancelled.")
        return EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
