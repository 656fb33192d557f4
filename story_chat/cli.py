"""Terminal front-end for co-writing a story through the relay."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Iterable, Optional, Sequence, TextIO

from .client import ConversationClient
from .config import DEFAULT_SERVER_URL

EXIT_COMMANDS = {"exit", "quit"}


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create a character and co-write a story with the storyteller model."
    )
    parser.add_argument(
        "--url",
        default=os.environ.get("STORY_CHAT_URL", DEFAULT_SERVER_URL),
        help=f"Base URL of the story relay (default: $STORY_CHAT_URL or {DEFAULT_SERVER_URL})",
    )
    parser.add_argument("--name", help="Character name. Without it the story starts from your first prompt.")
    parser.add_argument("--description", help="Character appearance and background (optional).")
    parser.add_argument("--personality", help="Character personality traits (optional).")
    parser.add_argument("--verbose", action="store_true", help="Log request details to stderr.")
    return parser.parse_args(argv)


def _print_fragment(fragment: str) -> None:
    print(fragment, end="", flush=True)


def run(client: ConversationClient, lines: Iterable[str], *, out: TextIO = sys.stdout) -> None:
    """Feed each line of ``lines`` to ``client`` until an exit command."""

    for line in lines:
        prompt = line.strip()
        if prompt.lower() in EXIT_COMMANDS:
            break
        if client.submit(prompt) is not None:
            print(file=out)


def _prompt_lines(label: str) -> Iterable[str]:
    while True:
        try:
            yield input(label)
        except EOFError:
            return


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with ConversationClient(args.url, on_fragment=_print_fragment) as client:
        if args.name:
            if client.create_character(args.name, args.description, args.personality) is not None:
                print()
        label = f"What happens next for {client.character.name}? " if client.character else "You: "
        try:
            run(client, _prompt_lines(label))
        except KeyboardInterrupt:
            pass


if __name__ == "__main__":
    main()
