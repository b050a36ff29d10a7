"""Render gist directives in a Markdown file.

Usage:
    gistembed README.md                    # rendered Markdown to stdout
    gistembed README.md -o README.out.md   # write to a file
    gistembed README.md -u octocat --truncate
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console

from gistembed import __version__
from gistembed.config import GistConfig, get_settings
from gistembed.embed import embed_gists
from gistembed.fetch import GistFetcher

console = Console(stderr=True)


LOG_HANDLER_NAME = "gistembed-console"


def _setup_logging(verbose: bool) -> None:
    """Configure console logging, installing the handler at most once."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if any(h.get_name() == LOG_HANDLER_NAME for h in root_logger.handlers):
        return

    handler = logging.StreamHandler()
    handler.set_name(LOG_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(handler)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gistembed",
        description="Replace `gist:` inline code in Markdown with gist HTML.",
    )
    parser.add_argument("input", type=Path, help="Markdown file to render.")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the rendered Markdown here instead of stdout.",
    )
    parser.add_argument(
        "-u",
        "--username",
        help="Default gist owner (overrides GIST__USERNAME).",
    )
    parser.add_argument(
        "--truncate",
        action="store_true",
        help="Shrink the embedded gist HTML.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def resolve_config(args: argparse.Namespace) -> GistConfig:
    """Overlay command-line options on the configured gist settings."""
    config = get_settings().gist
    updates: dict[str, object] = {}
    if args.username:
        updates["username"] = args.username
    if args.truncate:
        updates["truncate"] = True
    return config.model_copy(update=updates)


async def _render(markdown: str, config: GistConfig) -> str:
    async with GistFetcher(config) as fetcher:
        return await embed_gists(markdown, config, fetcher)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = _build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    try:
        markdown = args.input.read_text(encoding="utf-8")
    except OSError as exc:
        console.print(f"[red]Error:[/] cannot read {args.input}: {exc}")
        sys.exit(1)

    rendered = asyncio.run(_render(markdown, resolve_config(args)))

    if args.output is None:
        sys.stdout.write(rendered)
        return

    try:
        args.output.write_text(rendered, encoding="utf-8")
    except OSError as exc:
        console.print(f"[red]Error:[/] cannot write {args.output}: {exc}")
        sys.exit(1)
    console.print(f"[green]Wrote[/] {args.output}")


if __name__ == "__main__":
    main()
