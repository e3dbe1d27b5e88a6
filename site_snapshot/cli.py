"""Command-line entry point for site-snapshot."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import List, Sequence

from .config import CaptureConfig
from .crawler import run_batch

logger = logging.getLogger("site_snapshot.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="site-snapshot",
        description=(
            "Save the HTML, outbound links, and a full-page screenshot of web pages "
            "into results/<host>/run-<n>/."
        ),
    )
    parser.add_argument("url", nargs="?", help="URL to capture")
    parser.add_argument(
        "-f",
        dest="targets_file",
        type=Path,
        metavar="FILE",
        help="Run against multiple URLs from FILE, one per line",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def load_targets(path: Path) -> List[str]:
    """Read one target per line, ignoring blank lines."""
    with open(path, encoding="utf-8") as handle:
        return [line.strip() for line in handle if line.strip()]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.url and not args.targets_file:
        parser.print_help()
        return

    _configure_logging(args.verbose)

    if args.targets_file:
        try:
            targets = load_targets(args.targets_file)
        except OSError as exc:
            logger.error("File error: %s", exc)
            raise SystemExit(1) from exc
    else:
        targets = [args.url]

    config = CaptureConfig()
    overall_start = time.perf_counter()
    results = asyncio.run(run_batch(targets, config))
    total_elapsed = time.perf_counter() - overall_start

    successes = sum(1 for result in results if result.succeeded)
    failures = len(results) - successes
    logger.info(
        "Finished in %.2fs (%d/%d succeeded, %d failed)",
        total_elapsed,
        successes,
        len(results),
        failures,
    )
    if args.verbose:
        for result in results:
            logger.debug(
                "Timing for %s -> total: %.2fs | folder: %s",
                result.target,
                result.total_seconds,
                result.run_folder,
            )


if __name__ == "__main__":
    main()
