"""MCP server exposing the site-snapshot capture pipeline."""

from __future__ import annotations

import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from .config import CaptureConfig
from .crawler import run_batch
from .models import TargetResult

logger = logging.getLogger("site_snapshot.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="site-snapshot")


def format_report(result: TargetResult) -> str:
    """Summarise a processed target as plain text."""
    lines = [f"Target: {result.target}"]
    if result.run_folder is not None:
        lines.append(f"Run folder: {result.run_folder}")
    for path in result.artifacts.written():
        lines.append(f"Saved: {path}")
    if result.artifacts.links_path is not None:
        lines.append(f"Links: {result.link_count}")
    if result.extraction_error is not None:
        lines.append(f"URL extraction error: {result.extraction_error}")
    if result.error is not None:
        lines.append(f"Error: {result.error}")
    return "\n".join(lines)


@mcp.tool()
async def capture(
    url: str,
) -> str:
    """Save the HTML, outbound links, and a full-page screenshot of a web page."""

    config = CaptureConfig(output_root=Path("results").resolve())
    results = await run_batch([url], config)
    return format_report(results[0])


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
