"""High-level orchestration for fetching, extracting, and rendering targets."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Protocol, Sequence

from playwright.async_api import async_playwright

from .config import HTML_FILENAME, LINKS_FILENAME, SCREENSHOT_FILENAME, CaptureConfig
from .errors import (
    CaptureError,
    CaptureTimeout,
    ExtractionError,
    FilesystemError,
    HTTPStatusError,
    RenderError,
    TransportError,
)
from .fetcher import fetch_content
from .links import extract_links_from_file, write_links
from .models import TargetResult
from .screenshot import ScreenshotCapturer
from .utils import base_folder_for, next_run_folder

logger = logging.getLogger("site_snapshot")

Fetcher = Callable[..., bytes]


class Capturer(Protocol):
    def capture(self, url: str) -> Awaitable[bytes]: ...


def _write_bytes(path: Path, data: bytes) -> Path:
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise FilesystemError(f"Unable to write {path}: {exc}") from exc
    return path


def _create_run_folder(config: CaptureConfig, target: str) -> Path:
    try:
        folder = next_run_folder(base_folder_for(target, config))
        folder.mkdir(parents=True, exist_ok=False)
    except OSError as exc:
        raise FilesystemError(f"Unable to create run folder for {target}: {exc}") from exc
    return folder


async def process_target(
    target: str,
    config: CaptureConfig,
    capturer: Capturer,
    fetcher: Fetcher = fetch_content,
) -> TargetResult:
    """Run the fetch, extract, and screenshot stages for a single target.

    A failing stage is logged and ends the pipeline for this target only.
    Artifacts written by earlier stages stay in place.
    """
    start = time.perf_counter()
    result = TargetResult(target=target)
    try:
        await _run_stages(target, config, capturer, fetcher, result)
    except CaptureError as exc:
        result.error = exc
    finally:
        result.total_seconds = time.perf_counter() - start
    return result


async def _run_stages(
    target: str,
    config: CaptureConfig,
    capturer: Capturer,
    fetcher: Fetcher,
    result: TargetResult,
) -> None:
    try:
        folder = _create_run_folder(config, target)
    except FilesystemError as exc:
        logger.error("Folder error: %s", exc)
        raise
    result.run_folder = folder

    try:
        body = fetcher(target, timeout=config.fetch_timeout)
    except TransportError as exc:
        logger.error("Request error: %s", exc)
        raise
    except HTTPStatusError as exc:
        logger.error("HTTP Error: %s", exc.status_line)
        raise

    try:
        html_path = _write_bytes(folder / HTML_FILENAME, body)
    except FilesystemError as exc:
        logger.error("Write error: %s", exc)
        raise
    result.artifacts.html_path = html_path

    links_path = folder / LINKS_FILENAME
    try:
        links = extract_links_from_file(html_path, target)
        write_links(links, links_path)
    except ExtractionError as exc:
        result.extraction_error = exc
        logger.error("URL extraction error: %s", exc)
    except OSError as exc:
        result.extraction_error = FilesystemError(f"Unable to write {links_path}: {exc}")
        logger.error("URL extraction error: %s", result.extraction_error)
    else:
        result.artifacts.links_path = links_path
        result.link_count = len(links)
        logger.info("Extracted %d URLs saved to: %s", len(links), links_path)

    try:
        image = await capturer.capture(target)
    except (CaptureTimeout, RenderError) as exc:
        logger.error("Screenshot error: %s", exc)
        raise

    try:
        result.artifacts.screenshot_path = _write_bytes(folder / SCREENSHOT_FILENAME, image)
    except FilesystemError as exc:
        logger.error("Write error: %s", exc)
        raise

    logger.info("Saved to: %s", folder)


async def run_targets(
    targets: Sequence[str],
    config: CaptureConfig,
    capturer: Capturer,
    fetcher: Fetcher = fetch_content,
) -> List[TargetResult]:
    """Process targets one at a time in input order, continuing past failures."""
    results: List[TargetResult] = []
    for target in targets:
        logger.info("Processing: %s", target)
        try:
            result = await process_target(target, config, capturer, fetcher)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Unexpected error processing %s", target)
            result = TargetResult(target=target, error=exc)
        results.append(result)
    return results


async def run_batch(
    targets: Sequence[str],
    config: Optional[CaptureConfig] = None,
) -> List[TargetResult]:
    """Capture every target with a Playwright driver shared across the batch.

    Each screenshot still launches its own browser.
    """
    config = config or CaptureConfig()
    async with async_playwright() as playwright:
        capturer = ScreenshotCapturer(playwright, config)
        return await run_targets(targets, config, capturer)
