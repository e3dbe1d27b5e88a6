"""Full-page screenshots rendered in an isolated headless browser."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from filetype import guess
from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
)

from .config import CaptureConfig
from .errors import CaptureTimeout, RenderError

logger = logging.getLogger("site_snapshot")


def is_image(data: bytes) -> bool:
    """Check the file signature of ``data`` for an image type."""
    kind = guess(data)
    return bool(kind and kind.mime.startswith("image/"))


def _close_late_browser(launch: asyncio.Future[Browser]) -> None:
    if launch.cancelled() or launch.exception() is not None:
        return
    asyncio.ensure_future(launch.result().close())


class ScreenshotCapturer:
    """Renders each URL in a browser of its own and returns the image bytes.

    Nothing is shared between calls: every capture launches a new browser and
    context, and tears both down before returning.
    """

    def __init__(self, playwright: Playwright, config: CaptureConfig) -> None:
        self.playwright = playwright
        self.config = config

    def _screenshot_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"full_page": True, "type": self.config.screenshot_type}
        if self.config.screenshot_type == "jpeg":
            options["quality"] = self.config.screenshot_quality
        return options

    async def _launch(self) -> Browser:
        launch = asyncio.ensure_future(self.playwright.chromium.launch(headless=True))
        try:
            return await asyncio.shield(launch)
        except asyncio.CancelledError:
            # The deadline hit mid-launch; close the browser once it is up.
            launch.add_done_callback(_close_late_browser)
            raise

    async def _render(self, url: str) -> bytes:
        browser = await self._launch()
        context: Optional[BrowserContext] = None
        try:
            context = await browser.new_context()
            page = await context.new_page()
            page.set_default_timeout(self.config.capture_timeout * 1000)
            logger.debug("Navigating to %s", url)
            await page.goto(url)
            if self.config.settle_delay:
                # Blind delay for late content; not a readiness signal.
                await page.wait_for_timeout(int(self.config.settle_delay * 1000))
            return await page.screenshot(**self._screenshot_options())
        finally:
            if context is not None:
                await context.close()
            await browser.close()

    async def capture(self, url: str) -> bytes:
        """Navigate, settle, and capture ``url`` within the configured deadline."""
        try:
            data = await asyncio.wait_for(
                self._render(url), timeout=self.config.capture_timeout
            )
        except (asyncio.TimeoutError, PlaywrightTimeoutError) as exc:
            raise CaptureTimeout(
                f"Capture of {url} exceeded {self.config.capture_timeout:g}s"
            ) from exc
        except PlaywrightError as exc:
            raise RenderError(str(exc)) from exc

        if not is_image(data):
            raise RenderError(f"Renderer returned {len(data)} bytes that are not an image")
        return data
