from __future__ import annotations

import asyncio
from typing import Optional

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from site_snapshot.config import CaptureConfig
from site_snapshot.errors import CaptureTimeout, RenderError
from site_snapshot.screenshot import ScreenshotCapturer, is_image

from .conftest import PNG_BYTES


class FakePage:
    def __init__(self, goto_delay: float = 0, goto_error: Optional[Exception] = None, data: bytes = PNG_BYTES):
        self.goto_delay = goto_delay
        self.goto_error = goto_error
        self.data = data
        self.default_timeout = None
        self.visited = []
        self.waits = []
        self.screenshot_options = None

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    async def goto(self, url):
        self.visited.append(url)
        if self.goto_error is not None:
            raise self.goto_error
        await asyncio.sleep(self.goto_delay)

    async def wait_for_timeout(self, timeout):
        self.waits.append(timeout)
        await asyncio.sleep(timeout / 1000)

    async def screenshot(self, **options):
        self.screenshot_options = options
        return self.data


class FakeContext:
    def __init__(self, page):
        self.page = page
        self.closed = False

    async def new_page(self):
        return self.page

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.contexts = []
        self.closed = False

    async def new_context(self):
        context = FakeContext(self.page)
        self.contexts.append(context)
        return context

    async def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, page_factory, launch_delay: float = 0):
        self.page_factory = page_factory
        self.launch_delay = launch_delay
        self.browsers = []

    async def launch(self, headless=True):
        browser = FakeBrowser(self.page_factory())
        self.browsers.append(browser)
        await asyncio.sleep(self.launch_delay)
        return browser


class FakePlaywright:
    def __init__(self, page_factory=FakePage, launch_delay: float = 0):
        self.chromium = FakeChromium(page_factory, launch_delay)


def _config(**overrides) -> CaptureConfig:
    values = {"settle_delay": 0, "capture_timeout": 1.0}
    values.update(overrides)
    return CaptureConfig(**values)


def test_is_image():
    assert is_image(PNG_BYTES)
    assert not is_image(b"<html></html>")


def test_capture_returns_full_page_png():
    playwright = FakePlaywright()
    capturer = ScreenshotCapturer(playwright, _config())
    data = asyncio.run(capturer.capture("http://x.test/"))

    assert data == PNG_BYTES
    browser = playwright.chromium.browsers[0]
    assert browser.closed
    assert browser.contexts[0].closed
    assert browser.page.visited == ["http://x.test/"]
    assert browser.page.default_timeout == 1000
    assert browser.page.screenshot_options == {"full_page": True, "type": "png"}


def test_jpeg_capture_uses_quality():
    capturer = ScreenshotCapturer(FakePlaywright(), _config(screenshot_type="jpeg"))
    assert capturer._screenshot_options() == {"full_page": True, "type": "jpeg", "quality": 90}


def test_each_capture_uses_a_fresh_browser():
    playwright = FakePlaywright()
    capturer = ScreenshotCapturer(playwright, _config())

    async def run_twice():
        await capturer.capture("http://a.test/")
        await capturer.capture("http://b.test/")

    asyncio.run(run_twice())
    browsers = playwright.chromium.browsers
    assert len(browsers) == 2
    assert browsers[0] is not browsers[1]
    assert all(browser.closed for browser in browsers)
    assert all(len(browser.contexts) == 1 and browser.contexts[0].closed for browser in browsers)


def test_navigation_exceeding_deadline_times_out():
    playwright = FakePlaywright(lambda: FakePage(goto_delay=10))
    capturer = ScreenshotCapturer(playwright, _config(capture_timeout=0.05))
    with pytest.raises(CaptureTimeout):
        asyncio.run(capturer.capture("http://slow.test/"))
    assert playwright.chromium.browsers[0].closed


def test_settle_delay_counts_against_deadline():
    capturer = ScreenshotCapturer(FakePlaywright(), _config(settle_delay=5, capture_timeout=0.05))
    with pytest.raises(CaptureTimeout):
        asyncio.run(capturer.capture("http://x.test/"))


def test_playwright_timeout_maps_to_capture_timeout():
    playwright = FakePlaywright(lambda: FakePage(goto_error=PlaywrightTimeoutError("Timeout 1000ms exceeded")))
    capturer = ScreenshotCapturer(playwright, _config())
    with pytest.raises(CaptureTimeout):
        asyncio.run(capturer.capture("http://x.test/"))


def test_navigation_error_is_render_error():
    playwright = FakePlaywright(lambda: FakePage(goto_error=PlaywrightError("net::ERR_NAME_NOT_RESOLVED")))
    capturer = ScreenshotCapturer(playwright, _config())
    with pytest.raises(RenderError, match="ERR_NAME_NOT_RESOLVED"):
        asyncio.run(capturer.capture("http://missing.test/"))
    assert playwright.chromium.browsers[0].closed


def test_non_image_buffer_is_rejected():
    playwright = FakePlaywright(lambda: FakePage(data=b"not an image"))
    capturer = ScreenshotCapturer(playwright, _config())
    with pytest.raises(RenderError):
        asyncio.run(capturer.capture("http://x.test/"))


def test_settle_delay_waits_on_the_page():
    playwright = FakePlaywright()
    capturer = ScreenshotCapturer(playwright, _config(settle_delay=0.01))
    asyncio.run(capturer.capture("http://x.test/"))
    assert playwright.chromium.browsers[0].page.waits == [10]


def test_browser_launched_after_deadline_is_closed():
    playwright = FakePlaywright(launch_delay=0.2)
    capturer = ScreenshotCapturer(playwright, _config(capture_timeout=0.05))

    async def capture_then_wait():
        with pytest.raises(CaptureTimeout):
            await capturer.capture("http://x.test/")
        await asyncio.sleep(0.3)

    asyncio.run(capture_then_wait())
    browser = playwright.chromium.browsers[0]
    assert browser.closed
    assert browser.contexts == []
