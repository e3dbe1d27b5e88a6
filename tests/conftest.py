from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import pytest

from site_snapshot.config import CaptureConfig

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeCapturer:
    """Stands in for ScreenshotCapturer without launching a browser."""

    def __init__(self, data: bytes = PNG_BYTES, error: Optional[Exception] = None) -> None:
        self.data = data
        self.error = error
        self.calls: List[str] = []

    async def capture(self, url: str) -> bytes:
        self.calls.append(url)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.data


@pytest.fixture
def config(tmp_path: Path) -> CaptureConfig:
    return CaptureConfig(output_root=tmp_path / "results", settle_delay=0, capture_timeout=1.0)


@pytest.fixture
def capturer() -> FakeCapturer:
    return FakeCapturer()
