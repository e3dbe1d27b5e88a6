"""Configuration objects and constants for the capture pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_OUTPUT_ROOT = Path("results")
RUN_PREFIX = "run-"
HTML_FILENAME = "output.html"
LINKS_FILENAME = "urls.txt"
SCREENSHOT_FILENAME = "screenshot.png"


@dataclass
class CaptureConfig:
    """Top-level settings that control fetching and rendering behaviour."""

    output_root: Path = DEFAULT_OUTPUT_ROOT
    settle_delay: float = 3.0
    capture_timeout: float = 15.0
    screenshot_type: str = "png"
    screenshot_quality: int = 90
    fetch_timeout: Optional[float] = None
