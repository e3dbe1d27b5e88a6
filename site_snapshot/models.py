"""Data models used throughout the capture pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class CaptureArtifacts:
    """Files written into a run folder; each one is optional."""

    html_path: Optional[Path] = None
    links_path: Optional[Path] = None
    screenshot_path: Optional[Path] = None

    def written(self) -> List[Path]:
        return [
            path
            for path in (self.html_path, self.links_path, self.screenshot_path)
            if path is not None
        ]


@dataclass
class TargetResult:
    """Outcome and timing details for a processed target."""

    target: str
    run_folder: Optional[Path] = None
    artifacts: CaptureArtifacts = field(default_factory=CaptureArtifacts)
    error: Optional[Exception] = None
    extraction_error: Optional[Exception] = None
    link_count: int = 0
    total_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.error is None
