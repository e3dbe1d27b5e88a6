"""Utility helpers for folder naming and run folder allocation."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlsplit

from .config import RUN_PREFIX, CaptureConfig


def sanitize(hostname: str) -> str:
    """Replace path and port separators so a host can be used as a folder name.

    Only ``:`` and ``/`` are rewritten; anything else is left alone, so the
    result is not guaranteed to be valid on every filesystem.
    """
    return hostname.replace(":", "_").replace("/", "_")


def base_folder_for(target: str, config: CaptureConfig) -> Path:
    """Return the per-host folder for a target, or the output root if it has no host."""
    try:
        host = urlsplit(target).netloc
    except ValueError:
        host = ""
    if not host:
        return config.output_root
    return config.output_root / sanitize(host)


def next_run_folder(base: Path) -> Path:
    """Return the first ``run-<n>`` path under ``base`` that does not exist yet.

    ``base`` is created if missing. The returned folder itself is not created.
    Numbers freed by deleting a run folder are handed out again.
    """
    base = Path(base)
    base.mkdir(parents=True, exist_ok=True)
    index = 1
    while True:
        candidate = base / f"{RUN_PREFIX}{index}"
        if not candidate.exists():
            return candidate
        index += 1
