"""Outbound link extraction from stored page markup."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Set, Union
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup

from .errors import ExtractionError

logger = logging.getLogger("site_snapshot")

Markup = Union[str, bytes]

BAD_ESCAPE_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")
CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x1f\x7f]")


def check_reference(reference: str) -> None:
    """Raise ``ValueError`` if ``reference`` is not a well-formed URL reference."""
    if CONTROL_CHAR_PATTERN.search(reference):
        raise ValueError("invalid control character in URL")
    if BAD_ESCAPE_PATTERN.search(reference):
        raise ValueError("invalid URL escape")
    # Accessing the port validates it.
    urlsplit(reference).port


def _validate_base_url(base_url: str) -> None:
    try:
        check_reference(base_url)
    except ValueError as exc:
        raise ExtractionError(f"Malformed base URL {base_url!r}: {exc}") from exc


def _parse(html: Markup) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "html.parser")
    except Exception as exc:  # noqa: BLE001
        raise ExtractionError(f"Unable to parse document: {exc}") from exc


def _iter_hrefs(soup: BeautifulSoup) -> Iterable[str]:
    for anchor in soup.select("a[href]"):
        href = (anchor.get("href") or "").strip()
        if href:
            yield href


def extract_links(html: Markup, base_url: str) -> List[str]:
    """Resolve every anchor reference against ``base_url``.

    Duplicates are dropped by exact string comparison and the order of first
    occurrence is kept. References that cannot be resolved are skipped.
    """
    _validate_base_url(base_url)
    soup = _parse(html)

    seen: Set[str] = set()
    links: List[str] = []
    for href in _iter_hrefs(soup):
        try:
            check_reference(href)
            absolute = urljoin(base_url, href)
        except ValueError:
            logger.debug("Skipping malformed reference %r", href)
            continue
        if absolute in seen:
            continue
        seen.add(absolute)
        links.append(absolute)
    return links


def extract_links_from_file(html_path: Path, base_url: str) -> List[str]:
    """Read persisted markup from ``html_path`` and extract its links."""
    try:
        html = Path(html_path).read_bytes()
    except OSError as exc:
        raise ExtractionError(f"Unable to read {html_path}: {exc}") from exc
    return extract_links(html, base_url)


def write_links(links: List[str], output_path: Path) -> Path:
    output_path = Path(output_path)
    output_path.write_text("\n".join(links), encoding="utf-8")
    return output_path
