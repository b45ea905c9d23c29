"""Build source documents from markup, local files or URLs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import requests
from bs4 import BeautifulSoup
from charset_normalizer import from_bytes

DEFAULT_TIMEOUT_SECONDS = 30.0
_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


@dataclass(slots=True)
class DocumentLoadError(Exception):
    """Raised when a page cannot be read or fetched."""

    source: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (source={self.source})"


@dataclass(frozen=True, slots=True)
class SourceDocument:
    """A parsed page together with the URL it was loaded from."""

    url: str
    soup: BeautifulSoup


def parse_html(markup: str | bytes, url: str = "") -> SourceDocument:
    return SourceDocument(url=url, soup=BeautifulSoup(markup, "lxml"))


def decode_html(raw: bytes) -> str:
    """Decode page bytes as utf-8, falling back to the detected charset."""

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass

    best = from_bytes(raw).best()
    if best is not None and best.encoding:
        return raw.decode(best.encoding, errors="replace")
    return raw.decode("utf-8", errors="replace")


def load_html_file(path: str | Path, url: str | None = None) -> SourceDocument:
    """Parse a saved page; its URL defaults to the file's ``file://`` URI."""

    source = Path(path)
    try:
        raw = source.read_bytes()
    except OSError as exc:
        raise DocumentLoadError(str(source), f"Failed to read HTML file: {exc}") from exc

    return parse_html(decode_html(raw), url or source.resolve().as_uri())


def fetch_html(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    session: requests.Session | None = None,
) -> SourceDocument:
    """Download a page; redirects are followed and the final URL is kept."""

    client = session or requests.Session()
    try:
        response = client.get(url, timeout=timeout, headers={"User-Agent": _USER_AGENT})
        response.raise_for_status()
    except requests.RequestException as exc:
        raise DocumentLoadError(url, f"Failed to fetch page: {exc}") from exc

    return parse_html(decode_html(response.content), response.url or url)
