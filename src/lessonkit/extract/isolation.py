"""Article isolation: strip page chrome and keep the main content region."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from bs4 import BeautifulSoup, Tag

from lessonkit.extract.normalization import normalize_whitespace
from lessonkit.extract.sanitizer import visible_text

_CHROME_TAGS = ["nav", "header", "footer", "aside", "form", "script", "style", "noscript", "template", "iframe"]
_CHROME_ROLES = {"navigation", "banner", "contentinfo", "complementary", "search"}

# A landmark must hold at least this share of the page text to replace it
MIN_TEXT_SHARE = 0.6


@dataclass(frozen=True, slots=True)
class Article:
    """Main content isolated from a page."""

    content: str
    title: str | None = None


@runtime_checkable
class ArticleIsolator(Protocol):
    """Isolate the readable article of a document.

    Implementations receive a private copy of the document and may mutate it.
    They return ``None`` when nothing readable is found and may raise.
    """

    def parse(self, document: BeautifulSoup) -> Article | None:
        """Return the isolated article or None."""


def _role(tag: Tag) -> str:
    value = tag.get("role")
    return value.strip().lower() if isinstance(value, str) else ""


def _landmarks(root: Tag) -> list[Tag]:
    return [
        tag
        for tag in root.find_all(True)
        if tag.name in ("article", "main") or _role(tag) == "main"
    ]


def document_title(document: BeautifulSoup) -> str | None:
    """Normalized ``<head><title>``; titles inside the body (inline SVG) are ignored."""

    head = document.head
    title_tag = head.find("title") if head is not None else None
    if title_tag is None:
        return None
    return normalize_whitespace(title_tag.get_text()) or None


class LandmarkIsolator:
    """Keep the tightest article/main landmark that still holds most of the page.

    Navigation chrome is removed first. Landmarks holding less than
    ``min_text_share`` of the remaining text (teaser cards, related posts)
    are ignored, and the cleaned body is kept when none qualifies.
    """

    def __init__(self, min_text_share: float = MIN_TEXT_SHARE) -> None:
        self._min_text_share = min_text_share

    def parse(self, document: BeautifulSoup) -> Article | None:
        root = document.body or document

        for tag in root.find_all(_CHROME_TAGS):
            if not tag.decomposed:
                tag.decompose()
        for tag in root.find_all(attrs={"role": True}):
            if not tag.decomposed and _role(tag) in _CHROME_ROLES:
                tag.decompose()

        page_length = len(visible_text(root))
        if not page_length:
            return None

        landmark: Tag = root
        landmark_length = page_length
        for candidate in _landmarks(root):
            length = len(visible_text(candidate))
            # Nested landmarks come later, so ties resolve to the inner one
            if length >= self._min_text_share * page_length and length <= landmark_length:
                landmark = candidate
                landmark_length = length

        return Article(content=landmark.decode_contents(), title=document_title(document))
