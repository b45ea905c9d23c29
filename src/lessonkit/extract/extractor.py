"""Extraction orchestrator: isolate, segment, attach license."""

from __future__ import annotations

import copy
import logging

from bs4 import BeautifulSoup

from lessonkit.extract.config import SizePolicy
from lessonkit.extract.headings import scan_headings
from lessonkit.extract.isolation import ArticleIsolator, LandmarkIsolator, document_title
from lessonkit.extract.license import detect_license
from lessonkit.extract.loader import SourceDocument
from lessonkit.extract.models import PageExtraction
from lessonkit.extract.sanitizer import HtmlSanitizer, Sanitizer
from lessonkit.extract.sizing import build_chunks, fallback_chunk

logger = logging.getLogger(__name__)

UNTITLED_PAGE = "Untitled Page"


def page_title(document: BeautifulSoup) -> str:
    return document_title(document) or UNTITLED_PAGE


class PageExtractor:
    """Turn a parsed page into an ordered list of lesson chunks.

    The input document is never mutated: isolation runs on a copy and every
    later pass only reads the tree.
    """

    def __init__(
        self,
        *,
        policy: SizePolicy | None = None,
        sanitizer: Sanitizer | None = None,
        isolator: ArticleIsolator | None = None,
        isolate: bool = True,
    ) -> None:
        self._policy = policy or SizePolicy()
        self._sanitizer = sanitizer or HtmlSanitizer()
        self._isolator = isolator or LandmarkIsolator()
        self._isolate = isolate

    @property
    def policy(self) -> SizePolicy:
        return self._policy

    def extract(self, document: SourceDocument) -> PageExtraction:
        """Run the full pipeline; errors outside isolation propagate unchanged."""

        original = document.soup
        target = self._isolated(original) if self._isolate else None
        if target is None:
            target = original

        chunks = build_chunks(scan_headings(target), document.url, self._policy, self._sanitizer)
        license_info = detect_license(original)

        if not chunks:
            logger.info("No usable sections found, emitting whole-page fallback chunk")
            chunks = [fallback_chunk(target, document.url, self._policy, self._sanitizer)]

        return PageExtraction(
            page_url=document.url,
            page_title=page_title(original),
            chunks=tuple(chunks),
            license=license_info,
        )

    def _isolated(self, original: BeautifulSoup) -> BeautifulSoup | None:
        try:
            article = self._isolator.parse(copy.copy(original))
        except Exception as exc:
            logger.warning("Article isolation failed, using original document: %s", exc)
            return None

        if article is None or not article.content.strip():
            logger.warning("Article isolation returned no content, using original document")
            return None
        return BeautifulSoup(article.content, "lxml")


def extract_page(
    document: SourceDocument,
    *,
    policy: SizePolicy | None = None,
    sanitizer: Sanitizer | None = None,
    isolator: ArticleIsolator | None = None,
    isolate: bool = True,
) -> PageExtraction:
    """One-shot helper around :class:`PageExtractor`."""

    extractor = PageExtractor(policy=policy, sanitizer=sanitizer, isolator=isolator, isolate=isolate)
    return extractor.extract(document)
