"""Heading scanner selecting the split granularity of a document."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# Well-structured pages split on H2 alone once they carry this many H2s
H2_ONLY_THRESHOLD = 2


class HeadingStrategy(Enum):
    """Which heading ranks act as chunk boundaries."""

    H2_ONLY = "h2-only"
    H2_PLUS_H3 = "h2+h3"

    @property
    def split_tags(self) -> tuple[str, ...]:
        if self is HeadingStrategy.H2_ONLY:
            return ("h2",)
        return ("h2", "h3")

    @property
    def stop_tags(self) -> frozenset[str]:
        if self is HeadingStrategy.H2_ONLY:
            return frozenset({"h1", "h2"})
        return frozenset({"h1", "h2", "h3"})

    @property
    def is_flat(self) -> bool:
        return self is HeadingStrategy.H2_PLUS_H3


@dataclass(frozen=True, slots=True)
class HeadingScan:
    """Split points of a document in document order."""

    strategy: HeadingStrategy
    headings: tuple[Tag, ...]


def choose_strategy(document: BeautifulSoup) -> HeadingStrategy:
    if len(document.find_all("h2")) >= H2_ONLY_THRESHOLD:
        return HeadingStrategy.H2_ONLY
    return HeadingStrategy.H2_PLUS_H3


def scan_headings(document: BeautifulSoup) -> HeadingScan:
    """Return the document's split headings and the strategy that picked them."""

    strategy = choose_strategy(document)
    headings = tuple(document.find_all(list(strategy.split_tags)))
    logger.debug("Heading strategy %s selected with %d split points", strategy.value, len(headings))
    return HeadingScan(strategy=strategy, headings=headings)
