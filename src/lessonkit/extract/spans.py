"""Span collection between a heading and the next stop heading."""

from __future__ import annotations

from dataclasses import dataclass

from bs4 import Tag

from lessonkit.extract.headings import HeadingStrategy
from lessonkit.extract.normalization import word_count
from lessonkit.extract.sanitizer import Sanitizer


@dataclass(frozen=True, slots=True)
class SpanItem:
    """One sibling element of a span with its sanitized renditions."""

    element: Tag
    text: str
    html: str


@dataclass(frozen=True, slots=True)
class Span:
    """Raw content between a heading and the next stop heading."""

    items: tuple[SpanItem, ...] = ()

    @property
    def text(self) -> str:
        return " ".join(item.text for item in self.items if item.text)

    @property
    def html(self) -> str:
        return "\n".join(item.html for item in self.items if item.html)

    @property
    def elements(self) -> tuple[Tag, ...]:
        return tuple(item.element for item in self.items)

    @property
    def word_count(self) -> int:
        return word_count(self.text)


def span_item(element: Tag, sanitizer: Sanitizer) -> SpanItem:
    html = sanitizer.sanitize(str(element))
    return SpanItem(element=element, text=sanitizer.to_text(html), html=html)


def collect_span(heading: Tag, strategy: HeadingStrategy, sanitizer: Sanitizer) -> Span:
    """Collect every sibling element after ``heading`` up to the next stop heading."""

    stop_tags = strategy.stop_tags
    items: list[SpanItem] = []
    for sibling in heading.next_siblings:
        if not isinstance(sibling, Tag):
            continue
        if sibling.name in stop_tags:
            break
        items.append(span_item(sibling, sanitizer))
    return Span(items=tuple(items))
