"""Size policy: turn heading spans into chunks inside the target word band."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import Sequence
from urllib.parse import urldefrag

from bs4 import BeautifulSoup, Tag

from lessonkit.extract.code_blocks import dedupe_code_blocks, extract_code_blocks
from lessonkit.extract.config import SizePolicy
from lessonkit.extract.headings import HeadingScan
from lessonkit.extract.models import ChunkAnchors, LessonChunk
from lessonkit.extract.normalization import truncate_words, word_count
from lessonkit.extract.sanitizer import Sanitizer, visible_text
from lessonkit.extract.spans import Span, SpanItem, collect_span

logger = logging.getLogger(__name__)

FALLBACK_CHUNK_ID = "fallback-1"
FALLBACK_CHUNK_TITLE = "Page Content"

SUB_HEADING_TAG = "h3"
_PARAGRAPH_TAGS = frozenset({"p", "ul", "ol", "blockquote", "pre", "div"})


@dataclass(frozen=True, slots=True)
class SectionRef:
    """Identity of the heading a span was collected under."""

    chunk_id: str
    title: str
    heading_id: str | None


def heading_id(heading: Tag) -> str | None:
    value = heading.get("id")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def build_anchors(base_url: str, fragment: str | None) -> ChunkAnchors:
    """Anchor at ``base_url#fragment`` or at the bare base URL."""

    if not fragment:
        return ChunkAnchors(url=base_url)
    return ChunkAnchors(url=f"{urldefrag(base_url).url}#{fragment}", start_id=fragment)


def section_ref(heading: Tag, index: int) -> SectionRef:
    title = visible_text(heading) or f"Section {index + 1}"
    anchor_id = heading_id(heading)
    return SectionRef(chunk_id=anchor_id or f"chunk-{index}", title=title, heading_id=anchor_id)


def _items_word_count(items: Sequence[SpanItem]) -> int:
    return sum(word_count(item.text) for item in items)


def chunk_from_items(
    chunk_id: str,
    title: str,
    items: Sequence[SpanItem],
    anchors: ChunkAnchors,
) -> LessonChunk:
    html = "\n".join(item.html for item in items if item.html)
    return LessonChunk(
        id=chunk_id,
        title=title,
        text=" ".join(item.text for item in items if item.text),
        html=html or None,
        code_blocks=extract_code_blocks(item.element for item in items),
        anchors=anchors,
    )


def _split_on_sub_headings(
    span: Span,
    section: SectionRef,
    base_url: str,
    policy: SizePolicy,
) -> list[LessonChunk]:
    chunks: list[LessonChunk] = []
    run: list[SpanItem] = []
    run_title = f"{section.title} - Part 1"
    run_anchor = section.heading_id

    for item in span.items:
        if item.element.name != SUB_HEADING_TAG:
            run.append(item)
            continue
        if not run:
            run_title = item.text or run_title
            run_anchor = heading_id(item.element) or section.heading_id
            continue
        # Runs under the threshold keep accumulating across the boundary
        if _items_word_count(run) < policy.sub_run_min_words:
            continue

        chunks.append(
            chunk_from_items(f"{section.chunk_id}-{len(chunks)}", run_title, run, build_anchors(base_url, run_anchor))
        )
        run = []
        run_title = item.text or f"{section.title} - Part {len(chunks) + 1}"
        run_anchor = heading_id(item.element) or section.heading_id

    if run and _items_word_count(run) >= policy.remainder_min_words:
        chunks.append(
            chunk_from_items(
                f"{section.chunk_id}-{len(chunks)}",
                f"{section.title} - Continued",
                run,
                build_anchors(base_url, run_anchor),
            )
        )
    return chunks


def _split_into_buckets(
    span: Span,
    section: SectionRef,
    base_url: str,
    policy: SizePolicy,
) -> list[LessonChunk]:
    paragraphs = [
        item
        for item in span.items
        if item.element.name in _PARAGRAPH_TAGS and len(item.text) > policy.paragraph_min_chars
    ]
    anchors = build_anchors(base_url, section.heading_id)

    chunks: list[LessonChunk] = []
    group: list[SpanItem] = []
    group_words = 0

    for item in paragraphs:
        words = word_count(item.text)
        if group and group_words + words > policy.bucket_words:
            chunks.append(
                chunk_from_items(
                    f"{section.chunk_id}-{len(chunks)}",
                    f"{section.title} - Part {len(chunks) + 1}",
                    group,
                    anchors,
                )
            )
            group = [item]
            group_words = words
        else:
            group.append(item)
            group_words += words

    if group and group_words >= policy.bucket_min_words:
        chunks.append(
            chunk_from_items(
                f"{section.chunk_id}-{len(chunks)}",
                f"{section.title} - Part {len(chunks) + 1}",
                group,
                anchors,
            )
        )
    return chunks


def split_large_span(
    span: Span,
    section: SectionRef,
    base_url: str,
    policy: SizePolicy,
) -> list[LessonChunk]:
    """Split an oversized span on its H3 sub-headings, else into paragraph buckets.

    Falls back to a single chunk for the whole span when neither pass keeps
    anything.
    """

    has_sub_headings = any(item.element.name == SUB_HEADING_TAG for item in span.items)
    if has_sub_headings:
        chunks = _split_on_sub_headings(span, section, base_url, policy)
    else:
        chunks = _split_into_buckets(span, section, base_url, policy)

    if chunks:
        logger.debug("Split section %r into %d chunks", section.title, len(chunks))
        return chunks
    return [chunk_from_items(section.chunk_id, section.title, span.items, build_anchors(base_url, section.heading_id))]


def merge_chunks(first: LessonChunk, second: LessonChunk) -> LessonChunk:
    html_parts = [part for part in (first.html, second.html) if part]
    return replace(
        first,
        title=f"{first.title} & {second.title}",
        text=f"{first.text}\n\n{second.text}",
        html="\n".join(html_parts) or None,
        code_blocks=dedupe_code_blocks((*first.code_blocks, *second.code_blocks)),
    )


def merge_short_chunks(
    chunks: Sequence[LessonChunk],
    policy: SizePolicy,
    min_words: int | None = None,
) -> list[LessonChunk]:
    """Greedily merge an undersized chunk into its neighbour, left to right.

    A pair merges only when one side is under ``min_words`` and the combined
    size stays under ``policy.merge_max_words``.
    """

    if len(chunks) <= 1:
        return list(chunks)

    floor = policy.min_words if min_words is None else min_words
    merged: list[LessonChunk] = []
    current = chunks[0]
    for following in chunks[1:]:
        current_words = word_count(current.text)
        following_words = word_count(following.text)
        undersized = current_words < floor or following_words < floor
        if undersized and current_words + following_words < policy.merge_max_words:
            current = merge_chunks(current, following)
        else:
            merged.append(current)
            current = following
    merged.append(current)
    return merged


def ensure_unique_ids(chunks: Sequence[LessonChunk]) -> list[LessonChunk]:
    """Suffix repeated ids (pages reusing a heading id) with a counter."""

    taken: set[str] = set()
    unique: list[LessonChunk] = []
    for chunk in chunks:
        candidate = chunk.id
        counter = 1
        while candidate in taken:
            candidate = f"{chunk.id}~{counter}"
            counter += 1
        taken.add(candidate)
        unique.append(chunk if candidate == chunk.id else replace(chunk, id=candidate))
    return unique


def build_chunks(
    scan: HeadingScan,
    base_url: str,
    policy: SizePolicy,
    sanitizer: Sanitizer,
) -> list[LessonChunk]:
    """Apply the size policy to every span of ``scan`` in document order."""

    flat = scan.strategy.is_flat
    min_chars = policy.min_chars_for(flat)
    min_words = policy.min_words_for(flat)
    chunks: list[LessonChunk] = []

    for index, heading in enumerate(scan.headings):
        if len(chunks) >= policy.max_chunks:
            logger.debug("Chunk limit %d reached, ignoring remaining headings", policy.max_chunks)
            break

        section = section_ref(heading, index)
        span = collect_span(heading, scan.strategy, sanitizer)
        text = span.text
        if not text or len(text) < min_chars:
            logger.debug("Skipping heading-only section %r", section.title)
            continue

        words = word_count(text)
        if words > policy.max_words:
            room = policy.max_chunks - len(chunks)
            chunks.extend(split_large_span(span, section, base_url, policy)[:room])
        elif words >= min_words or not chunks:
            chunks.append(
                chunk_from_items(section.chunk_id, section.title, span.items, build_anchors(base_url, section.heading_id))
            )
        else:
            logger.debug("Skipping short section %r (%d words)", section.title, words)

    if 0 < len(chunks) < policy.min_chunks:
        chunks = merge_short_chunks(chunks, policy, min_words)
    return ensure_unique_ids(chunks)


def fallback_chunk(
    document: BeautifulSoup,
    base_url: str,
    policy: SizePolicy,
    sanitizer: Sanitizer,
) -> LessonChunk:
    """Whole-page chunk used when structural splitting keeps nothing."""

    body = document.body or document
    html = sanitizer.sanitize(body.decode_contents())
    text = sanitizer.to_text(html)
    if policy.fallback_word_limit is not None:
        text = truncate_words(text, policy.fallback_word_limit)

    return LessonChunk(
        id=FALLBACK_CHUNK_ID,
        title=FALLBACK_CHUNK_TITLE,
        text=text,
        html=html or None,
        code_blocks=extract_code_blocks([body]),
        anchors=ChunkAnchors(url=base_url),
    )
