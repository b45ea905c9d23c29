"""Markdown renderers for page extractions."""

from __future__ import annotations

from datetime import date
import re

from lessonkit.extract.models import LessonChunk, PageExtraction

PREVIEW_WORDS = 100
FOOTER = "*Exported from lessonkit*"

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_SLUG_SPACE_RE = re.compile(r"[\s_]+")
_SLUG_DASHES_RE = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """Anchor slug in the style of rendered Markdown headings."""

    text = _SLUG_STRIP_RE.sub("", text.lower()).strip()
    text = _SLUG_SPACE_RE.sub("-", text)
    return _SLUG_DASHES_RE.sub("-", text).strip("-")


def _license_line(extraction: PageExtraction, *, with_source: bool) -> str | None:
    license_info = extraction.license
    if license_info is None:
        return None
    kind = license_info.kind.value if license_info.kind is not None else "Unknown"
    if with_source and license_info.source:
        return f"**License:** {kind} ({license_info.source})"
    return f"**License:** {kind}"


def export_chunk_to_markdown(
    extraction: PageExtraction,
    chunk: LessonChunk,
    *,
    notes: str | None = None,
    exported_on: date | None = None,
) -> str:
    """Render one chunk with its code examples and optional notes."""

    day = exported_on or date.today()
    lines: list[str] = [
        f"# {chunk.title}",
        "",
        f"**Source:** [{extraction.page_title}]({chunk.anchors.url})",
        "",
        f"**Date:** {day.isoformat()}",
        "",
    ]

    license_line = _license_line(extraction, with_source=True)
    if license_line:
        lines.extend([license_line, ""])
    lines.extend(["---", ""])

    lines.extend([chunk.text, ""])

    if chunk.code_blocks:
        lines.extend(["## Code Examples", ""])
        for index, block in enumerate(chunk.code_blocks, start=1):
            suffix = f" ({block.lang})" if block.lang else ""
            lines.extend(
                [
                    f"### Example {index}{suffix}",
                    "",
                    f"```{block.lang or ''}",
                    block.code,
                    "```",
                    "",
                ]
            )

    if notes and notes.strip():
        lines.extend(["## My Notes", "", notes.strip(), ""])

    lines.extend(["---", "", f"[↑ Back to source]({chunk.anchors.url})", "", FOOTER])
    return "\n".join(lines) + "\n"


def export_lesson_plan_to_markdown(
    extraction: PageExtraction,
    *,
    exported_on: date | None = None,
) -> str:
    """Render the table of contents and a short preview of every chunk."""

    day = exported_on or date.today()
    lines: list[str] = [
        f"# {extraction.page_title}",
        "",
        f"**Source:** {extraction.page_url}",
        "",
        f"**Date:** {day.isoformat()}",
        "",
    ]

    license_line = _license_line(extraction, with_source=False)
    if license_line:
        lines.extend([license_line, ""])
    lines.extend(["---", "", "## Table of Contents", ""])

    for index, chunk in enumerate(extraction.chunks, start=1):
        lines.append(f"{index}. [{chunk.title}](#{slugify(chunk.title)})")
    lines.append("")

    for chunk in extraction.chunks:
        words = chunk.text.split()
        preview = " ".join(words[:PREVIEW_WORDS])
        if len(words) > PREVIEW_WORDS:
            preview += "..."
        lines.extend(
            [
                f"## {chunk.title}",
                "",
                f"[View source]({chunk.anchors.url})",
                "",
                preview,
                "",
            ]
        )

    lines.extend(["---", "", FOOTER])
    return "\n".join(lines) + "\n"
