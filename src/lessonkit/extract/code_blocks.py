"""Code sample extraction from collected elements."""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from bs4 import Tag

from lessonkit.extract.models import CodeBlock

_LANG_CLASS_RE = re.compile(r"^(?:language|lang)-([\w+#.-]+)$")


def _class_tokens(tag: Tag) -> list[str]:
    value = tag.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def _language_of(tag: Tag) -> str | None:
    for token in _class_tokens(tag):
        match = _LANG_CLASS_RE.match(token)
        if match:
            return match.group(1)
    return None


def _pre_blocks(element: Tag) -> Iterator[Tag]:
    if element.name == "pre":
        yield element
    yield from element.find_all("pre")


def code_block_from_pre(pre: Tag) -> CodeBlock | None:
    """Build a code block from a ``<pre>``, preferring its inner ``<code>``."""

    inner = pre.find("code")
    source = inner if isinstance(inner, Tag) else pre
    code = source.get_text().strip()
    if not code:
        return None

    lang = _language_of(inner) if isinstance(inner, Tag) else None
    return CodeBlock(code=code, lang=lang or _language_of(pre))


def dedupe_code_blocks(blocks: Iterable[CodeBlock]) -> tuple[CodeBlock, ...]:
    """Drop blocks whose code text was already seen; first occurrence wins."""

    seen: set[str] = set()
    unique: list[CodeBlock] = []
    for block in blocks:
        if block.code in seen:
            continue
        seen.add(block.code)
        unique.append(block)
    return tuple(unique)


def extract_code_blocks(elements: Iterable[Tag]) -> tuple[CodeBlock, ...]:
    """Collect deduplicated code blocks from elements in document order."""

    found: list[CodeBlock] = []
    for element in elements:
        for pre in _pre_blocks(element):
            block = code_block_from_pre(pre)
            if block is not None:
                found.append(block)
    return dedupe_code_blocks(found)
