"""Value objects produced by a page extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import json


class LicenseKind(str, Enum):
    CC_BY_SA = "CC-BY-SA"
    MIT = "MIT"
    UNKNOWN = "Unknown"


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """A code sample lifted out of a chunk's markup."""

    code: str
    lang: str | None = None

    def to_dict(self) -> dict[str, str]:
        payload = {"code": self.code}
        if self.lang:
            payload["lang"] = self.lang
        return payload


@dataclass(frozen=True, slots=True)
class ChunkAnchors:
    """Locator pointing back at the chunk's origin in the source page."""

    url: str
    start_id: str | None = None

    def to_dict(self) -> dict[str, str]:
        payload = {"url": self.url}
        if self.start_id:
            payload["startId"] = self.start_id
        return payload


@dataclass(frozen=True, slots=True)
class LessonChunk:
    """One bounded lesson unit of a page."""

    id: str
    title: str
    text: str
    anchors: ChunkAnchors
    html: str | None = None
    code_blocks: tuple[CodeBlock, ...] = ()

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "id": self.id,
            "title": self.title,
            "text": self.text,
        }
        if self.html is not None:
            payload["html"] = self.html
        payload["codeBlocks"] = [block.to_dict() for block in self.code_blocks]
        payload["anchors"] = self.anchors.to_dict()
        return payload


@dataclass(frozen=True, slots=True)
class LicenseInfo:
    """License signal detected on the source page."""

    kind: LicenseKind | None = None
    source: str | None = None

    def to_dict(self) -> dict[str, str]:
        payload: dict[str, str] = {}
        if self.source:
            payload["source"] = self.source
        if self.kind is not None:
            payload["kind"] = self.kind.value
        return payload


@dataclass(frozen=True, slots=True)
class PageExtraction:
    """Complete extraction output handed to the caller."""

    page_url: str
    page_title: str
    chunks: tuple[LessonChunk, ...] = field(default_factory=tuple)
    license: LicenseInfo | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "pageUrl": self.page_url,
            "pageTitle": self.page_title,
        }
        if self.license is not None:
            payload["license"] = self.license.to_dict()
        payload["chunks"] = [chunk.to_dict() for chunk in self.chunks]
        return payload

    def to_json(self, *, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
