"""HTML sanitization built on BeautifulSoup."""

from __future__ import annotations

import re
from typing import Collection, Protocol, runtime_checkable

from bs4 import BeautifulSoup, Comment, Doctype, NavigableString, Tag

from lessonkit.extract.normalization import normalize_whitespace

# Removed together with their content
DANGEROUS_TAGS = frozenset(
    {
        "script", "style", "noscript", "template",
        "iframe", "frame", "frameset", "object", "embed",
        "base", "link", "meta",
    }
)

_URL_ATTRIBUTES = frozenset({"href", "src", "action", "formaction", "xlink:href", "poster", "background"})
_ALWAYS_DROPPED_ATTRIBUTES = frozenset({"srcdoc"})
# Browsers ignore ASCII whitespace and control characters inside a URL scheme
_URL_NOISE_RE = re.compile(r"[\x00-\x20\x7f]+")
_UNSAFE_URL_RE = re.compile(r"^(?:javascript:|vbscript:|data:text/html)", re.IGNORECASE)

# Text on either side of these elements never runs together
BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "br", "dd", "details", "dialog",
        "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
        "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "li", "main", "nav",
        "ol", "p", "pre", "section", "summary", "table", "tbody", "td", "tfoot",
        "th", "thead", "tr", "ul",
    }
)

# Allowlist used for snippets rendered by a reading view
STRICT_TAGS = frozenset(
    {
        "p", "br", "strong", "em", "u",
        "h1", "h2", "h3", "h4", "h5", "h6",
        "ul", "ol", "li", "a", "code", "pre", "blockquote", "img",
        "table", "thead", "tbody", "tr", "th", "td",
    }
)
STRICT_ATTRIBUTES = frozenset({"href", "src", "alt", "title", "class"})


@runtime_checkable
class Sanitizer(Protocol):
    """Contract for turning untrusted markup into safe HTML or plain text."""

    def sanitize(
        self,
        fragment: str,
        allowed_tags: Collection[str] | None = None,
        allowed_attributes: Collection[str] | None = None,
    ) -> str:
        """Return safe HTML for the fragment."""

    def to_text(self, fragment: str) -> str:
        """Return the fragment's visible text with every tag stripped."""


def _is_unsafe_attribute(name: str, value: object) -> bool:
    lowered = name.lower()
    if lowered.startswith("on") or lowered in _ALWAYS_DROPPED_ATTRIBUTES:
        return True
    if lowered in _URL_ATTRIBUTES:
        return bool(_UNSAFE_URL_RE.match(_URL_NOISE_RE.sub("", str(value))))
    return False


def _collect_text(node: Tag, parts: list[str]) -> None:
    for child in node.children:
        if isinstance(child, Tag):
            block = child.name in BLOCK_TAGS
            if block:
                parts.append(" ")
            _collect_text(child, parts)
            if block:
                parts.append(" ")
        elif isinstance(child, NavigableString) and not isinstance(child, (Comment, Doctype)):
            parts.append(str(child))


def visible_text(node: Tag) -> str:
    """Text of ``node`` with inline runs joined directly and blocks kept apart."""

    parts: list[str] = []
    _collect_text(node, parts)
    return normalize_whitespace("".join(parts))


class HtmlSanitizer:
    """Strip scripts, event handlers and unsafe URLs from HTML fragments.

    Without an allowlist every other tag and attribute is kept. With
    ``allowed_tags`` any other tag is unwrapped so its content survives;
    with ``allowed_attributes`` any other attribute is dropped.
    """

    def __init__(self, parser: str = "html.parser") -> None:
        self._parser = parser

    def sanitize(
        self,
        fragment: str,
        allowed_tags: Collection[str] | None = None,
        allowed_attributes: Collection[str] | None = None,
    ) -> str:
        if not fragment or not fragment.strip():
            return ""

        soup = self._parse(fragment)
        tag_allowlist = None if allowed_tags is None else {name.lower() for name in allowed_tags}
        attribute_allowlist = None if allowed_attributes is None else {name.lower() for name in allowed_attributes}

        for tag in soup.find_all(True):
            if tag_allowlist is not None and tag.name not in tag_allowlist:
                tag.unwrap()
                continue

            for name in list(tag.attrs):
                if _is_unsafe_attribute(name, tag.attrs[name]):
                    del tag.attrs[name]
                elif attribute_allowlist is not None and name.lower() not in attribute_allowlist:
                    del tag.attrs[name]

        return soup.decode().strip()

    def to_text(self, fragment: str) -> str:
        if not fragment or not fragment.strip():
            return ""
        return visible_text(self._parse(fragment))

    def _parse(self, fragment: str) -> BeautifulSoup:
        soup = BeautifulSoup(fragment, self._parser)
        for node in soup.find_all(string=lambda value: isinstance(value, Comment)):
            node.extract()
        for tag in soup.find_all(DANGEROUS_TAGS):
            if not tag.decomposed:
                tag.decompose()
        return soup


def sanitize_strict(fragment: str, sanitizer: Sanitizer | None = None) -> str:
    """Sanitize against the reading-view tag and attribute allowlist."""

    active = sanitizer or HtmlSanitizer()
    return active.sanitize(fragment, allowed_tags=STRICT_TAGS, allowed_attributes=STRICT_ATTRIBUTES)
