"""License signal detection on the original page."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from lessonkit.extract.models import LicenseInfo, LicenseKind
from lessonkit.extract.normalization import normalize_whitespace

_CC_BY_SA_MARKERS = ("cc by-sa", "creative commons")
_MIT_MARKERS = ("mit license",)
_LICENSE_META_RE = re.compile(r"^\s*license\s*$", re.IGNORECASE)


def detect_license(document: BeautifulSoup) -> LicenseInfo | None:
    """Return the first license signal found, or None.

    Body text is checked for Creative Commons, then MIT wording; a
    ``<meta name="license">`` tag is the last resort.
    """

    body = document.body
    body_text = normalize_whitespace(body.get_text(" ")).lower() if body is not None else ""

    if any(marker in body_text for marker in _CC_BY_SA_MARKERS):
        return LicenseInfo(kind=LicenseKind.CC_BY_SA)
    if any(marker in body_text for marker in _MIT_MARKERS):
        return LicenseInfo(kind=LicenseKind.MIT)

    meta = document.find("meta", attrs={"name": _LICENSE_META_RE})
    if isinstance(meta, Tag):
        content = meta.get("content")
        if isinstance(content, str) and content.strip():
            return LicenseInfo(kind=LicenseKind.UNKNOWN, source=content.strip())
    return None
