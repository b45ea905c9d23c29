from __future__ import annotations

from bs4 import BeautifulSoup

from lessonkit.extract.license import detect_license
from lessonkit.extract.models import LicenseInfo, LicenseKind


def _soup(body: str, head: str = "") -> BeautifulSoup:
    return BeautifulSoup(f"<html><head>{head}</head><body>{body}</body></html>", "lxml")


def test_creative_commons_wording_is_detected() -> None:
    assert detect_license(_soup("<footer>Licensed under CC BY-SA 4.0</footer>")) == LicenseInfo(kind=LicenseKind.CC_BY_SA)
    assert detect_license(_soup("<p>CREATIVE\n   COMMONS</p>")) == LicenseInfo(kind=LicenseKind.CC_BY_SA)


def test_creative_commons_wins_over_mit() -> None:
    info = detect_license(_soup("<p>MIT License</p><p>Creative Commons</p>"))

    assert info == LicenseInfo(kind=LicenseKind.CC_BY_SA)


def test_mit_license_is_detected() -> None:
    assert detect_license(_soup("<p>Released under the <b>MIT</b> License.</p>")) == LicenseInfo(kind=LicenseKind.MIT)


def test_license_meta_tag_is_last_resort() -> None:
    info = detect_license(_soup("<p>Docs</p>", head='<meta name="license" content=" Apache-2.0 ">'))

    assert info == LicenseInfo(kind=LicenseKind.UNKNOWN, source="Apache-2.0")
    assert info.to_dict() == {"source": "Apache-2.0", "kind": "Unknown"}


def test_no_signal_returns_none() -> None:
    assert detect_license(_soup("<p>Docs</p>", head='<meta name="license" content="  ">')) is None
    assert detect_license(BeautifulSoup("", "lxml")) is None
