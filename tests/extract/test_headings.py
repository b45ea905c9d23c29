from __future__ import annotations

from bs4 import BeautifulSoup

from lessonkit.extract.headings import HeadingStrategy, scan_headings


def _soup(body: str) -> BeautifulSoup:
    return BeautifulSoup(f"<html><body>{body}</body></html>", "lxml")


def test_two_h2_headings_select_h2_only_strategy() -> None:
    scan = scan_headings(_soup("<h2>One</h2><h3>Nested</h3><h2>Two</h2>"))

    assert scan.strategy is HeadingStrategy.H2_ONLY
    assert [heading.get_text() for heading in scan.headings] == ["One", "Two"]


def test_sparse_document_splits_on_h2_and_h3_in_document_order() -> None:
    scan = scan_headings(_soup("<h3>First</h3><h2>Only</h2><section><h3>Deep</h3></section>"))

    assert scan.strategy is HeadingStrategy.H2_PLUS_H3
    assert [heading.get_text() for heading in scan.headings] == ["First", "Only", "Deep"]


def test_document_without_headings_has_no_split_points() -> None:
    scan = scan_headings(_soup("<p>Just text</p><h4>Minor</h4>"))

    assert scan.strategy is HeadingStrategy.H2_PLUS_H3
    assert scan.headings == ()


def test_strategy_stop_tags() -> None:
    assert HeadingStrategy.H2_ONLY.stop_tags == {"h1", "h2"}
    assert HeadingStrategy.H2_PLUS_H3.stop_tags == {"h1", "h2", "h3"}
    assert HeadingStrategy.H2_PLUS_H3.is_flat
    assert not HeadingStrategy.H2_ONLY.is_flat
