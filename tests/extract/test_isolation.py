from __future__ import annotations

from bs4 import BeautifulSoup

from lessonkit.extract.isolation import ArticleIsolator, LandmarkIsolator, document_title


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def _words(count: int, seed: str = "w") -> str:
    return " ".join(f"{seed}{index}" for index in range(count))


def test_article_holding_the_page_is_preferred_and_chrome_removed() -> None:
    document = _soup(
        "<html><head><title> Guide </title></head><body>"
        "<nav>Menu</nav><main><p>Intro</p>"
        f"<article><div role='navigation'>Breadcrumbs</div><h2>Title</h2><p>{_words(40)}</p></article></main>"
        "<footer>Footer</footer></body></html>"
    )

    article = LandmarkIsolator().parse(document)

    assert article is not None
    assert article.title == "Guide"
    assert article.content == f"<h2>Title</h2><p>{_words(40)}</p>"


def test_small_article_card_inside_main_is_ignored() -> None:
    sections = "".join(f"<h2>Step {index}</h2><p>{_words(60, f's{index}x')}</p>" for index in range(4))
    document = _soup(
        "<html><body><main>"
        '<article class="card"><p>Related: read our other post about things.</p></article>'
        f"{sections}</main></body></html>"
    )

    article = LandmarkIsolator().parse(document)

    assert article is not None
    assert article.content.startswith('<article class="card">')
    assert article.content.count("<h2>") == 4


def test_body_is_kept_when_no_landmark_holds_most_text() -> None:
    document = _soup(
        "<html><body><article><p>Teaser card</p></article>"
        f"<h2>A</h2><p>{_words(50)}</p></body></html>"
    )

    article = LandmarkIsolator().parse(document)

    assert article is not None
    assert "<h2>A</h2>" in article.content
    assert "Teaser card" in article.content


def test_body_is_used_without_landmarks() -> None:
    document = _soup("<html><body><header>Site</header><h2>A</h2><p>Text</p></body></html>")

    article = LandmarkIsolator().parse(document)

    assert article is not None
    assert article.content == "<h2>A</h2><p>Text</p>"
    assert article.title is None


def test_page_with_only_chrome_yields_nothing() -> None:
    document = _soup("<html><body><nav>Menu</nav><footer>Footer</footer></body></html>")

    assert LandmarkIsolator().parse(document) is None


def test_document_title_only_reads_head() -> None:
    document = BeautifulSoup(
        "<html><head></head><body><svg><title>Close</title></svg><p>Text</p></body></html>",
        "html.parser",
    )

    assert document_title(document) is None
    assert document_title(_soup("<html><head><title> Docs  Home </title></head><body></body></html>")) == "Docs Home"


def test_landmark_isolator_satisfies_protocol() -> None:
    assert isinstance(LandmarkIsolator(), ArticleIsolator)
