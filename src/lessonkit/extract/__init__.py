"""Content segmentation engine turning documentation pages into lesson chunks."""

from .config import SizePolicy
from .extractor import PageExtractor, extract_page
from .headings import HeadingScan, HeadingStrategy, scan_headings
from .isolation import Article, ArticleIsolator, LandmarkIsolator
from .license import detect_license
from .loader import DocumentLoadError, SourceDocument, fetch_html, load_html_file, parse_html
from .models import ChunkAnchors, CodeBlock, LessonChunk, LicenseInfo, LicenseKind, PageExtraction
from .sanitizer import HtmlSanitizer, Sanitizer

__all__ = [
    "Article",
    "ArticleIsolator",
    "ChunkAnchors",
    "CodeBlock",
    "DocumentLoadError",
    "HeadingScan",
    "HeadingStrategy",
    "HtmlSanitizer",
    "LandmarkIsolator",
    "LessonChunk",
    "LicenseInfo",
    "LicenseKind",
    "PageExtraction",
    "PageExtractor",
    "Sanitizer",
    "SizePolicy",
    "SourceDocument",
    "detect_license",
    "extract_page",
    "fetch_html",
    "load_html_file",
    "parse_html",
    "scan_headings",
]
