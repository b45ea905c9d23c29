"""CLI command splitting a documentation page into lesson chunks."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from lessonkit.export.markdown import export_chunk_to_markdown, export_lesson_plan_to_markdown
from lessonkit.extract.config import SizePolicy
from lessonkit.extract.extractor import PageExtractor
from lessonkit.extract.loader import DocumentLoadError, SourceDocument, fetch_html, load_html_file
from lessonkit.extract.models import PageExtraction

load_dotenv()

LOGGER = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Split a documentation page into lesson chunks")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--path", help="Saved HTML page")
    source.add_argument("--url", help="Page URL to download")
    parser.add_argument("--base-url", help="URL used for chunk anchors (defaults to the page location)")
    parser.add_argument("--format", choices=("json", "markdown"), default="json", help="Output format")
    parser.add_argument("--output", help="Write the result to this file instead of stdout")
    parser.add_argument("--no-isolation", action="store_true", help="Skip article isolation")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _load(args: argparse.Namespace) -> SourceDocument:
    if args.path:
        return load_html_file(Path(args.path), url=args.base_url)

    document = fetch_html(args.url)
    if args.base_url:
        return SourceDocument(url=args.base_url, soup=document.soup)
    return document


def _render(extraction: PageExtraction, output_format: str) -> str:
    if output_format == "json":
        return extraction.to_json()

    sections = [export_lesson_plan_to_markdown(extraction)]
    sections.extend(export_chunk_to_markdown(extraction, chunk) for chunk in extraction.chunks)
    return "\n".join(sections)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        policy = SizePolicy.from_env()
    except ValueError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 2

    source = args.path or args.url
    try:
        document = _load(args)
        extraction = PageExtractor(policy=policy, isolate=not args.no_isolation).extract(document)
    except DocumentLoadError as exc:
        print(json.dumps({"source": source, "error": str(exc)}, ensure_ascii=True, indent=2))
        return 1
    except Exception as exc:
        LOGGER.exception("Extraction failed for %s", source)
        print(json.dumps({"source": source, "error": f"Extraction failed: {exc}"}, ensure_ascii=True, indent=2))
        return 1

    LOGGER.info("Extracted %d chunks from %s", len(extraction.chunks), extraction.page_url)
    rendered = _render(extraction, args.format)
    if args.output:
        Path(args.output).write_text(rendered, encoding="utf-8")
    else:
        print(rendered)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
