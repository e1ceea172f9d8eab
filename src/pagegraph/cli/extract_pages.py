"""CLI extracting quads from a single wikitext page or a MediaWiki dump."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Iterator

from dotenv import load_dotenv
from lxml import etree

from pagegraph.config import ExtractorSettings
from pagegraph.extraction import PageExtractor, PostProcessingError, build_default_hooks, subject_uri_for
from pagegraph.rdf import Graph
from pagegraph.schema import SchemaError, load_schema
from pagegraph.sources import iter_dump_pages, read_wikitext

LOGGER = logging.getLogger(__name__)

_FORMATS = ("nquads", "ntriples", "json")


def _iter_inputs(args: argparse.Namespace) -> Iterator[tuple[str, str]]:
    if args.dump:
        for count, page in enumerate(iter_dump_pages(args.dump), start=1):
            if args.limit is not None and count > args.limit:
                return
            yield page.title, page.text
        return

    page_path = Path(args.page)
    title = args.title or page_path.stem
    yield title, read_wikitext(page_path)


def _render(graph: Graph, output_format: str) -> str:
    if output_format == "ntriples":
        return graph.render_ntriples()
    return graph.render_nquads()


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Extract RDF quads from wiki pages with an XML schema")
    parser.add_argument("--config", help="Path to the XML extraction schema (overrides PAGEGRAPH_SCHEMA_PATH)")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--page", help="Wikitext file of a single page")
    source.add_argument("--dump", help="MediaWiki XML export to stream pages from")
    parser.add_argument("--title", help="Page title for --page (defaults to the file name)")
    parser.add_argument("--base-uri", help="Prefix for page resource IRIs (overrides PAGEGRAPH_BASE_URI)")
    parser.add_argument("--format", choices=_FORMATS, default="nquads", help="Output format (default: nquads)")
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of dump pages to process")
    args = parser.parse_args(argv)

    try:
        settings = ExtractorSettings.from_env()
    except ValueError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=settings.log_level,
    )

    hooks = build_default_hooks()
    schema_path = Path(args.config) if args.config else settings.schema_path
    try:
        schema = load_schema(schema_path, hooks=hooks)
    except SchemaError as exc:
        LOGGER.error("Schema error: %s", exc)
        print(f"Schema error: {exc}", file=sys.stderr)
        return 2

    extractor = PageExtractor(schema, hooks=hooks)
    base_uri = args.base_uri or settings.base_uri

    pages: list[dict[str, object]] = []
    errors: list[dict[str, str]] = []
    try:
        for title, text in _iter_inputs(args):
            subject_uri = subject_uri_for(title, base_uri)
            try:
                graph = extractor.extract_wikitext(text, subject_uri)
            except PostProcessingError as exc:
                LOGGER.error("Extraction failed for %s: %s", title, exc)
                errors.append({"title": title, "error": str(exc)})
                continue

            if args.format == "json":
                pages.append({"title": title, "subject": subject_uri, "quads": [quad.to_dict() for quad in graph]})
            else:
                sys.stdout.write(_render(graph, args.format))
    except (OSError, ValueError, etree.XMLSyntaxError) as exc:
        LOGGER.error("Input error: %s", exc)
        print(f"Input error: {exc}", file=sys.stderr)
        return 2

    if args.format == "json":
        payload = {"processed": len(pages), "pages": pages, "errors": errors}
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0 if not errors else 1


if __name__ == "__main__":
    raise SystemExit(main())
