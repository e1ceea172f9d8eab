"""Config-driven extraction of RDF quads from wiki pages."""

from pagegraph.document import NodeCursor, parse_wikitext
from pagegraph.extraction import PageExtractor, PostProcessingError, build_default_hooks, subject_uri_for
from pagegraph.rdf import Graph, IriRef, PlainLiteral, Quad
from pagegraph.schema import ExtractionSchema, SchemaError, load_schema, parse_schema

__all__ = [
    "ExtractionSchema",
    "Graph",
    "IriRef",
    "NodeCursor",
    "PageExtractor",
    "PlainLiteral",
    "PostProcessingError",
    "Quad",
    "SchemaError",
    "build_default_hooks",
    "load_schema",
    "parse_schema",
    "parse_wikitext",
    "subject_uri_for",
]
