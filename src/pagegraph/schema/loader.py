"""XML schema loader building an ``ExtractionSchema``."""

from __future__ import annotations

from pathlib import Path
from typing import Container

from lxml import etree

from pagegraph.document.wikitext import parse_wikitext
from pagegraph.rdf import IriRef, PlainLiteral, Term
from pagegraph.schema.model import (
    DEFAULT_DATASET,
    UNDEFINED_URI,
    BlockType,
    ChildLink,
    ExtractionSchema,
    SchemaError,
    Template,
    Variable,
    validate_schema,
)

_TRUE_VALUES = {"true", "1", "yes"}


def load_schema(path: str | Path, *, hooks: Container[str] | None = None) -> ExtractionSchema:
    """Read and validate a schema file."""

    source = Path(path)
    try:
        raw = source.read_bytes()
    except OSError as exc:
        raise SchemaError(f"Failed to read schema file: {exc}", str(source)) from exc
    return parse_schema(raw, hooks=hooks, source=str(source))


def parse_schema(
    xml_bytes: bytes | str,
    *,
    hooks: Container[str] | None = None,
    source: str | None = None,
) -> ExtractionSchema:
    """Build a validated schema from XML content."""

    if isinstance(xml_bytes, str):
        xml_bytes = xml_bytes.encode("utf-8")

    parser = etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False, huge_tree=False)
    try:
        root = etree.fromstring(xml_bytes, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise SchemaError(f"Schema is not well-formed XML: {exc}", source) from exc

    page_nodes = root.xpath("./page")
    if len(page_nodes) != 1:
        raise SchemaError("Schema must contain exactly one <page> element", source)

    properties = _read_properties(root)
    schema = ExtractionSchema(
        page=_read_block(page_nodes[0], name="page", source=source),
        namespace=properties.get("ns", UNDEFINED_URI),
        dataset=properties.get("dataset", DEFAULT_DATASET),
        block_property=properties.get("blockProperty", UNDEFINED_URI),
        sense_property=properties.get("senseProperty", UNDEFINED_URI),
        mappings=_read_mappings(root),
        prologs=tuple(_read_template(node, source) for node in root.xpath("./templates/prologs/template")),
        epilogs=tuple(_read_template(node, source) for node in root.xpath("./templates/epilogs/template")),
    )

    try:
        validate_schema(schema, hooks=hooks)
    except SchemaError as exc:
        raise SchemaError(exc.message, source) from exc
    return schema


def _read_properties(root: etree._Element) -> dict[str, str]:
    properties: dict[str, str] = {}
    for node in root.xpath("./properties/property"):
        name = (node.get("name") or "").strip()
        if name:
            properties[name] = (node.get("value") or "").strip()
    return properties


def _read_mappings(root: etree._Element) -> dict[str, Term]:
    mappings: dict[str, Term] = {}
    for node in root.xpath("./mappings/mapping"):
        origin = node.get("from")
        target = node.get("to", "")
        if origin is None:
            continue
        if (node.get("toType") or "").strip().lower() == "uri":
            mappings[origin] = IriRef(target)
        else:
            mappings[origin] = PlainLiteral(target)
    return mappings


def _read_block(node: etree._Element, *, name: str, source: str | None) -> BlockType:
    indicator_nodes = node.xpath("./indicator")
    if len(indicator_nodes) > 1:
        raise SchemaError(f"Block '{name}' declares more than one indicator", source)

    child_nodes = node.xpath("./block")
    if len(child_nodes) > 1:
        raise SchemaError(f"Block '{name}' declares more than one child block", source)

    child: ChildLink | None = None
    if child_nodes:
        child_node = child_nodes[0]
        property_uri = (child_node.get("property") or "").strip()
        child_name = (child_node.get("name") or "").strip() or f"{name}.block"
        if not property_uri:
            raise SchemaError(f"Block '{child_name}' has no linking property", source)
        child = ChildLink(block=_read_block(child_node, name=child_name, source=source), property=property_uri)

    return BlockType(
        name=name,
        indicator=_read_template(indicator_nodes[0], source) if indicator_nodes else None,
        templates=tuple(_read_template(template, source) for template in node.xpath("./template")),
        child=child,
    )


def _read_template(node: etree._Element, source: str | None) -> Template:
    name = (node.get("name") or "").strip() or "unnamed"
    syntax_nodes = node.xpath("./wikisyntax")
    if not syntax_nodes or not (syntax_nodes[0].text or "").strip():
        raise SchemaError(f"Template '{name}' has no wikisyntax", source)

    try:
        pattern = parse_wikitext(_strip_layout(syntax_nodes[0].text), pattern=True)
    except ValueError as exc:
        raise SchemaError(f"Template '{name}': {exc}", source) from exc

    variables = tuple(
        Variable(
            name=(var.get("name") or "").strip(),
            property=(var.get("property") or "").strip(),
            do_mapping=_flag(var.get("doMapping")),
            sense_bound=_flag(var.get("senseBound")),
        )
        for var in node.xpath("./vars/var")
    )
    post_processor = (node.get("postProcessor") or "").strip() or None
    return Template(name=name, pattern=pattern, variables=variables, post_processor=post_processor)


def _strip_layout(text: str) -> str:
    """Drop a leading newline and trailing indentation; other newlines are significant."""

    if text.startswith("\n"):
        text = text[1:]
    return text.rstrip(" \t")


def _flag(raw: str | None) -> bool:
    return (raw or "").strip().lower() in _TRUE_VALUES
