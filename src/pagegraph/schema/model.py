"""Immutable schema describing what to extract from a page."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Container, Iterator, Mapping

from pagegraph.document.nodes import Node
from pagegraph.rdf import Term

UNDEFINED_URI = "http://undefined.com/"
DEFAULT_DATASET = "wiktionary"


@dataclass(slots=True)
class SchemaError(Exception):
    """Invalid or unreadable extraction schema."""

    message: str
    source: str | None = None

    def __str__(self) -> str:
        if self.source:
            return f"{self.message} (source={self.source})"
        return self.message


@dataclass(frozen=True, slots=True)
class Variable:
    """Placeholder in a template and the predicate its values are stored under."""

    name: str
    property: str
    do_mapping: bool = False
    sense_bound: bool = False


@dataclass(frozen=True, slots=True)
class Template:
    name: str
    pattern: tuple[Node, ...]
    variables: tuple[Variable, ...] = ()
    post_processor: str | None = None

    @property
    def needs_post_processing(self) -> bool:
        return self.post_processor is not None


@dataclass(frozen=True, slots=True, eq=False)
class BlockType:
    """One nesting level of a page; compared by identity."""

    name: str
    indicator: Template | None = None
    templates: tuple[Template, ...] = ()
    child: "ChildLink | None" = None


@dataclass(frozen=True, slots=True)
class ChildLink:
    """The single block type nested below a block, and the linking predicate."""

    block: BlockType
    property: str


@dataclass(frozen=True, slots=True)
class ExtractionSchema:
    page: BlockType
    namespace: str = UNDEFINED_URI
    dataset: str = DEFAULT_DATASET
    block_property: str = UNDEFINED_URI
    sense_property: str = UNDEFINED_URI
    mappings: Mapping[str, Term] = field(default_factory=dict)
    prologs: tuple[Template, ...] = ()
    epilogs: tuple[Template, ...] = ()

    def block_chain(self) -> Iterator[BlockType]:
        """Walk block types from the page downwards."""

        block: BlockType | None = self.page
        seen: set[int] = set()
        while block is not None:
            if id(block) in seen:
                raise SchemaError(f"Block type cycle detected at '{block.name}'")
            seen.add(id(block))
            yield block
            block = block.child.block if block.child is not None else None

    def templates(self) -> Iterator[Template]:
        yield from self.prologs
        yield from self.epilogs
        for block in self.block_chain():
            if block.indicator is not None:
                yield block.indicator
            yield from block.templates


def validate_schema(schema: ExtractionSchema, *, hooks: Container[str] | None = None) -> None:
    """Raise ``SchemaError`` unless *schema* can drive an extraction run."""

    for depth, block in enumerate(schema.block_chain()):
        if depth and block.indicator is None:
            raise SchemaError(f"Block type '{block.name}' has no indicator template")

    for template in schema.templates():
        if not template.pattern:
            raise SchemaError(f"Template '{template.name}' has an empty pattern")
        for variable in template.variables:
            if not variable.name or not variable.property:
                raise SchemaError(f"Template '{template.name}' declares a variable without name or property")
        if hooks is not None and template.needs_post_processing and template.post_processor not in hooks:
            raise SchemaError(
                f"Template '{template.name}' references unregistered post-processor '{template.post_processor}'"
            )
