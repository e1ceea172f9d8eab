"""Immutable node types produced by the wikitext tokenizer.

A parsed page is a flat tuple of nodes.  Plain text is split into one
``TextNode`` per word, punctuation mark, whitespace run or newline, while
templates, links and headings become structured nodes whose parts are node
tuples of their own.  ``VariableNode`` and ``GroupNode`` only appear in
template patterns.
"""

from __future__ import annotations

from dataclasses import dataclass

from pagegraph.document.normalization import normalize_whitespace

NEWLINE = "\n"
SPACE = " "


@dataclass(frozen=True, slots=True)
class TextNode:
    """A single text token."""

    text: str

    @property
    def is_newline(self) -> bool:
        return self.text == NEWLINE

    @property
    def is_space(self) -> bool:
        return self.text == SPACE

    def to_text(self) -> str:
        return self.text

    def dump(self) -> str:
        return repr(self.text)


@dataclass(frozen=True, slots=True)
class TemplateNode:
    """A ``{{name|param|...}}`` template call."""

    name: str
    params: tuple[tuple["Node", ...], ...] = ()

    def to_text(self) -> str:
        rendered = "".join("|" + nodes_source(param) for param in self.params)
        return "{{" + self.name + rendered + "}}"

    def dump(self) -> str:
        return self.to_text()


@dataclass(frozen=True, slots=True)
class LinkNode:
    """An internal ``[[target|label]]`` link; renders as its label."""

    parts: tuple[tuple["Node", ...], ...]

    @property
    def target(self) -> str:
        return render_nodes(self.parts[0]) if self.parts else ""

    def to_text(self) -> str:
        return nodes_source(self.parts[-1]) if self.parts else ""

    def dump(self) -> str:
        return "[[" + "|".join(nodes_source(part) for part in self.parts) + "]]"


@dataclass(frozen=True, slots=True)
class SectionNode:
    """A ``== heading ==`` line; renders as its title."""

    level: int
    title: tuple["Node", ...]

    def to_text(self) -> str:
        return nodes_source(self.title)

    def dump(self) -> str:
        marks = "=" * self.level
        return f"{marks} {nodes_source(self.title)} {marks}"


@dataclass(frozen=True, slots=True)
class VariableNode:
    """Pattern placeholder bound by the matcher."""

    name: str

    def to_text(self) -> str:
        return "$" + self.name

    def dump(self) -> str:
        return self.to_text()


@dataclass(frozen=True, slots=True)
class GroupNode:
    """Repeated pattern fragment: ``((items))`` with ``*``, ``+`` or ``?``."""

    items: tuple["Node", ...]
    min_count: int = 1
    max_count: int | None = 1

    def to_text(self) -> str:
        if self.max_count is None:
            suffix = "*" if self.min_count == 0 else "+"
        elif self.min_count == 0:
            suffix = "?"
        else:
            suffix = ""
        return "((" + nodes_source(self.items) + "))" + suffix

    def dump(self) -> str:
        return self.to_text()


Node = TextNode | TemplateNode | LinkNode | SectionNode | VariableNode | GroupNode


def nodes_source(nodes: tuple[Node, ...] | list[Node]) -> str:
    """Concatenate the textual rendering of nodes without normalization."""

    return "".join(node.to_text() for node in nodes)


def render_nodes(nodes: tuple[Node, ...] | list[Node] | None) -> str:
    """Stable text used for identifiers and literal values."""

    if not nodes:
        return ""
    return normalize_whitespace(nodes_source(nodes))
