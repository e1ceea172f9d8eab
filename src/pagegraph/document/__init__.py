"""Document node model, wikitext tokenizer and cursor."""

from .cursor import NodeCursor
from .nodes import (
    GroupNode,
    LinkNode,
    Node,
    SectionNode,
    TemplateNode,
    TextNode,
    VariableNode,
    nodes_source,
    render_nodes,
)
from .wikitext import parse_wikitext

__all__ = [
    "GroupNode",
    "LinkNode",
    "Node",
    "NodeCursor",
    "SectionNode",
    "TemplateNode",
    "TextNode",
    "VariableNode",
    "nodes_source",
    "parse_wikitext",
    "render_nodes",
]
