"""Registry of post-processing hooks referenced by templates.

A template with a ``postProcessor`` attribute bypasses default projection;
the named hook receives the match bindings and returns the quads verbatim.
Hook names are resolved when the schema is loaded, never at extraction time.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import TYPE_CHECKING, Callable, Iterator

from pagegraph.document.nodes import LinkNode, render_nodes
from pagegraph.matching.bindings import VarBindings
from pagegraph.rdf import IriRef, Quad
from pagegraph.schema.model import Template

if TYPE_CHECKING:
    from pagegraph.extraction.projection import ProjectionContext

_LIST_SEPARATOR_RE = re.compile(r"\s*[,;]\s*")


@dataclass(frozen=True, slots=True)
class HookCall:
    """Everything a hook may need besides the bindings themselves."""

    block_iri: IriRef
    template: Template
    context: "ProjectionContext"


PostProcessor = Callable[[VarBindings, HookCall], list[Quad]]


class HookRegistry:
    """Static name -> hook table."""

    def __init__(self) -> None:
        self._hooks: dict[str, PostProcessor] = {}

    def register(self, name: str, hook: PostProcessor) -> None:
        if not name:
            raise ValueError("Hook name cannot be empty")
        self._hooks[name] = hook

    def resolve(self, name: str) -> PostProcessor:
        try:
            return self._hooks[name]
        except KeyError:
            raise KeyError(f"No post-processor registered as '{name}'") from None

    def __contains__(self, name: object) -> bool:
        return name in self._hooks

    def __iter__(self) -> Iterator[str]:
        return iter(self._hooks)

    def names(self) -> list[str]:
        return sorted(self._hooks)


def split_list_values(bindings: VarBindings, call: HookCall) -> list[Quad]:
    """One quad per comma or semicolon separated item of every bound value."""

    quads: list[Quad] = []
    for variable in call.template.variables:
        for value in bindings.all(variable.name):
            text = render_nodes(value)
            for item in _LIST_SEPARATOR_RE.split(text):
                if item:
                    quads.append(
                        call.context.quad(call.block_iri, variable.property, call.context.term_for(variable, item))
                    )
    return quads


def link_targets(bindings: VarBindings, call: HookCall) -> list[Quad]:
    """One quad per ``[[link]]`` target inside every bound value."""

    quads: list[Quad] = []
    for variable in call.template.variables:
        for value in bindings.all(variable.name):
            for node in value:
                if isinstance(node, LinkNode) and node.target:
                    quads.append(
                        call.context.quad(
                            call.block_iri, variable.property, call.context.term_for(variable, node.target)
                        )
                    )
    return quads


def build_default_hooks() -> HookRegistry:
    """Return the registry of built-in post-processors."""

    registry = HookRegistry()
    registry.register("split_list", split_list_values)
    registry.register("link_targets", link_targets)
    return registry
