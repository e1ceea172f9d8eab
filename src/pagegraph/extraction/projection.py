"""Projection of template bindings into quads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from pagegraph.document.nodes import render_nodes
from pagegraph.extraction.hooks import HookCall, HookRegistry
from pagegraph.extraction.identifiers import sense_iri
from pagegraph.matching.bindings import VarBindings
from pagegraph.rdf import Dataset, IriRef, PlainLiteral, Quad, Term
from pagegraph.schema.model import Template, Variable


@dataclass(slots=True)
class PostProcessingError(Exception):
    """A post-processing hook failed or returned something other than quads."""

    template: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (template={self.template})"


@dataclass(frozen=True, slots=True)
class ProjectionContext:
    """Run-independent values shared by every quad of a schema."""

    dataset: Dataset
    context: IriRef
    mappings: Mapping[str, Term] = field(default_factory=dict)

    def term_for(self, variable: Variable, text: str) -> Term:
        """Mapped term for mapping variables, plain literal otherwise or on a miss."""

        if variable.do_mapping:
            return self.mappings.get(text, PlainLiteral(text))
        return PlainLiteral(text)

    def quad(self, subject: IriRef, predicate: str, obj: Term) -> Quad:
        return Quad(
            dataset=self.dataset,
            subject=subject,
            predicate=IriRef(predicate),
            obj=obj,
            context=self.context,
        )


def project_bindings(
    block_iri: IriRef,
    template: Template,
    bindings: VarBindings,
    context: ProjectionContext,
    hooks: HookRegistry,
) -> list[Quad]:
    """Turn the bindings of one match of *template* into quads about *block_iri*."""

    if template.needs_post_processing:
        return _run_post_processor(block_iri, template, bindings, context, hooks)

    quads: list[Quad] = []
    for variable in template.variables:
        if variable.sense_bound:
            for sense, value in bindings.by_sense(variable.name):
                obj = context.term_for(variable, render_nodes(value))
                quads.append(context.quad(sense_iri(block_iri, sense), variable.property, obj))
        else:
            for value in bindings.all(variable.name):
                obj = context.term_for(variable, render_nodes(value))
                quads.append(context.quad(block_iri, variable.property, obj))
    return quads


def _run_post_processor(
    block_iri: IriRef,
    template: Template,
    bindings: VarBindings,
    context: ProjectionContext,
    hooks: HookRegistry,
) -> list[Quad]:
    assert template.post_processor is not None
    try:
        hook = hooks.resolve(template.post_processor)
    except KeyError as exc:
        raise PostProcessingError(template.name, str(exc.args[0])) from exc

    try:
        produced = hook(bindings, HookCall(block_iri=block_iri, template=template, context=context))
    except Exception as exc:
        raise PostProcessingError(template.name, f"Post-processor '{template.post_processor}' failed: {exc}") from exc

    if not isinstance(produced, (list, tuple)) or not all(isinstance(quad, Quad) for quad in produced):
        raise PostProcessingError(template.name, f"Post-processor '{template.post_processor}' returned non-quad output")
    return list(produced)
