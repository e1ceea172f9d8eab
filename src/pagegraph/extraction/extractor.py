"""Extraction driver walking a page and emitting quads.

A page is processed in three passes.  Prolog templates are matched at the
start and epilog templates at the end (on a reversed cursor); both accept
whatever a diverging match bound before it failed.  The main loop then
repeatedly tries block indicators (to open or close nested blocks) and the
content templates of the innermost open block, dropping one node whenever
nothing matched.
"""

from __future__ import annotations

import logging
from typing import Sequence

from pagegraph.document.cursor import NodeCursor
from pagegraph.document.nodes import Node
from pagegraph.document.wikitext import parse_wikitext
from pagegraph.extraction.hooks import HookRegistry, build_default_hooks
from pagegraph.extraction.identifiers import synthesize_block_iri
from pagegraph.extraction.projection import ProjectionContext, project_bindings
from pagegraph.matching.bindings import VarBindings
from pagegraph.matching.matcher import MatchResult, MatchSuccess, reverse_pattern, try_match
from pagegraph.rdf import Dataset, Graph, IriRef, Quad
from pagegraph.schema.model import BlockType, ExtractionSchema, Template, validate_schema

LOGGER = logging.getLogger(__name__)


class PageExtractor:
    """Extract quads from single pages with one validated schema.

    The extractor itself is read-only after construction; every call to
    ``extract`` works on its own cursor, open-block stack and IRI cache.
    """

    def __init__(self, schema: ExtractionSchema, *, hooks: HookRegistry | None = None) -> None:
        self._hooks = hooks if hooks is not None else build_default_hooks()
        validate_schema(schema, hooks=self._hooks)
        self._schema = schema
        self._context = ProjectionContext(
            dataset=Dataset(schema.dataset),
            context=IriRef(schema.namespace),
            mappings=schema.mappings,
        )
        self._epilogs = tuple((template, reverse_pattern(template.pattern)) for template in schema.epilogs)

    @property
    def schema(self) -> ExtractionSchema:
        return self._schema

    def extract(self, nodes: Sequence[Node], subject_uri: str) -> Graph:
        """Extract the quads of one page whose root resource is *subject_uri*."""

        run = _ExtractionRun(self, nodes, subject_uri)
        quads = run.execute()
        LOGGER.info("%d quads extracted for %s", len(quads), subject_uri.rsplit("/", 1)[-1])
        return Graph.from_quads(quads)

    def extract_wikitext(self, text: str, subject_uri: str) -> Graph:
        return self.extract(parse_wikitext(text), subject_uri)


class _ExtractionRun:
    """Mutable state of one ``PageExtractor.extract`` call."""

    def __init__(self, extractor: PageExtractor, nodes: Sequence[Node], subject_uri: str) -> None:
        self._extractor = extractor
        self._schema = extractor._schema
        self._cursor = NodeCursor(nodes)
        self._open_blocks: list[BlockType] = [self._schema.page]
        self._block_iris: dict[BlockType, IriRef] = {self._schema.page: IriRef(subject_uri)}
        self._quads: list[Quad] = []

    def execute(self) -> list[Quad]:
        page = self._schema.page
        lenient = self._match_prologs() + self._match_epilogs()
        for template, bindings in lenient:
            self._quads.extend(self._project(page, template, bindings))

        while self._cursor:
            progressed = self._scan_boundaries()
            if self._scan_content():
                progressed = True
            if not progressed:
                skipped = self._cursor.pop()
                LOGGER.debug("no template matched, skipping %s", skipped.dump())

        return self._quads

    def _match_prologs(self) -> list[tuple[Template, VarBindings]]:
        results: list[tuple[Template, VarBindings]] = []
        for template in self._schema.prologs:
            outcome = try_match(template.pattern, self._cursor)
            results.append((template, _lenient_bindings(outcome)))
        return results

    def _match_epilogs(self) -> list[tuple[Template, VarBindings]]:
        backwards = self._cursor.reversed()
        results: list[tuple[Template, VarBindings]] = []
        for template, pattern in self._extractor._epilogs:
            outcome = try_match(pattern, backwards, backwards=True)
            results.append((template, _lenient_bindings(outcome).reversed()))

        # nodes taken by epilogs are gone for the main loop
        self._cursor.replace(reversed(backwards.remaining()))
        return results

    def _scan_boundaries(self) -> bool:
        innermost = self._open_blocks[-1]
        candidates = list(self._open_blocks)
        if innermost.child is not None:
            candidates.append(innermost.child.block)

        for depth, block in enumerate(candidates):
            if block.indicator is None:
                continue
            outcome = try_match(block.indicator.pattern, self._cursor)
            if not isinstance(outcome, MatchSuccess):
                continue

            LOGGER.debug("recognized block start %s", block.indicator.name)
            if depth < len(self._open_blocks):
                del self._open_blocks[depth + 1 :]
            else:
                self._open_child(innermost, outcome.bindings)
            return True
        return False

    def _open_child(self, parent: BlockType, bindings: VarBindings) -> None:
        assert parent.child is not None
        block = parent.child.block
        assert block.indicator is not None

        parent_iri = self._block_iris[parent]
        block_iri = synthesize_block_iri(parent_iri, bindings, block.indicator.variables)
        self._block_iris[block] = block_iri
        LOGGER.debug("new block %s", block_iri.uri)

        context = self._extractor._context
        for variable in block.indicator.variables:
            obj = context.term_for(variable, bindings.first_text(variable.name))
            self._quads.append(context.quad(block_iri, variable.property, obj))
        self._quads.append(context.quad(parent_iri, parent.child.property, block_iri))
        self._open_blocks.append(block)

    def _scan_content(self) -> bool:
        block = self._open_blocks[-1]
        for template in block.templates:
            outcome = try_match(template.pattern, self._cursor)
            if isinstance(outcome, MatchSuccess):
                LOGGER.debug("extracted data with template %s", template.name)
                self._quads.extend(self._project(block, template, outcome.bindings))
                return True
        return False

    def _project(self, block: BlockType, template: Template, bindings: VarBindings) -> list[Quad]:
        return project_bindings(
            self._block_iris[block],
            template,
            bindings,
            self._extractor._context,
            self._extractor._hooks,
        )


def _lenient_bindings(outcome: MatchResult) -> VarBindings:
    if isinstance(outcome, MatchSuccess):
        return outcome.bindings
    return outcome.partial
