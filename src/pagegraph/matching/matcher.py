"""Backtracking matcher aligning one template pattern with the front of a cursor.

Text tokens compare by value, structured nodes compare by kind and have
their parts matched recursively (parts must be consumed completely).
Variables capture one or more nodes up to the next pattern token, shortest
first, and grow on backtracking; a variable ending a pattern takes the rest
of the line.  Variables never cross a newline.  Groups repeat possessively:
an iteration that succeeded is never given back.

A mismatch is a normal outcome and is returned as ``MatchFailure`` carrying
the bindings of the attempt that got furthest, nested parts included; the
cursor only advances on ``MatchSuccess``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from pagegraph.document.cursor import NodeCursor
from pagegraph.document.nodes import (
    GroupNode,
    LinkNode,
    Node,
    SectionNode,
    TemplateNode,
    TextNode,
    VariableNode,
    render_nodes,
)
from pagegraph.document.normalization import normalize_title
from pagegraph.matching.bindings import Binding, VarBindings

SENSE_VARIABLE = "sense"


@dataclass(frozen=True, slots=True)
class MatchSuccess:
    """Pattern matched; ``consumed`` nodes were taken from the cursor."""

    bindings: VarBindings
    consumed: int


@dataclass(frozen=True, slots=True)
class MatchFailure:
    """Pattern diverged; the cursor is untouched."""

    partial: VarBindings


MatchResult = MatchSuccess | MatchFailure


@dataclass(frozen=True, slots=True)
class _State:
    position: int
    bindings: tuple[Binding, ...]
    sense: str | None


def try_match(pattern: Sequence[Node], cursor: NodeCursor, *, backwards: bool = False) -> MatchResult:
    """Match *pattern* against the front of *cursor*.

    A match that would consume no nodes counts as a failure, so every
    success makes progress through the document.  With ``backwards`` the
    cursor runs over a reversed document (and *pattern* should come from
    ``reverse_pattern``); values captured from it are stored in reading order
    and ``$sense`` scopes the bindings that follow it in reading order.
    """

    attempt = _Attempt(cursor.nodes, cursor.position, backwards=backwards)
    state = attempt.match_sequence(
        tuple(pattern), 0, cursor.nodes, _State(cursor.position, (), None), anchored=False
    )
    if state is None or state.position == cursor.position:
        return MatchFailure(partial=VarBindings(attempt.best_bindings))

    consumed = state.position - cursor.position
    cursor.advance(consumed)
    return MatchSuccess(bindings=VarBindings(state.bindings), consumed=consumed)


def reverse_pattern(pattern: Sequence[Node]) -> tuple[Node, ...]:
    """Pattern for matching against a reversed node sequence."""

    reversed_items: list[Node] = []
    for item in reversed(pattern):
        if isinstance(item, GroupNode):
            item = GroupNode(
                items=reverse_pattern(item.items),
                min_count=item.min_count,
                max_count=item.max_count,
            )
        reversed_items.append(item)
    return tuple(reversed_items)


class _Attempt:
    def __init__(self, document: tuple[Node, ...], start: int, *, backwards: bool) -> None:
        self._document = document
        self._backwards = backwards
        # location of the sequence being matched: document offset, then
        # (node offset, part index) pairs for every structured node entered
        self._prefix: tuple[int, ...] = ()
        self._best_progress: tuple[int, ...] = (start,)
        self.best_bindings: tuple[Binding, ...] = ()

    def _note(self, state: _State) -> None:
        progress = self._prefix + (state.position,)
        if progress > self._best_progress or (
            progress == self._best_progress and len(state.bindings) > len(self.best_bindings)
        ):
            self._best_progress = progress
            self.best_bindings = state.bindings

    def match_sequence(
        self,
        items: tuple[Node, ...],
        index: int,
        nodes: Sequence[Node],
        state: _State,
        *,
        anchored: bool,
    ) -> _State | None:
        self._note(state)

        if index == len(items):
            if anchored and state.position != len(nodes):
                return None
            return state

        item = items[index]
        if isinstance(item, VariableNode):
            return self._match_variable(items, index, nodes, state, anchored=anchored)
        if isinstance(item, GroupNode):
            return self._match_group(items, index, nodes, state, anchored=anchored)

        if state.position >= len(nodes):
            return None
        matched = self._match_node(item, nodes[state.position], state)
        if matched is None:
            return None
        advanced = _State(state.position + 1, matched.bindings, matched.sense)
        return self.match_sequence(items, index + 1, nodes, advanced, anchored=anchored)

    def _match_variable(
        self,
        items: tuple[Node, ...],
        index: int,
        nodes: Sequence[Node],
        state: _State,
        *,
        anchored: bool,
    ) -> _State | None:
        variable = items[index]
        assert isinstance(variable, VariableNode)

        limit = state.position
        while limit < len(nodes) and not _is_newline(nodes[limit]):
            limit += 1

        stops = range(state.position + 1, limit + 1)
        if index == len(items) - 1 and not anchored:
            stops = range(limit, state.position, -1)

        for stop in stops:
            value = tuple(nodes[state.position : stop])
            if self._backwards and nodes is self._document:
                value = value[::-1]
            if self._backwards:
                # scoped afterwards, in reading order, by _scope_senses
                binding = Binding(name=variable.name, value=value)
                sense = state.sense
            elif variable.name == SENSE_VARIABLE:
                binding = Binding(name=variable.name, value=value)
                sense = render_nodes(value)
            else:
                binding = Binding(name=variable.name, value=value, sense=state.sense)
                sense = state.sense
            bound = _State(stop, state.bindings + (binding,), sense)
            result = self.match_sequence(items, index + 1, nodes, bound, anchored=anchored)
            if result is not None:
                return result
        return None

    def _match_group(
        self,
        items: tuple[Node, ...],
        index: int,
        nodes: Sequence[Node],
        state: _State,
        *,
        anchored: bool,
    ) -> _State | None:
        group = items[index]
        assert isinstance(group, GroupNode)

        count = 0
        current = state
        while group.max_count is None or count < group.max_count:
            iteration = self.match_sequence(group.items, 0, nodes, current, anchored=False)
            if iteration is None or iteration.position == current.position:
                break
            bindings = iteration.bindings
            if self._backwards:
                taken = len(current.bindings)
                bindings = bindings[:taken] + _scope_senses(bindings[taken:], state.sense)
            # sense keys never leak out of the iteration that bound them
            current = _State(iteration.position, bindings, state.sense)
            count += 1

        if count < group.min_count:
            return None
        return self.match_sequence(items, index + 1, nodes, current, anchored=anchored)

    def _match_node(self, expected: Node, actual: Node, state: _State) -> _State | None:
        if isinstance(expected, TextNode):
            if isinstance(actual, TextNode) and actual.text == expected.text:
                return state
            return None

        if isinstance(expected, TemplateNode):
            if not isinstance(actual, TemplateNode):
                return None
            if normalize_title(expected.name) != normalize_title(actual.name):
                return None
            return self._match_parts(expected.params, actual.params, state)

        if isinstance(expected, LinkNode):
            if not isinstance(actual, LinkNode):
                return None
            return self._match_parts(expected.parts, actual.parts, state)

        if isinstance(expected, SectionNode):
            if not isinstance(actual, SectionNode) or expected.level != actual.level:
                return None
            return self._match_parts((expected.title,), (actual.title,), state)

        return None

    def _match_parts(
        self,
        expected: tuple[tuple[Node, ...], ...],
        actual: tuple[tuple[Node, ...], ...],
        state: _State,
    ) -> _State | None:
        if len(expected) != len(actual):
            return None

        outer = self._prefix
        bindings = state.bindings
        sense = state.sense
        try:
            for part_index, (expected_part, actual_part) in enumerate(zip(expected, actual)):
                self._prefix = outer + (state.position, part_index)
                result = self.match_sequence(
                    expected_part, 0, actual_part, _State(0, bindings, sense), anchored=True
                )
                if result is None:
                    return None
                bindings = result.bindings
                sense = result.sense
        finally:
            self._prefix = outer
        return _State(state.position, bindings, sense)


def _scope_senses(entries: tuple[Binding, ...], sense: str | None) -> tuple[Binding, ...]:
    """Scope bindings gathered on a reversed document as if matched forwards."""

    scoped: list[Binding] = []
    for entry in reversed(entries):
        if entry.name == SENSE_VARIABLE:
            sense = render_nodes(entry.value)
        elif entry.sense is None and sense is not None:
            entry = Binding(name=entry.name, value=entry.value, sense=sense)
        scoped.append(entry)
    scoped.reverse()
    return tuple(scoped)


def _is_newline(node: Node) -> bool:
    return isinstance(node, TextNode) and node.is_newline
