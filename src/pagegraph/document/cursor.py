"""Front-consumed cursor over a document's node sequence."""

from __future__ import annotations

from typing import Iterable, Sequence

from pagegraph.document.nodes import Node


class NodeCursor:
    """Ordered view over the nodes that are still to be processed.

    Nodes are only ever consumed from the front.  The matcher reads ahead
    through ``nodes``/``position`` and commits with ``advance`` once a
    template matched completely, so a failed attempt never moves the cursor.
    """

    def __init__(self, nodes: Iterable[Node] = ()) -> None:
        self._nodes: tuple[Node, ...] = tuple(nodes)
        self._position = 0

    @property
    def nodes(self) -> tuple[Node, ...]:
        """Full underlying sequence, including already consumed nodes."""

        return self._nodes

    @property
    def position(self) -> int:
        return self._position

    def __len__(self) -> int:
        return len(self._nodes) - self._position

    def __bool__(self) -> bool:
        return self._position < len(self._nodes)

    def peek(self, count: int = 1) -> tuple[Node, ...]:
        return self._nodes[self._position : self._position + count]

    def remaining(self) -> tuple[Node, ...]:
        return self._nodes[self._position :]

    def advance(self, count: int) -> None:
        if count < 0 or count > len(self):
            raise ValueError(f"Cannot advance cursor by {count} with {len(self)} nodes left")
        self._position += count

    def pop(self) -> Node:
        if not self:
            raise IndexError("pop from exhausted cursor")
        node = self._nodes[self._position]
        self._position += 1
        return node

    def reversed(self) -> "NodeCursor":
        """Independent cursor over the remaining nodes in reverse order."""

        return NodeCursor(reversed(self.remaining()))

    def replace(self, nodes: Sequence[Node] | Iterable[Node]) -> None:
        """Swap the remaining content for *nodes*."""

        self._nodes = tuple(nodes)
        self._position = 0
