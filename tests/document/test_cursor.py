from __future__ import annotations

import pytest

from pagegraph.document.cursor import NodeCursor
from pagegraph.document.nodes import TextNode


def _cursor(*texts: str) -> NodeCursor:
    return NodeCursor(TextNode(text) for text in texts)


def test_cursor_consumes_from_front() -> None:
    cursor = _cursor("a", "b", "c")

    assert cursor.pop() == TextNode("a")
    cursor.advance(1)

    assert len(cursor) == 1
    assert cursor.peek() == (TextNode("c"),)
    assert cursor.remaining() == (TextNode("c"),)


def test_cursor_is_falsy_when_exhausted() -> None:
    cursor = _cursor("a")
    assert cursor

    cursor.pop()

    assert not cursor
    with pytest.raises(IndexError):
        cursor.pop()


def test_advance_beyond_end_is_rejected() -> None:
    cursor = _cursor("a")

    with pytest.raises(ValueError):
        cursor.advance(2)
    assert len(cursor) == 1


def test_reversed_cursor_is_independent() -> None:
    cursor = _cursor("a", "b", "c")
    cursor.pop()

    backwards = cursor.reversed()
    backwards.pop()

    assert backwards.remaining() == (TextNode("b"),)
    assert cursor.remaining() == (TextNode("b"), TextNode("c"))


def test_replace_swaps_remaining_content() -> None:
    cursor = _cursor("a", "b", "c")
    cursor.pop()

    cursor.replace([TextNode("x")])

    assert cursor.position == 0
    assert cursor.remaining() == (TextNode("x"),)
