from __future__ import annotations

from pagegraph.document.nodes import TextNode
from pagegraph.matching.bindings import Binding, VarBindings


def _value(*texts: str) -> tuple[TextNode, ...]:
    return tuple(TextNode(text) for text in texts)


def test_first_and_all_follow_binding_order() -> None:
    bindings = VarBindings(
        [
            Binding("word", _value("Haus")),
            Binding("word", _value("Hof")),
            Binding("lang", _value("de")),
        ]
    )

    assert bindings.first("word") == _value("Haus")
    assert bindings.all("word") == [_value("Haus"), _value("Hof")]
    assert bindings.names() == ["word", "lang"]


def test_missing_binding_renders_empty() -> None:
    bindings = VarBindings()

    assert bindings.first("word") is None
    assert bindings.first_text("word") == ""
    assert not bindings


def test_by_sense_skips_unscoped_values() -> None:
    bindings = VarBindings(
        [
            Binding("meaning", _value("general")),
            Binding("meaning", _value("rot"), sense="[1]"),
            Binding("meaning", _value("blau"), sense="[2]"),
        ]
    )

    assert bindings.by_sense("meaning") == [("[1]", _value("rot")), ("[2]", _value("blau"))]


def test_reversed_flips_entry_order_only() -> None:
    bindings = VarBindings(
        [
            Binding("link", _value("fr", ":", "Maison")),
            Binding("link", _value("en", ":", "Haus")),
        ]
    )

    restored = bindings.reversed()

    assert restored.all("link") == [_value("en", ":", "Haus"), _value("fr", ":", "Maison")]


def test_text_collapses_whitespace() -> None:
    binding = Binding("meaning", _value(" ", "rot", " ", " ", "und", " "))

    assert binding.text == "rot und"
