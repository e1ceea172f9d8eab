from __future__ import annotations

from pagegraph.rdf import Dataset, Graph, IriRef, PlainLiteral, Quad

CONTEXT = IriRef("http://example.org/ns/")


def _quad(subject: str, obj: IriRef | PlainLiteral, predicate: str = "http://example.org/p") -> Quad:
    return Quad(
        dataset=Dataset("wiktionary"),
        subject=IriRef(subject),
        predicate=IriRef(predicate),
        obj=obj,
        context=CONTEXT,
    )


def test_literal_escaping() -> None:
    literal = PlainLiteral('say "hi"\nback\\slash')

    assert literal.render() == '"say \\"hi\\"\\nback\\\\slash"'
    assert PlainLiteral("Haus", language="de").render() == '"Haus"@de'


def test_iri_escaping() -> None:
    assert IriRef("http://example.org/a b<c>").render() == "<http://example.org/a\\u0020b\\u003Cc\\u003E>"
    assert IriRef("http://example.org/Straße").render() == "<http://example.org/Straße>"


def test_ntriple_and_nquad_rendering() -> None:
    quad = _quad("http://example.org/X", PlainLiteral("rot"))

    assert quad.render_ntriple() == '<http://example.org/X> <http://example.org/p> "rot" .'
    assert quad.render_nquad() == '<http://example.org/X> <http://example.org/p> "rot" <http://example.org/ns/> .'


def test_to_dict() -> None:
    assert _quad("http://example.org/X", IriRef("http://example.org/Noun")).to_dict() == {
        "dataset": "wiktionary",
        "subject": "http://example.org/X",
        "predicate": "http://example.org/p",
        "object": "http://example.org/Noun",
        "object_type": "uri",
        "context": "http://example.org/ns/",
    }
    assert _quad("http://example.org/X", PlainLiteral("rot")).to_dict()["object_type"] == "literal"


def test_graph_orders_by_subject_length_stably() -> None:
    quads = [
        _quad("http://example.org/X-1-1", PlainLiteral("a")),
        _quad("http://example.org/X", PlainLiteral("b")),
        _quad("http://example.org/X-2", PlainLiteral("c")),
        _quad("http://example.org/X-1", PlainLiteral("d")),
        _quad("http://example.org/Y", PlainLiteral("e")),
    ]

    graph = Graph.from_quads(quads)

    assert [quad.obj.text for quad in graph] == ["b", "e", "c", "d", "a"]
    assert len(graph) == 5


def test_graph_rendering() -> None:
    graph = Graph.from_quads([_quad("http://example.org/X", PlainLiteral("rot"))])

    assert graph.render_ntriples() == '<http://example.org/X> <http://example.org/p> "rot" .\n'
    assert Graph().render_nquads() == ""
