"""Statement model and N-Triples / N-Quads rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

_LITERAL_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_IRI_FORBIDDEN = set('<>"{}|^`\\')


def _escape_literal(text: str) -> str:
    return "".join(_LITERAL_ESCAPES.get(char, char) for char in text)


def _escape_iri(uri: str) -> str:
    escaped: list[str] = []
    for char in uri:
        if char in _IRI_FORBIDDEN or ord(char) <= 0x20:
            escaped.append(f"\\u{ord(char):04X}")
        else:
            escaped.append(char)
    return "".join(escaped)


@dataclass(frozen=True, slots=True)
class IriRef:
    uri: str

    def render(self) -> str:
        return f"<{_escape_iri(self.uri)}>"


@dataclass(frozen=True, slots=True)
class PlainLiteral:
    text: str
    language: str | None = None

    def render(self) -> str:
        rendered = f'"{_escape_literal(self.text)}"'
        if self.language:
            rendered += f"@{self.language}"
        return rendered


Term = IriRef | PlainLiteral


@dataclass(frozen=True, slots=True)
class Dataset:
    name: str


@dataclass(frozen=True, slots=True)
class Quad:
    """One extracted statement with its dataset and context graph."""

    dataset: Dataset
    subject: IriRef
    predicate: IriRef
    obj: Term
    context: IriRef

    def render_ntriple(self) -> str:
        return f"{self.subject.render()} {self.predicate.render()} {self.obj.render()} ."

    def render_nquad(self) -> str:
        return (
            f"{self.subject.render()} {self.predicate.render()} "
            f"{self.obj.render()} {self.context.render()} ."
        )

    def to_dict(self) -> dict[str, str | None]:
        is_iri = isinstance(self.obj, IriRef)
        return {
            "dataset": self.dataset.name,
            "subject": self.subject.uri,
            "predicate": self.predicate.uri,
            "object": self.obj.uri if is_iri else self.obj.text,
            "object_type": "uri" if is_iri else "literal",
            "context": self.context.uri,
        }


@dataclass(frozen=True, slots=True)
class Graph:
    """Quads of one page, ordered by subject IRI length."""

    quads: tuple[Quad, ...] = ()

    @classmethod
    def from_quads(cls, quads: Iterable[Quad]) -> "Graph":
        # stable sort: equal lengths keep generation order
        return cls(quads=tuple(sorted(quads, key=lambda quad: len(quad.subject.uri))))

    def __iter__(self) -> Iterator[Quad]:
        return iter(self.quads)

    def __len__(self) -> int:
        return len(self.quads)

    def render_ntriples(self) -> str:
        return "".join(quad.render_ntriple() + "\n" for quad in self.quads)

    def render_nquads(self) -> str:
        return "".join(quad.render_nquad() + "\n" for quad in self.quads)
