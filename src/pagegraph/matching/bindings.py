"""Variable bindings collected by one template match."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from pagegraph.document.nodes import Node, render_nodes


@dataclass(frozen=True, slots=True)
class Binding:
    """One value bound to a variable, optionally scoped to a sense key."""

    name: str
    value: tuple[Node, ...]
    sense: str | None = None

    @property
    def text(self) -> str:
        return render_nodes(self.value)


class VarBindings:
    """Ordered, read-only view over the bindings of one match."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[Binding] = ()) -> None:
        self._entries: tuple[Binding, ...] = tuple(entries)

    @property
    def entries(self) -> tuple[Binding, ...]:
        return self._entries

    def __iter__(self) -> Iterator[Binding]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VarBindings):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"VarBindings({self.dump()})"

    def names(self) -> list[str]:
        return list(dict.fromkeys(entry.name for entry in self._entries))

    def first(self, name: str) -> tuple[Node, ...] | None:
        for entry in self._entries:
            if entry.name == name:
                return entry.value
        return None

    def first_text(self, name: str) -> str:
        """Rendered first value of *name*; empty when unbound."""

        return render_nodes(self.first(name))

    def all(self, name: str) -> list[tuple[Node, ...]]:
        return [entry.value for entry in self._entries if entry.name == name]

    def by_sense(self, name: str) -> list[tuple[str, tuple[Node, ...]]]:
        """``(sense, value)`` pairs for every sense-scoped binding of *name*."""

        return [
            (entry.sense, entry.value)
            for entry in self._entries
            if entry.name == name and entry.sense is not None
        ]

    def reversed(self) -> "VarBindings":
        """Entries in reverse order, for bindings gathered on a reversed cursor."""

        return VarBindings(reversed(self._entries))

    def dump(self) -> str:
        parts = []
        for entry in self._entries:
            scope = f"[{entry.sense}]" if entry.sense is not None else ""
            parts.append(f"{entry.name}{scope}={entry.text!r}")
        return ", ".join(parts)
