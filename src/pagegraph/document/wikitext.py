"""Tokenizer turning raw wikitext into a flat node sequence."""

from __future__ import annotations

import re
from typing import Iterator

from pagegraph.document.nodes import (
    NEWLINE,
    SPACE,
    GroupNode,
    LinkNode,
    Node,
    SectionNode,
    TemplateNode,
    TextNode,
    VariableNode,
)
from pagegraph.document.normalization import normalize_whitespace

_TOKEN_RE = re.compile(r"[^\S\n]+|\w+|[^\w\s]")
_HEADING_RE = re.compile(r"^(={1,6})(.+?)\1[^\S\n]*$")
_VARIABLE_RE = re.compile(r"\$(\w+)")

_GROUP_OPEN = "(("
_GROUP_CLOSE = "))"
_QUANTIFIERS: dict[str, tuple[int, int | None]] = {
    "*": (0, None),
    "+": (1, None),
    "?": (0, 1),
}


def parse_wikitext(text: str, *, pattern: bool = False) -> tuple[Node, ...]:
    """Tokenize *text*; with ``pattern=True`` also recognize ``$var`` and ``((...))``.

    Groups are only recognized outside templates and links; a ``((`` inside
    ``{{...}}`` or ``[[...]]`` is literal text.
    """

    text = text.replace("\r\n", NEWLINE).replace("\r", NEWLINE)
    if not pattern:
        return tuple(_parse_lines(text, pattern=False))

    nodes: list[Node] = []
    for segment in _split_groups(text):
        if isinstance(segment, GroupNode):
            nodes.append(segment)
        else:
            nodes.extend(_parse_lines(segment, pattern=True))
    return tuple(nodes)


def _split_groups(text: str) -> Iterator[str | GroupNode]:
    position = 0
    while True:
        start = _find_top_level(text, _GROUP_OPEN, position)
        if start == -1:
            break
        end = _find_closing(text, start, _GROUP_OPEN, _GROUP_CLOSE)
        if end == -1:
            raise ValueError(f"Unbalanced '((' in template pattern at offset {start}")

        if start > position:
            yield text[position:start]
        inner = text[start + len(_GROUP_OPEN) : end]
        after = end + len(_GROUP_CLOSE)
        min_count, max_count = _QUANTIFIERS.get(text[after : after + 1], (1, 1))
        if text[after : after + 1] in _QUANTIFIERS:
            after += 1
        yield GroupNode(items=parse_wikitext(inner, pattern=True), min_count=min_count, max_count=max_count)
        position = after

    if position < len(text):
        yield text[position:]


def _find_top_level(text: str, token: str, start: int) -> int:
    """Offset of *token* outside ``{{...}}`` and ``[[...]]``, or -1."""

    depth = 0
    index = start
    while index < len(text):
        pair = text[index : index + 2]
        if pair in ("{{", "[["):
            depth += 1
            index += 2
            continue
        if pair in ("}}", "]]") and depth:
            depth -= 1
            index += 2
            continue
        if not depth and text.startswith(token, index):
            return index
        index += 1
    return -1


def _parse_lines(text: str, *, pattern: bool) -> list[Node]:
    nodes: list[Node] = []
    for index, line in enumerate(text.split(NEWLINE)):
        if index:
            nodes.append(TextNode(NEWLINE))
        if not line:
            continue

        heading = _HEADING_RE.match(line)
        if heading and heading.group(2).strip():
            title = _strip_spaces(_parse_inline(heading.group(2), pattern=pattern))
            nodes.append(SectionNode(level=len(heading.group(1)), title=title))
        else:
            nodes.extend(_parse_inline(line, pattern=pattern))
    return nodes


def _parse_inline(text: str, *, pattern: bool) -> tuple[Node, ...]:
    nodes: list[Node] = []
    run_start = 0
    index = 0

    def flush(until: int) -> None:
        if until > run_start:
            nodes.extend(_tokenize(text[run_start:until]))

    while index < len(text):
        if text.startswith("{{", index):
            end = _find_closing(text, index, "{{", "}}")
            if end != -1:
                flush(index)
                parts = _split_top_level(text[index + 2 : end])
                params = tuple(_strip_spaces(_parse_inline(part, pattern=pattern)) for part in parts[1:])
                nodes.append(TemplateNode(name=normalize_whitespace(parts[0]), params=params))
                index = run_start = end + 2
                continue
        elif text.startswith("[[", index):
            end = _find_closing(text, index, "[[", "]]")
            if end != -1:
                flush(index)
                parts = _split_top_level(text[index + 2 : end])
                nodes.append(LinkNode(parts=tuple(_strip_spaces(_parse_inline(part, pattern=pattern)) for part in parts)))
                index = run_start = end + 2
                continue
        elif pattern and text[index] == "$":
            variable = _VARIABLE_RE.match(text, index)
            if variable:
                flush(index)
                nodes.append(VariableNode(variable.group(1)))
                index = run_start = variable.end()
                continue
        index += 1

    flush(len(text))
    return tuple(nodes)


def _tokenize(text: str) -> list[Node]:
    tokens: list[Node] = []
    for match in _TOKEN_RE.finditer(text):
        token = match.group(0)
        tokens.append(TextNode(SPACE if token.isspace() else token))
    return tokens


def _find_closing(text: str, start: int, opener: str, closer: str) -> int:
    """Return the offset of the closer balancing the opener at *start*, or -1."""

    depth = 0
    index = start
    while index < len(text):
        if text.startswith(opener, index):
            depth += 1
            index += len(opener)
        elif text.startswith(closer, index):
            depth -= 1
            if depth == 0:
                return index
            index += len(closer)
        else:
            index += 1
    return -1


def _split_top_level(text: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current = 0
    index = 0
    while index < len(text):
        pair = text[index : index + 2]
        if pair in ("{{", "[["):
            depth += 1
            index += 2
            continue
        if pair in ("}}", "]]") and depth:
            depth -= 1
            index += 2
            continue
        if text[index] == "|" and depth == 0:
            parts.append(text[current:index])
            current = index + 1
        index += 1
    parts.append(text[current:])
    return parts


def _strip_spaces(nodes: tuple[Node, ...]) -> tuple[Node, ...]:
    start = 0
    end = len(nodes)
    while start < end and _is_space(nodes[start]):
        start += 1
    while end > start and _is_space(nodes[end - 1]):
        end -= 1
    return nodes[start:end]


def _is_space(node: Node) -> bool:
    return isinstance(node, TextNode) and node.is_space
