"""Streaming reader for MediaWiki XML export dumps."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from lxml import etree

MAIN_NAMESPACE = 0


@dataclass(slots=True)
class DumpPage:
    """One article page of a dump."""

    title: str
    text: str
    namespace: int = MAIN_NAMESPACE


def iter_dump_pages(path: str | Path, *, namespaces: frozenset[int] = frozenset({MAIN_NAMESPACE})) -> Iterator[DumpPage]:
    """Yield non-redirect pages of the given namespaces in dump order."""

    context = etree.iterparse(
        str(path),
        events=("end",),
        tag="{*}page",
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
    )
    for _, element in context:
        page = _read_page(element)
        # free the parsed subtree, dumps do not fit in memory
        element.clear()
        while element.getprevious() is not None:
            del element.getparent()[0]
        if page is not None and page.namespace in namespaces:
            yield page


def _read_page(element: etree._Element) -> DumpPage | None:
    title = _child_text(element, "title")
    if not title or element.xpath("./*[local-name()='redirect']"):
        return None

    raw_namespace = _child_text(element, "ns")
    try:
        namespace = int(raw_namespace) if raw_namespace else MAIN_NAMESPACE
    except ValueError:
        return None

    texts = element.xpath("./*[local-name()='revision']/*[local-name()='text']")
    text = texts[-1].text if texts else None
    return DumpPage(title=title, text=text or "", namespace=namespace)


def _child_text(element: etree._Element, name: str) -> str | None:
    for child in element.xpath(f"./*[local-name()='{name}']"):
        if child.text and child.text.strip():
            return child.text.strip()
    return None
