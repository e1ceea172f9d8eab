"""Deterministic IRIs for pages, block instances and senses."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import quote

from pagegraph.document.normalization import normalize_title
from pagegraph.matching.bindings import VarBindings
from pagegraph.rdf import IriRef
from pagegraph.schema.model import Variable

BLOCK_SEPARATOR = "-"

# characters kept verbatim in resource names, as in DBpedia resource IRIs
_SAFE_TITLE_CHARS = "()',:;!*$&+=@~/"


def synthesize_block_iri(parent: IriRef, bindings: VarBindings, variables: Sequence[Variable]) -> IriRef:
    """Parent IRI extended by the first value of each indicator variable.

    Equal parents and equal indicator values always give the same IRI.
    """

    identifier = parent.uri
    for variable in variables:
        identifier += BLOCK_SEPARATOR + bindings.first_text(variable.name)
    return IriRef(identifier)


def render_sense_key(sense: str) -> str:
    """``[1]`` and ``1`` both identify sense ``1``."""

    key = sense.strip()
    if key.startswith("[") and key.endswith("]"):
        key = key[1:-1].strip()
    return key


def sense_iri(block: IriRef, sense: str) -> IriRef:
    return IriRef(block.uri + BLOCK_SEPARATOR + render_sense_key(sense))


def subject_uri_for(title: str, base_uri: str) -> str:
    """Resource IRI for a page title: ``Haus am See`` -> ``<base>Haus_am_See``."""

    name = normalize_title(title).replace(" ", "_")
    return base_uri + quote(name, safe=_SAFE_TITLE_CHARS)
