"""Text normalization helpers used when rendering bound nodes."""

from __future__ import annotations

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse repeated whitespace and trim boundaries."""

    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_title(text: str) -> str:
    """Produce the canonical page or template title used for comparisons."""

    normalized = normalize_whitespace(unicodedata.normalize("NFC", text).replace("_", " "))
    return normalized[:1].upper() + normalized[1:]
