"""Plain wikitext page files with encoding detection."""

from __future__ import annotations

from pathlib import Path

from charset_normalizer import from_bytes


def read_wikitext(path: str | Path) -> str:
    """Decode a page file, detecting its charset."""

    raw = Path(path).read_bytes()
    return raw.decode(_detect_encoding(raw))


def _detect_encoding(raw: bytes) -> str:
    if not raw:
        return "utf-8"
    try:
        raw.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass

    best = from_bytes(raw).best()
    if best and best.encoding:
        return best.encoding

    for fallback in ("cp1252", "latin-1"):
        try:
            raw.decode(fallback)
            return fallback
        except UnicodeDecodeError:
            continue
    raise ValueError("Could not detect wikitext encoding")
