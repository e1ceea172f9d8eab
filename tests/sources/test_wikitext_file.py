from __future__ import annotations

from pathlib import Path

from pagegraph.sources import read_wikitext


def test_reads_utf8(tmp_path: Path) -> None:
    path = tmp_path / "Haus.txt"
    path.write_text("== Haus ({{Sprache|Deutsch}}) ==\n:[1] Gebäude\n", encoding="utf-8")

    assert read_wikitext(path) == "== Haus ({{Sprache|Deutsch}}) ==\n:[1] Gebäude\n"


def test_reads_legacy_encoding(tmp_path: Path) -> None:
    text = ":[1] Gebäude für Menschen, größer als eine Hütte, mit Türen und Fenstern.\n" * 5
    path = tmp_path / "Haus.txt"
    path.write_bytes(text.encode("cp1252"))

    decoded = read_wikitext(path)

    assert "Gebäude" in decoded
    assert "Hütte" in decoded


def test_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")

    assert read_wikitext(path) == ""
