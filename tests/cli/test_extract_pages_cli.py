from __future__ import annotations

import json
from pathlib import Path

import pytest

from pagegraph.cli.extract_pages import main

CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "config-de.xml"

PAGE = """== Haus ({{Sprache|Deutsch}}) ==
=== {{Wortart|Substantiv|Deutsch}} ===
{{Bedeutungen}}
:[1] Gebäude
"""

DUMP = f"""<mediawiki xmlns="http://www.mediawiki.org/xml/export-0.10/">
  <page><title>Haus</title><ns>0</ns><revision><text>{PAGE}</text></revision></page>
  <page><title>Baum</title><ns>0</ns><revision><text>{PAGE.replace('Haus', 'Baum')}</text></revision></page>
</mediawiki>
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "PAGEGRAPH_SCHEMA_PATH",
        "PAGEGRAPH_SCHEMA_DIR",
        "PAGEGRAPH_LANGUAGE",
        "PAGEGRAPH_BASE_URI",
        "PAGEGRAPH_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def _page_file(tmp_path: Path) -> Path:
    path = tmp_path / "Haus.txt"
    path.write_text(PAGE, encoding="utf-8")
    return path


def test_cli_json_for_single_page(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(
        [
            "--config",
            str(CONFIG_PATH),
            "--page",
            str(_page_file(tmp_path)),
            "--base-uri",
            "http://example.org/",
            "--format",
            "json",
        ]
    )

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["processed"] == 1
    assert payload["errors"] == []
    page = payload["pages"][0]
    assert page["title"] == "Haus"
    assert page["subject"] == "http://example.org/Haus"
    assert page["quads"][0] == {
        "dataset": "wiktionary",
        "subject": "http://example.org/Haus",
        "predicate": "http://wiktionary.dbpedia.org/terms/hasLangUsage",
        "object": "http://example.org/Haus-Deutsch",
        "object_type": "uri",
        "context": "http://wiktionary.dbpedia.org/terms/",
    }
    assert page["quads"][-1]["object"] == "Gebäude"


def test_cli_ntriples_uses_settings(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PAGEGRAPH_SCHEMA_PATH", str(CONFIG_PATH))
    monkeypatch.setenv("PAGEGRAPH_BASE_URI", "https://example.org/wiki/")

    exit_code = main(["--page", str(_page_file(tmp_path)), "--title", "haus", "--format", "ntriples"])

    assert exit_code == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 5
    assert lines[0] == (
        "<https://example.org/wiki/Haus> <http://wiktionary.dbpedia.org/terms/hasLangUsage> "
        "<https://example.org/wiki/Haus-Deutsch> ."
    )


def test_cli_dump_with_limit(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    dump = tmp_path / "pages.xml"
    dump.write_text(DUMP, encoding="utf-8")

    exit_code = main(["--config", str(CONFIG_PATH), "--dump", str(dump), "--limit", "1", "--format", "json"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert [page["title"] for page in payload["pages"]] == ["Haus"]


def test_cli_invalid_settings(tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGEGRAPH_LANGUAGE", "fr")

    exit_code = main(["--page", str(_page_file(tmp_path))])

    assert exit_code == 2
    assert "Configuration error" in capsys.readouterr().err


def test_cli_missing_schema(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["--config", str(tmp_path / "missing.xml"), "--page", str(_page_file(tmp_path))])

    assert exit_code == 2
    assert "Schema error" in capsys.readouterr().err


def test_cli_requires_an_input() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(CONFIG_PATH)])

    assert exc_info.value.code == 2


def test_cli_unreadable_page_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["--config", str(CONFIG_PATH), "--page", str(tmp_path / "missing.txt")])

    assert exit_code == 2
    assert "Input error" in capsys.readouterr().err


def test_cli_malformed_dump(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    dump = tmp_path / "broken.xml"
    dump.write_text("<mediawiki><page><title>Haus</title><revision><text>abc", encoding="utf-8")

    exit_code = main(["--config", str(CONFIG_PATH), "--dump", str(dump), "--format", "json"])

    assert exit_code == 2
    assert "Input error" in capsys.readouterr().err
