"""Tests for the note-splitter CLI."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from note_splitter.cli import app

runner = CliRunner()


def _settings(tmp_path, **values):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(values))
    return str(path)


def test_split_writes_notes_into_vault(tmp_path):
    vault = tmp_path / "vault"
    vault.mkdir()
    (vault / "src.md").write_text("A\n---\nB\n---\nC", encoding="utf-8")
    settings = _settings(tmp_path, delimiter="---", save_folder_path="out")

    result = runner.invoke(app, ["split", "src.md", "--vault", str(vault), "--settings", settings])

    assert result.exit_code == 0, result.output
    assert "Split into 3 notes." in result.output
    bodies = sorted(p.read_text(encoding="utf-8") for p in (vault / "out").glob("*.md"))
    assert bodies == ["A", "B", "C"]
    assert (vault / "src.md").exists()


def test_split_accepts_absolute_path_and_deletes_original(tmp_path):
    vault = tmp_path / "vault"
    (vault / "inbox").mkdir(parents=True)
    source = vault / "inbox" / "src.md"
    source.write_text("First\nSecond", encoding="utf-8")
    settings = _settings(tmp_path, save_folder_path="", delete_original_note=True, use_content_as_title=True)

    result = runner.invoke(app, ["split", str(source), "--vault", str(vault), "--settings", settings])

    assert result.exit_code == 0, result.output
    assert not source.exists()
    assert sorted(p.name for p in (vault / "inbox").iterdir()) == ["First.md", "Second.md"]


def test_split_single_section(tmp_path):
    vault = tmp_path / "vault"
    vault.mkdir()
    (vault / "src.md").write_text("Only one part", encoding="utf-8")
    settings = _settings(tmp_path, delimiter="---")

    result = runner.invoke(app, ["split", "src.md", "--vault", str(vault), "--settings", settings])

    assert result.exit_code == 0
    assert "Only one section of content found. Nothing to split." in result.output
    assert not (vault / "note-splitter").exists()


def test_split_missing_note(tmp_path):
    vault = tmp_path / "vault"
    vault.mkdir()
    settings = _settings(tmp_path)

    result = runner.invoke(app, ["split", "missing.md", "--vault", str(vault), "--settings", settings])

    assert "No file found for this note." in result.output


def test_split_with_invalid_settings_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[]")

    result = runner.invoke(app, ["split", "x.md", "--vault", str(tmp_path), "--settings", str(path)])

    assert result.exit_code == 2


def test_config_set_and_show(tmp_path):
    settings = str(tmp_path / "settings.json")

    result = runner.invoke(app, ["config", "set", "delimiter", "\\n\\n", "--settings", settings])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["config", "set", "use_content_as_title", "yes", "--settings", settings])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["config", "show", "--settings", settings])
    shown = json.loads(result.output)
    assert shown["delimiter"] == "\\n\\n"
    assert shown["use_content_as_title"] is True


def test_config_set_unknown_key(tmp_path):
    result = runner.invoke(app, ["config", "set", "bogus", "1", "--settings", str(tmp_path / "s.json")])
    assert result.exit_code == 2
