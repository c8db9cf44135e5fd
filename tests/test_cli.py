"""Tests for the outline-reveal CLI commands."""

from unittest.mock import patch

import pytest
from rich.console import Console
from typer import Exit

from outline_reveal import cli


@pytest.fixture
def recording_console():
    console = Console(record=True, width=200, color_system=None)
    with patch("outline_reveal.cli.console", console):
        yield console


@pytest.fixture
def outline_file(isolated_cwd):
    path = isolated_cwd / "outline.md"
    path.write_text("- #idea A\n    - [x] B\n    - C\n- D\n", encoding="utf-8")
    return path


def test_tokens_lists_offsets(outline_file, recording_console):
    cli.tokens(str(outline_file), config_path=None, debug=False)
    output = recording_console.export_text()
    assert "'#idea'" in output
    assert "name='idea'" in output
    assert "done" in output
    assert "Total characters: 30" in output
    assert "Tokens:" in output


def test_tree_shows_connector(outline_file, recording_console):
    cli.tree(str(outline_file), config_path=None, debug=False)
    output = recording_console.export_text()
    assert "#idea children=[1, 2]" in output
    assert "L3 - D" in output


def test_reveal_full_and_partial(outline_file, recording_console):
    cli.reveal(str(outline_file), typed=None, config_path=None, debug=False)
    output = recording_console.export_text()
    assert "#idea" in output
    assert output.splitlines()[0].rstrip().endswith("A")
    assert "✓ B" in output
    assert "typed 30 / 30 (complete)" in output

    recording_console.export_text(clear=True)
    cli.reveal(str(outline_file), typed=4, config_path=None, debug=False)
    output = recording_console.export_text()
    assert "#i" in output
    assert "#id" not in output
    assert "B" not in output
    assert "(typing)" in output


def test_styles_lists_every_state(recording_console):
    cli.styles()
    output = recording_console.export_text()
    for state in ["unchecked", "done", "in_progress", "cancelled", "error", "question"]:
        assert state in output


def test_missing_file_exits(isolated_cwd, recording_console):
    with pytest.raises(Exit):
        cli.tokens(str(isolated_cwd / "nope.md"), config_path=None, debug=False)
    assert "does not exist" in recording_console.export_text()


def test_bad_config_exits(outline_file, recording_console):
    with pytest.raises(Exit):
        cli.tree(str(outline_file), config_path=str(outline_file.parent / "missing.toml"), debug=False)


def test_uses_config_file_palette(outline_file, recording_console, tmp_path):
    config = tmp_path / "palette.toml"
    config.write_text('[palette]\nidea = "#010203"\n')
    document = cli._load_document(str(outline_file), str(config), False)
    assert document.lines[0].connector.color == "#010203"
    assert document.palette.color_for("idea") == "#010203"

    cli.tree(str(outline_file), config_path=str(config), debug=False)
    assert "#idea children=[1, 2]" in recording_console.export_text()


def test_config_directory_exits(outline_file, recording_console, tmp_path):
    with pytest.raises(Exit):
        cli.tree(str(outline_file), config_path=str(tmp_path), debug=False)
    assert "Invalid config file" in recording_console.export_text()


def test_split_rows_only_breaks_on_newlines():
    assert cli.split_rows("- a\x0cb\n- c\u2028d\n") == ["- a\x0cb", "- c\u2028d"]
    assert cli.split_rows("- a\n\n- b") == ["- a", "", "- b"]
    assert cli.split_rows("") == []


def test_form_feed_does_not_add_rows(isolated_cwd, recording_console):
    path = isolated_cwd / "feed.md"
    path.write_text("- a\x0cb\n- c\n", encoding="utf-8")
    document = cli._load_document(str(path), None, False)
    assert len(document.lines) == 2
    assert document.total_characters == 8


def test_geometry_lists_layout_and_icons(isolated_cwd, recording_console):
    cli.geometry(config_path=None, debug=False)
    output = recording_console.export_text()
    assert "indent_space_width" in output
    assert "connector_width" in output
    assert "checkbox_space_width" in output
    assert "(-6.0,0.0) (-1.0,6.0) (9.0,-6.0)" in output
    assert "r=15 (0.0,0.0)" in output


def test_version(recording_console):
    cli.version()
    assert "outline-reveal v0.1.0" in recording_console.export_text()
