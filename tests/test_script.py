"""Tests for line-array mutation sequences."""

import pytest

from outline_reveal.document import derive_document
from outline_reveal.script import insert_text, retag, type_lines


def test_type_lines_one_character_per_snapshot():
    snapshots = list(type_lines(["ab", "", "c"]))
    assert snapshots == [
        ("a", "", ""),
        ("ab", "", ""),
        ("ab", "", ""),
        ("ab", "", "c"),
    ]


def test_type_lines_every_snapshot_derives():
    targets = ["- #idea plan", "    - [ ] step"]
    snapshots = list(type_lines(targets))
    assert snapshots[-1] == tuple(targets)
    for snapshot in snapshots:
        document = derive_document(snapshot)
        assert document.total_characters == sum(len(line) for line in snapshot)
    assert derive_document(snapshots[-1]).lines[0].connector is not None


def test_insert_text_turns_bullet_into_task():
    lines = ["What I need to get done:", "- buy groceries"]
    snapshots = list(insert_text(lines, 1, 2, "[ ] #todo "))
    assert len(snapshots) == len("[ ] #todo ")
    assert snapshots[0][1] == "- [buy groceries"
    assert snapshots[-1][1] == "- [ ] #todo buy groceries"
    assert snapshots[-1][0] == lines[0]
    assert lines[1] == "- buy groceries"

    line = derive_document(snapshots[-1]).lines[1]
    assert line.marker_token.raw == "- [ ]"


def test_insert_text_bounds():
    with pytest.raises(IndexError):
        list(insert_text(["a"], 1, 0, "x"))
    with pytest.raises(IndexError):
        list(insert_text(["a"], 0, 5, "x"))


def test_retag_backspaces_then_types():
    lines = ["- #idea use daily notes", "    - child"]
    snapshots = [s[0] for s in retag(lines, 0, "todo")]
    assert snapshots == [
        "- #ide use daily notes",
        "- #id use daily notes",
        "- #i use daily notes",
        "- # use daily notes",
        "- #t use daily notes",
        "- #to use daily notes",
        "- #tod use daily notes",
        "- #todo use daily notes",
    ]


def test_retag_connector_color_follows_name():
    lines = ["- #idea root", "    - child"]
    colors = [derive_document(s).lines[0].connector for s in retag(lines, 0, "todo")]
    # The bare "#" step has no connector tag
    assert colors[3] is None
    assert colors[-1].color == "#8f6bff"
    assert colors[0].color == "#94a3b8"


def test_retag_requires_a_tag():
    with pytest.raises(ValueError):
        list(retag(["- plain"], 0, "todo"))
