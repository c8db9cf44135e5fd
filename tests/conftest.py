"""Pytest fixtures for outline-reveal tests."""

import pytest

from outline_reveal.config import LayoutConfig, TagPalette
from outline_reveal.document import derive_document


@pytest.fixture
def idea_lines():
    """Tagged parent with two indented children followed by a sibling."""
    return ["- #idea A", "    - B", "    - C", "- D"]


@pytest.fixture
def idea_document(idea_lines):
    return derive_document(idea_lines)


@pytest.fixture
def layout():
    return LayoutConfig()


@pytest.fixture
def palette():
    return TagPalette()


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run from an empty repo root so no repo config or env overrides leak in.

    Returns:
        Path to the temporary repo root (contains a pyproject.toml marker)
    """
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    (repo_root / "pyproject.toml").write_text("[project]\nname = 'scratch'\n")
    monkeypatch.chdir(repo_root)
    for name in LayoutConfig.model_fields:
        monkeypatch.delenv(f"OUTLINE_REVEAL_{name.upper()}", raising=False)
    return repo_root
