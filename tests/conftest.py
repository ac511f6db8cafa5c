"""Pytest fixtures for Bindery tests."""

import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from bindery.config.settings import get_settings
from bindery.project.descriptor import ProjectDescriptor
from bindery.project.structure import BinderStructure


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep the user's ~/.bindery/config.yaml and BINDERY_* vars out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in list(os.environ):
        if name.upper().startswith("BINDERY_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def abc_structure() -> BinderStructure:
    """Structure with items a.txt, b.txt, c.txt in that order."""
    structure = BinderStructure()
    for name in ("a.txt", "b.txt", "c.txt"):
        structure.add_item(name)
    return structure


@pytest.fixture
def binder_root(tmp_path, abc_structure) -> Path:
    """Project directory with a binder over a.txt, b.txt and c.txt."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "a.txt").write_text("Hello")
    (root / "b.txt").write_text("Middle")
    (root / "c.txt").write_text("World")
    descriptor = ProjectDescriptor(root=root, structure=abc_structure, default_mode="text")
    (root / ".binder.yaml").write_text(descriptor.to_yaml())
    return root
