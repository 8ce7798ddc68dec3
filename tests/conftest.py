"""Shared fixtures: small project trees under tmp_path."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create ``a.txt``, ``sub/b.txt`` and an excluded ``node_modules/c.txt``."""
    root = tmp_path / "project"
    (root / "sub").mkdir(parents=True)
    (root / "node_modules").mkdir()
    (root / "a.txt").write_text("hello")
    (root / "sub" / "b.txt").write_text("world\n")
    (root / "node_modules" / "c.txt").write_text("dependency")
    return root


@pytest.fixture
def empty_root(tmp_path: Path) -> Path:
    root = tmp_path / "empty"
    root.mkdir()
    return root
