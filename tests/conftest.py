"""
Shared pytest fixtures for rdme tests.

This module provides:
- A ``cargo_project`` factory that lays out a throwaway Cargo project
- Environment and logging isolation between tests

Usage:
    def test_sync(cargo_project):
        root = cargo_project(files={"src/lib.rs": "//! Hello\n"})
        assert (root / "Cargo.toml").is_file()
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest
import structlog

DEFAULT_MANIFEST = '[package]\nname = "demo"\nversion = "0.1.0"\n'


def write_exact(path: Path, content: str) -> Path:
    """Write ``content`` byte-for-byte (no newline translation)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="")
    return path


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch):
    """Drop RDME_* variables and restore structlog defaults after each test."""
    for key in list(os.environ):
        if key.startswith("RDME_"):
            monkeypatch.delenv(key)
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.fixture
def cargo_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating a Cargo project under ``tmp_path``.

    Args (of the returned callable):
        manifest: Cargo.toml text
        files: relative path -> content, written without newline translation
        readme: README.md content; None leaves the README absent
    """

    def _make(
        manifest: str = DEFAULT_MANIFEST,
        files: dict[str, str] | None = None,
        readme: str | None = None,
    ) -> Path:
        write_exact(tmp_path / "Cargo.toml", manifest)
        for rel_path, content in (files or {}).items():
            write_exact(tmp_path / rel_path, content)
        if readme is not None:
            write_exact(tmp_path / "README.md", readme)
        return tmp_path

    return _make
