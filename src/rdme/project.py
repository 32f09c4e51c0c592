"""Cargo project resolution.

Finds the project root (the nearest ancestor directory holding
``Cargo.toml``), reads the few manifest fields rdme needs, and resolves
entry files relative to the root.

Usage::

    from rdme.project import Project

    project = Project.from_dir(Path.cwd()).unwrap()
    lib_rs = project.get_lib_entryfile_path()      # None if absent
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rdme.core.errors import (
    InvalidEntrypointError,
    ManifestParseError,
    ManifestReadError,
    ProjectManifestError,
    ProjectRootNotFoundError,
)
from rdme.core.logging import get_logger
from rdme.core.result import Err, Ok, Result

logger = get_logger(__name__)

MANIFEST_FILENAME = "Cargo.toml"

DEFAULT_LIB_PATH = Path("src") / "lib.rs"
DEFAULT_BIN_PATH = Path("src") / "main.rs"
DEFAULT_README_PATH = Path("README.md")


def _get_str(table: Any, key: str) -> str | None:
    if not isinstance(table, dict):
        return None
    value = table.get(key)
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class Manifest:
    """The parts of ``Cargo.toml`` that locate entry files and the README."""

    lib_path: Path | None = None
    readme_path: Path | None = None
    bin_path: dict[str, Path] = field(default_factory=dict)

    @classmethod
    def from_file(cls, file_path: Path | str) -> Result["Manifest"]:
        path = Path(file_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            return Err(ManifestReadError(path, cause=e))
        return cls.from_str(text)

    @classmethod
    def from_str(cls, text: str) -> Result["Manifest"]:
        """Parse manifest TOML.

        Recognizes ``[lib] path``, ``[package] readme`` and ``[[bin]]``
        entries carrying both ``name`` and ``path``. Anything else, including
        values of the wrong type, is ignored.
        """
        try:
            toml = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            return Err(ManifestParseError(cause=e))

        bin_path: dict[str, Path] = {}
        bins = toml.get("bin")
        if isinstance(bins, list):
            for entry in bins:
                name, path = _get_str(entry, "name"), _get_str(entry, "path")
                if name is not None and path is not None:
                    bin_path[name] = Path(path)

        lib_path = _get_str(toml.get("lib"), "path")
        readme_path = _get_str(toml.get("package"), "readme")

        return Ok(cls(
            lib_path=Path(lib_path) if lib_path is not None else None,
            readme_path=Path(readme_path) if readme_path is not None else None,
            bin_path=bin_path,
        ))


def find_first_file_in_ancestors(dir_path: Path | str, filename: str) -> Path | None:
    """Return ``<ancestor>/<filename>`` for the nearest ancestor holding that file.

    The search starts at ``dir_path`` itself and stops at the filesystem root.
    """
    start = Path(dir_path).absolute()
    for ancestor_dir in (start, *start.parents):
        candidate = ancestor_dir / filename
        if candidate.is_file():
            return candidate
    return None


def _existing_file(path: Path) -> Path | None:
    return path if path.is_file() else None


@dataclass(frozen=True)
class Project:
    """A Cargo project: its manifest and its root directory."""

    manifest: Manifest
    directory: Path

    @classmethod
    def from_dir(cls, dir_path: Path | str) -> Result["Project"]:
        """Create a Project from any directory inside it.

        Ancestors are searched until a directory holding ``Cargo.toml`` is found.
        """
        manifest_file = find_first_file_in_ancestors(dir_path, MANIFEST_FILENAME)
        if manifest_file is None:
            return Err(ProjectRootNotFoundError(dir_path))

        match Manifest.from_file(manifest_file):
            case Err(error):
                return Err(ProjectManifestError(error))
            case Ok(manifest):
                logger.debug("project_found", directory=str(manifest_file.parent))
                return Ok(cls(manifest=manifest, directory=manifest_file.parent))

    def get_lib_entryfile_path(self) -> Path | None:
        rel_path = self.manifest.lib_path or DEFAULT_LIB_PATH
        return _existing_file(self.directory / rel_path)

    def get_bin_default_entryfile_path(self) -> Path | None:
        # Always src/main.rs: [lib] path describes the library target only.
        return _existing_file(self.directory / DEFAULT_BIN_PATH)

    def get_bin_entryfile_path(self, name: str) -> Path | None:
        rel_path = self.manifest.bin_path.get(name)
        if rel_path is None:
            return None
        return _existing_file(self.directory / rel_path)

    def get_readme_target_path(self) -> Path:
        """Where the README lives or would be created."""
        return self.directory / (self.manifest.readme_path or DEFAULT_README_PATH)

    def get_readme_path(self) -> Path | None:
        return _existing_file(self.get_readme_target_path())

    def get_entryfile_path(self, entrypoint: str = "auto") -> Result[Path | None]:
        """Resolve an entrypoint spelling to an entry file.

        ``auto`` (library, else default binary), ``lib``, ``bin`` (default
        binary) or ``bin:<name>``.

        Returns:
            Ok(path), Ok(None) if that entry file does not exist, or
            Err(InvalidEntrypointError) for an unknown spelling.
        """
        match entrypoint.split(":", 1):
            case ["auto"]:
                return Ok(self.get_lib_entryfile_path() or self.get_bin_default_entryfile_path())
            case ["lib"]:
                return Ok(self.get_lib_entryfile_path())
            case ["bin"]:
                return Ok(self.get_bin_default_entryfile_path())
            case ["bin", name] if name:
                return Ok(self.get_bin_entryfile_path(name))
            case _:
                return Err(InvalidEntrypointError(entrypoint))
