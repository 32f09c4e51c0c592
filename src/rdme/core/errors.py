"""
Structured error types for rdme.

Every failure that can stop a README sync is a subclass of ``RdmeError``.
Errors are not raised across component boundaries: they travel inside
``Err`` values (see ``rdme.core.result``) so each stage of the pipeline
states its failure modes in its return type.

Each error carries:
- **Category:** What kind of failure (manifest, source, markers, I/O, ...)
- **Context:** The path or position the failure refers to
- **Cause:** The underlying exception, when one exists

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                          RdmeError                               │
        │                (category, context, cause)                        │
        ├─────────────────────────────────────────────────────────────────┤
        │  ManifestError        ProjectError           DocError            │
        │  (MANIFEST)           (PROJECT)              (SOURCE)            │
        │     │                    │                      │                │
        │  ManifestReadError    ProjectRootNotFound    SourceReadError     │
        │  ManifestParseError   ProjectManifestError   SourceParseError    │
        │                       EntrypointNotFound                         │
        │                       InvalidEntrypoint                          │
        │                                                                  │
        │  InjectError          DocumentError                              │
        │  (MARKERS)            (STORAGE)                                  │
        │     │                    │                                       │
        │  MalformedMarkers     DocumentReadError                          │
        │                       DocumentWriteError                         │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = ManifestReadError(Path("Cargo.toml"))
    >>> error.category
    <ErrorCategory.MANIFEST: 'MANIFEST'>
    >>> error.context.path
    'Cargo.toml'

Tags:
    error-handling, exception-hierarchy, error-context, rdme

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories, one per pipeline stage."""

    MANIFEST = "MANIFEST"       # Cargo.toml unreadable or invalid
    PROJECT = "PROJECT"         # Root or entry file cannot be resolved
    CONFIG = "CONFIG"           # Invalid user-supplied option
    SOURCE = "SOURCE"           # Rust entry file unreadable or unparsable
    MARKERS = "MARKERS"         # Managed region markers corrupted
    STORAGE = "STORAGE"         # README read/write failures
    INTERNAL = "INTERNAL"       # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only the fields that are set end up in ``to_dict()``, so the same
    context type serves every stage without empty noise in log output.

    Attributes:
        path: File the error refers to
        line: 1-based line in that file, for parse errors
        column: 1-based column in that file, for parse errors
        metadata: Additional key-value pairs
    """

    path: str | None = None
    line: int | None = None
    column: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ["path", "line", "column"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RdmeError(Exception):
    """
    Base exception for all rdme errors.

    Subclasses set ``default_category``. Instances are usually built by the
    component that detects the failure and returned wrapped in ``Err``.

    Manifesto:
        - **Single base class:** Callers match on ``RdmeError`` subclasses
        - **Context over prose:** The path lives in ``context``, not only
          in the message, so renderers can format it consistently
        - **Error chaining:** The original exception is kept as ``cause``
          and ``__cause__``

    Examples:
        >>> error = RdmeError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(path="README.md").context.path
        'README.md'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RdmeError:
        """
        Add context to this error (fluent API).

        Usage:
            return Err(SourceParseError("bad token").with_context(path=str(p)))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    @property
    def path(self) -> str | None:
        return self.context.path

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


def _path_context(path: Path | str | None) -> ErrorContext:
    return ErrorContext(path=str(path) if path is not None else None)


# =============================================================================
# MANIFEST ERRORS
# =============================================================================


class ManifestError(RdmeError):
    """Base for Cargo.toml failures."""

    default_category = ErrorCategory.MANIFEST


class ManifestReadError(ManifestError):
    """The manifest file could not be read."""

    def __init__(self, path: Path | str, *, cause: Exception | None = None):
        super().__init__(
            f'failed to read manifest "{path}"',
            context=_path_context(path),
            cause=cause,
        )


class ManifestParseError(ManifestError):
    """The manifest is not valid TOML."""

    def __init__(self, message: str = "failed to parse toml", *, cause: Exception | None = None):
        super().__init__(message, cause=cause)


# =============================================================================
# PROJECT ERRORS
# =============================================================================


class ProjectError(RdmeError):
    """Base for project resolution failures."""

    default_category = ErrorCategory.PROJECT


class ProjectRootNotFoundError(ProjectError):
    """No ancestor of the start directory contains the manifest."""

    def __init__(self, start_dir: Path | str):
        super().__init__("project root not found", context=_path_context(start_dir))


class ProjectManifestError(ProjectError):
    """The project root was found but its manifest failed to load."""

    def __init__(self, manifest_error: ManifestError):
        super().__init__(
            f"manifest error: {manifest_error.message}",
            context=ErrorContext(path=manifest_error.context.path),
            cause=manifest_error,
        )


class EntrypointNotFoundError(ProjectError):
    """The requested entry file does not exist in the project."""

    def __init__(self, entrypoint: str, project_dir: Path | str):
        super().__init__(
            f'no entry file found for "{entrypoint}"',
            context=_path_context(project_dir),
        )
        self.entrypoint = entrypoint


class InvalidEntrypointError(ProjectError):
    """The entrypoint spelling is not one of auto, lib, bin, bin:<name>."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, entrypoint: str):
        super().__init__(
            f'invalid entrypoint "{entrypoint}" (expected auto, lib, bin or bin:<name>)'
        )
        self.entrypoint = entrypoint


# =============================================================================
# DOCUMENTATION ERRORS
# =============================================================================


class DocError(RdmeError):
    """Base for source file failures."""

    default_category = ErrorCategory.SOURCE


class SourceReadError(DocError):
    """The Rust entry file could not be read."""

    def __init__(self, path: Path | str, *, cause: Exception | None = None):
        super().__init__(
            f'cannot open source file "{path}"',
            context=_path_context(path),
            cause=cause,
        )


class SourceParseError(DocError):
    """The Rust entry file is not syntactically valid."""

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        column: int | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(
            f"cannot parse source file: {message}",
            context=ErrorContext(line=line, column=column),
            cause=cause,
        )


# =============================================================================
# INJECTION ERRORS
# =============================================================================


class InjectError(RdmeError):
    """Base for failures merging documentation into a README."""

    default_category = ErrorCategory.MARKERS


class MalformedMarkersError(InjectError):
    """The README's managed region markers are missing, repeated or out of order."""

    def __init__(self, reason: str):
        super().__init__(f"malformed markers: {reason}")
        self.reason = reason


# =============================================================================
# DOCUMENT I/O ERRORS
# =============================================================================


class DocumentError(RdmeError):
    """Base for README read/write failures."""

    default_category = ErrorCategory.STORAGE


class DocumentReadError(DocumentError):
    """The README (or another markdown file) could not be read."""

    def __init__(self, path: Path | str, *, cause: Exception | None = None):
        super().__init__(
            f'failed to read README file "{path}"',
            context=_path_context(path),
            cause=cause,
        )


class DocumentWriteError(DocumentError):
    """The README could not be written, or the sink rejected the write."""

    def __init__(self, path: Path | str | None = None, *, cause: Exception | None = None):
        message = f'failed to write README file "{path}"' if path is not None else "failed to write README"
        super().__init__(message, context=_path_context(path), cause=cause)
