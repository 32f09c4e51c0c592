"""Shared primitives: errors, Result envelope, logging and settings."""

from rdme.core.errors import (
    DocError,
    DocumentError,
    DocumentReadError,
    DocumentWriteError,
    EntrypointNotFoundError,
    ErrorCategory,
    ErrorContext,
    InjectError,
    InvalidEntrypointError,
    MalformedMarkersError,
    ManifestError,
    ManifestParseError,
    ManifestReadError,
    ProjectError,
    ProjectManifestError,
    ProjectRootNotFoundError,
    RdmeError,
    SourceParseError,
    SourceReadError,
)
from rdme.core.result import Err, Ok, Result

__all__ = [
    "DocError",
    "DocumentError",
    "DocumentReadError",
    "DocumentWriteError",
    "EntrypointNotFoundError",
    "ErrorCategory",
    "ErrorContext",
    "InjectError",
    "InvalidEntrypointError",
    "MalformedMarkersError",
    "ManifestError",
    "ManifestParseError",
    "ManifestReadError",
    "ProjectError",
    "ProjectManifestError",
    "ProjectRootNotFoundError",
    "RdmeError",
    "SourceParseError",
    "SourceReadError",
    "Err",
    "Ok",
    "Result",
]
