"""
rdme - keep a Rust crate's README in sync with its crate documentation.

The top-level inner documentation of the crate's entry file (``//!``,
``/*! */`` and ``#![doc = "..."]``) is injected into the README between
the ``<!-- cargo-rdme start -->`` and ``<!-- cargo-rdme end -->`` markers.

Usage::

    from rdme import sync_readme

    outcome = sync_readme("path/to/crate").unwrap()
    print(outcome.written)
"""

from rdme.doc import Doc, extract_doc
from rdme.inject import MARKER_END, MARKER_START, inject_doc
from rdme.line_terminator import LineTerminator, infer_line_terminator
from rdme.markdown import Markdown
from rdme.pipeline import SyncOutcome, sync_readme
from rdme.project import Manifest, Project

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Doc",
    "extract_doc",
    "MARKER_START",
    "MARKER_END",
    "inject_doc",
    "LineTerminator",
    "infer_line_terminator",
    "Markdown",
    "SyncOutcome",
    "sync_readme",
    "Manifest",
    "Project",
]
