"""README sync pipeline.

One run resolves the project, extracts the crate documentation, loads the
README, injects the documentation and writes the README back (or, in
check mode, only reports whether it would change).

Architecture:
    ::

        sync_readme(start_dir)
              │
              ├──► Project.from_dir()            → Project
              ├──► Project.get_entryfile_path()  → entry file
              ├──► Doc.from_source_file()        → Doc | None
              ├──► Markdown.from_file()          → README (empty if absent)
              ├──► inject_doc()                  → new README
              ├──► infer_line_terminator()       → LF | CRLF
              │
              └──► write_to_file() unless check mode or unchanged

    Every stage returns a Result; the first Err ends the run before anything
    is written.

Example:
    >>> outcome = sync_readme(Path(".")).unwrap()
    >>> outcome.changed
    False
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rdme.core.errors import DocumentReadError, EntrypointNotFoundError
from rdme.core.logging import LogContext, get_logger
from rdme.core.result import Err, Ok, Result
from rdme.core.settings import LineTerminatorChoice
from rdme.doc import Doc
from rdme.inject import inject_doc
from rdme.line_terminator import LineTerminator, infer_line_terminator, read_text_exact
from rdme.markdown import Markdown
from rdme.project import Project

logger = get_logger(__name__)


@dataclass(frozen=True)
class SyncOutcome:
    """What a sync run found and did."""

    project_dir: Path
    entry_path: Path
    readme_path: Path
    line_terminator: LineTerminator
    has_doc: bool
    changed: bool
    written: bool


@dataclass(frozen=True)
class _ReadmeState:
    path: Path
    exists: bool
    markdown: Markdown


def _load_readme(path: Path) -> Result[_ReadmeState]:
    if not path.is_file():
        return Ok(_ReadmeState(path=path, exists=False, markdown=Markdown.empty()))
    return Markdown.from_file(path).map(lambda markdown: _ReadmeState(path=path, exists=True, markdown=markdown))


def _differs_from_disk(readme: _ReadmeState, rendered: str, new_readme: Markdown) -> Result[bool]:
    """Whether writing ``rendered`` would change the README's bytes."""
    if not readme.exists or new_readme != readme.markdown:
        return Ok(True)
    try:
        current = read_text_exact(readme.path)
    except (OSError, UnicodeDecodeError) as e:
        return Err(DocumentReadError(readme.path, cause=e))
    return Ok(current != rendered)


def _resolve_line_terminator(readme: _ReadmeState, choice: LineTerminatorChoice) -> Result[LineTerminator]:
    if choice != "auto":
        return Ok(LineTerminator.from_label(choice))
    if not readme.exists:
        return Ok(LineTerminator.LF)
    return infer_line_terminator(readme.path)


def sync_readme(
    start_dir: Path | str,
    *,
    entrypoint: str = "auto",
    readme_path: Path | str | None = None,
    line_terminator: LineTerminatorChoice = "auto",
    check: bool = False,
) -> Result[SyncOutcome]:
    """Bring a project's README in line with its crate documentation.

    Args:
        start_dir: Any directory inside the Cargo project.
        entrypoint: ``auto``, ``lib``, ``bin`` or ``bin:<name>``.
        readme_path: README path relative to the project root; overrides
            the manifest's ``package.readme``.
        line_terminator: ``auto`` keeps the README's current convention.
        check: Only report whether the README is up to date; never write.

    Returns:
        Ok(SyncOutcome), or Err with the first failure. On Err nothing has
        been written.
    """
    project_result = Project.from_dir(start_dir)
    if project_result.is_err():
        return Err(project_result.unwrap_err())
    project = project_result.unwrap()

    with LogContext(project=str(project.directory)):
        return _sync_project(
            project,
            entrypoint=entrypoint,
            readme_path=readme_path,
            line_terminator=line_terminator,
            check=check,
        )


def _sync_project(
    project: Project,
    *,
    entrypoint: str,
    readme_path: Path | str | None,
    line_terminator: LineTerminatorChoice,
    check: bool,
) -> Result[SyncOutcome]:
    entry = project.get_entryfile_path(entrypoint)
    if entry.is_err():
        return Err(entry.unwrap_err())
    entry_path = entry.unwrap()
    if entry_path is None:
        return Err(EntrypointNotFoundError(entrypoint, project.directory))

    doc_result = Doc.from_source_file(entry_path)
    if doc_result.is_err():
        return Err(doc_result.unwrap_err())
    doc = doc_result.unwrap()
    if doc is None:
        logger.warning("crate_has_no_documentation", entry=str(entry_path))

    target = project.directory / readme_path if readme_path is not None else project.get_readme_target_path()
    readme_result = _load_readme(target)
    if readme_result.is_err():
        return Err(readme_result.unwrap_err())
    readme = readme_result.unwrap()

    injected = inject_doc(readme.markdown, doc or Doc.empty())
    if injected.is_err():
        return Err(injected.unwrap_err())
    new_readme = injected.unwrap()

    terminator_result = _resolve_line_terminator(readme, line_terminator)
    if terminator_result.is_err():
        return Err(terminator_result.unwrap_err())
    terminator = terminator_result.unwrap()

    changed_result = _differs_from_disk(readme, new_readme.render(terminator), new_readme)
    if changed_result.is_err():
        return Err(changed_result.unwrap_err())
    changed = changed_result.unwrap()
    written = False

    if changed and not check:
        write_result = new_readme.write_to_file(target, terminator)
        if write_result.is_err():
            return Err(write_result.unwrap_err())
        written = True
        logger.info("readme_written", path=str(target), line_terminator=terminator.label)
    elif changed:
        logger.info("readme_out_of_date", path=str(target))
    else:
        logger.info("readme_up_to_date", path=str(target))

    return Ok(SyncOutcome(
        project_dir=project.directory,
        entry_path=entry_path,
        readme_path=target,
        line_terminator=terminator,
        has_doc=doc is not None,
        changed=changed,
        written=written,
    ))
