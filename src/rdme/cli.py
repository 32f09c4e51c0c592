"""
Command-line interface for rdme.

A single Typer command that syncs (or checks) the README of the Cargo
project containing ``--project-dir``.

Exit codes: 0 success, 1 failure, 2 ``--check`` found the README out of date.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from rdme.core.errors import RdmeError
from rdme.core.logging import configure_logging, get_logger
from rdme.core.result import Err, Ok
from rdme.core.settings import RdmeSettings
from rdme.pipeline import SyncOutcome, sync_readme

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

logger = get_logger(__name__)

EXIT_FAILURE = 1
EXIT_OUT_OF_DATE = 2

_LINE_TERMINATOR_CHOICES = ("auto", "lf", "crlf")

app = typer.Typer(
    name="rdme",
    help="Keep a Rust crate's README in sync with its crate documentation.",
    add_completion=False,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from rdme import __version__

        try:
            v = pkg_version("rdme")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"rdme {v}")
        raise typer.Exit()


# ── Output helpers ───────────────────────────────────────────────────────


def _display_path(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def render_error(error: RdmeError, *, verbose: bool = False) -> None:
    """Print a failure to stderr with its location, if it has one."""
    err_console.print(f"[bold red]Error[/bold red]: {escape(error.message)}", highlight=False)

    ctx = error.context
    if ctx.path is not None:
        location = ctx.path
        if ctx.line is not None:
            location += f":{ctx.line}"
            if ctx.column is not None:
                location += f":{ctx.column}"
        err_console.print(f"  [dim]at[/dim] {escape(location)}", highlight=False)

    if verbose and error.cause is not None:
        err_console.print(f"  [dim]caused by[/dim] {escape(str(error.cause))}", highlight=False)


def render_outcome(outcome: SyncOutcome, *, check: bool) -> None:
    readme = _display_path(outcome.readme_path)
    if outcome.written:
        console.print(f"[green]✓[/green] {escape(readme)} updated", highlight=False)
    elif outcome.changed and check:
        err_console.print(f"[bold red]✗[/bold red] {escape(readme)} is not up to date", highlight=False)
    else:
        console.print(f"[green]✓[/green] {escape(readme)} is up to date", highlight=False)


# ── Command ──────────────────────────────────────────────────────────────


@app.command()
def main(
    project_dir: Path = typer.Option(
        Path("."),
        "--project-dir",
        "-p",
        help="Directory to start the Cargo.toml search from.",
        file_okay=False,
    ),
    entrypoint: str | None = typer.Option(
        None,
        "--entrypoint",
        "-e",
        help="Entry file to take documentation from: auto, lib, bin or bin:<name>.",
    ),
    readme_path: Path | None = typer.Option(
        None,
        "--readme-path",
        "-r",
        help="README path relative to the project root (overrides Cargo.toml).",
    ),
    line_terminator: str | None = typer.Option(
        None,
        "--line-terminator",
        "-l",
        help="Line terminator for the written README: auto, lf or crlf.",
    ),
    check: bool = typer.Option(
        False,
        "--check",
        help="Do not write; exit 2 if the README is not up to date.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    json_logs: bool = typer.Option(False, "--json-logs", help="JSON log lines on stderr."),
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Inject the crate documentation into the README.

    The documentation comes from the [bold]//![/bold] comments of the entry
    file; it replaces the region between the cargo-rdme markers, which is
    created on the first run.
    """
    try:
        settings = RdmeSettings()
    except ValidationError as e:
        err_console.print(f"[bold red]Error[/bold red]: invalid RDME_* settings\n{escape(str(e))}", highlight=False)
        raise typer.Exit(code=EXIT_FAILURE)

    configure_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_format=True if json_logs else settings.json_logs,
    )

    terminator = (line_terminator or settings.line_terminator).lower()
    if terminator not in _LINE_TERMINATOR_CHOICES:
        err_console.print(
            f"[bold red]Error[/bold red]: invalid line terminator {escape(repr(terminator))} "
            f"(expected one of {', '.join(_LINE_TERMINATOR_CHOICES)})",
            highlight=False,
        )
        raise typer.Exit(code=EXIT_FAILURE)

    result = sync_readme(
        project_dir,
        entrypoint=entrypoint or settings.entrypoint,
        readme_path=readme_path or settings.readme_path,
        line_terminator=terminator,
        check=check,
    )

    match result:
        case Err(error):
            logger.debug("sync_failed", **error.to_dict())
            render_error(error, verbose=verbose)
            raise typer.Exit(code=EXIT_FAILURE)
        case Ok(outcome):
            render_outcome(outcome, check=check)
            if check and outcome.changed:
                raise typer.Exit(code=EXIT_OUT_OF_DATE)


def run() -> None:
    """Console-script entry point."""
    app()


__all__ = ["app", "main", "run", "render_error", "render_outcome"]
