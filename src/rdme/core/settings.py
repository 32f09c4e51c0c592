"""Settings for rdme.

Defaults for every command-line option can come from the environment
(``RDME_*``) or a ``.env`` file in the working directory. Command-line
options override settings; settings override the built-in defaults.

Examples:
    >>> import os
    >>> os.environ["RDME_LINE_TERMINATOR"] = "crlf"
    >>> RdmeSettings().line_terminator
    'crlf'

Tags:
    settings, configuration, pydantic, environment, rdme

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LineTerminatorChoice = Literal["auto", "lf", "crlf"]


class RdmeSettings(BaseSettings):
    """Environment-driven defaults for a README sync run.

    Fields
    ──────
    log_level        : structlog log level
    json_logs        : JSON log lines (None = JSON when stderr is not a tty)
    entrypoint       : auto, lib, bin or bin:<name>
    line_terminator  : auto (detect from the README), lf or crlf
    readme_path      : README path relative to the project root
    """

    model_config = SettingsConfigDict(
        env_prefix="RDME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "WARNING"
    json_logs: bool | None = None

    # ── Sync ─────────────────────────────────────────────────────
    entrypoint: str = Field(
        default="auto",
        description="Which entry file to take documentation from",
    )
    line_terminator: LineTerminatorChoice = "auto"
    readme_path: Path | None = Field(
        default=None,
        description="Overrides the manifest's package.readme",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("line_terminator", mode="before")
    @classmethod
    def _lower_terminator(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value
