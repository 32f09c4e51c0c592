"""Tests for rdme.cli."""

from __future__ import annotations

from typer.testing import CliRunner

from rdme.cli import app
from rdme.inject import MARKER_END, MARKER_START

runner = CliRunner()

LIB_RS = "//! Hello from the crate\n\npub fn f() {}\n"
SYNCED = f"# T\n{MARKER_START}\nHello from the crate\n{MARKER_END}\n"


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("rdme ")

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "--check" in result.output


class TestSync:
    def test_updates_readme(self, cargo_project):
        root = cargo_project(files={"src/lib.rs": LIB_RS}, readme="# T\n")
        result = runner.invoke(app, ["--project-dir", str(root)])

        assert result.exit_code == 0, result.output
        assert "updated" in result.output
        assert (root / "README.md").read_bytes().decode() == SYNCED

    def test_up_to_date(self, cargo_project):
        root = cargo_project(files={"src/lib.rs": LIB_RS}, readme=SYNCED)
        result = runner.invoke(app, ["-p", str(root)])

        assert result.exit_code == 0
        assert "is up to date" in result.output

    def test_line_terminator_option(self, cargo_project):
        root = cargo_project(files={"src/lib.rs": LIB_RS}, readme="# T\n")
        result = runner.invoke(app, ["-p", str(root), "-l", "crlf"])

        assert result.exit_code == 0
        assert (root / "README.md").read_bytes() == SYNCED.replace("\n", "\r\n").encode()

    def test_readme_path_option(self, cargo_project):
        root = cargo_project(files={"src/lib.rs": LIB_RS})
        result = runner.invoke(app, ["-p", str(root), "--readme-path", "DOCS.md"])

        assert result.exit_code == 0
        assert (root / "DOCS.md").is_file()
        assert not (root / "README.md").exists()

    def test_entrypoint_from_environment(self, cargo_project, monkeypatch):
        root = cargo_project(files={"src/lib.rs": LIB_RS, "src/main.rs": "//! Binary doc\nfn main() {}\n"})
        monkeypatch.setenv("RDME_ENTRYPOINT", "bin")
        result = runner.invoke(app, ["-p", str(root)])

        assert result.exit_code == 0
        assert "Binary doc" in (root / "README.md").read_text(encoding="utf-8")

    def test_option_overrides_environment(self, cargo_project, monkeypatch):
        root = cargo_project(files={"src/lib.rs": LIB_RS, "src/main.rs": "//! Binary doc\nfn main() {}\n"})
        monkeypatch.setenv("RDME_ENTRYPOINT", "bin")
        result = runner.invoke(app, ["-p", str(root), "-e", "lib"])

        assert result.exit_code == 0
        assert "Hello from the crate" in (root / "README.md").read_text(encoding="utf-8")

    def test_json_logs(self, cargo_project):
        root = cargo_project(files={"src/lib.rs": LIB_RS}, readme="# T\n")
        result = runner.invoke(app, ["-p", str(root), "--json-logs", "--verbose"])

        assert result.exit_code == 0
        assert '"event": "readme_written"' in result.output


class TestCheck:
    def test_out_of_date_exits_2(self, cargo_project):
        root = cargo_project(files={"src/lib.rs": LIB_RS}, readme="# T\n")
        result = runner.invoke(app, ["-p", str(root), "--check"])

        assert result.exit_code == 2
        assert "is not up to date" in result.output
        assert (root / "README.md").read_bytes() == b"# T\n"

    def test_up_to_date_exits_0(self, cargo_project):
        root = cargo_project(files={"src/lib.rs": LIB_RS}, readme=SYNCED)
        result = runner.invoke(app, ["-p", str(root), "--check"])

        assert result.exit_code == 0
        assert "is up to date" in result.output


class TestErrors:
    def test_missing_entry_file(self, cargo_project):
        root = cargo_project()
        result = runner.invoke(app, ["-p", str(root)])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert 'no entry file found for "auto"' in result.output

    def test_parse_error_shows_location(self, cargo_project):
        root = cargo_project(files={"src/lib.rs": "//! doc\n/* open\n"})
        result = runner.invoke(app, ["-p", str(root)])

        assert result.exit_code == 1
        assert "unterminated block comment" in result.output
        assert "lib.rs:2:1" in result.output

    def test_malformed_markers(self, cargo_project):
        root = cargo_project(files={"src/lib.rs": LIB_RS}, readme=f"{MARKER_END}\n{MARKER_START}\n")
        result = runner.invoke(app, ["-p", str(root)])

        assert result.exit_code == 1
        assert "end marker before the start marker" in result.output

    def test_invalid_line_terminator(self, cargo_project):
        root = cargo_project(files={"src/lib.rs": LIB_RS})
        result = runner.invoke(app, ["-p", str(root), "-l", "cr"])

        assert result.exit_code == 1
        assert "invalid line terminator" in result.output
        assert not (root / "README.md").exists()

    def test_invalid_line_terminator_in_check_mode_is_a_failure(self, cargo_project):
        root = cargo_project(files={"src/lib.rs": LIB_RS}, readme="# T\n")
        result = runner.invoke(app, ["-p", str(root), "--check", "-l", "cr"])

        assert result.exit_code == 1
        assert "not up to date" not in result.output

    def test_invalid_settings(self, cargo_project, monkeypatch):
        root = cargo_project(files={"src/lib.rs": LIB_RS})
        monkeypatch.setenv("RDME_LINE_TERMINATOR", "cr")
        result = runner.invoke(app, ["-p", str(root)])

        assert result.exit_code == 1
        assert "invalid RDME_* settings" in result.output
