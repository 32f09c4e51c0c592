"""Tests for rdme.markdown."""

import io

from rdme.core.errors import DocumentReadError, DocumentWriteError
from rdme.line_terminator import LineTerminator
from rdme.markdown import Markdown, split_lines


class TestSplitLines:
    def test_empty(self):
        assert split_lines("") == []

    def test_trailing_terminator_does_not_add_line(self):
        assert split_lines("a\nb\n") == ["a", "b"]
        assert split_lines("a\nb") == ["a", "b"]

    def test_crlf_and_lf_mixed(self):
        assert split_lines("a\r\nb\nc\r\n") == ["a", "b", "c"]

    def test_blank_lines_kept(self):
        assert split_lines("\n\na\n") == ["", "", "a"]

    def test_lone_cr_stays_in_line(self):
        assert split_lines("a\rb\n") == ["a\rb"]

    def test_trailing_lone_cr_kept_on_last_line(self):
        assert split_lines("a\r") == ["a\r"]
        assert split_lines("x\r\ny\r") == ["x", "y\r"]


class TestMarkdown:
    def test_equality_is_line_equality(self):
        assert Markdown.from_str("a\r\nb\r\n") == Markdown.from_str("a\nb")
        assert Markdown.from_lines(["a", "b"]) == Markdown.from_str("a\nb\n")
        assert Markdown.empty() == Markdown.from_str("")

    def test_lines_restart_each_call(self):
        markdown = Markdown.from_lines(["x", "y"])
        assert list(markdown.lines()) == ["x", "y"]
        assert list(markdown.lines()) == ["x", "y"]
        assert list(markdown) == ["x", "y"]
        assert len(markdown) == 2

    def test_render(self):
        markdown = Markdown.from_lines(["# T", "", "body"])
        assert markdown.render(LineTerminator.LF) == "# T\n\nbody\n"
        assert markdown.render(LineTerminator.CRLF) == "# T\r\n\r\nbody\r\n"
        assert Markdown.empty().render(LineTerminator.LF) == ""


class TestMarkdownIO:
    def test_from_file_keeps_lines(self, tmp_path):
        path = tmp_path / "README.md"
        path.write_bytes(b"# Title\r\n\r\nSome text\r\n")
        assert list(Markdown.from_file(path).unwrap().lines()) == ["# Title", "", "Some text"]

    def test_from_file_missing(self, tmp_path):
        error = Markdown.from_file(tmp_path / "nope.md").unwrap_err()
        assert isinstance(error, DocumentReadError)

    def test_write_to_sink(self):
        sink = io.StringIO(newline="")
        result = Markdown.from_lines(["a", "b"]).write(sink, LineTerminator.CRLF)
        assert result.is_ok()
        assert sink.getvalue() == "a\r\nb\r\n"

    def test_write_to_closed_sink(self):
        sink = io.StringIO()
        sink.close()
        error = Markdown.from_lines(["a"]).write(sink, LineTerminator.LF).unwrap_err()
        assert isinstance(error, DocumentWriteError)

    def test_write_to_file_round_trip(self, tmp_path):
        path = tmp_path / "README.md"
        markdown = Markdown.from_lines(["# Title", "", "text"])
        assert markdown.write_to_file(path, LineTerminator.CRLF).is_ok()
        assert path.read_bytes() == b"# Title\r\n\r\ntext\r\n"
        assert Markdown.from_file(path).unwrap() == markdown

    def test_write_to_file_truncates(self, tmp_path):
        path = tmp_path / "README.md"
        path.write_bytes(b"a much longer previous content\n" * 10)
        Markdown.from_lines(["short"]).write_to_file(path, LineTerminator.LF).unwrap()
        assert path.read_bytes() == b"short\n"

    def test_write_to_file_into_missing_directory(self, tmp_path):
        path = tmp_path / "missing" / "README.md"
        error = Markdown.from_lines(["a"]).write_to_file(path, LineTerminator.LF).unwrap_err()
        assert isinstance(error, DocumentWriteError)
        assert error.path == str(path)
