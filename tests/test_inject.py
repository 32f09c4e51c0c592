"""Tests for rdme.inject."""

import pytest

from rdme.core.errors import MalformedMarkersError
from rdme.doc import Doc
from rdme.inject import MARKER_END, MARKER_START, InjectionSpan, build_region, find_injection_span, inject_doc
from rdme.markdown import Markdown


def md(*lines: str) -> Markdown:
    return Markdown.from_lines(lines)


class TestFindInjectionSpan:
    def test_no_markers_no_heading(self):
        assert find_injection_span(md("text")).unwrap() == InjectionSpan(0, 0)

    def test_no_markers_after_title(self):
        span = find_injection_span(md("# Title", "text")).unwrap()
        assert span == InjectionSpan(1, 1)
        assert span.is_empty

    def test_second_level_heading_is_not_a_title(self):
        assert find_injection_span(md("## Section")).unwrap() == InjectionSpan(0, 0)
        assert find_injection_span(md("#hashtag")).unwrap() == InjectionSpan(0, 0)

    def test_empty_document(self):
        assert find_injection_span(Markdown.empty()).unwrap() == InjectionSpan(0, 0)

    def test_existing_region(self):
        span = find_injection_span(md("# T", MARKER_START, "old", MARKER_END, "tail")).unwrap()
        assert span == InjectionSpan(1, 4)

    def test_markers_match_with_surrounding_whitespace(self):
        span = find_injection_span(md("  " + MARKER_START, MARKER_END + "\t")).unwrap()
        assert span == InjectionSpan(0, 2)

    @pytest.mark.parametrize(
        "lines, reason",
        [
            ((MARKER_START, "x"), "start marker without an end marker"),
            (("x", MARKER_END), "end marker without a start marker"),
            ((MARKER_END, "x", MARKER_START), "end marker before the start marker"),
            ((MARKER_START, MARKER_START, MARKER_END), "2 start markers found"),
            ((MARKER_START, MARKER_END, MARKER_END), "2 end markers found"),
        ],
    )
    def test_malformed(self, lines, reason):
        error = find_injection_span(md(*lines)).unwrap_err()
        assert isinstance(error, MalformedMarkersError)
        assert error.reason == reason


class TestInjectDoc:
    def test_title_example(self):
        readme = md("# Title", "Some text")
        result = inject_doc(readme, Doc.from_lines(["Hello"])).unwrap()
        assert list(result.lines()) == ["# Title", MARKER_START, "Hello", MARKER_END, "Some text"]

    def test_insert_at_top(self):
        result = inject_doc(md("Intro"), Doc.from_lines(["Doc"])).unwrap()
        assert list(result.lines()) == [MARKER_START, "Doc", MARKER_END, "Intro"]

    def test_empty_readme(self):
        result = inject_doc(Markdown.empty(), Doc.from_lines(["Doc"])).unwrap()
        assert list(result.lines()) == [MARKER_START, "Doc", MARKER_END]

    def test_replaces_region_only(self):
        readme = md("# T", "before", MARKER_START, "old 1", "old 2", MARKER_END, "after")
        result = inject_doc(readme, Doc.from_lines(["new"])).unwrap()
        assert list(result.lines()) == ["# T", "before", MARKER_START, "new", MARKER_END, "after"]

    def test_empty_doc_keeps_markers(self):
        readme = md(MARKER_START, "old", MARKER_END)
        result = inject_doc(readme, Doc.empty()).unwrap()
        assert list(result.lines()) == [MARKER_START, MARKER_END]

    def test_idempotent(self):
        doc = Doc.from_lines(["Line A", "", "  indented"])
        once = inject_doc(md("# Title", "", "## Usage", "text"), doc).unwrap()
        twice = inject_doc(once, doc).unwrap()
        assert twice == once

    def test_input_not_modified(self):
        readme = md("# Title", "text")
        inject_doc(readme, Doc.from_lines(["x"])).unwrap()
        assert list(readme.lines()) == ["# Title", "text"]

    @pytest.mark.parametrize("marker", [MARKER_START, MARKER_END, "  " + MARKER_END])
    def test_doc_containing_a_marker_is_refused(self, marker):
        """Every successful result can be injected into again."""
        readme = md("# Title", "text")
        error = inject_doc(readme, Doc.from_lines(["intro", marker])).unwrap_err()
        assert isinstance(error, MalformedMarkersError)
        assert error.reason == "documentation line 2 is a marker line"

    def test_malformed_input_is_error(self):
        readme = md(MARKER_START, "dangling")
        error = inject_doc(readme, Doc.from_lines(["x"])).unwrap_err()
        assert isinstance(error, MalformedMarkersError)
        assert list(readme.lines()) == [MARKER_START, "dangling"]


class TestBuildRegion:
    def test_region(self):
        assert build_region(Doc.from_lines(["a", "b"])) == [MARKER_START, "a", "b", MARKER_END]

    def test_markers_are_cargo_rdme_compatible(self):
        assert MARKER_START == "<!-- cargo-rdme start -->"
        assert MARKER_END == "<!-- cargo-rdme end -->"
