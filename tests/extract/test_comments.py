"""Tests for comment indexing and association."""

from __future__ import annotations

import pytest
import tree_sitter

from funsig.extract.comments import (
    DEFAULT_MAX_DISTANCE,
    build_comment_index,
    nearest_comment,
    scan_comments,
)
from funsig.extract.grammars import GrammarResolver
from funsig.extract.packs import PACKS

JS = PACKS["javascript"].comment_syntax
PY = PACKS["python"].comment_syntax
PHP = PACKS["php"].comment_syntax


def _js_tree(source: bytes) -> tree_sitter.Node:
    parser = tree_sitter.Parser()
    parser.language = GrammarResolver().load("javascript")
    return parser.parse(source).root_node


class TestScanComments:
    """Lexical comment scan."""

    def test_line_and_block_comments(self) -> None:
        source = b"// one\nlet a = 1; /* two */\n/**\n * three\n */\n"

        texts = [c.text for c in scan_comments(source, JS)]

        assert texts == ["// one", "/* two */", "/**\n * three\n */"]

    def test_offsets_are_byte_spans(self) -> None:
        source = b"x; // tail\n"

        (comment,) = scan_comments(source, JS)

        assert source[comment.start : comment.end] == b"// tail"

    def test_markers_inside_strings_ignored(self) -> None:
        """Comment markers inside string literals do not start comments."""
        source = (
            b"const url = \"http://example.com\"; // real\n"
            b"let s = '/* no */';\n"
            b"let t = `// nope`;\n"
        )

        texts = [c.text for c in scan_comments(source, JS)]

        assert texts == ["// real"]

    def test_escaped_quote_does_not_end_string(self) -> None:
        source = b'let s = "say \\"// hi\\""; // after\n'

        assert [c.text for c in scan_comments(source, JS)] == ["// after"]

    def test_unterminated_block_runs_to_end(self) -> None:
        source = b"code();\n/* never closed\nmore"

        (comment,) = scan_comments(source, JS)

        assert comment.end == len(source)

    def test_python_hash_comments_and_docstrings(self) -> None:
        """Triple-quoted strings hide '#' from the scanner."""
        source = b'x = "# not a comment"  # real\n"""\n# inside docstring\n"""\n# last\n'

        texts = [c.text for c in scan_comments(source, PY)]

        assert texts == ["# real", "# last"]

    def test_python_has_no_block_comments(self) -> None:
        assert scan_comments(b"/* not python */\n", PY) == []

    def test_php_accepts_all_three_styles(self) -> None:
        source = b"<?php\n// a\n# b\n/* c */\n"

        assert [c.text for c in scan_comments(source, PHP)] == ["// a", "# b", "/* c */"]

    def test_non_utf8_bytes_are_replaced(self) -> None:
        source = b"// caf\xe9\n"

        (comment,) = scan_comments(source, JS)

        assert comment.text.startswith("// caf")


class TestBuildCommentIndex:
    """Text scan merged with tree comment nodes."""

    def test_tree_comments_fill_scanner_gaps(self) -> None:
        """A quote inside a regex literal hides a comment from the text scan."""
        source = b"const re = /'/; // trailing\nfunction f() {}\n"
        assert scan_comments(source, JS) == []

        index = build_comment_index(source, JS, _js_tree(source))

        assert [c.text for c in index] == ["// trailing"]

    def test_same_comment_not_duplicated(self) -> None:
        source = b"/** doc */\nfunction f() {}\n"

        index = build_comment_index(source, JS, _js_tree(source))

        assert len(index) == 1

    def test_ordered_by_end_offset(self) -> None:
        source = b"// b\n/* a */\n// c\n"

        index = build_comment_index(source, JS)

        ends = [c.end for c in index]
        assert ends == sorted(ends)

    def test_line_of(self) -> None:
        index = build_comment_index(b"a\nb\nc\n", JS)

        assert index.line_of(0) == 1
        assert index.line_of(2) == 2
        assert index.line_of(4) == 3


class TestNearestComment:
    """Comment-to-declaration association."""

    @staticmethod
    def _source_with_gap(gap: int) -> bytes:
        """A comment on line 1 and a declaration ``gap`` lines below it."""
        return b"// note\n" + b"\n" * (gap - 1) + b"function f() {}\n"

    def test_comment_three_lines_above_is_found(self) -> None:
        source = self._source_with_gap(3)
        index = build_comment_index(source, JS)

        assert nearest_comment(index, source.index(b"function")) == "// note"

    def test_comment_twelve_lines_above_is_not_found(self) -> None:
        source = self._source_with_gap(12)
        index = build_comment_index(source, JS)

        assert nearest_comment(index, source.index(b"function")) is None

    @pytest.mark.parametrize(
        ("gap", "found"),
        [(1, True), (DEFAULT_MAX_DISTANCE, True), (DEFAULT_MAX_DISTANCE + 1, False)],
    )
    def test_distance_bound_is_inclusive(self, gap: int, found: bool) -> None:
        source = self._source_with_gap(gap)
        index = build_comment_index(source, JS)

        result = nearest_comment(index, source.index(b"function"))

        assert (result is not None) is found

    def test_custom_max_distance(self) -> None:
        source = self._source_with_gap(3)
        index = build_comment_index(source, JS)

        assert nearest_comment(index, source.index(b"function"), max_distance=2) is None

    def test_same_line_comment_has_distance_zero(self) -> None:
        source = b"/* inline */ function f() {}\n"
        index = build_comment_index(source, JS)

        assert nearest_comment(index, source.index(b"function")) == "/* inline */"

    def test_closest_comment_wins(self) -> None:
        source = b"// far\n// near\nfunction f() {}\n"
        index = build_comment_index(source, JS)

        assert nearest_comment(index, source.index(b"function")) == "// near"

    def test_tie_resolves_to_first_comment(self) -> None:
        """Two comments ending on the same line: the earlier one wins."""
        source = b"/* a */ /* b */\nfunction f() {}\n"
        index = build_comment_index(source, JS)

        assert nearest_comment(index, source.index(b"function")) == "/* a */"

    def test_comments_after_the_node_are_ignored(self) -> None:
        source = b"function f() {} // after\n"
        index = build_comment_index(source, JS)

        assert nearest_comment(index, 0) is None

    def test_empty_index(self) -> None:
        index = build_comment_index(b"function f() {}\n", JS)

        assert nearest_comment(index, 0) is None
