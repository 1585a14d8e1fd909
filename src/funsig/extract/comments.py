"""Comment indexing and comment-to-declaration association.

A text scan over the raw source bytes finds line and block comments while
skipping string literals. When a syntax tree is available its comment nodes
are merged in, keyed by end offset, so comments the lexical scan missed
(or mis-delimited) are still indexed.

All offsets are byte offsets into the source, matching tree-sitter node
positions. Lines are 1-based.
"""

from __future__ import annotations

import re
from bisect import bisect_left, bisect_right
from collections.abc import Iterator
from dataclasses import dataclass

import tree_sitter

from funsig.extract.packs import CommentSyntax

DEFAULT_MAX_DISTANCE = 9


@dataclass(frozen=True)
class Comment:
    """One comment: ``[start, end)`` byte span and its raw text."""

    start: int
    end: int
    text: str


def _build_scanner(syntax: CommentSyntax) -> re.Pattern[bytes]:
    """Compile one alternation: strings first, then comments.

    Only the ``comment`` group is collected; string matches just advance the
    scan past literal text.
    """
    strings: list[bytes] = []
    if syntax.triple_quoted:
        strings += [rb'"""[\s\S]*?(?:"""|\Z)', rb"'''[\s\S]*?(?:'''|\Z)"]
    for quote in syntax.string_quotes:
        q = re.escape(quote.encode())
        if quote == "`":
            strings.append(q + rb"(?:\\[\s\S]|[^\\" + q + rb"])*(?:" + q + rb"|\Z)")
        else:
            strings.append(q + rb"(?:\\.|[^\\\n" + q + rb"])*" + q + rb"?")

    comments: list[bytes] = []
    for opener, closer in syntax.block_delimiters:
        o, c = re.escape(opener.encode()), re.escape(closer.encode())
        comments.append(o + rb"[\s\S]*?(?:" + c + rb"|\Z)")
    for prefix in syntax.line_prefixes:
        comments.append(re.escape(prefix.encode()) + rb"[^\r\n]*")

    parts = [*strings, b"(?P<comment>" + b"|".join(comments) + b")"] if comments else strings
    return re.compile(b"|".join(parts))


_SCANNERS: dict[CommentSyntax, re.Pattern[bytes]] = {}


def _scanner_for(syntax: CommentSyntax) -> re.Pattern[bytes]:
    scanner = _SCANNERS.get(syntax)
    if scanner is None:
        scanner = _SCANNERS[syntax] = _build_scanner(syntax)
    return scanner


def scan_comments(source: bytes, syntax: CommentSyntax) -> list[Comment]:
    """Lexically scan source bytes for comments, in document order."""
    if not syntax.line_prefixes and not syntax.block_delimiters:
        return []
    found: list[Comment] = []
    for match in _scanner_for(syntax).finditer(source):
        if match.group("comment") is None:
            continue
        start, end = match.span()
        found.append(Comment(start, end, source[start:end].decode("utf-8", errors="replace")))
    return found


def _tree_comments(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Yield comment nodes in document order without descending into them."""
    cursor = root.walk()
    while True:
        node = cursor.node
        is_comment = node is not None and "comment" in node.type
        if is_comment:
            yield node
        if not is_comment and cursor.goto_first_child():
            continue
        while not cursor.goto_next_sibling():
            if not cursor.goto_parent():
                return


class CommentIndex:
    """Comments of one file ordered by end offset, with a line table."""

    def __init__(self, source: bytes, comments: list[Comment]) -> None:
        self._comments = sorted(comments, key=lambda c: (c.end, c.start))
        self._ends = [c.end for c in self._comments]
        self._newlines = [m.start() for m in re.finditer(rb"\n", source)]

    def __len__(self) -> int:
        return len(self._comments)

    def __iter__(self) -> Iterator[Comment]:
        return iter(self._comments)

    def line_of(self, offset: int) -> int:
        """1-based line of a byte offset: one plus the newlines before it."""
        return bisect_left(self._newlines, offset) + 1

    def nearest(self, start_byte: int, max_distance: int = DEFAULT_MAX_DISTANCE) -> str | None:
        """Text of the closest comment ending before ``start_byte``.

        Distance is the declaration's line minus the comment's end line; only
        distances in ``[0, max_distance]`` qualify. On equal distance the
        comment that comes first wins.
        """
        node_line = self.line_of(start_byte)
        best: Comment | None = None
        best_distance = max_distance + 1
        # Walk backwards from the last comment ending at or before the node
        idx = bisect_right(self._ends, start_byte) - 1
        while idx >= 0:
            comment = self._comments[idx]
            distance = node_line - self.line_of(comment.end)
            if distance > max_distance:
                break
            if distance <= best_distance:
                best, best_distance = comment, distance
            idx -= 1
        return best.text if best is not None else None


def build_comment_index(
    source: bytes,
    syntax: CommentSyntax,
    root: tree_sitter.Node | None = None,
) -> CommentIndex:
    """Index every comment in ``source``.

    Text-scan results come first; tree comment nodes fill in end offsets the
    scan did not produce.
    """
    by_end: dict[int, Comment] = {c.end: c for c in scan_comments(source, syntax)}
    if root is not None:
        for node in _tree_comments(root):
            by_end.setdefault(
                node.end_byte,
                Comment(
                    node.start_byte,
                    node.end_byte,
                    source[node.start_byte : node.end_byte].decode("utf-8", errors="replace"),
                ),
            )
    return CommentIndex(source, list(by_end.values()))


def nearest_comment(
    index: CommentIndex,
    start_byte: int,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> str | None:
    """Comment text associated with a declaration starting at ``start_byte``."""
    return index.nearest(start_byte, max_distance)
