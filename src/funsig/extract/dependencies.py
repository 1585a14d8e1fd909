"""Best-effort dependency inference for the legacy flat output.

This is a lexical heuristic, not a call graph. For each function A it finds
A's declaration text, approximates A's body by brace matching, and records
every other function B of the same file whose name appears call-shaped
(``name(``) inside that span.

Known limitations:
- Call-shaped text inside string literals and comments counts as a call.
- Braces inside strings, comments or regex literals can mis-delimit a body;
  unbalanced bodies extend to end of file.
- Python ``def`` bodies always get an end-of-file span, so a Python function
  appears to call every later function it declares or calls.
- An arrow with an expression body ends at its ``;`` or at the first line
  that does not continue the expression. Calls written on a later,
  continued line are still inside the span.
- Ruby methods without parentheses have no recognizable declaration and
  depend on nothing.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from funsig.extract.models import FunctionDeclaration

# Declaration-start patterns; the earliest match wins. ``{name}`` is the escaped name
_DECLARATION_PATTERNS: tuple[str, ...] = (
    r"function\s*\*?\s*{name}\s*\(",
    r"class\s+{name}\b",
    r"(?:const|let|var)\s+{name}\s*=",
    r"(?<![\w$]){name}\s*=\s*(?:async\s*)?function\b",
    r"def\s+{name}\s*\(",
    # Class method shorthand: `  static name(args) {`
    r"^[ \t]*(?:(?:static|async|get|set|public|private|protected)\s+)*"
    r"\*?{name}\s*\([^)]*\)[^{{;]*\{{",
)

_PYTHON_DEF = re.compile(r"def\s")

# Line endings after which an expression continues on the next line
_CONTINUATION_TOKENS: tuple[str, ...] = (
    "=>", "=", ",", "(", "[", "+", "-", "*", "/", "%", "&&", "||", "??", "?", ":", ".",
)


def _line_offsets(source: str) -> list[int]:
    """Offset of the first character of each line (index 0 is line 1)."""
    return [0, *(m.end() for m in re.finditer("\n", source))]


def find_declaration(source: str, name: str, from_offset: int = 0) -> int | None:
    """Earliest declaration-pattern match for ``name`` at or after ``from_offset``."""
    escaped = re.escape(name)
    starts = []
    for template in _DECLARATION_PATTERNS:
        pattern = re.compile(template.format(name=escaped), re.MULTILINE)
        match = pattern.search(source, from_offset)
        if match:
            starts.append(match.start())
    return min(starts) if starts else None


def _continues(line: str) -> bool:
    """True when a line ends mid-expression, so the statement runs on."""
    stripped = line.rstrip()
    return not stripped or stripped.endswith(_CONTINUATION_TOKENS)


def body_span(source: str, start: int) -> tuple[int, int]:
    """Approximate body of the declaration that starts at ``start``.

    - ``def`` declarations run to end of file.
    - A ``{`` outside parentheses opens a block body; the span is
      ``[open, close)`` up to its match, or end of file if unbalanced.
    - A ``;`` outside parentheses ends a brace-less statement (an arrow
      with an expression body); the span is the statement itself.
    - After a top-level ``=``, a line that does not end in a continuation
      token also ends the statement.
    - With none of these, the span runs to end of file.
    """
    if _PYTHON_DEF.match(source, start):
        return start, len(source)

    nesting = 0
    assigned = False
    line_start = start
    for idx in range(start, len(source)):
        char = source[idx]
        if char in "([":
            nesting += 1
        elif char in ")]":
            nesting = max(nesting - 1, 0)
        elif char == "\n":
            if nesting == 0 and assigned and not _continues(source[line_start:idx]):
                return start, idx
            line_start = idx + 1
        elif nesting == 0:
            if char == "{":
                return _brace_block(source, idx)
            if char == ";":
                return start, idx + 1
            if char == "=":
                assigned = True
    return start, len(source)


def _brace_block(source: str, open_idx: int) -> tuple[int, int]:
    depth = 0
    for idx in range(open_idx, len(source)):
        char = source[idx]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return open_idx, idx + 1
    return open_idx, len(source)


def infer_dependencies(
    functions: Sequence[FunctionDeclaration],
    source: str,
) -> dict[int, set[int]]:
    """Map each function id to the ids of same-file functions it appears to call.

    The search for A's declaration starts at A's own line, so a method and a
    top-level function sharing a name get their own spans. A function with
    no recognizable declaration depends on nothing. Functions sharing A's
    name are never recorded as A's dependencies.
    """
    line_offsets = _line_offsets(source)
    call_patterns = {
        fn.id: re.compile(r"(?<![\w$]){}\s*\(".format(re.escape(fn.function_name)))
        for fn in functions
    }

    result: dict[int, set[int]] = {}
    for fn in functions:
        line_index = min(max(fn.line_no - 1, 0), len(line_offsets) - 1)
        start = find_declaration(source, fn.function_name, line_offsets[line_index])
        if start is None:
            start = find_declaration(source, fn.function_name)
        if start is None:
            result[fn.id] = set()
            continue

        body_start, body_end = body_span(source, start)
        body = source[body_start:body_end]
        result[fn.id] = {
            other.id
            for other in functions
            if other.id != fn.id
            and other.function_name != fn.function_name
            and call_patterns[other.id].search(body)
        }
    return result
