"""Shared fixtures for extraction tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
import tree_sitter

from funsig.extract.engine import DeclarationExtractor
from funsig.extract.grammars import GrammarResolver

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def extractor() -> DeclarationExtractor:
    """A fresh extractor with default configuration."""
    return DeclarationExtractor()


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write ``content`` to ``tmp_path / name`` and return the path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture(scope="session")
def grammar_resolver() -> GrammarResolver:
    """Session-wide grammar cache for tests that parse snippets directly."""
    return GrammarResolver()


@pytest.fixture
def parse_snippet(
    grammar_resolver: GrammarResolver,
) -> Callable[[str, str], tuple[tree_sitter.Node, bytes]]:
    """Parse ``code`` with a grammar id, returning ``(root, source_bytes)``."""

    def _parse(code: str, grammar: str = "javascript") -> tuple[tree_sitter.Node, bytes]:
        source = code.encode()
        parser = tree_sitter.Parser()
        parser.language = grammar_resolver.load(grammar)
        return parser.parse(source).root_node, source

    return _parse


def _first_node(root: tree_sitter.Node, kind: str) -> tree_sitter.Node:
    """First node of ``kind`` in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == kind:
            return node
        stack.extend(reversed(node.children))
    raise LookupError(f"no {kind} node")


@pytest.fixture
def find_first() -> Callable[[tree_sitter.Node, str], tree_sitter.Node]:
    """Lookup helper: ``find_first(root, "function_declaration")``."""
    return _first_node
