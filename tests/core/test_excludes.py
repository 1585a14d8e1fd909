"""Tests for core/excludes.py module.

Covers:
- DEPENDENCY_DIRS frozenset
- is_hidden_dir() function
- is_excluded_dir() function
"""

from __future__ import annotations

import pytest

from funsig.core.excludes import DEPENDENCY_DIRS, is_excluded_dir, is_hidden_dir


class TestDependencyDirs:
    """Tests for DEPENDENCY_DIRS constant."""

    def test_is_frozenset(self) -> None:
        """DEPENDENCY_DIRS is a frozenset."""
        assert isinstance(DEPENDENCY_DIRS, frozenset)

    def test_contains_node_modules(self) -> None:
        """Contains node_modules."""
        assert "node_modules" in DEPENDENCY_DIRS

    def test_contains_python_environments(self) -> None:
        assert "venv" in DEPENDENCY_DIRS
        assert "__pycache__" in DEPENDENCY_DIRS


class TestIsHiddenDir:
    @pytest.mark.parametrize("name", [".git", ".venv", ".idea", "."])
    def test_dot_prefixed_is_hidden(self, name: str) -> None:
        assert is_hidden_dir(name) is True

    @pytest.mark.parametrize("name", ["src", "lib", "node_modules", "a.b"])
    def test_plain_name_is_not_hidden(self, name: str) -> None:
        assert is_hidden_dir(name) is False


class TestIsExcludedDir:
    """Tests for is_excluded_dir function."""

    def test_hidden_dirs_excluded(self) -> None:
        assert is_excluded_dir(".cache") is True

    def test_dependency_dirs_excluded(self) -> None:
        assert is_excluded_dir("node_modules") is True

    def test_source_dirs_kept(self) -> None:
        assert is_excluded_dir("src") is False

    def test_extra_names_excluded(self) -> None:
        """Caller-provided names are excluded too."""
        assert is_excluded_dir("generated", extra=["generated"]) is True
        assert is_excluded_dir("generated") is False
