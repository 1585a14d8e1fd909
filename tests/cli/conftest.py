"""CLI test fixtures."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterator
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent.parent / "extract" / "fixtures"


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers bound to the runner's streams once a command finishes."""
    yield
    logging.getLogger().handlers.clear()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A copy of the sample sources in a scratch directory."""
    root = tmp_path / "project"
    shutil.copytree(FIXTURES_DIR, root)
    return root
