"""Config test fixtures."""

import os
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, None, None]:
    """Remove FUNSIG__* env vars for clean tests."""
    orig = {k: v for k, v in os.environ.items() if k.startswith("FUNSIG__")}
    for k in orig:
        del os.environ[k]
    yield
    # Clean up any new FUNSIG__* env vars set during the test
    current_keys = [k for k in os.environ if k.startswith("FUNSIG__")]
    for k in current_keys:
        del os.environ[k]
    # Restore original values
    os.environ.update(orig)
