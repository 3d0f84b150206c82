"""Pytest bootstrap helpers shared by all test domains."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from loguru import logger


def _append_repo_root() -> None:
    """Ensure repository root is present in import path."""
    repo_root_text = str(Path(__file__).resolve().parents[1])
    if repo_root_text not in sys.path:
        sys.path.insert(0, repo_root_text)


_append_repo_root()


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore a plain stderr sink after tests that reconfigure loguru."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")
