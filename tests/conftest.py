"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
import sys

from loguru import logger
import pytest


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Restore a plain stderr sink after each test.

    The CLI replaces loguru's handlers with a sink bound to the stream that
    was current at invocation time, which CliRunner closes afterwards.
    """
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")
