"""Shared test fixtures for the unitlens test suite.

Provides stub executables standing in for systemctl and journalctl, and
a mock SystemdQueries for exercising the HTTP layer in isolation.
"""

from __future__ import annotations

import logging
import stat
from pathlib import Path
from typing import Callable, Iterator
from unittest.mock import MagicMock

import pytest

from unitlens.runner.command import CommandRunner
from unitlens.systemd.queries import SystemdQueries


# ---------------------------------------------------------------------------
# Stub executables
# ---------------------------------------------------------------------------


@pytest.fixture
def make_stub(tmp_path: Path) -> Callable[[str, str], str]:
    """Factory writing an executable POSIX sh script and returning its path."""

    def _make(name: str, body: str) -> str:
        path = tmp_path / name
        path.write_text(f"#!/bin/sh\n{body}\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(path)

    return _make


@pytest.fixture
def echo_args_stub(make_stub: Callable[[str, str], str]) -> str:
    """A program that prints each of its arguments on its own line."""
    return make_stub("echo-args", "printf '%s\\n' \"$@\"")


@pytest.fixture
def summary_stub(make_stub: Callable[[str, str], str]) -> str:
    """A systemctl stand-in listing two units and exiting 0."""
    return make_stub("systemctl-ok", "printf 'unit-a loaded\\nunit-b loaded\\n'")


@pytest.fixture
def not_found_stub(make_stub: Callable[[str, str], str]) -> str:
    """A systemctl stand-in that cannot find the unit and exits 3."""
    return make_stub(
        "systemctl-missing",
        "printf 'Unit nginx.service could not be found.'\nexit 3",
    )


@pytest.fixture
def missing_program(tmp_path: Path) -> str:
    """Path to a program that does not exist."""
    return str(tmp_path / "no-such-program")


@pytest.fixture
def runner() -> CommandRunner:
    return CommandRunner()


@pytest.fixture(autouse=True)
def _reset_unitlens_logger() -> Iterator[None]:
    """Drop handlers installed by setup_logging so they don't outlive a test."""
    yield
    logger = logging.getLogger("unitlens")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Mock Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_queries() -> MagicMock:
    """A mock SystemdQueries for testing the HTTP layer without subprocesses."""
    queries = MagicMock(spec=SystemdQueries)
    queries.systemctl = "systemctl"
    queries.journalctl = "journalctl"
    return queries
