"""Invocation builders for the systemd queries unitlens exposes.

Each builder is a pure function that returns an Invocation. Unit names
and time bounds go into the argument vector unmodified, one token each.
"""

from __future__ import annotations

import logging

from unitlens.domain.models import Invocation
from unitlens.runner.command import CommandRunner

logger = logging.getLogger(__name__)

SYSTEMCTL = "systemctl"
JOURNALCTL = "journalctl"
NO_PAGER = "--no-pager"


def unit_status_invocation(unit: str, systemctl: str = SYSTEMCTL) -> Invocation:
    """``systemctl status <unit>``"""
    return Invocation(program=systemctl, args=("status", unit))


def system_summary_invocation(
    systemctl: str = SYSTEMCTL, no_pager: bool = True
) -> Invocation:
    """``systemctl --no-pager``, the listing of all loaded units.

    Args:
        systemctl: Name or path of the systemctl binary.
        no_pager: Pass ``--no-pager`` so the listing is not routed
                  through an interactive pager.
    """
    args = (NO_PAGER,) if no_pager else ()
    return Invocation(program=systemctl, args=args)


def unit_logs_invocation(
    unit: str,
    since: str | None = None,
    journalctl: str = JOURNALCTL,
) -> Invocation:
    """``journalctl --no-pager --unit <unit> [--since <since>]``"""
    args: tuple[str, ...] = (NO_PAGER, "--unit", unit)
    if since is not None:
        args += ("--since", since)
    return Invocation(program=journalctl, args=args)


class SystemdQueries:
    """Runs the systemd queries through a CommandRunner.

    Each method builds a fresh Invocation, runs it once, and returns the
    captured text. Errors from the runner propagate unchanged.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        systemctl: str = SYSTEMCTL,
        journalctl: str = JOURNALCTL,
        no_pager: bool = True,
    ) -> None:
        self._runner = runner or CommandRunner()
        self._systemctl = systemctl
        self._journalctl = journalctl
        self._no_pager = no_pager

    @property
    def systemctl(self) -> str:
        return self._systemctl

    @property
    def journalctl(self) -> str:
        return self._journalctl

    def unit_status(self, unit: str) -> str:
        return self._runner.execute(unit_status_invocation(unit, self._systemctl))

    def system_summary(self) -> str:
        return self._runner.execute(
            system_summary_invocation(self._systemctl, no_pager=self._no_pager)
        )

    def unit_logs(self, unit: str, since: str | None = None) -> str:
        logger.debug("Fetching journal for %s (since=%s)", unit, since)
        return self._runner.execute(
            unit_logs_invocation(unit, since=since, journalctl=self._journalctl)
        )
