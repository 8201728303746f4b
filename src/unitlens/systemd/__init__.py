"""systemd query module for unitlens.

Builds ``systemctl`` and ``journalctl`` invocations and runs them.
"""

from unitlens.systemd.queries import (
    SystemdQueries,
    system_summary_invocation,
    unit_logs_invocation,
    unit_status_invocation,
)

__all__ = [
    "SystemdQueries",
    "system_summary_invocation",
    "unit_logs_invocation",
    "unit_status_invocation",
]
