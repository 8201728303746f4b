"""unitlens -- Read-only HTTP view of a host's systemd units.

This package exposes unit status, the aggregate unit listing, and
journal tails over HTTP by running ``systemctl`` and ``journalctl``
as child processes and relaying their text output. Nothing is ever
passed through a shell.
"""

__version__ = "0.1.0"
