"""FastAPI HTTP server exposing systemd status and journal text.

Endpoints:

    GET /summary              -> systemctl --no-pager
    GET /status/{unit}        -> systemctl status <unit>
    GET /logs/{unit}?since=   -> journalctl --no-pager --unit <unit> [--since <since>]
    GET /health               -> {"status": "ok", ...}

Successful queries return the command output as ``text/plain``. A
command that ran and failed returns 502 with its output as the body. A
command that could not be run returns a bare 500; the cause is only
logged.
"""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from unitlens.runner.command import (
    COMMAND_FAILED_STATUS,
    CommandFailedError,
    CommandRunner,
    ProcessIOError,
)
from unitlens.systemd.queries import JOURNALCTL, SYSTEMCTL, SystemdQueries

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = "Internal Server Error"


class HealthResponse(BaseModel):
    status: str = "ok"
    systemctl: str = SYSTEMCTL
    journalctl: str = JOURNALCTL


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(
    queries: SystemdQueries | None = None,
    systemctl: str = SYSTEMCTL,
    journalctl: str = JOURNALCTL,
    no_pager: bool = True,
    encoding: str = "utf-8",
    timeout: float | None = None,
) -> FastAPI:
    """Create the unitlens application.

    Args:
        queries: Optional pre-configured SystemdQueries (for testing).
        systemctl: Name or path of the systemctl binary.
        journalctl: Name or path of the journalctl binary.
        no_pager: Pass --no-pager to the summary listing.
        encoding: Encoding used to decode command output.
        timeout: Seconds before a running command is killed; None waits forever.
    """
    if queries is None:
        queries = SystemdQueries(
            runner=CommandRunner(encoding=encoding, timeout=timeout),
            systemctl=systemctl,
            journalctl=journalctl,
            no_pager=no_pager,
        )

    app = FastAPI(
        title="unitlens",
        description="Read-only HTTP view of systemd unit status and journals",
        version="0.1.0",
    )
    app.state.queries = queries

    @app.exception_handler(CommandFailedError)
    async def command_failed_handler(
        request: Request, exc: CommandFailedError
    ) -> PlainTextResponse:
        return PlainTextResponse(exc.output, status_code=COMMAND_FAILED_STATUS)

    @app.exception_handler(ProcessIOError)
    async def process_io_handler(request: Request, exc: ProcessIOError) -> PlainTextResponse:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc,
            exc_info=exc.cause,
        )
        return PlainTextResponse(INTERNAL_ERROR_BODY, status_code=500)

    # Handlers are plain functions so each request blocks a worker
    # thread, not the event loop, while its command runs.

    @app.get("/summary", response_class=PlainTextResponse)
    def summary() -> str:
        q: SystemdQueries = app.state.queries
        return q.system_summary()

    @app.get("/status/{unit}", response_class=PlainTextResponse)
    def unit_status(unit: str) -> str:
        q: SystemdQueries = app.state.queries
        return q.unit_status(unit)

    @app.get("/logs/{unit}", response_class=PlainTextResponse)
    def unit_logs(unit: str, since: str | None = None) -> str:
        q: SystemdQueries = app.state.queries
        return q.unit_logs(unit, since=since)

    @app.get("/health")
    async def health_check() -> HealthResponse:
        q: SystemdQueries = app.state.queries
        return HealthResponse(status="ok", systemctl=q.systemctl, journalctl=q.journalctl)

    return app


# ---------------------------------------------------------------------------
# Standalone entry point
# ---------------------------------------------------------------------------

def main(host: str = "127.0.0.1", port: int = 8080) -> None:
    """Run the unitlens server with default command settings."""
    app = create_app()
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
