"""Command-line interface for unitlens.

Provides the main entry point for running the HTTP server, running a
single query on this host, or running the same query against a remote
unitlens server.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

EXIT_COMMAND_FAILED = 1
EXIT_IO_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="unitlens",
        description="Read-only view of systemd unit status and journals",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/unitlens.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP server")
    serve_parser.add_argument("--host", type=str, default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")

    _add_query_parsers(subparsers)

    remote_parser = subparsers.add_parser(
        "remote", help="Run a query against a remote unitlens server",
    )
    remote_parser.add_argument(
        "--url", type=str, default=None,
        help="Server base URL (default: client.base_url from config)",
    )
    _add_query_parsers(remote_parser.add_subparsers(dest="query", required=True))

    return parser.parse_args(argv)


def _add_query_parsers(subparsers: argparse._SubParsersAction) -> None:
    subparsers.add_parser("summary", help="List all units")
    status_parser = subparsers.add_parser("status", help="Show the status of one unit")
    status_parser.add_argument("unit", help="Unit name, e.g. nginx.service")
    logs_parser = subparsers.add_parser("logs", help="Show the journal of one unit")
    logs_parser.add_argument("unit", help="Unit name, e.g. nginx.service")
    logs_parser.add_argument(
        "--since", type=str, default=None,
        help="Only entries newer than this (any journalctl --since value)",
    )


def _run_local(settings, query: str, args: argparse.Namespace) -> int:
    """Run a query on this host and print its output."""
    from unitlens.runner.command import CommandFailedError, CommandRunner, ProcessIOError
    from unitlens.systemd.queries import SystemdQueries

    cmds = settings.commands
    queries = SystemdQueries(
        runner=CommandRunner(encoding=cmds.encoding, timeout=cmds.timeout),
        systemctl=cmds.systemctl,
        journalctl=cmds.journalctl,
        no_pager=cmds.no_pager,
    )
    try:
        if query == "summary":
            output = queries.system_summary()
        elif query == "status":
            output = queries.unit_status(args.unit)
        else:
            output = queries.unit_logs(args.unit, since=args.since)
    except CommandFailedError as e:
        sys.stderr.write(e.output)
        return EXIT_COMMAND_FAILED
    except ProcessIOError as e:
        logger.error("%s", e)
        return EXIT_IO_ERROR

    sys.stdout.write(output)
    return 0


async def _run_remote(settings, args: argparse.Namespace) -> int:
    """Run a query through the HTTP client and print its output."""
    from unitlens.client.http_client import ClientError, RemoteCommandError, UnitLensClient

    base_url = args.url or settings.client.base_url
    try:
        async with UnitLensClient(base_url=base_url, timeout=settings.client.timeout) as client:
            if args.query == "summary":
                output = await client.summary()
            elif args.query == "status":
                output = await client.unit_status(args.unit)
            else:
                output = await client.unit_logs(args.unit, since=args.since)
    except RemoteCommandError as e:
        sys.stderr.write(e.output)
        return EXIT_COMMAND_FAILED
    except ClientError as e:
        logger.error("%s", e)
        return EXIT_IO_ERROR

    sys.stdout.write(output)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the unitlens CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return 0

    from unitlens.config.settings import load_settings
    from unitlens.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    if args.command == "serve":
        from unitlens.api.server import create_app
        import uvicorn

        cmds = settings.commands
        host = args.host or settings.server.host
        port = args.port or settings.server.port
        logger.info("Starting server on %s:%d", host, port)
        app = create_app(
            systemctl=cmds.systemctl,
            journalctl=cmds.journalctl,
            no_pager=cmds.no_pager,
            encoding=cmds.encoding,
            timeout=cmds.timeout,
        )
        uvicorn.run(app, host=host, port=port)
        return 0

    if args.command == "remote":
        return asyncio.run(_run_remote(settings, args))

    return _run_local(settings, args.command, args)


if __name__ == "__main__":
    sys.exit(main())
