"""Command execution module for unitlens.

Public API:
    CommandRunner -- Runs an Invocation and captures combined output
    ProcessError -- Base class of all execution failures
    ProcessIOError -- The command could not be run or read
    CommandTimeoutError -- The command outlived the configured timeout
    CommandFailedError -- The command ran and failed
"""

from unitlens.runner.command import (
    COMMAND_FAILED_STATUS,
    CommandFailedError,
    CommandRunner,
    CommandTimeoutError,
    ProcessError,
    ProcessIOError,
)

__all__ = [
    "COMMAND_FAILED_STATUS",
    "CommandFailedError",
    "CommandRunner",
    "CommandTimeoutError",
    "ProcessError",
    "ProcessIOError",
]
