"""Synchronous command execution with combined output capture.

Runs an Invocation as a child process with stdout and stderr sharing
one pipe, waits for it to exit, and decodes what it wrote. Failures are
split into two kinds so callers can tell a broken host (the program
could not be started or its output could not be read) from a command
that ran and reported a problem:

    ProcessError
    ├── ProcessIOError         spawn, read or decode failure
    │   └── CommandTimeoutError
    └── CommandFailedError     non-zero exit or killed by a signal
"""

from __future__ import annotations

import codecs
import logging
import subprocess

from unitlens.domain.models import ExecutionResult, ExitKind, Invocation

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"

# HTTP status a server answers with when a command ran and failed
COMMAND_FAILED_STATUS = 502


class CommandRunner:
    """Runs invocations one at a time on the calling thread.

    The runner holds no per-call state, so one instance can be shared
    by concurrent requests; each call owns its own process and pipe.

    Usage::

        runner = CommandRunner()
        text = runner.execute(Invocation(program="systemctl", args=("--no-pager",)))
    """

    def __init__(
        self,
        encoding: str = DEFAULT_ENCODING,
        timeout: float | None = None,
    ) -> None:
        codecs.lookup(encoding)
        self._encoding = encoding
        self._timeout = timeout

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def run(self, invocation: Invocation) -> ExecutionResult:
        """Run the invocation to completion and return its result.

        Does not raise on a non-zero exit; see ``execute`` for that.

        Raises:
            ProcessIOError: If the program cannot be started or its
                output is not valid text in the configured encoding.
            CommandTimeoutError: If a timeout is configured and the
                child outlives it. The child is killed and reaped.
        """
        logger.debug("Running %s", invocation)
        try:
            completed = subprocess.run(
                invocation.argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                cwd=invocation.cwd,
                env=invocation.env,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandTimeoutError(invocation, self._timeout or 0.0) from e
        except (OSError, ValueError) as e:
            # ValueError: an argument holds a NUL byte and cannot reach exec
            raise ProcessIOError(
                f"Cannot run {invocation.program!r}: {e}", invocation, e
            ) from e

        try:
            output = completed.stdout.decode(self._encoding)
        except UnicodeDecodeError as e:
            raise ProcessIOError(
                f"Output of {invocation.program!r} is not valid {self._encoding}: {e}",
                invocation,
                e,
            ) from e

        return ExecutionResult(
            invocation=invocation,
            output=output,
            returncode=completed.returncode,
        )

    def execute(self, invocation: Invocation) -> str:
        """Run the invocation and return its output if it succeeded.

        Raises:
            CommandFailedError: If the program exited non-zero or was
                killed by a signal. Carries the captured output.
            ProcessIOError: See ``run``.
        """
        result = self.run(invocation)
        if not result.succeeded:
            logger.info(
                "%s exited with %s (returncode=%d)",
                invocation, result.exit_kind.value, result.returncode,
            )
            raise CommandFailedError(result)
        return result.output


class ProcessError(Exception):
    """Base class for all command execution failures."""

    def __init__(self, message: str, invocation: Invocation) -> None:
        super().__init__(message)
        self.invocation = invocation


class ProcessIOError(ProcessError):
    """The command could not be run or its output could not be read.

    The underlying ``OSError``, ``ValueError`` or ``UnicodeDecodeError``
    is kept as ``cause`` and is never meant to be shown to remote callers.
    """

    def __init__(
        self,
        message: str,
        invocation: Invocation,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, invocation)
        self.cause = cause

    @property
    def os_error(self) -> OSError | None:
        return self.cause if isinstance(self.cause, OSError) else None


class CommandTimeoutError(ProcessIOError):
    """The command did not finish within the configured timeout."""

    def __init__(self, invocation: Invocation, timeout: float) -> None:
        super().__init__(
            f"{invocation.program!r} did not finish within {timeout}s", invocation
        )
        self.timeout = timeout


class CommandFailedError(ProcessError):
    """The command ran but exited non-zero or was killed by a signal.

    ``output`` is exactly what the command printed; it usually explains
    the failure (e.g. "Unit foo.service could not be found.").
    """

    def __init__(self, result: ExecutionResult) -> None:
        if result.exit_kind is ExitKind.SIGNALED:
            reason = f"killed by signal {result.signal_number}"
        else:
            reason = f"exited with status {result.returncode}"
        super().__init__(f"{result.invocation.program!r} {reason}", result.invocation)
        self.result = result

    @property
    def output(self) -> str:
        return self.result.output

    @property
    def returncode(self) -> int:
        return self.result.returncode

    @property
    def exit_kind(self) -> ExitKind:
        return self.result.exit_kind
