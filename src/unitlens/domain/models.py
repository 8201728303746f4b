"""Core domain models for unitlens.

These models represent the only data flowing through the system: the
command invocation built for a request and the result of running it.
Both are request-scoped and never outlive the request that made them.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ExitKind(str, enum.Enum):
    """How a child process terminated."""

    SUCCESS = "success"  # Exited with status 0
    NON_ZERO = "non_zero"  # Exited with a non-zero status
    SIGNALED = "signaled"  # Killed by a signal


# ---------------------------------------------------------------------------
# Command Models
# ---------------------------------------------------------------------------


class Invocation(BaseModel):
    """A single program invocation as an argument vector.

    Every argument is handed to the program as one token. There is no
    shell layer, so metacharacters in arguments have no special meaning.
    """

    model_config = ConfigDict(frozen=True)

    program: str = Field(min_length=1, description="Executable name or absolute path")
    args: tuple[str, ...] = Field(default=(), description="Ordered argument list")
    cwd: str | None = Field(default=None, description="Working directory for the child")
    env: dict[str, str] | None = Field(
        default=None, description="Full environment for the child (inherit when None)"
    )

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)


class ExecutionResult(BaseModel):
    """Outcome of running an Invocation to completion.

    ``output`` holds stdout and stderr merged as the OS delivered them.
    A negative ``returncode`` means the child was killed by signal
    ``-returncode`` (the subprocess module convention).
    """

    model_config = ConfigDict(frozen=True)

    invocation: Invocation
    output: str = Field(description="Combined stdout and stderr text")
    returncode: int = Field(description="Exit status, negative when signaled")

    @property
    def exit_kind(self) -> ExitKind:
        if self.returncode == 0:
            return ExitKind.SUCCESS
        if self.returncode < 0:
            return ExitKind.SIGNALED
        return ExitKind.NON_ZERO

    @property
    def succeeded(self) -> bool:
        return self.exit_kind is ExitKind.SUCCESS

    @property
    def signal_number(self) -> int | None:
        if self.returncode < 0:
            return -self.returncode
        return None
