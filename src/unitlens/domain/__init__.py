"""Domain models for unitlens.

This package contains the request-scoped value objects used throughout
the system. All models use Pydantic v2 for validation.
"""

from unitlens.domain.models import ExecutionResult, ExitKind, Invocation

__all__ = [
    "ExecutionResult",
    "ExitKind",
    "Invocation",
]
