"""Domain models for retry policies and per-attempt outcomes."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Generic, Optional, TypeVar


T = TypeVar("T")


class OutcomeKind(str, Enum):
    """Tag of a single attempt's result."""

    SUCCESS = "success"
    RETRYABLE = "retryable"
    FATAL = "fatal"


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for retry behavior.

    Delays grow geometrically: attempt ``i`` (0-based) is followed by a wait
    of ``initial_delay_seconds * backoff_multiplier ** i``. No jitter is
    applied.
    """

    max_retries: int = 3
    initial_delay_seconds: float = 1.0
    backoff_multiplier: float = 2.0

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.initial_delay_seconds <= 0:
            raise ValueError("initial_delay_seconds must be positive")
        if self.backoff_multiplier <= 1:
            raise ValueError("backoff_multiplier must be greater than 1")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """Delay in seconds after the failed 0-based ``attempt``."""
        return self.initial_delay_seconds * (self.backoff_multiplier ** attempt)

    def with_overrides(self, **changes: Any) -> RetryPolicy:
        """Return a copy with the given fields replaced, ignoring ``None`` values."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


DEFAULT_RETRY_POLICY = RetryPolicy()


@dataclass(frozen=True)
class AttemptOutcome(Generic[T]):
    """Tagged result of one attempt: a value, or a retryable/fatal error."""

    kind: OutcomeKind
    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: T) -> AttemptOutcome[T]:
        return cls(kind=OutcomeKind.SUCCESS, value=value)

    @classmethod
    def retryable(cls, error: Exception) -> AttemptOutcome[T]:
        return cls(kind=OutcomeKind.RETRYABLE, error=error)

    @classmethod
    def fatal(cls, error: Exception) -> AttemptOutcome[T]:
        return cls(kind=OutcomeKind.FATAL, error=error)
