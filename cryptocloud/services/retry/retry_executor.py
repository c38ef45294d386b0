"""Retry executor with exponential backoff."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from cryptocloud.domain.retry import (
    DEFAULT_RETRY_POLICY,
    AttemptOutcome,
    OutcomeKind,
    RetryPolicy,
)
from cryptocloud.services.retry.error_classifier import classify_failure


T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]
SleepFunc = Callable[[float], Awaitable[None]]
RetryHook = Callable[[int, float, Exception], None]


class RetryExecutor:
    """
    Runs a single network attempt repeatedly until it succeeds, fails fatally
    or the policy runs out of retries.

    The executor keeps no state between calls; each ``execute_with_retry``
    owns its attempt counter. Waiting between attempts uses ``asyncio.sleep``
    so other tasks in the event loop keep running, and cancelling the calling
    task aborts the loop with ``asyncio.CancelledError``.

    Retried operations may reach the remote side more than once. Callers that
    wrap non-idempotent calls should pass ``RetryPolicy(max_retries=0)``.
    """

    def __init__(
        self,
        default_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        *,
        classifier: Callable[[Exception], AttemptOutcome] = classify_failure,
        sleep: SleepFunc = asyncio.sleep,
        on_retry: Optional[RetryHook] = None,
    ):
        self.default_policy = default_policy
        self._classifier = classifier
        self._sleep = sleep
        self._on_retry = on_retry

    async def _attempt(self, operation: Operation[T]) -> AttemptOutcome[T]:
        try:
            return AttemptOutcome.success(await operation())
        except Exception as e:
            # CancelledError is a BaseException and is never classified
            return self._classifier(e)

    async def execute_with_retry(
        self,
        operation: Operation[T],
        policy: Optional[RetryPolicy] = None,
    ) -> T:
        """
        Execute ``operation`` under ``policy`` (or the executor default).

        Returns the first successful result. Raises the fatal error at once, or
        the last transient error after ``policy.max_retries`` retries.
        """
        policy = policy or self.default_policy
        attempt = 0

        while True:
            outcome = await self._attempt(operation)

            if outcome.kind is OutcomeKind.SUCCESS:
                return outcome.value

            if outcome.kind is OutcomeKind.FATAL or attempt >= policy.max_retries:
                raise outcome.error

            delay = policy.delay_for(attempt)
            if self._on_retry is not None:
                self._on_retry(attempt, delay, outcome.error)
            await self._sleep(delay)
            attempt += 1


async def execute_with_retry(
    operation: Operation[T],
    policy: Optional[RetryPolicy] = None,
) -> T:
    """Run ``operation`` with a default-configured ``RetryExecutor``."""
    return await RetryExecutor().execute_with_retry(operation, policy)


__all__ = ["RetryExecutor", "execute_with_retry"]
