"""Tests for RetryExecutor."""

import asyncio
from typing import List
from unittest.mock import AsyncMock, Mock

import pytest
from hypothesis import given, settings, strategies as st

from cryptocloud.domain.exceptions import CryptocloudError
from cryptocloud.domain.retry import RetryPolicy
from cryptocloud.services.retry.retry_executor import RetryExecutor, execute_with_retry


def transient(attempt: int = 0) -> CryptocloudError:
    return CryptocloudError(f"Service unavailable ({attempt})", code="HTTP_ERROR", status_code=503)


class FlakyOperation:
    """Fails with a transient error until ``succeed_on`` (1-based)."""

    def __init__(self, succeed_on: int = 0, error_factory=transient):
        self.succeed_on = succeed_on
        self.error_factory = error_factory
        self.calls = 0
        self.raised: List[Exception] = []

    async def __call__(self) -> str:
        self.calls += 1
        if self.succeed_on and self.calls >= self.succeed_on:
            return f"result-{self.calls}"
        error = self.error_factory(self.calls)
        self.raised.append(error)
        raise error


@pytest.fixture
def sleep() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def executor(sleep) -> RetryExecutor:
    return RetryExecutor(sleep=sleep)


@pytest.mark.asyncio
class TestRetryExecutor:
    """Test RetryExecutor control flow."""

    async def test_success_on_first_attempt(self, executor, sleep):
        operation = FlakyOperation(succeed_on=1)

        result = await executor.execute_with_retry(operation)

        assert result == "result-1"
        assert operation.calls == 1
        sleep.assert_not_awaited()

    async def test_failure_then_success(self, executor, sleep):
        operation = FlakyOperation(succeed_on=3)

        result = await executor.execute_with_retry(operation)

        assert result == "result-3"
        assert operation.calls == 3
        assert sleep.await_count == 2

    async def test_exhausted_retries_raise_last_error(self, executor):
        operation = FlakyOperation()

        with pytest.raises(CryptocloudError) as exc_info:
            await executor.execute_with_retry(operation, RetryPolicy(max_retries=2))

        assert operation.calls == 3
        assert exc_info.value is operation.raised[-1]

    @pytest.mark.parametrize("status_code", [400, 401, 403])
    async def test_client_faults_are_not_retried(self, executor, sleep, status_code):
        operation = FlakyOperation(
            error_factory=lambda n: CryptocloudError("Rejected", code="HTTP_ERROR", status_code=status_code)
        )

        with pytest.raises(CryptocloudError) as exc_info:
            await executor.execute_with_retry(operation, RetryPolicy(max_retries=5))

        assert exc_info.value.status_code == status_code
        assert operation.calls == 1
        sleep.assert_not_awaited()

    @pytest.mark.parametrize("status_code", [404, 408, 429, 500, 502, 503, 504])
    async def test_other_statuses_are_retried(self, executor, status_code):
        operation = FlakyOperation(
            error_factory=lambda n: CryptocloudError("Failed", status_code=status_code)
        )

        with pytest.raises(CryptocloudError):
            await executor.execute_with_retry(operation, RetryPolicy(max_retries=2))

        assert operation.calls == 3

    async def test_errors_without_status_code_are_retried(self, executor):
        operation = FlakyOperation(
            succeed_on=2,
            error_factory=lambda n: ConnectionRefusedError("Connection refused"),
        )

        assert await executor.execute_with_retry(operation) == "result-2"

    async def test_unclassified_errors_are_raised_unchanged(self, executor):
        error = RuntimeError("boom")

        async def operation():
            raise error

        with pytest.raises(RuntimeError) as exc_info:
            await executor.execute_with_retry(operation, RetryPolicy(max_retries=1))

        assert exc_info.value is error

    async def test_delays_grow_geometrically(self, executor, sleep):
        policy = RetryPolicy(max_retries=4, initial_delay_seconds=0.5, backoff_multiplier=3.0)

        with pytest.raises(CryptocloudError):
            await executor.execute_with_retry(FlakyOperation(), policy)

        delays = [call.args[0] for call in sleep.await_args_list]
        assert delays == pytest.approx([0.5, 1.5, 4.5, 13.5])

    async def test_default_policy(self, executor, sleep):
        operation = FlakyOperation()

        with pytest.raises(CryptocloudError):
            await executor.execute_with_retry(operation)

        assert operation.calls == 4
        assert [call.args[0] for call in sleep.await_args_list] == [1.0, 2.0, 4.0]

    async def test_executor_default_policy_is_configurable(self, sleep):
        executor = RetryExecutor(RetryPolicy(max_retries=1), sleep=sleep)
        operation = FlakyOperation()

        with pytest.raises(CryptocloudError):
            await executor.execute_with_retry(operation)

        assert operation.calls == 2

    async def test_zero_retries_means_single_attempt(self, executor, sleep):
        operation = FlakyOperation()

        with pytest.raises(CryptocloudError):
            await executor.execute_with_retry(operation, RetryPolicy(max_retries=0))

        assert operation.calls == 1
        sleep.assert_not_awaited()

    async def test_on_retry_hook_receives_attempt_delay_and_error(self, sleep):
        on_retry = Mock()
        executor = RetryExecutor(sleep=sleep, on_retry=on_retry)
        operation = FlakyOperation(succeed_on=3)

        await executor.execute_with_retry(operation)

        assert [call.args for call in on_retry.call_args_list] == [
            (0, 1.0, operation.raised[0]),
            (1, 2.0, operation.raised[1]),
        ]

    async def test_cancelled_operation_is_not_retried(self, executor, sleep):
        operation = AsyncMock(side_effect=asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await executor.execute_with_retry(operation)

        assert operation.await_count == 1
        sleep.assert_not_awaited()

    async def test_cancellation_during_backoff_aborts_loop(self):
        waiting = asyncio.Event()
        executor = RetryExecutor(on_retry=lambda attempt, delay, error: waiting.set())
        operation = FlakyOperation()

        task = asyncio.create_task(
            executor.execute_with_retry(operation, RetryPolicy(initial_delay_seconds=30.0))
        )
        await waiting.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert operation.calls == 1

    async def test_backoff_does_not_block_other_calls(self):
        executor = RetryExecutor()
        finished: List[str] = []

        async def slow():
            result = await executor.execute_with_retry(
                FlakyOperation(succeed_on=2), RetryPolicy(initial_delay_seconds=0.05)
            )
            finished.append("slow")
            return result

        async def fast():
            result = await executor.execute_with_retry(FlakyOperation(succeed_on=1))
            finished.append("fast")
            return result

        results = await asyncio.gather(slow(), fast())

        assert results == ["result-2", "result-1"]
        assert finished == ["fast", "slow"]

    async def test_module_level_helper(self):
        assert await execute_with_retry(FlakyOperation(succeed_on=1)) == "result-1"

        with pytest.raises(CryptocloudError):
            await execute_with_retry(FlakyOperation(), RetryPolicy(max_retries=0))


class TestRetryPolicy:
    """Test RetryPolicy validation and delay math."""

    def test_defaults(self):
        policy = RetryPolicy()

        assert policy.max_retries == 3
        assert policy.initial_delay_seconds == 1.0
        assert policy.backoff_multiplier == 2.0
        assert policy.max_attempts == 4

    @pytest.mark.parametrize("kwargs", [
        {"max_retries": -1},
        {"initial_delay_seconds": 0},
        {"initial_delay_seconds": -1.0},
        {"backoff_multiplier": 1.0},
        {"backoff_multiplier": 0.5},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            RetryPolicy(**kwargs)

    def test_policy_is_immutable(self):
        policy = RetryPolicy()

        with pytest.raises(AttributeError):
            policy.max_retries = 10

    def test_with_overrides_keeps_unset_fields(self):
        policy = RetryPolicy().with_overrides(max_retries=5, backoff_multiplier=None)

        assert policy.max_retries == 5
        assert policy.backoff_multiplier == 2.0

    def test_delay_for(self):
        policy = RetryPolicy(initial_delay_seconds=2.0, backoff_multiplier=1.5)

        assert policy.delay_for(0) == 2.0
        assert policy.delay_for(2) == pytest.approx(4.5)


class TestRetryExecutorProperties:
    """Property-based tests using Hypothesis."""

    @settings(max_examples=50, deadline=None)
    @given(
        max_retries=st.integers(min_value=0, max_value=6),
        initial_delay=st.floats(min_value=0.001, max_value=10.0),
        multiplier=st.floats(min_value=1.01, max_value=5.0),
    )
    def test_always_failing_operation_attempts_n_plus_one(self, max_retries, initial_delay, multiplier):
        """Property: N retries means exactly N+1 attempts and geometric delays."""
        sleep = AsyncMock()
        executor = RetryExecutor(sleep=sleep)
        policy = RetryPolicy(
            max_retries=max_retries,
            initial_delay_seconds=initial_delay,
            backoff_multiplier=multiplier,
        )
        operation = FlakyOperation()

        with pytest.raises(CryptocloudError) as exc_info:
            asyncio.run(executor.execute_with_retry(operation, policy))

        assert operation.calls == max_retries + 1
        assert exc_info.value is operation.raised[-1]
        delays = [call.args[0] for call in sleep.await_args_list]
        assert delays == pytest.approx([initial_delay * multiplier ** i for i in range(max_retries)])
        assert all(later > earlier for earlier, later in zip(delays, delays[1:]))

    @settings(max_examples=50, deadline=None)
    @given(
        max_retries=st.integers(min_value=0, max_value=6),
        status_code=st.sampled_from([400, 401, 403]),
    )
    def test_client_faults_attempted_once(self, max_retries, status_code):
        """Property: auth and bad-request faults are never retried."""
        operation = FlakyOperation(
            error_factory=lambda n: CryptocloudError("Rejected", status_code=status_code)
        )

        with pytest.raises(CryptocloudError):
            asyncio.run(
                RetryExecutor(sleep=AsyncMock()).execute_with_retry(
                    operation, RetryPolicy(max_retries=max_retries)
                )
            )

        assert operation.calls == 1

    @settings(max_examples=50, deadline=None)
    @given(data=st.data())
    def test_success_on_attempt_k_stops_retrying(self, data):
        """Property: success on attempt k <= N+1 returns that attempt's result."""
        max_retries = data.draw(st.integers(min_value=0, max_value=6))
        succeed_on = data.draw(st.integers(min_value=1, max_value=max_retries + 1))
        operation = FlakyOperation(succeed_on=succeed_on)

        result = asyncio.run(
            RetryExecutor(sleep=AsyncMock()).execute_with_retry(
                operation, RetryPolicy(max_retries=max_retries)
            )
        )

        assert result == f"result-{succeed_on}"
        assert operation.calls == succeed_on
