import asyncio
import logging

import pytest

from models.generation import GenerationRequest, GenerationResult, TextPart
from services.genai.retrying_invoker import (
    InvocationFailure,
    InvocationSuccess,
    RetryingInvoker,
    RetryPolicy,
)
from utils.errors import ModelUnavailable


def _request():
    return GenerationRequest.build("test-model", TextPart("hello"))


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.mark.parametrize("max_attempts", [1, 2, 3, 5])
def test_always_failing_client_is_called_exactly_max_attempts(fake_model, max_attempts):
    fake_model.default = RuntimeError("boom")
    sleep = RecordingSleep()
    invoker = RetryingInvoker(fake_model, RetryPolicy(max_attempts, 1.0), sleep=sleep)

    with pytest.raises(ModelUnavailable) as excinfo:
        asyncio.run(invoker.invoke(_request()))

    assert len(fake_model.calls) == max_attempts
    assert excinfo.value.attempts == max_attempts
    assert len(sleep.delays) == max_attempts - 1


@pytest.mark.parametrize("succeed_at", [1, 2, 3])
def test_returns_on_first_success(fake_model, succeed_at):
    fake_model.outcomes = [RuntimeError("boom")] * (succeed_at - 1) + ["done"]
    fake_model.default = RuntimeError("should not be reached")
    invoker = RetryingInvoker(fake_model, RetryPolicy(3, 0.0), sleep=RecordingSleep())

    result = asyncio.run(invoker.invoke(_request()))

    assert result == GenerationResult(text="done")
    assert len(fake_model.calls) == succeed_at


def test_delay_schedule_doubles_after_each_failure(fake_model):
    fake_model.default = RuntimeError("boom")
    sleep = RecordingSleep()
    invoker = RetryingInvoker(fake_model, RetryPolicy(3, 1.0), sleep=sleep)

    with pytest.raises(ModelUnavailable):
        asyncio.run(invoker.invoke(_request()))

    # No delay before attempt 1 and none after the terminal failure.
    assert sleep.delays == [1.0, 2.0]
    assert RetryPolicy(3, 1.0).schedule() == [1.0, 2.0]
    assert RetryPolicy(4, 0.5).schedule() == [0.5, 1.0, 2.0]


def test_no_delay_after_immediate_success(fake_model):
    sleep = RecordingSleep()
    invoker = RetryingInvoker(fake_model, RetryPolicy(), sleep=sleep)

    asyncio.run(invoker.invoke(_request()))

    assert sleep.delays == []


def test_single_attempt_propagates_without_delay(fake_model):
    fake_model.default = ValueError("bad request")
    sleep = RecordingSleep()
    invoker = RetryingInvoker(fake_model, RetryPolicy(1, 1.0), sleep=sleep)

    with pytest.raises(ModelUnavailable) as excinfo:
        asyncio.run(invoker.invoke(_request()))

    assert sleep.delays == []
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert "bad request" in str(excinfo.value)


def test_failure_is_chained_to_last_error(fake_model):
    fake_model.outcomes = [RuntimeError("first"), RuntimeError("second")]
    invoker = RetryingInvoker(fake_model, RetryPolicy(2, 0.0), sleep=RecordingSleep())

    with pytest.raises(ModelUnavailable) as excinfo:
        asyncio.run(invoker.invoke(_request()))

    assert str(excinfo.value.last_error) == "second"
    assert excinfo.value.__cause__ is excinfo.value.last_error


def test_run_returns_outcome_values(fake_model):
    invoker = RetryingInvoker(fake_model, RetryPolicy(2, 0.0), sleep=RecordingSleep())

    fake_model.outcomes = [RuntimeError("x"), "fine"]
    success = asyncio.run(invoker.run(_request()))
    assert success == InvocationSuccess(result=GenerationResult(text="fine"), attempts=2)

    fake_model.default = RuntimeError("down")
    failure = asyncio.run(invoker.run(_request()))
    assert isinstance(failure, InvocationFailure)
    assert failure.attempts == 2


def test_default_policy():
    policy = RetryPolicy()
    assert policy.max_attempts == 3
    assert policy.base_delay == 1.0


@pytest.mark.parametrize("max_attempts, base_delay", [(0, 1.0), (-1, 1.0), (3, -0.5)])
def test_invalid_policy_is_rejected(max_attempts, base_delay):
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts, base_delay)


def test_attempts_and_failures_are_logged(fake_model, caplog):
    fake_model.outcomes = [RuntimeError("flaky")]
    invoker = RetryingInvoker(fake_model, RetryPolicy(3, 0.0), sleep=RecordingSleep())

    with caplog.at_level(logging.INFO, logger="services.genai.retrying_invoker"):
        asyncio.run(invoker.invoke(_request()))

    messages = [r.getMessage() for r in caplog.records]
    assert any("attempt 1/3" in m for m in messages)
    assert any("failed (attempt 1/3): flaky" in m for m in messages)
    assert any("attempt 2/3" in m for m in messages)


def test_success_log_is_truncated(fake_model, caplog):
    fake_model.outcomes = ["x" * 5000]
    invoker = RetryingInvoker(fake_model, RetryPolicy(), sleep=RecordingSleep())

    with caplog.at_level(logging.INFO, logger="services.genai.retrying_invoker"):
        asyncio.run(invoker.invoke(_request()))

    prefix = "Model response (trim): "
    trimmed = [r.getMessage() for r in caplog.records if r.getMessage().startswith(prefix)]
    assert len(trimmed) == 1
    assert len(trimmed[0]) - len(prefix) == 2000
