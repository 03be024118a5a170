"""Bounded retry with exponential backoff around model invocations.

The loop is explicit: `run()` returns an outcome value (success or terminal
failure) carrying the number of attempts made, and `invoke()` turns a failure
outcome into `ModelUnavailable`. Backoff sleeps go through an injectable
coroutine so the delay schedule can be observed without waiting.

There is no jitter, no circuit breaker, no per-attempt timeout beyond the one
the model client imposes, and no external cancellation: a started invocation
runs to success or exhaustion.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Protocol, Union

from models.generation import GenerationRequest, GenerationResult
from utils.errors import ModelUnavailable

LOGGER = logging.getLogger(__name__)

LOG_TRUNCATE_CHARS = 2000

Sleep = Callable[[float], Awaitable[None]]


class Generator(Protocol):
    async def generate(self, request: GenerationRequest) -> GenerationResult: ...


@dataclass(frozen=True)
class RetryPolicy:
    """Retry limits: `max_attempts` calls, first backoff `base_delay` seconds."""

    max_attempts: int = 3
    base_delay: float = 1.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        if self.base_delay < 0:
            raise ValueError("base_delay must be non-negative.")

    def delay_after(self, attempt: int) -> float:
        """Seconds to wait after the failed 1-indexed `attempt`: base * 2^(attempt-1)."""
        return self.base_delay * (2 ** (attempt - 1))

    def schedule(self) -> List[float]:
        """Every backoff delay an always-failing invocation would sleep, in order."""
        return [self.delay_after(attempt) for attempt in range(1, self.max_attempts)]


@dataclass(frozen=True)
class InvocationSuccess:
    result: GenerationResult
    attempts: int


@dataclass(frozen=True)
class InvocationFailure:
    error: BaseException
    attempts: int


InvocationOutcome = Union[InvocationSuccess, InvocationFailure]


def _truncate(value: object, limit: int = LOG_TRUNCATE_CHARS) -> str:
    text = repr(value)
    return text if len(text) <= limit else text[:limit]


class RetryingInvoker:
    """Call a model client, retrying failed attempts with exponential backoff."""

    def __init__(
        self,
        client: Generator,
        policy: Optional[RetryPolicy] = None,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.client = client
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    async def run(self, request: GenerationRequest) -> InvocationOutcome:
        """Attempt the request until it succeeds or the attempt budget is spent."""
        total = self.policy.max_attempts
        attempt = 0
        while True:
            LOGGER.info("Model call attempt %d/%d (model=%s)", attempt + 1, total, request.model_id)
            try:
                result = await self.client.generate(request)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                attempt += 1
                LOGGER.error("Model call failed (attempt %d/%d): %s", attempt, total, exc)
                if attempt >= total:
                    return InvocationFailure(error=exc, attempts=attempt)
                await self._sleep(self.policy.delay_after(attempt))
                continue

            LOGGER.info("Model response (trim): %s", _truncate(result))
            return InvocationSuccess(result=result, attempts=attempt + 1)

    async def invoke(self, request: GenerationRequest) -> GenerationResult:
        """Return the first successful result.

        Raises:
            ModelUnavailable: After `max_attempts` consecutive failures, chained
                to the last underlying error.
        """
        outcome = await self.run(request)
        if isinstance(outcome, InvocationFailure):
            raise ModelUnavailable(outcome.attempts, outcome.error) from outcome.error
        return outcome.result
