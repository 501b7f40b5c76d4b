"""
Bounded retry with exponential backoff for rate-limited remote calls.

Only errors tagged ``ErrorKind.RATE_LIMITED`` are retried; every other
failure propagates on the attempt it occurred. The backoff wait honours an
optional per-call deadline and an optional ``threading.Event`` so a
throttling remote service cannot hold a caller indefinitely.

Usage:
    >>> policy = RetryPolicy(max_attempts=3, initial_delay=0.0)
    >>> with_retry(lambda: "ok", policy)
    'ok'
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from employee_hub.domain.employees.errors import EmployeeServiceError, ErrorKind
from employee_hub.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry configuration shared by every retry-eligible call.

    Attributes:
        max_attempts: Total attempts including the first one (>= 1)
        initial_delay: Seconds to wait before the second attempt (>= 0)
        multiplier: Factor applied to the delay after each retry (>= 1.0)
        max_delay: Optional upper bound for a single wait, in seconds
    """

    max_attempts: int = 3
    initial_delay: float = 1.0
    multiplier: float = 2.0
    max_delay: Optional[float] = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0:
            raise ValueError("initial_delay cannot be negative")
        if self.multiplier < 1.0:
            raise ValueError("multiplier must be >= 1.0")
        if self.max_delay is not None and self.max_delay < 0:
            raise ValueError("max_delay cannot be negative")

    @classmethod
    def from_settings(cls, settings=None) -> "RetryPolicy":
        """Build the policy from application settings."""
        if settings is None:
            from employee_hub.config.settings import get_settings

            settings = get_settings()
        return cls(
            max_attempts=settings.retry_max_attempts,
            initial_delay=settings.retry_initial_delay,
            multiplier=settings.retry_multiplier,
            max_delay=settings.retry_max_delay,
        )

    def next_delay(self, delay: float) -> float:
        grown = delay * self.multiplier
        if self.max_delay is not None:
            return min(grown, self.max_delay)
        return grown

    def first_delay(self) -> float:
        if self.max_delay is not None:
            return min(self.initial_delay, self.max_delay)
        return self.initial_delay


class RetryController:
    """
    Runs callables under a RetryPolicy.

    Stateless apart from its fixed policy, so one instance can be shared by
    concurrent callers.
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        *,
        sleep: Optional[Callable[[float], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.policy = policy or RetryPolicy()
        self._sleep = sleep or time.sleep
        self._clock = clock

    def run(
        self,
        operation: Callable[[], T],
        *,
        operation_name: Optional[str] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> T:
        """
        Execute ``operation`` retrying on rate-limit errors.

        Args:
            operation: Zero-argument callable performing one remote attempt
            operation_name: Label used in log events
            timeout: Seconds after which no further attempt or backoff is started
            cancel_event: Event that interrupts a pending backoff when set

        Returns:
            The operation's result

        Raises:
            EmployeeServiceError: The first non rate-limit error, or the last
                rate-limit error once attempts, deadline or cancellation stop
                the loop
        """
        name = operation_name or getattr(operation, "__name__", "operation")
        return self.run_with_budget(
            lambda remaining: operation(),
            operation_name=name,
            timeout=timeout,
            cancel_event=cancel_event,
        )

    def run_with_budget(
        self,
        operation: Callable[[Optional[float]], T],
        *,
        operation_name: Optional[str] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> T:
        """
        Like ``run``, but each attempt receives the seconds left before the
        deadline (None without ``timeout``) so it can bound its own I/O.
        """
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")

        name = operation_name or getattr(operation, "__name__", "operation")
        log = logger.bind(operation=name)
        max_attempts = self.policy.max_attempts
        deadline = None if timeout is None else self._clock() + timeout
        delay = self.policy.first_delay()

        for attempt in range(1, max_attempts + 1):
            remaining = None if deadline is None else deadline - self._clock()
            try:
                result = operation(remaining)
            except EmployeeServiceError as e:
                if e.kind is not ErrorKind.RATE_LIMITED:
                    raise

                e.attempts = attempt
                if attempt >= max_attempts:
                    log.error("retry.exhausted", attempts=attempt)
                    raise

                if deadline is not None and self._clock() + delay >= deadline:
                    log.warning(
                        "retry.deadline_exceeded",
                        attempts=attempt,
                        timeout_seconds=timeout,
                    )
                    raise

                log.warning(
                    "retry.scheduled",
                    attempt=attempt,
                    max_attempts=max_attempts,
                    delay_seconds=round(delay, 3),
                )
                if not self._wait(delay, cancel_event):
                    log.warning("retry.cancelled", attempts=attempt)
                    raise

                # the wait may overrun; never start an attempt with no budget left
                if deadline is not None and self._clock() >= deadline:
                    log.warning(
                        "retry.deadline_exceeded",
                        attempts=attempt,
                        timeout_seconds=timeout,
                    )
                    raise

                delay = self.policy.next_delay(delay)
            else:
                if attempt > 1:
                    log.info("retry.recovered", attempts=attempt)
                return result

        # range() always enters the loop because max_attempts >= 1
        raise AssertionError("unreachable")

    def _wait(self, delay: float, cancel_event: Optional[threading.Event]) -> bool:
        """Wait ``delay`` seconds; False means the wait was cancelled."""
        if cancel_event is not None:
            if delay <= 0:
                return not cancel_event.is_set()
            return not cancel_event.wait(delay)
        if delay > 0:
            self._sleep(delay)
        return True


def with_retry(operation: Callable[[], T], policy: RetryPolicy, **kwargs) -> T:
    """Run ``operation`` once under ``policy``; see RetryController.run."""
    return RetryController(policy).run(operation, **kwargs)
