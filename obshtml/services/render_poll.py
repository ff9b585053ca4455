"""
Bounded polling for content that is produced asynchronously.

The rendering surface has no "render finished" event, so readiness is
approximated: wait a fixed delay, read, and re-read at a fixed interval while
the result is still empty, up to a maximum number of reads.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from obshtml.domain.interfaces import IConfigService
from obshtml.utils.constants import (
    RENDER_INITIAL_DELAY_MS,
    RENDER_MAX_ATTEMPTS,
    RENDER_RETRY_INTERVAL_MS,
)

Sleep = Callable[[int], None]


@dataclass(frozen=True)
class RetryPolicy:
    initial_delay_ms: int = RENDER_INITIAL_DELAY_MS
    interval_ms: int = RENDER_RETRY_INTERVAL_MS
    max_attempts: int = RENDER_MAX_ATTEMPTS  # number of reads, not of retries

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay_ms < 0 or self.interval_ms < 0:
            raise ValueError("delays must not be negative")

    @classmethod
    def from_config(cls, config: IConfigService) -> RetryPolicy:
        def _int(key: str, default: int) -> int:
            value = config.get_int("export", key, default)
            return default if value is None else value

        return cls(
            initial_delay_ms=_int("initial_delay_ms", RENDER_INITIAL_DELAY_MS),
            interval_ms=_int("retry_interval_ms", RENDER_RETRY_INTERVAL_MS),
            max_attempts=_int("max_attempts", RENDER_MAX_ATTEMPTS),
        )


@dataclass(frozen=True)
class Ready:
    content: str


@dataclass(frozen=True)
class TimedOut:
    attempts: int


PollOutcome = Ready | TimedOut


def poll_until_ready(read: Callable[[], str], policy: RetryPolicy, sleep: Sleep) -> PollOutcome:
    sleep(policy.initial_delay_ms)
    for attempt in range(1, policy.max_attempts + 1):
        if attempt > 1:
            sleep(policy.interval_ms)
        content = read()
        if content:
            return Ready(content)
    return TimedOut(attempts=policy.max_attempts)
