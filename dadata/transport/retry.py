"""Retry policy for transport-level failures.

Only failures that happen before a status code is obtained are retried:
connect errors, timeouts and lower-level network/protocol errors. A
well-formed response of any status is returned to the caller untouched.

Non-idempotent requests (POST) are retried under the same policy; callers
that cannot tolerate a duplicate must make the request idempotent.
"""

import random
import time

import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

MAX_RETRIES = 2  # after the first attempt, so 3 attempts in total
RETRY_INTERVAL = 0.05  # seconds before the first retry
RETRY_INTERVAL_RANDOMNESS = 0.5  # +/- 50% jitter
RETRY_BACKOFF_FACTOR = 2

RETRY_EXCEPTIONS: tuple[type[BaseException], ...] = (httpx.TransportError,)


class wait_jittered_exponential(wait_exponential):
    """Exponential backoff with multiplicative jitter of +/- ``randomness``."""

    def __init__(self, multiplier: float, exp_base: float, randomness: float):
        super().__init__(multiplier=multiplier, exp_base=exp_base)
        self.randomness = randomness

    def __call__(self, retry_state) -> float:
        interval = super().__call__(retry_state)
        return interval * random.uniform(1 - self.randomness, 1 + self.randomness)


def build_retrying(sleep=time.sleep) -> Retrying:
    """Create a fresh retry controller for one submit() call."""
    return Retrying(
        stop=stop_after_attempt(MAX_RETRIES + 1),
        wait=wait_jittered_exponential(
            multiplier=RETRY_INTERVAL,
            exp_base=RETRY_BACKOFF_FACTOR,
            randomness=RETRY_INTERVAL_RANDOMNESS,
        ),
        retry=retry_if_exception_type(RETRY_EXCEPTIONS),
        sleep=sleep,
        reraise=True,
    )
