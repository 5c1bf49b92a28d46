'''
bounded retry policy for apibase requests

Only `Timeout` is retried, every other exception goes straight through.

Raises
------
Timeout
    _re-raised from the final attempt once all attempts are used up_
InvariantViolation
    _the attempt counter left its bound (a bug, never expected)_
'''

import logging
import random
import time
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from apibase.errors import InvariantViolation, Timeout

P = ParamSpec("P")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class retry_policy:

    _RETRYABLE_ERRORS = (Timeout,)

    def __init__(
        self,
        *,
        attempts: int = 3,
        delay: float = 0.0,
        jitter: float = 0.0,
    ) -> None:
        '''
        Parameters
        ----------
        attempts : int, optional
            The maximum number of attempts, by default 3
        delay : float, optional
            The base delay between attempts, by default 0.0 (no wait)
        jitter : float, optional
            The jitter factor to apply to the delay, by default 0.0
        '''
        self.attempts: int = attempts
        self.delay: float = delay
        self.jitter: float = jitter

    def get_timeout(self, attempt_no: int) -> float:
        base = self.delay * attempt_no

        if self.jitter:
            j = base * self.jitter
            base += random.uniform(-j, j)

        return max(0.0, base)

    def call_with_retries(
        self,
        func: Callable[P, R],
        /,
        *args,
        description: str = '',
        **kwargs
    ) -> R:
        what = description or getattr(func, '__qualname__', repr(func))

        # attempts + 1 is the hard ceiling, the loop always returns
        # or raises before reaching it
        ceiling = self.attempts + 1
        for attempt_no in range(1, ceiling + 1):
            try:
                return func(*args, **kwargs)
            except self._RETRYABLE_ERRORS as exc:
                if attempt_no >= self.attempts:
                    raise
                logger.warning(
                    f'caught {type(exc).__name__} making http request, '
                    f'will try again (attempt {attempt_no + 1}/{self.attempts}): '
                    f'{what}, {exc}'
                )
                wait = self.get_timeout(attempt_no)
                if wait:
                    time.sleep(wait)

        raise InvariantViolation(
            f'retry loop ran past its bound of {ceiling} attempts for {what}'
        )
