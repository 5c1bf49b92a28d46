'''
**apibase.errors**
-----------------

The failures an `ApiClient` call can surface. Only `Timeout` is ever
recovered from locally (by the retry policy); everything else goes
straight back to the caller.
'''
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class ApiError(Exception):
    '''
    Base class for every error raised by apibase.
    '''


class Timeout(ApiError, TimeoutError):
    '''
    Raised when the server answers 408/504 or the transport
    itself times out. Retryable.

    Parent: ApiError, TimeoutError
    '''


class HTTPError(ApiError):
    '''
    Raised for any status code outside of [200, 299] that is not a timeout.
    The message is always `"<code>:<body>"`.

    Parent: ApiError
    '''

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f'{status_code}:{body}')
        self.status_code: int = status_code
        self.body: str = body


class ApplicationError(ApiError):
    '''
    Raised by `RequestHooks.check_for_special_response_errors` implementations
    when a 2xx response actually encodes an application level error.

    Parent: ApiError
    '''

    def __init__(
        self,
        message: str,
        response: httpx.Response | None = None
    ) -> None:
        super().__init__(message)
        self.response = response


class InvariantViolation(ApiError, RuntimeError):
    '''
    The retry counter went past its bound, this is a bug in apibase.

    Parent: ApiError, RuntimeError
    '''
