'''
**apibase**
---------

A base for blocking HTTP API clients: GET/POST/PUT/DELETE against a
configured host, timeout retries, session cookie replay, request hooks,
and `ResultView` for reading decoded results by field name.
'''
from apibase.api_client import ApiClient
from apibase.errors import (
    ApiError,
    ApplicationError,
    HTTPError,
    InvariantViolation,
    Timeout,
)
from apibase.hooks import DefaultParamsHooks, RequestHooks
from apibase.http import ClientConfig, CookieJar
from apibase.result import ResultView

__all__ = [
    'ApiClient',
    'ApiError',
    'ApplicationError',
    'HTTPError',
    'InvariantViolation',
    'Timeout',
    'DefaultParamsHooks',
    'RequestHooks',
    'ClientConfig',
    'CookieJar',
    'ResultView',
]
