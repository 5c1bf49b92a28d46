'''
**apibase.http**
---------

The HTTP plumbing behind `ApiClient`: the connection settings, a single
use transport with certificate verification, the session cookie jar, the
raw wire logger and the timeout retry policy. `ApiClient` is the intended
entry point, but these pieces can be used on their own.
'''
from apibase.http._client import (
    ClientConfig,
    WireLogger,
    open_connection,
)
from apibase.http._cookies import CookieJar, parse_set_cookie
from apibase.http._retry import retry_policy
from apibase.http._transport import (
    ApiTransport,
    URLRejectedError,
    verified_ssl_context,
)

__all__ = [
    'ClientConfig',
    'WireLogger',
    'open_connection',
    'CookieJar',
    'parse_set_cookie',
    'retry_policy',
    'ApiTransport',
    'URLRejectedError',
    'verified_ssl_context',
]
