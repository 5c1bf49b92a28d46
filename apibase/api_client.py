'''
**apibase.api_client**
-----------------

`ApiClient` is the base for HTTP API clients. Every call opens a fresh
connection, replays the session cookies, runs the request hooks, waits at
most `timeout_seconds`, classifies the status code and stores any cookies
the server hands back. Timeouts are retried up to `max_retries` attempts.
'''
import logging
from collections.abc import Mapping
from typing import Any, Self, TextIO

import httpcore
import httpx

from apibase.errors import HTTPError, Timeout
from apibase.hooks import RequestHooks
from apibase.http import ClientConfig, CookieJar, WireLogger, open_connection


logger = logging.getLogger(__name__)

Payload = str | bytes | None

TIMEOUT_STATUSES = frozenset({408, 504})

_TRANSPORT_TIMEOUTS = (
    httpx.TimeoutException,
    httpcore.TimeoutException,
)


def response_is_success(response: httpx.Response) -> bool:
    return 200 <= response.status_code <= 299


def response_is_timeout(response: httpx.Response) -> bool:
    return response.status_code in TIMEOUT_STATUSES


def raise_for_outcome(response: httpx.Response) -> None:
    '''
    Classify a response by its status code.

    Raises
    ------
    Timeout
        status 408 or 504
    HTTPError
        any other status outside of [200, 299]
    '''
    if response_is_timeout(response):
        raise Timeout(f'{response.status_code}:{response.text}')
    if not response_is_success(response):
        raise HTTPError(response.status_code, response.text)


class ApiClient:
    '''
    Blocking HTTP API client with cookie replay and timeout retries.

    The cookie jar has no locking, give each thread (or logical session)
    its own client.
    '''

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        hooks: RequestHooks | None = None,
        transport: httpx.BaseTransport | None = None,
        debug_stream: TextIO | None = None,
    ) -> None:
        '''
        Parameters
        ----------
        config : ClientConfig | None, optional
            Connection settings, by default `ClientConfig()`
        hooks : RequestHooks | None, optional
            Request/response customization, by default no-op hooks
        transport : httpx.BaseTransport | None, optional
            Send every attempt through this transport instead of opening
            a new `ApiTransport`; it stays open between attempts and is
            closed by `close()`. Timeouts it raises as `httpx.TimeoutException`
            or raw `httpcore.TimeoutException` both count as `Timeout`
        debug_stream : TextIO | None, optional
            Where raw wire traffic goes, by default stdout
        '''
        self.config: ClientConfig = config or ClientConfig()
        self.hooks: RequestHooks = hooks or RequestHooks()
        self.cookies: CookieJar = CookieJar()
        self._transport = transport
        self._wire = WireLogger(debug_stream)

    def __repr__(self) -> str:
        return f'{type(self).__name__}(base_url={self.config.base_url!r})'

    def _with_default_params(
        self,
        params: Mapping[str, Any] | None
    ) -> dict[str, Any]:
        merged = dict(params or {})
        self.hooks.inject_default_params(merged)
        return merged

    def get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        suppress_log: bool = False,
        with_retry: bool = True,
    ) -> httpx.Response:
        return self._dispatch(
            'GET',
            path,
            params=self._with_default_params(params),
            suppress_log=suppress_log,
            with_retry=with_retry,
        )

    def post(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        suppress_log: bool = False,
        with_retry: bool = True,
    ) -> httpx.Response:
        return self._dispatch(
            'POST',
            path,
            data=self._with_default_params(params),
            suppress_log=suppress_log,
            with_retry=with_retry,
        )

    def post_with_body(
        self,
        path: str,
        payload: Payload,
        suppress_log: bool = False,
        with_retry: bool = True,
    ) -> httpx.Response:
        return self._dispatch(
            'POST',
            path,
            content=payload,
            suppress_log=suppress_log,
            with_retry=with_retry,
        )

    def put(
        self,
        path: str,
        payload: Payload,
        suppress_log: bool = False,
        with_retry: bool = True,
    ) -> httpx.Response:
        return self._dispatch(
            'PUT',
            path,
            content=payload,
            suppress_log=suppress_log,
            with_retry=with_retry,
        )

    def delete(
        self,
        path: str,
        suppress_log: bool = False,
        with_retry: bool = True,
    ) -> httpx.Response:
        return self._dispatch(
            'DELETE',
            path,
            suppress_log=suppress_log,
            with_retry=with_retry,
        )

    def _dispatch(
        self,
        method: str,
        path: str,
        *,
        suppress_log: bool,
        with_retry: bool,
        **request_kwargs: Any,
    ) -> httpx.Response:
        if not with_retry:
            return self.execute_once(
                method, path, suppress_log=suppress_log, **request_kwargs
            )

        policy = self.config.to_retry_policy()
        return policy.call_with_retries(
            self.execute_once,
            method,
            path,
            description=f'{method} {self.config.url_for(path)}',
            suppress_log=suppress_log,
            **request_kwargs,
        )

    def execute_once(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | None = None,
        content: Payload = None,
        suppress_log: bool = False,
    ) -> httpx.Response:
        '''
        Run a single request/response cycle, no retries.

        Returns
        -------
        httpx.Response
            A 2xx response that passed `check_for_special_response_errors`

        Raises
        ------
        Timeout
            408/504 or the transport timed out
        HTTPError
            any other non-2xx status, message is `"<code>:<body>"`
        '''
        config = self.config
        config.validate()
        connection = open_connection(
            config,
            transport=self._transport,
            wire=None if suppress_log else self._wire,
        )
        try:
            self.hooks.tweak_connection_if_necessary(connection)
            connection.timeout = config.to_timeout()

            request = connection.build_request(
                method,
                config.url_for(path),
                params=params or None,
                data=data or None,
                content=content,
            )
            self.cookies.apply(request)
            self.hooks.tweak_request_if_necessary(request)

            logger.debug(f'making http call to {request.method} {request.url}')
            try:
                response = connection.send(request)
            except _TRANSPORT_TIMEOUTS as exc:
                raise Timeout(
                    f'{request.method} {request.url} timed out after '
                    f'{config.timeout_seconds}s: {exc}'
                ) from exc
        finally:
            # an injected transport outlives the attempt
            if self._transport is None:
                connection.close()

        raise_for_outcome(response)
        self.hooks.check_for_special_response_errors(response)
        logger.debug(f'finished http call to {request.method} {request.url}')

        self.cookies.store_from_response(response)
        return response

    def close(self) -> None:
        if self._transport is not None:
            self._transport.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args) -> None:
        self.close()
