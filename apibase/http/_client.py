import dataclasses as dc
import logging
import sys
from typing import Any, TextIO

import httpx

from apibase.http._retry import retry_policy
from apibase.http._transport import ApiTransport


logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class ClientConfig:
    '''
    Connection settings for an `ApiClient`. The client reads them at the
    start of every attempt, so changing a field affects the next request.
    '''
    protocol: str = 'http'
    host: str = 'localhost'
    port: int = 80
    use_ssl: bool = False
    timeout_seconds: int = 5
    max_retries: int = 3
    ca_file: str | None = None
    http2: bool = False
    retry_delay: float = 0.0
    retry_jitter: float = 0.0

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        '''
        Checked on construction and again whenever a call starts,
        since every field stays writable.

        Raises
        ------
        ValueError
        '''
        if self.max_retries < 0:
            raise ValueError(f'max_retries must be >= 0, got {self.max_retries}')
        if self.timeout_seconds <= 0:
            raise ValueError(
                f'timeout_seconds must be > 0, got {self.timeout_seconds}'
            )

    @property
    def scheme(self) -> str:
        # use_ssl always means TLS, whatever the protocol says
        return 'https' if self.use_ssl else self.protocol

    @property
    def base_url(self) -> str:
        return f'{self.scheme}://{self.host}:{self.port}'

    def url_for(self, path: str) -> str:
        return f'{self.base_url}/{path.lstrip("/")}'

    def to_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(float(self.timeout_seconds))

    def to_retry_policy(self) -> retry_policy:
        self.validate()
        return retry_policy(
            attempts=self.max_retries,
            delay=self.retry_delay,
            jitter=self.retry_jitter,
        )

    def create_transport(self) -> ApiTransport:
        return ApiTransport(
            use_ssl=self.use_ssl,
            ca_file=self.ca_file,
            http2=self.http2,
        )


def _decode_body(content: bytes) -> str:
    return content.decode('utf-8', errors='replace')


class WireLogger:
    '''
    httpx event hooks that dump the raw request and response going over
    the wire to a text stream (stdout unless told otherwise).
    '''
    __slots__ = ('_stream',)

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # resolved late so a swapped sys.stdout is honoured
        return self._stream or sys.stdout

    def _emit(self, prefix: str, lines: list[str]) -> None:
        out = self.stream
        for line in lines:
            out.write(f'{prefix} {line}\n')
        out.flush()

    def on_request(self, request: httpx.Request) -> None:
        target = request.url.raw_path.decode('ascii')
        lines = [f'{request.method} {target} HTTP/1.1']
        lines.extend(
            f'{name}: {value}'
            for name, value in request.headers.multi_items()
        )
        body = request.read()
        if body:
            lines.append('')
            lines.append(_decode_body(body))
        self._emit('->', lines)

    def on_response(self, response: httpx.Response) -> None:
        body = response.read()
        lines = [
            f'{response.http_version} {response.status_code} {response.reason_phrase}'
        ]
        lines.extend(
            f'{name}: {value}'
            for name, value in response.headers.multi_items()
        )
        if body:
            lines.append('')
            lines.append(_decode_body(body))
        self._emit('<-', lines)

    def event_hooks(self) -> dict[str, list[Any]]:
        return {
            'request': [self.on_request],
            'response': [self.on_response],
        }


def open_connection(
    config: ClientConfig,
    *,
    transport: httpx.BaseTransport | None = None,
    wire: WireLogger | None = None,
) -> httpx.Client:
    '''
    Open the single use `httpx.Client` for one attempt.

    Parameters
    ----------
    config : ClientConfig
    transport : httpx.BaseTransport | None, optional
        Use this transport instead of a fresh `ApiTransport`, by default None
    wire : WireLogger | None, optional
        Dump raw traffic through this logger, by default None (silent)

    Returns
    -------
    httpx.Client
    '''
    logger.debug(f'opening connection to {config.base_url}')
    return httpx.Client(
        transport=transport or config.create_transport(),
        timeout=config.to_timeout(),
        event_hooks=wire.event_hooks() if wire else None,
        follow_redirects=False,
        trust_env=False,
    )
