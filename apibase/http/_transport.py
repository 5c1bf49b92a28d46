import contextlib
import socket
import ssl

import httpx


class URLRejectedError(ValueError):
    '''
    Raised when a request URL does not use a scheme the transport
    can speak.

    Parent: ValueError
    '''


SUPPORTED_SCHEMES = frozenset({'http', 'https'})


def default_socket_options() -> list[tuple]:
    '''
    cross platform socket options for TCP connections

    Returns
    -------
    list[SockOpt]
    '''
    opts = []

    if hasattr(socket, "TCP_NODELAY"):
        opts.append((socket.IPPROTO_TCP, socket.TCP_NODELAY, 1))

    if hasattr(socket, "SO_KEEPALIVE"):
        opts.append((socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1))

    return opts


def verified_ssl_context(
    ca_file: str | None = None,
    *,
    http2: bool = False
) -> ssl.SSLContext:
    '''
    creates an SSL context that requires a peer certificate signed by
    the given trust store and checks the hostname against it once the
    connection is up.

    - TLS 1.2 is the floor
    - when `ca_file` is None the system trust store is used

    Parameters
    ----------
    ca_file : str | None, optional
        Path to a PEM certificate bundle, by default None
    http2 : bool, optional
        Advertise h2 over ALPN, by default False

    Returns
    -------
    ssl.SSLContext
    '''
    ctx = ssl.create_default_context(
        purpose=ssl.Purpose.SERVER_AUTH,
        cafile=ca_file,
    )

    ctx.minimum_version = ssl.TLSVersion.TLSv1_2
    ctx.maximum_version = ssl.TLSVersion.MAXIMUM_SUPPORTED

    ctx.check_hostname = True
    ctx.verify_mode = ssl.CERT_REQUIRED

    alpn = ["h2", "http/1.1"] if http2 else ["http/1.1"]
    with contextlib.suppress(NotImplementedError):
        ctx.set_alpn_protocols(alpn)

    ctx.options |= ssl.OP_NO_COMPRESSION
    return ctx


def normalize_idna_host(host: str) -> str:
    try:
        return host.encode("idna").decode("ascii")
    except UnicodeError:
        return host


def normalize_request_url(url: httpx.URL) -> httpx.URL:
    if url.scheme not in SUPPORTED_SCHEMES:
        raise URLRejectedError(f"Rejected unsupported URL scheme: {url.scheme}")

    if not url.host:
        return url

    return url.copy_with(host=normalize_idna_host(url.host))


class ApiTransport(httpx.BaseTransport):
    '''
    A single use HTTP transport: opened for one attempt and closed
    right after. Transport level retries are off, retrying on timeouts
    is the job of `retry_policy`.
    '''
    def __init__(
        self,
        *,
        use_ssl: bool = False,
        ca_file: str | None = None,
        http2: bool = False,
    ) -> None:
        verify: ssl.SSLContext | bool = True
        if use_ssl:
            verify = verified_ssl_context(ca_file, http2=http2)

        self._inner: httpx.HTTPTransport = httpx.HTTPTransport(
            http2=http2,
            socket_options=default_socket_options(),
            verify=verify,
            trust_env=False,
            retries=0,
            limits=httpx.Limits(max_keepalive_connections=0),
        )

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        request.url = normalize_request_url(request.url)
        return self._inner.handle_request(request)

    def close(self) -> None:
        self._inner.close()
