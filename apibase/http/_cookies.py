'''
Session cookie store for `ApiClient`.

Only the leading `name=value` token of each Set-Cookie entry is kept,
attributes (Path, Expires, HttpOnly, ...) are dropped and never sent back.
'''
from collections.abc import Iterable, Iterator

import httpx


def parse_set_cookie(entry: str) -> tuple[str, str] | None:
    '''
    Split a single Set-Cookie value into its name and its literal
    `name=value` token.

    Parameters
    ----------
    entry : str
        e.g. `"sid=abc; Path=/; HttpOnly"`

    Returns
    -------
    tuple[str, str] | None
        `("sid", "sid=abc")`, or None when the entry has no name
    '''
    token = entry.split(';', 1)[0].strip()
    name = token.split('=', 1)[0].strip()
    if not name:
        return None
    return name, token


class CookieJar:
    '''
    Maps a cookie name to the full `name=value` token last received
    for it, last write wins. Not thread safe.
    '''
    __slots__ = ('_cookies',)

    def __init__(self) -> None:
        self._cookies: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._cookies)

    def __iter__(self) -> Iterator[str]:
        return iter(self._cookies)

    def __contains__(self, name: object) -> bool:
        return name in self._cookies

    def __getitem__(self, name: str) -> str:
        return self._cookies[name]

    def __repr__(self) -> str:
        return f'CookieJar({self._cookies!r})'

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._cookies.get(name, default)

    def as_dict(self) -> dict[str, str]:
        return dict(self._cookies)

    def header_value(self) -> str:
        return '; '.join(self._cookies.values())

    def store(self, entries: Iterable[str]) -> None:
        for entry in entries:
            parsed = parse_set_cookie(entry)
            if parsed is None:
                continue
            name, token = parsed
            self._cookies[name] = token

    def store_from_response(self, response: httpx.Response) -> None:
        self.store(response.headers.get_list('set-cookie'))

    def apply(self, request: httpx.Request) -> None:
        if self._cookies:
            request.headers['Cookie'] = self.header_value()

    def clear(self) -> None:
        self._cookies.clear()
