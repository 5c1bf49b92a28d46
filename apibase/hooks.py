'''
**apibase.hooks**
-----------------

Customization points called by `ApiClient` around every request. The
defaults do nothing; pass your own `RequestHooks` to the client to add
required parameters, adjust the connection or request before it is sent,
or turn a 2xx response that actually carries an error into an exception.
'''
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class RequestHooks:
    '''
    No-op implementation of every hook.
    '''

    def inject_default_params(self, params: dict[str, Any]) -> None:
        '''
        Mutate the outgoing parameters of `get`/`post` before they are encoded.
        '''

    def tweak_connection_if_necessary(self, connection: httpx.Client) -> None:
        '''
        Adjust the per attempt connection before the request is built.
        '''

    def tweak_request_if_necessary(self, request: httpx.Request) -> None:
        '''
        Adjust the request (cookies already attached) right before it is sent.
        '''

    def check_for_special_response_errors(self, response: httpx.Response) -> None:
        '''
        Inspect a 2xx response and raise `ApplicationError` if it really
        represents an error. Not called for any other status.
        '''


class DefaultParamsHooks(RequestHooks):
    '''
    Adds constant parameters (an API version, a client id, ...) to every
    `get`/`post`. Values the caller passed explicitly win.
    '''

    def __init__(self, defaults: Mapping[str, Any]) -> None:
        self.defaults: dict[str, Any] = dict(defaults)

    def inject_default_params(self, params: dict[str, Any]) -> None:
        for key, value in self.defaults.items():
            params.setdefault(key, value)
