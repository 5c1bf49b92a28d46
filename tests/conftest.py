import httpx
import pytest

from apibase import ApiClient, ClientConfig
from tests._scripted import Reply, ScriptedServer


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(host='api.test', port=8080, max_retries=3)


@pytest.fixture
def make_client(config):
    def factory(*replies: Reply, **client_kwargs) -> tuple[ApiClient, ScriptedServer]:
        server = ScriptedServer(*replies)
        client = ApiClient(
            config,
            transport=httpx.MockTransport(server),
            **client_kwargs,
        )
        return client, server
    return factory
