import pytest

from reqcraft.context import QueueContext
from reqcraft.endpoint import HTTPMethod, StaticEndpoint
from reqcraft.transport import Transport, TransportResult


@pytest.fixture
def anyio_backend() -> str:
    return 'asyncio'


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    '''Keep REQCRAFT_* settings from the outer environment out of tests.'''
    monkeypatch.delenv('REQCRAFT_TIMEOUT', raising=False)
    monkeypatch.delenv('REQCRAFT_FOLLOW_REDIRECTS', raising=False)


@pytest.fixture
def users_endpoint() -> StaticEndpoint:
    return StaticEndpoint(
        base_url_string='https://api.example.com',
        path='/v1/users',
        http_method=HTTPMethod.GET,
        port=8080,
    )


@pytest.fixture
def context() -> QueueContext:
    return QueueContext()


class FakeTransport(Transport):
    '''Returns a canned result and records what it was asked to send.'''

    def __init__(self, result: TransportResult | None = None, raises: Exception | None = None) -> None:
        self.result = result or TransportResult()
        self.raises = raises
        self.requests = []

    async def send(self, request):
        self.requests.append(request)
        if self.raises is not None:
            raise self.raises
        return self.result


@pytest.fixture
def fake_transport_factory():
    return FakeTransport
