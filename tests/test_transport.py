import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

from reqcraft.builder import build_request
from reqcraft.config import RequestConfig
from reqcraft.endpoint import HTTPMethod, StaticEndpoint
from reqcraft.transport import HttpxTransport, create_transport

URL = 'https://api.example.com:8080/v1/users?id=42'


class TestHttpxTransport:
    @pytest.mark.anyio
    async def test_send(self, httpx_mock: HTTPXMock, users_endpoint: StaticEndpoint):
        httpx_mock.add_response(url=URL, json={'id': '42'})

        result = await HttpxTransport().send(build_request(users_endpoint, parameters={'id': '42'}))

        assert result.error is None
        assert json.loads(result.data) == {'id': '42'}
        assert result.response.status_code == 200
        sent = httpx_mock.get_request()
        assert sent.method == 'GET'
        assert sent.headers['Accept'] == 'application/json; charset=utf-8; v=2'

    @pytest.mark.anyio
    async def test_empty_body_is_no_data(self, httpx_mock: HTTPXMock, users_endpoint: StaticEndpoint):
        httpx_mock.add_response(url=URL, status_code=204)

        result = await HttpxTransport().send(build_request(users_endpoint, parameters={'id': '42'}))

        assert result.data is None
        assert result.error is None
        assert result.response.status_code == 204

    @pytest.mark.anyio
    async def test_error_status_is_not_transport_error(self, httpx_mock: HTTPXMock, users_endpoint: StaticEndpoint):
        httpx_mock.add_response(url=URL, status_code=500, text='boom')

        result = await HttpxTransport().send(build_request(users_endpoint, parameters={'id': '42'}))

        assert result.error is None
        assert result.data == b'boom'

    @pytest.mark.anyio
    async def test_network_failure(self, httpx_mock: HTTPXMock, users_endpoint: StaticEndpoint):
        httpx_mock.add_exception(httpx.ConnectError('connection refused'), url=URL)

        result = await HttpxTransport().send(build_request(users_endpoint, parameters={'id': '42'}))

        assert isinstance(result.error, httpx.ConnectError)
        assert result.data is None
        assert result.response is None

    @pytest.mark.anyio
    async def test_injected_client_left_open(self, httpx_mock: HTTPXMock, users_endpoint: StaticEndpoint):
        httpx_mock.add_response(url=URL, text='ok')

        async with httpx.AsyncClient() as client:
            result = await HttpxTransport(client=client).send(build_request(users_endpoint, parameters={'id': '42'}))
            assert not client.is_closed

        assert result.data == b'ok'

    @pytest.mark.anyio
    async def test_client_cookies_not_sent(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url='https://api.example.com/v1/session', text='ok')
        endpoint = StaticEndpoint('https://api.example.com', '/v1/session', HTTPMethod.GET)

        async with httpx.AsyncClient(cookies={'session': 'abc'}) as client:
            await HttpxTransport(client=client).send(build_request(endpoint))

        assert 'cookie' not in httpx_mock.get_request().headers


class TestCreateTransport:
    def test_httpx(self):
        transport = create_transport('httpx', timeout=5.0)

        assert isinstance(transport, HttpxTransport)
        assert transport.timeout == 5.0

    def test_unknown(self):
        with pytest.raises(ValueError):
            create_transport('curl')

    def test_from_config(self):
        transport = HttpxTransport.from_config(RequestConfig(timeout=2.5, follow_redirects=False))

        assert transport.timeout == 2.5
        assert transport.follow_redirects is False
        assert transport.client is None
