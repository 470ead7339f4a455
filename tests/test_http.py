"""Tests for guildkit.http."""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from guildkit.errors import DiscordServerError, Forbidden, HTTPException, NotFound
from guildkit.http import HTTPClient, Route


def make_response(status: int, body=None, *, headers=None):
    response = MagicMock()
    response.status = status
    response.reason = 'Reason'
    response.headers = dict(headers or {})
    if body is None:
        text = ''
    elif isinstance(body, str):
        text = body
    else:
        text = json.dumps(body)
        response.headers.setdefault('content-type', 'application/json')
    response.text = AsyncMock(return_value=text)
    return response


@pytest.fixture
def sleep(monkeypatch) -> AsyncMock:
    mock = AsyncMock()
    monkeypatch.setattr(asyncio, 'sleep', mock)
    return mock


def make_client(*responses, **options) -> HTTPClient:
    http = HTTPClient(**options)
    http.token = 'token'
    http.session = MagicMock()
    http.session.closed = False
    http.session.request = AsyncMock(side_effect=list(responses))
    return http


class TestRoute:
    def test_url(self):
        route = Route('GET', '/channels/1')

        assert route.url == 'https://discord.com/api/v10/channels/1'
        assert route.method == 'GET'

    def test_override_base(self):
        route = Route('GET', '/channels/1', override_base='http://localhost')

        assert route.url == 'http://localhost/channels/1'


class TestHTTPClient:
    def test_max_retries_must_be_positive(self):
        with pytest.raises(ValueError):
            HTTPClient(max_retries=0)

    @pytest.mark.asyncio
    async def test_returns_json(self):
        http = make_client(make_response(200, {'id': '1'}))

        assert await http.request(Route('GET', '/channels/1')) == {'id': '1'}

    @pytest.mark.asyncio
    async def test_no_content(self):
        http = make_client(make_response(204))

        assert await http.request(Route('DELETE', '/channels/1')) is None

    @pytest.mark.asyncio
    async def test_plain_text_body(self):
        http = make_client(make_response(200, 'ok'))

        assert await http.request(Route('GET', '/')) == 'ok'

    @pytest.mark.asyncio
    async def test_headers_and_body(self):
        http = make_client(make_response(200, {}))

        await http.request(Route('PATCH', '/channels/1'), json={'name': 'a'}, reason='moving things/around')

        method, url = http.session.request.await_args.args
        kwargs = http.session.request.await_args.kwargs
        assert method == 'PATCH'
        assert url == 'https://discord.com/api/v10/channels/1'
        assert kwargs['data'] == '{"name":"a"}'
        headers = kwargs['headers']
        assert headers['Authorization'] == 'Bot token'
        assert headers['Content-Type'] == 'application/json'
        assert headers['X-Audit-Log-Reason'] == 'moving things/around'

    @pytest.mark.asyncio
    async def test_reason_is_quoted(self):
        http = make_client(make_response(204))

        await http.request(Route('DELETE', '/channels/1'), reason='café?')

        headers = http.session.request.await_args.kwargs['headers']
        assert headers['X-Audit-Log-Reason'] == 'caf%C3%A9%3F'

    @pytest.mark.asyncio
    async def test_base_url_option(self):
        http = make_client(make_response(204), base_url='http://localhost:8080')

        await http.request(Route('GET', '/guilds/1'))

        assert http.session.request.await_args.args[1] == 'http://localhost:8080/guilds/1'

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'status, error',
        [(403, Forbidden), (404, NotFound), (400, HTTPException), (503, DiscordServerError)],
    )
    async def test_error_statuses(self, status, error):
        http = make_client(make_response(status, {'message': 'nope', 'code': 50013}))

        with pytest.raises(error) as exc_info:
            await http.request(Route('GET', '/'))

        assert exc_info.value.status == status
        assert exc_info.value.code == 50013
        assert exc_info.value.text == 'nope'

    @pytest.mark.asyncio
    async def test_rate_limit_is_retried(self, sleep):
        http = make_client(
            make_response(429, {'retry_after': 0.5, 'message': 'slow down'}),
            make_response(200, {'ok': True}),
        )

        assert await http.request(Route('GET', '/')) == {'ok': True}
        sleep.assert_awaited_once_with(0.5)
        assert http.session.request.await_count == 2

    @pytest.mark.asyncio
    async def test_rate_limit_header(self, sleep):
        http = make_client(
            make_response(429, 'slow down', headers={'retry-after': '2'}),
            make_response(204),
        )

        await http.request(Route('GET', '/'))

        sleep.assert_awaited_once_with(2.0)

    @pytest.mark.asyncio
    async def test_server_errors_exhaust_retries(self, sleep):
        http = make_client(*(make_response(502, 'bad gateway') for _ in range(2)), max_retries=2)

        with pytest.raises(DiscordServerError):
            await http.request(Route('GET', '/'))

        assert http.session.request.await_count == 2

    @pytest.mark.asyncio
    async def test_connection_reset_is_retried(self, sleep):
        http = make_client(ConnectionResetError(54, 'reset'), make_response(204))

        assert await http.request(Route('GET', '/')) is None
        assert sleep.await_count == 1

    @pytest.mark.asyncio
    async def test_endpoint_routes(self):
        http = make_client(make_response(204))

        await http.edit_channel_permissions(10, 300, {'id': '300'}, reason=None)

        method, url = http.session.request.await_args.args
        assert method == 'PUT'
        assert url.endswith('/channels/10/permissions/300')

    @pytest.mark.asyncio
    async def test_positions_route(self):
        http = make_client(make_response(204))

        await http.modify_guild_channel_positions(100, [{'id': '1', 'position': 0}])

        method, url = http.session.request.await_args.args
        assert method == 'PATCH'
        assert url.endswith('/guilds/100/channels')
        assert http.session.request.await_args.kwargs['data'] == '[{"id":"1","position":0}]'
