"""
MIT License

Copyright (c) 2020-present shay (shayypy)

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

------------------------------------------------------------------------------

This project includes code from https://github.com/Rapptz/discord.py, which is
available under the MIT license:

The MIT License (MIT)

Copyright (c) 2015-present Rapptz

Permission is hereby granted, free of charge, to any person obtaining a
copy of this software and associated documentation files (the "Software"),
to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense,
and/or sell copies of the Software, and to permit persons to whom the
Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS
OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
DEALINGS IN THE SOFTWARE.
"""

from __future__ import annotations
import sys

import aiohttp
import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Optional, Union
from urllib.parse import quote as _uriquote

from . import __version__
from .errors import DiscordServerError, Forbidden, HTTPException, NotFound

log = logging.getLogger(__name__)


if TYPE_CHECKING:
    from .types.channel import (
        ChannelPosition as ChannelPositionPayload,
        GuildChannel as GuildChannelPayload,
        PermissionOverwrite as PermissionOverwritePayload,
    )
    from .types.invite import CreateInvite as CreateInvitePayload, Invite as InvitePayload

    from .guild import Guild


async def json_or_text(response: aiohttp.ClientResponse) -> Union[Dict[str, Any], List[Any], str]:
    text = await response.text(encoding='utf-8')
    try:
        if response.headers['content-type'] == 'application/json':
            return json.loads(text)
    except KeyError:
        # Thanks Cloudflare
        pass

    return text


class Route:
    BASE: ClassVar[str] = 'https://discord.com/api/v10'

    def __init__(self, method: str, path: str, *, override_base: Optional[str] = None):
        self.method = method
        self.path = path

        base = override_base if override_base is not None else self.BASE
        self.url = base + path

    def __repr__(self) -> str:
        return f'<Route {self.method} {self.path}>'


class HTTPClient:
    """Sends requests to Discord's REST API and holds the guild cache.

    Parameters
    -----------
    connector: Optional[:class:`aiohttp.BaseConnector`]
        The connector to create the session with.
    max_retries: :class:`int`
        How many times a request is attempted when it is rate limited or
        Discord has a server error. Defaults to ``5``.
    base_url: Optional[:class:`str`]
        The API base URL. Defaults to :attr:`Route.BASE`.
    """

    def __init__(
        self,
        *,
        connector: Optional[aiohttp.BaseConnector] = None,
        max_retries: int = 5,
        base_url: Optional[str] = None,
    ):
        if max_retries < 1:
            raise ValueError('max_retries must be at least 1')

        self.connector = connector
        self.session: Optional[aiohttp.ClientSession] = None
        self.token: Optional[str] = None
        self.max_retries: int = max_retries
        self.base_url: Optional[str] = base_url

        self._guilds: Dict[int, Guild] = {}

        user_agent = 'DiscordBot (https://github.com/guildkit/guildkit {0}) Python/{1[0]}.{1[1]} aiohttp/{2}'
        self.user_agent: str = user_agent.format(__version__, sys.version_info, aiohttp.__version__)

    # cache

    def _get_guild(self, guild_id: int) -> Optional[Guild]:
        return self._guilds.get(guild_id)

    def add_to_guild_cache(self, guild: Guild) -> None:
        self._guilds[guild.id] = guild

    # session

    async def static_login(self, token: str) -> None:
        self.token = token
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(connector=self.connector)

    async def close(self) -> None:
        if self.session:
            await self.session.close()

    async def request(
        self,
        route: Route,
        *,
        json: Optional[Any] = None,
        reason: Optional[str] = None,
    ) -> Any:
        if self.base_url is not None:
            route = Route(route.method, route.path, override_base=self.base_url)

        url = route.url
        method = route.method

        # create headers
        headers: Dict[str, str] = {
            'User-Agent': self.user_agent,
        }

        if self.token:
            headers['Authorization'] = f'Bot {self.token}'

        if reason:
            headers['X-Audit-Log-Reason'] = _uriquote(reason, safe='/ ')

        kwargs: Dict[str, Any] = {}
        if json is not None:
            headers['Content-Type'] = 'application/json'
            kwargs['data'] = _to_json(json)

        kwargs['headers'] = headers

        log_headers = headers.copy()
        if 'Authorization' in log_headers:
            log_headers['Authorization'] = 'Bot [removed]'

        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(connector=self.connector)

        response: Optional[aiohttp.ClientResponse] = None
        data: Optional[Union[Dict[str, Any], List[Any], str]] = None
        for tries in range(self.max_retries):
            try:
                response = await self.session.request(method, url, **kwargs)
            except OSError as exc:
                # Connection reset by peer
                if tries < self.max_retries - 1 and exc.errno in (54, 10054):
                    await asyncio.sleep(1 + tries * 2)
                    continue
                raise

            log.debug('%s %s with data %s, headers %s, has returned %s', method, url, kwargs.get('data'), log_headers, response.status)

            data = await json_or_text(response)
            log.debug('%s %s has received %s', method, url, data)

            # The request was successful so just return the text/json
            if 300 > response.status >= 200:
                if response.status == 204:
                    return None
                return data

            if response.status == 429:
                retry_after: Optional[float] = None
                if isinstance(data, dict) and 'retry_after' in data:
                    retry_after = float(data['retry_after'])
                elif response.headers.get('retry-after') is not None:
                    retry_after = float(response.headers['retry-after'])
                if retry_after is None:
                    retry_after = 1 + tries * 2

                log.warning(
                    'Rate limited on %s. Retrying in %s seconds',
                    route.path,
                    retry_after,
                )
                await asyncio.sleep(retry_after)
                log.debug('Done sleeping for the rate limit. Retrying...')

                continue

            # We've received a 500, 502, or 504, unconditional retry
            if response.status in {500, 502, 504}:
                await asyncio.sleep(1 + tries * 2)
                continue

            if response.status == 403:
                raise Forbidden(response, data)
            elif response.status == 404:
                raise NotFound(response, data)
            elif response.status >= 500:
                raise DiscordServerError(response, data)
            else:
                raise HTTPException(response, data)

        if response is not None:
            # We've run out of retries
            if response.status >= 500:
                raise DiscordServerError(response, data)

            raise HTTPException(response, data)

        raise RuntimeError('Unreachable code in HTTP handling')

    # /channels

    def edit_channel(
        self,
        channel_id: int,
        payload: Dict[str, Any],
        *,
        reason: Optional[str] = None,
    ):
        return self.request(Route('PATCH', f'/channels/{channel_id}'), json=payload, reason=reason)

    def delete_channel(self, channel_id: int, *, reason: Optional[str] = None):
        return self.request(Route('DELETE', f'/channels/{channel_id}'), reason=reason)

    def create_channel_invite(
        self,
        channel_id: int,
        payload: CreateInvitePayload,
        *,
        reason: Optional[str] = None,
    ):
        return self.request(Route('POST', f'/channels/{channel_id}/invites'), json=payload, reason=reason)

    def get_channel_invites(self, channel_id: int):
        return self.request(Route('GET', f'/channels/{channel_id}/invites'))

    def edit_channel_permissions(
        self,
        channel_id: int,
        target_id: int,
        payload: PermissionOverwritePayload,
        *,
        reason: Optional[str] = None,
    ):
        route = Route('PUT', f'/channels/{channel_id}/permissions/{target_id}')
        return self.request(route, json=payload, reason=reason)

    # /guilds

    def get_guild(self, guild_id: int):
        return self.request(Route('GET', f'/guilds/{guild_id}'))

    def get_guild_channels(self, guild_id: int):
        return self.request(Route('GET', f'/guilds/{guild_id}/channels'))

    def create_guild_channel(
        self,
        guild_id: int,
        payload: Dict[str, Any],
        *,
        reason: Optional[str] = None,
    ):
        return self.request(Route('POST', f'/guilds/{guild_id}/channels'), json=payload, reason=reason)

    def modify_guild_channel_positions(
        self,
        guild_id: int,
        payload: List[ChannelPositionPayload],
        *,
        reason: Optional[str] = None,
    ):
        return self.request(Route('PATCH', f'/guilds/{guild_id}/channels'), json=payload, reason=reason)


def _to_json(obj: Any) -> str:
    return json.dumps(obj, separators=(',', ':'), ensure_ascii=True)
