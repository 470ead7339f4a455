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

import logging
from typing import TYPE_CHECKING, Any, List, Optional

from .errors import InvalidData
from .guild import Guild
from .http import HTTPClient

if TYPE_CHECKING:
    from typing_extensions import Self
    from types import TracebackType

    from .abc import GuildChannel
    from .types.guild import Guild as GuildPayload

log = logging.getLogger(__name__)


__all__ = (
    'Client',
)


class Client:
    """The entry point of the library. Owns the HTTP session and the cache
    of guilds that channels read from.

    It can be used as an asynchronous context manager, in which case the
    session is closed on exit: ::

        async with guildkit.Client() as client:
            await client.login(token)
            guild = await client.fetch_guild(guild_id)
            channel = guild.get_channel(channel_id)
            await channel.set_position(0)

    Parameters
    -----------
    max_retries: :class:`int`
        How many times a request is attempted when it is rate limited or
        Discord has a server error. Defaults to ``5``.
    base_url: Optional[:class:`str`]
        Override the API base URL.
    connector: Optional[:class:`aiohttp.BaseConnector`]
        The connector to use for the HTTP session.
    """

    def __init__(self, **options: Any):
        self.http: HTTPClient = HTTPClient(
            connector=options.pop('connector', None),
            max_retries=options.pop('max_retries', 5),
            base_url=options.pop('base_url', None),
        )
        if options:
            raise TypeError(f'Unexpected options: {", ".join(options)}')

        self._closed: bool = False

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        if not self.is_closed():
            await self.close()

    @property
    def guilds(self) -> List[Guild]:
        """List[:class:`.Guild`]: The guilds that are cached."""
        return list(self.http._guilds.values())

    def is_closed(self) -> bool:
        return self._closed

    async def login(self, token: str) -> None:
        """|coro|

        Set the bot token that requests are authenticated with.
        """
        log.info('Logging in using static token.')
        await self.http.static_login(token.strip())

    async def close(self) -> None:
        """|coro|

        Close the HTTP session.
        """
        if self._closed:
            return

        await self.http.close()
        self._closed = True

    def get_guild(self, guild_id: int, /) -> Optional[Guild]:
        return self.http._get_guild(guild_id)

    def get_channel(self, channel_id: int, /) -> Optional[GuildChannel]:
        for guild in self.http._guilds.values():
            channel = guild.get_channel(channel_id)
            if channel is not None:
                return channel
        return None

    def _add_guild_from_data(self, data: GuildPayload) -> Guild:
        guild = Guild(state=self.http, data=data)
        self.http.add_to_guild_cache(guild)
        return guild

    async def fetch_guild(self, guild_id: int, /) -> Guild:
        """|coro|

        Fetch a guild and its channels from the API and cache them.

        Members are only cached if Discord includes them in the guild
        payload.

        Raises
        -------
        InvalidData
            Discord returned something other than a guild and its channels.
        HTTPException
            Fetching the guild failed.

        Returns
        --------
        :class:`.Guild`
        """
        data = await self.http.get_guild(guild_id)
        channels = await self.http.get_guild_channels(guild_id)
        if not isinstance(data, dict) or not isinstance(channels, list):
            raise InvalidData('Unexpected payload when fetching a guild.')

        data = {**data, 'channels': channels}

        guild = self.get_guild(int(data['id']))
        if guild is not None:
            guild._sync_channels(channels)
            return guild

        return self._add_guild_from_data(data)
