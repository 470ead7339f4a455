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
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Optional, Tuple

from .user import User
from .utils import _get_as_snowflake

if TYPE_CHECKING:
    from .types.invite import Invite as InvitePayload

    from .guild import Guild


__all__ = (
    'Invite',
)


class Invite:
    """Represents an invite that can be used to add members to a :class:`.Guild`.

    Attributes
    -----------
    code: :class:`str`
        The URL fragment used for the invite.
    channel_id: Optional[:class:`int`]
        The ID of the channel that the invite points to.
    guild_id: Optional[:class:`int`]
        The ID of the guild that the invite is for.
    inviter: Optional[:class:`~guildkit.User`]
        The user that created the invite.
    uses: Optional[:class:`int`]
        How many times the invite has been used.
    max_uses: Optional[:class:`int`]
        How many times the invite can be used. ``0`` means unlimited.
    max_age: Optional[:class:`int`]
        How long the invite is valid for, in seconds. ``0`` means forever.
    temporary: :class:`bool`
        Whether the invite grants temporary membership.
    """

    BASE = 'https://discord.gg'

    __slots__: Tuple[str, ...] = (
        'code',
        'channel_id',
        'guild_id',
        'inviter',
        'uses',
        'max_uses',
        'max_age',
        'temporary',
        'created_at',
        '_guild',
    )

    def __init__(self, *, data: InvitePayload, guild: Optional[Guild] = None):
        self._guild = guild

        self.code: str = data['code']
        self.channel_id: Optional[int] = _get_as_snowflake(data.get('channel') or {}, 'id')
        self.guild_id: Optional[int] = _get_as_snowflake(data.get('guild') or {}, 'id')
        if self.guild_id is None and guild is not None:
            self.guild_id = guild.id

        inviter = data.get('inviter')
        self.inviter: Optional[User] = User(data=inviter) if inviter else None

        self.uses: Optional[int] = data.get('uses')
        self.max_uses: Optional[int] = data.get('max_uses')
        self.max_age: Optional[int] = data.get('max_age')
        self.temporary: bool = data.get('temporary', False)

        created_at = data.get('created_at')
        self.created_at: Optional[datetime.datetime] = datetime.datetime.fromisoformat(created_at) if created_at else None

    def __str__(self) -> str:
        return self.url

    def __repr__(self) -> str:
        return f'<Invite code={self.code!r} channel_id={self.channel_id!r} guild_id={self.guild_id!r}>'

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Invite) and self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    @property
    def url(self) -> str:
        """:class:`str`: The full URL of the invite."""
        return f'{self.BASE}/{self.code}'

    @property
    def guild(self) -> Optional[Guild]:
        """Optional[:class:`.Guild`]: The guild that the invite is for, if
        it is known."""
        return self._guild
