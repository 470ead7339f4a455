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
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set, Tuple, Union

from .enums import OverwriteType
from .errors import ObjectNotFound
from .mixins import Hashable
from .role import Role
from .user import Member
from .utils import _get_id

if TYPE_CHECKING:
    from .types.channel import GuildChannel as GuildChannelPayload
    from .types.guild import Guild as GuildPayload

    from .abc import GuildChannel
    from .http import HTTPClient

log = logging.getLogger(__name__)


__all__ = (
    'Guild',
)


class Guild(Hashable):
    """Represents a Discord guild.

    The guild owns the caches that channels consult: its channels, roles and
    members. Channels only hold a reference back to their guild.

    .. container:: operations

        .. describe:: x == y

            Checks if two guilds are equal.

        .. describe:: x != y

            Checks if two guilds are not equal.

        .. describe:: hash(x)

            Returns the guild's hash.

        .. describe:: str(x)

            Returns the guild's name.

    Attributes
    -----------
    id: :class:`int`
        The guild's ID. This is also the ID of its ``@everyone`` role.
    name: :class:`str`
        The guild's name.
    owner_id: :class:`int`
        The ID of the member that owns the guild.
    """

    def __init__(self, *, state: HTTPClient, data: GuildPayload):
        self._state = state

        self.id: int = int(data['id'])
        self.name: str = data.get('name') or ''
        self.owner_id: int = int(data['owner_id'])

        self._channels: Dict[int, GuildChannel] = {}
        self._members: Dict[int, Member] = {}
        self._roles: Dict[int, Role] = {}

        for role_data in data.get('roles') or []:
            role = Role(guild=self, data=role_data)
            self._roles[role.id] = role

        for member_data in data.get('members') or []:
            member = Member(guild=self, data=member_data)
            self._members[member.id] = member

        self._sync_channels(data.get('channels') or [])

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f'<Guild id={self.id!r} name={self.name!r}>'

    @property
    def channels(self) -> List[GuildChannel]:
        """List[:class:`.abc.GuildChannel`]: The list of channels in the guild."""
        return list(self._channels.values())

    @property
    def roles(self) -> List[Role]:
        """List[:class:`.Role`]: The list of roles in the guild, lowest
        position first."""
        return sorted(self._roles.values(), key=lambda r: (r.position, r.id))

    @property
    def members(self) -> List[Member]:
        """List[:class:`.Member`]: The list of cached members in the guild."""
        return list(self._members.values())

    @property
    def default_role(self) -> Optional[Role]:
        """Optional[:class:`.Role`]: The ``@everyone`` role, if cached."""
        return self._roles.get(self.id)

    @property
    def owner(self) -> Optional[Member]:
        """Optional[:class:`.Member`]: The member that owns the guild, if
        cached."""
        return self._members.get(self.owner_id)

    def get_channel(self, channel_id: int, /) -> Optional[GuildChannel]:
        return self._channels.get(channel_id)

    def get_role(self, role_id: int, /) -> Optional[Role]:
        return self._roles.get(role_id)

    def get_member(self, member_id: int, /) -> Optional[Member]:
        return self._members.get(member_id)

    def _add_channel(self, channel: GuildChannel) -> None:
        self._channels[channel.id] = channel

    def _remove_channel(self, channel: GuildChannel) -> None:
        self._channels.pop(channel.id, None)

    def _sync_channels(self, payloads: List[GuildChannelPayload]) -> None:
        """Reconciles cached channels with the full, server-confirmed list
        of the guild's channels.

        Known channels are patched in place and unknown ones are created.
        Channels whose type changed are rebuilt as the new class, and
        channels missing from ``payloads`` are dropped.
        """
        from .channel import _channel_factory

        seen: Set[int] = set()
        for data in payloads:
            channel_id = int(data['id'])
            seen.add(channel_id)

            channel = self._channels.get(channel_id)
            if channel is not None and ('type' not in data or channel.type.value == data['type']):
                channel._update(data)
                continue

            cls = _channel_factory(data['type'])
            if cls is None:
                log.debug('Ignoring channel %s of unsupported type %r', channel_id, data['type'])
                self._channels.pop(channel_id, None)
                continue

            if channel is not None:
                log.debug('Channel %s changed type from %s to %r', channel_id, channel.type, data['type'])

            self._add_channel(cls(state=self._state, guild=self, data=data))

        for channel_id in set(self._channels) - seen:
            log.debug('Dropping channel %s missing from the guild', channel_id)
            del self._channels[channel_id]

    def _lookup(self, obj: Any, cache: Dict[int, Any]) -> Optional[Any]:
        try:
            target_id = _get_id(obj)
        except (TypeError, ValueError):
            return None

        return cache.get(target_id)

    def resolve_member(self, member: Union[Member, Any], /) -> Member:
        """Resolves a member-like value to a cached :class:`.Member`.

        Parameters
        -----------
        member: Union[:class:`.Member`, :class:`.abc.Snowflake`, :class:`int`, :class:`str`]
            A member, anything with an ``id`` attribute, or a raw ID.

        Raises
        -------
        ObjectNotFound
            No cached member matches.
        """
        resolved = self._lookup(member, self._members)
        if resolved is None:
            raise ObjectNotFound('member', member)
        return resolved

    def resolve_role(self, role: Union[Role, Any], /) -> Role:
        """Resolves a role-like value to a cached :class:`.Role`.

        Raises
        -------
        ObjectNotFound
            No cached role matches.
        """
        resolved = self._lookup(role, self._roles)
        if resolved is None:
            raise ObjectNotFound('role', role)
        return resolved

    def resolve_overwrite_target(self, target: Any, /) -> Tuple[OverwriteType, Union[Member, Role]]:
        """Resolves ``target`` as a member, or failing that, as a role.

        Returns
        --------
        Tuple[:class:`.OverwriteType`, Union[:class:`.Member`, :class:`.Role`]]
            What the target is, and the resolved object.

        Raises
        -------
        ObjectNotFound
            Neither a member nor a role matches. The error describes the
            role lookup.
        """
        member = self._lookup(target, self._members)
        if member is not None:
            return OverwriteType.member, member

        return OverwriteType.role, self.resolve_role(target)
