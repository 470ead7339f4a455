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

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union
from typing_extensions import Self

from .enums import ChannelType, try_enum
from .errors import InvalidArgument, PreconditionFailed
from .invite import Invite
from .mixins import Hashable
from .override import ChannelOverwrite, OverwriteBuckets
from .permissions import Permissions
from .utils import _get_as_snowflake

if TYPE_CHECKING:
    from .types.channel import (
        ChannelPosition as ChannelPositionPayload,
        GuildChannel as GuildChannelPayload,
        PermissionOverwrite as PermissionOverwritePayload,
    )

    from .guild import Guild
    from .http import HTTPClient
    from .role import Role
    from .user import Member

log = logging.getLogger(__name__)


__all__ = (
    'GuildChannel',
)


class GuildChannel(Hashable):
    """The base class that every channel in a :class:`.Guild` derives from.

    It implements permission resolution and all of the channel management
    operations. Subclasses only differ in which fields they carry and
    which of those may be edited.

    The following implement this ABC:

        * :class:`.TextChannel`
        * :class:`.NewsChannel`
        * :class:`.VoiceChannel`
        * :class:`.StageChannel`
        * :class:`.CategoryChannel`

    Attributes
    -----------
    id: :class:`int`
        The channel's ID.
    type: :class:`.ChannelType`
        The channel's type.
    name: :class:`str`
        The channel's name.
    position: :class:`int`
        The channel's position among the other channels of its guild.
    topic: Optional[:class:`str`]
        The channel's topic, if any.
    nsfw: :class:`bool`
        Whether the channel is marked as NSFW.
    parent_id: Optional[:class:`int`]
        The ID of the category that the channel is in, if any.
    guild: :class:`.Guild`
        The guild that the channel is in.
    """

    def __init__(self, *, state: HTTPClient, guild: Guild, data: GuildChannelPayload):
        self._state = state
        self.guild = guild

        self.id: int = int(data['id'])
        self.type: ChannelType = try_enum(ChannelType, data['type'])
        self.name: str = ''
        self.position: int = 0
        self.topic: Optional[str] = None
        self.nsfw: bool = False
        self.parent_id: Optional[int] = None
        self._overwrites: Dict[int, ChannelOverwrite] = {}

        self._update(data)

    def _update(self, data: GuildChannelPayload) -> None:
        # Responses may be partial, so only keys that are present are applied
        if 'name' in data:
            self.name = data['name'] or ''

        if 'position' in data:
            self.position = data['position']

        if 'topic' in data:
            self.topic = data['topic']

        if 'nsfw' in data:
            self.nsfw = data['nsfw']

        if 'parent_id' in data:
            self.parent_id = _get_as_snowflake(data, 'parent_id')

        overwrites: Optional[List[PermissionOverwritePayload]] = data.get('permission_overwrites')
        if overwrites is None:
            overwrites = data.get('permissions_overwrites')

        if overwrites is not None:
            self._overwrites = {}
            for overwrite_data in overwrites:
                overwrite = ChannelOverwrite(data=overwrite_data, channel=self)
                self._overwrites[overwrite.id] = overwrite

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} id={self.id!r} name={self.name!r} position={self.position!r} guild={self.guild!r}>'

    @property
    def mention(self) -> str:
        """:class:`str`: The string that allows you to mention the channel."""
        return f'<#{self.id}>'

    @property
    def parent(self) -> Optional[GuildChannel]:
        """Optional[:class:`.CategoryChannel`]: The category that this
        channel is in, if any and if it is cached."""
        if self.parent_id is None:
            return None
        return self.guild.get_channel(self.parent_id)

    category = parent

    @property
    def overwrites(self) -> Dict[int, ChannelOverwrite]:
        """Dict[:class:`int`, :class:`.ChannelOverwrite`]: The channel's
        permission overwrites, keyed by the ID of the role or member they
        target."""
        return dict(self._overwrites)

    @property
    def _editable_fields(self) -> frozenset:
        from .channel import editable_fields

        return editable_fields(self.type)

    # Permissions

    def overwrites_for(self, member: Union[Member, Any], /) -> OverwriteBuckets:
        """Groups this channel's overwrites by how they apply to ``member``.

        An overwrite for the ``@everyone`` role (whose ID is the guild's ID)
        goes in :attr:`~.OverwriteBuckets.everyone`, one for the member
        themself in :attr:`~.OverwriteBuckets.member`, and one for each role
        that the member holds in :attr:`~.OverwriteBuckets.roles`. Overwrites
        for anything else are left out.

        Parameters
        -----------
        member: Union[:class:`.Member`, :class:`int`]
            The member, or the ID of a cached member.

        Raises
        -------
        ObjectNotFound
            The member could not be resolved.

        Returns
        --------
        :class:`.OverwriteBuckets`
        """
        member = self.guild.resolve_member(member)

        everyone: Optional[ChannelOverwrite] = None
        member_overwrite: Optional[ChannelOverwrite] = None
        roles: List[ChannelOverwrite] = []

        for overwrite in self._overwrites.values():
            if overwrite.id == self.guild.id:
                everyone = overwrite
            elif overwrite.id == member.id:
                member_overwrite = overwrite
            elif member.has_role(overwrite.id):
                roles.append(overwrite)

        return OverwriteBuckets(everyone=everyone, member=member_overwrite, roles=roles)

    def permissions_for(self, member: Union[Member, Any], /) -> Permissions:
        """Computes the effective permissions of ``member`` in this channel.

        The calculation is, in order:

        1. The guild owner gets :meth:`.Permissions.all`.
        2. The permissions of every role the member holds are combined.
        3. If that includes ``administrator``, :meth:`.Permissions.all`.
        4. The ``@everyone`` overwrite, each held role's overwrite, then the
           member's own overwrite are applied. Each of them adds its
           allowed permissions, then removes its denied ones.

        This only reads cached state; nothing is requested from Discord.

        Parameters
        -----------
        member: Union[:class:`.Member`, :class:`int`]
            The member, or the ID of a cached member.

        Raises
        -------
        ObjectNotFound
            The member could not be resolved.

        Returns
        --------
        :class:`.Permissions`
            The resolved permissions.
        """
        member = self.guild.resolve_member(member)

        if member.id == self.guild.owner_id:
            return Permissions.all()

        base = Permissions.none()
        for role in member.roles:
            base = base.add(role.permissions)

        if base.administrator:
            return Permissions.all()

        everyone, member_overwrite, roles = self.overwrites_for(member)

        permissions = base
        if everyone is not None:
            permissions = everyone.apply(permissions)

        for overwrite in roles:
            permissions = overwrite.apply(permissions)

        if member_overwrite is not None:
            permissions = member_overwrite.apply(permissions)

        return permissions

    # Positions

    def reorder_position(self, position: int) -> List[ChannelPositionPayload]:
        """Computes the position changes needed to move this channel to
        ``position``.

        The other channels of the guild keep their relative order and are
        renumbered from zero without gaps around the moved channel. Channels
        whose position would not change are left out. The entry for this
        channel always comes first.

        Parameters
        -----------
        position: :class:`int`
            The new zero-based position of the channel.

        Raises
        -------
        InvalidArgument
            ``position`` is negative.

        Returns
        --------
        List[Dict[:class:`str`, Any]]
            The ``{'id', 'position'}`` entries to submit together.
        """
        if position < 0:
            raise InvalidArgument('Channel position cannot be less than 0.')

        siblings = [channel for channel in self.guild.channels if channel.id != self.id]
        siblings.sort(key=lambda c: (c.position, c.id))

        payload: List[ChannelPositionPayload] = [{'id': str(self.id), 'position': position}]

        slot = 0
        for channel in siblings:
            if slot == position:
                slot += 1

            if channel.position != slot:
                payload.append({'id': str(channel.id), 'position': slot})

            slot += 1

        return payload

    async def set_position(self, position: int, *, reason: Optional[str] = None) -> None:
        """|coro|

        Move this channel to ``position``, shifting the other channels of
        the guild around it.

        All changes are submitted in one request. The cached positions are
        not changed by this method.

        Parameters
        -----------
        position: :class:`int`
            The new zero-based position of the channel.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        -------
        InvalidArgument
            ``position`` is negative.
        HTTPException
            Moving the channel failed.
        """
        payload = self.reorder_position(position)
        log.debug('Moving channel %s to position %s (%s changes)', self.id, position, len(payload))
        await self._state.modify_guild_channel_positions(self.guild.id, payload, reason=reason)

    # Editing

    async def edit(self, *, reason: Optional[str] = None, **options: Any) -> Self:
        """|coro|

        Edit this channel.

        At least one option is required. Which options are accepted depends
        on the channel's type; for example, only voice-type channels accept
        ``bitrate`` and ``user_limit``.

        Parameters
        -----------
        name: :class:`str`
            The channel's name.
        position: :class:`int`
            The channel's position.
        topic: :class:`str`
            The channel's topic.
        nsfw: :class:`bool`
            Whether the channel is NSFW.
        bitrate: :class:`int`
            The channel's bitrate. Voice-type channels only.
        user_limit: :class:`int`
            The channel's user limit. Voice-type channels only.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        -------
        InvalidArgument
            No options were given, or an option is not editable on this
            type of channel.
        HTTPException
            Editing the channel failed.

        Returns
        --------
        :class:`.abc.GuildChannel`
            This channel, updated from Discord's response.
        """
        if not options:
            raise InvalidArgument('Cannot edit a channel with zero information.')

        from .channel import EDITABLE_FIELDS

        allowed = self._editable_fields
        payload: Dict[str, Any] = {}
        for key, value in options.items():
            if key not in EDITABLE_FIELDS:
                raise InvalidArgument(f'{key!r} is not an editable channel option.')
            if key not in allowed:
                raise InvalidArgument(f'Cannot set {key} of a {self.type} channel.')

            payload[key] = value

        log.debug('Editing channel %s with %s', self.id, payload)
        data = await self._state.edit_channel(self.id, payload, reason=reason)
        self._update(data)
        return self

    async def set_name(self, name: str, *, reason: Optional[str] = None) -> Self:
        """|coro|

        Set the name of this channel. Shortcut for :meth:`edit`.
        """
        return await self.edit(name=name, reason=reason)

    async def set_topic(self, topic: str, *, reason: Optional[str] = None) -> Self:
        """|coro|

        Set the topic of this channel. Shortcut for :meth:`edit`.
        """
        return await self.edit(topic=topic, reason=reason)

    async def clone(
        self,
        *,
        name: Optional[str] = None,
        with_permissions: bool = True,
        with_topic: bool = True,
        reason: Optional[str] = None,
    ) -> Self:
        """|coro|

        Create a new channel with the same properties as this one.

        Parameters
        -----------
        name: Optional[:class:`str`]
            The name of the new channel. Defaults to this channel's name.
        with_permissions: :class:`bool`
            Whether to copy this channel's permission overwrites.
            Defaults to ``True``.
        with_topic: :class:`bool`
            Whether to copy this channel's topic. Defaults to ``True``.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        -------
        HTTPException
            Creating the channel failed.

        Returns
        --------
        :class:`.abc.GuildChannel`
            The channel that was created.
        """
        payload: Dict[str, Any] = {
            'name': name or self.name,
            'type': self.type.value,
        }

        if with_permissions:
            payload['permissions_overwrites'] = [overwrite.to_dict() for overwrite in self._overwrites.values()]

        if with_topic:
            payload['topic'] = self.topic

        if self.parent_id:
            payload['parent_id'] = str(self.parent_id)

        if 'bitrate' in self._editable_fields:
            payload['bitrate'] = getattr(self, 'bitrate', None)
            payload['user_limit'] = getattr(self, 'user_limit', None)
        else:
            payload['nsfw'] = self.nsfw

        data = await self._state.create_guild_channel(self.guild.id, payload, reason=reason)
        channel = self.__class__(state=self._state, guild=self.guild, data=data)
        self.guild._add_channel(channel)
        return channel

    async def delete(self, *, reason: Optional[str] = None) -> None:
        """|coro|

        Delete this channel.

        Parameters
        -----------
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        -------
        HTTPException
            Deleting the channel failed.
        """
        await self._state.delete_channel(self.id, reason=reason)
        self.guild._remove_channel(self)

    # Invites

    async def create_invite(
        self,
        *,
        max_age: Optional[int] = None,
        max_uses: int = 0,
        temporary: bool = False,
        unique: bool = False,
        reason: Optional[str] = None,
    ) -> Invite:
        """|coro|

        Create an invite to this channel.

        Parameters
        -----------
        max_age: Optional[:class:`int`]
            How long the invite should last, in seconds. ``0`` means it never
            expires. If not given, Discord's default is used.
        max_uses: :class:`int`
            How many times the invite can be used. ``0`` means unlimited.
        temporary: :class:`bool`
            Whether the invite grants temporary membership.
        unique: :class:`bool`
            Whether to always create a new invite instead of reusing a
            similar one.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        -------
        HTTPException
            Creating the invite failed.

        Returns
        --------
        :class:`.Invite`
            The invite that was created.
        """
        payload: Dict[str, Any] = {
            'max_uses': max_uses,
            'temporary': temporary,
            'unique': unique,
        }
        if max_age is not None:
            payload['max_age'] = max_age

        data = await self._state.create_channel_invite(self.id, payload, reason=reason)
        return Invite(data=data, guild=self.guild)

    async def invites(self) -> List[Invite]:
        """|coro|

        Fetch the invites to this channel.

        Raises
        -------
        HTTPException
            Fetching the invites failed.

        Returns
        --------
        List[:class:`.Invite`]
        """
        data = await self._state.get_channel_invites(self.id)
        return [Invite(data=invite, guild=self.guild) for invite in data]

    # Overwrites

    async def overwrite_permissions(
        self,
        target: Union[Member, Role, Any],
        allow: Union[Permissions, int],
        deny: Union[Permissions, int] = 0,
        *,
        reason: Optional[str] = None,
    ) -> ChannelOverwrite:
        """|coro|

        Set the permission overwrite for a member or role in this channel.

        ``target`` is looked up as a member first and as a role second.

        Parameters
        -----------
        target: Union[:class:`.Member`, :class:`.Role`, :class:`int`]
            The member or role, or the ID of a cached one.
        allow: Union[:class:`.Permissions`, :class:`int`]
            The permissions to explicitly allow.
        deny: Union[:class:`.Permissions`, :class:`int`]
            The permissions to explicitly deny.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        -------
        ObjectNotFound
            ``target`` is neither a cached member nor a cached role.
        InvalidArgument
            ``allow`` or ``deny`` is not an :class:`int` or
            :class:`.Permissions`, or is negative.
        HTTPException
            Setting the overwrite failed.

        Returns
        --------
        :class:`.ChannelOverwrite`
            The overwrite, as stored on this channel.
        """
        target_type, resolved = self.guild.resolve_overwrite_target(target)

        for label, value in (('allow', allow), ('deny', deny)):
            if isinstance(value, bool) or not isinstance(value, (int, Permissions)):
                raise InvalidArgument(f'{label} must be an int or Permissions, not {value.__class__.__name__}')
            if int(value) < 0:
                raise InvalidArgument(f'{label} cannot be negative.')

        payload: PermissionOverwritePayload = {
            'id': str(resolved.id),
            'type': target_type.value,
            'allow': str(int(allow)),
            'deny': str(int(deny)),
        }

        log.debug('Overwriting permissions of %s %s in channel %s', target_type.value, resolved.id, self.id)
        await self._state.edit_channel_permissions(self.id, resolved.id, payload, reason=reason)

        overwrite = ChannelOverwrite(data=payload, channel=self)
        self._overwrites[overwrite.id] = overwrite
        return overwrite

    async def lock_permissions(self, *, reason: Optional[str] = None) -> None:
        """|coro|

        Copy the permission overwrites of this channel's category onto this
        channel.

        One request is sent per overwrite. If any of them fails, that error
        is raised; overwrites that were already applied are not reverted.

        Parameters
        -----------
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        -------
        PreconditionFailed
            This channel does not have a parent.
        HTTPException
            Setting one of the overwrites failed.
        """
        parent = self.parent
        if parent is None:
            raise PreconditionFailed('This channel does not have a parent.')

        payloads = [overwrite.to_dict() for overwrite in parent._overwrites.values()]

        log.debug('Locking permissions of channel %s to parent %s (%s overwrites)', self.id, parent.id, len(payloads))
        await asyncio.gather(*(
            self._state.edit_channel_permissions(self.id, int(payload['id']), payload, reason=reason)
            for payload in payloads
        ))

        for payload in payloads:
            overwrite = ChannelOverwrite(data=payload, channel=self)
            self._overwrites[overwrite.id] = overwrite

    sync_permissions = lock_permissions
