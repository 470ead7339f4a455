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

from typing import TYPE_CHECKING, List, Optional, Set, Tuple

from .mixins import Hashable

if TYPE_CHECKING:
    from .types.guild import Member as MemberPayload, User as UserPayload

    from .guild import Guild
    from .role import Role


__all__ = (
    'User',
    'Member',
)


class User(Hashable):
    """Represents a Discord user.

    Attributes
    -----------
    id: :class:`int`
        The user's id.
    name: :class:`str`
        The user's username.
    bot: :class:`bool`
        Whether the user is a bot account.
    """

    __slots__: Tuple[str, ...] = (
        'id',
        'name',
        'global_name',
        'bot',
    )

    def __init__(self, *, data: UserPayload):
        self.id: int = int(data['id'])
        self.name: str = data.get('username') or ''
        self.global_name: Optional[str] = data.get('global_name')
        self.bot: bool = data.get('bot', False)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f'<User id={self.id!r} name={self.name!r} bot={self.bot!r}>'

    @property
    def mention(self) -> str:
        return f'<@{self.id}>'

    @property
    def display_name(self) -> str:
        return self.global_name or self.name


class Member(User):
    """Represents a member of a :class:`.Guild`.

    Attributes
    -----------
    guild: :class:`.Guild`
        The guild that the member is in.
    nick: Optional[:class:`str`]
        The member's nickname, if any.
    """

    __slots__: Tuple[str, ...] = (
        'guild',
        'nick',
        '_role_ids',
    )

    def __init__(self, *, guild: Guild, data: MemberPayload):
        super().__init__(data=data['user'])
        self.guild = guild
        self.nick: Optional[str] = data.get('nick')
        self._role_ids: Set[int] = {int(role_id) for role_id in data.get('roles') or []}

    def __repr__(self) -> str:
        return f'<Member id={self.id!r} name={self.name!r} guild={self.guild!r}>'

    @property
    def display_name(self) -> str:
        return self.nick or super().display_name

    @property
    def role_ids(self) -> Set[int]:
        """Set[:class:`int`]: The IDs of the roles held by this member.

        The ``@everyone`` role is only included if Discord sent it.
        """
        return set(self._role_ids)

    @property
    def roles(self) -> List[Role]:
        """List[:class:`.Role`]: The cached list of roles that this member
        has, lowest position first. Roles missing from the guild's cache are
        skipped."""
        roles = []
        for role_id in self._role_ids:
            role = self.guild.get_role(role_id)
            if role is not None:
                roles.append(role)

        return sorted(roles, key=lambda r: (r.position, r.id))

    def has_role(self, role_id: int, /) -> bool:
        return role_id in self._role_ids

    def is_owner(self) -> bool:
        """:class:`bool`: Whether this member owns the guild."""
        return self.guild.owner_id == self.id
