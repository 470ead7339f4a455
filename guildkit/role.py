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

from typing import TYPE_CHECKING, Tuple

from .mixins import Hashable
from .permissions import Permissions

if TYPE_CHECKING:
    from .types.guild import Role as RolePayload

    from .guild import Guild


__all__ = (
    'Role',
)


class Role(Hashable):
    """Represents a role in a :class:`.Guild`.

    .. container:: operations

        .. describe:: x == y

            Checks if two roles are equal.

        .. describe:: x != y

            Checks if two roles are not equal.

        .. describe:: hash(x)

            Returns the role's hash.

        .. describe:: str(x)

            Returns the name of the role.

    Attributes
    -----------
    id: :class:`int`
        The role's ID.
    name: :class:`str`
        The role's name.
    permissions: :class:`.Permissions`
        The guild-level permissions granted by the role.
    position: :class:`int`
        The role's position in the role hierarchy.
    guild: :class:`.Guild`
        The guild that the role is from.
    """

    __slots__: Tuple[str, ...] = (
        'id',
        'name',
        'permissions',
        'position',
        'mentionable',
        'hoist',
        'guild',
    )

    def __init__(self, *, guild: Guild, data: RolePayload):
        self.guild = guild
        self.id: int = int(data['id'])
        self._update(data)

    def _update(self, data: RolePayload) -> None:
        self.name: str = data.get('name') or ''
        self.permissions: Permissions = Permissions(int(data.get('permissions', 0)))
        self.position: int = data.get('position', 0)
        self.mentionable: bool = data.get('mentionable', False)
        self.hoist: bool = data.get('hoist', False)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f'<Role id={self.id!r} name={self.name!r}>'

    def is_default(self) -> bool:
        """:class:`bool`: Whether this is the guild's ``@everyone`` role,
        i.e., its ID is the guild's ID."""
        return self.guild.id == self.id

    @property
    def mention(self) -> str:
        """:class:`str`: The mention string for this role."""
        if self.is_default():
            return '@everyone'
        return f'<@&{self.id}>'
