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
from typing import TYPE_CHECKING, Any, Dict, List, NamedTuple, Optional, Tuple, Union

from .enums import OverwriteType, try_enum
from .permissions import PermissionOverwrite, Permissions

if TYPE_CHECKING:
    from .types.channel import PermissionOverwrite as PermissionOverwritePayload

    from .abc import GuildChannel


__all__ = (
    'ChannelOverwrite',
    'OverwriteBuckets',
)


class ChannelOverwrite:
    """Represents a permission overwrite for a role or member in a channel.

    Attributes
    -----------
    id: :class:`int`
        The ID of the role or member that the overwrite targets.
    type: :class:`.OverwriteType`
        Whether the overwrite targets a role or a member.
    allow: :class:`.Permissions`
        The permissions explicitly allowed.
    deny: :class:`.Permissions`
        The permissions explicitly denied.
    channel: Optional[:class:`.abc.GuildChannel`]
        The channel that the overwrite is in.
    """

    __slots__: Tuple[str, ...] = (
        'id',
        'type',
        'allow',
        'deny',
        'channel',
    )

    def __init__(
        self,
        *,
        data: Union[PermissionOverwritePayload, Dict[str, Any]],
        channel: Optional[GuildChannel] = None,
    ):
        self.id: int = int(data['id'])
        self.type: OverwriteType = try_enum(OverwriteType, data.get('type'))
        self.allow: Permissions = Permissions(int(data.get('allow', 0)))
        self.deny: Permissions = Permissions(int(data.get('deny', 0)))
        self.channel = channel

    def __repr__(self) -> str:
        return f'<ChannelOverwrite id={self.id!r} type={self.type!r} allow={self.allow.value} deny={self.deny.value}>'

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, ChannelOverwrite)
            and self.id == other.id
            and self.type == other.type
            and self.allow == other.allow
            and self.deny == other.deny
        )

    def __hash__(self) -> int:
        return hash((self.id, self.type, self.allow.value, self.deny.value))

    @property
    def overwrite(self) -> PermissionOverwrite:
        """:class:`.PermissionOverwrite`: The allow/deny pair of this overwrite."""
        return PermissionOverwrite(self.allow, self.deny)

    def apply(self, base: Permissions) -> Permissions:
        """Adds this overwrite's allowed bits to ``base``, then removes its
        denied bits."""
        return base.handle_overwrite(self.allow, self.deny)

    def copy(self, *, channel: Optional[GuildChannel] = None) -> ChannelOverwrite:
        return self.__class__(data=self.to_dict(), channel=channel or self.channel)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': str(self.id),
            'type': self.type.value,
            'allow': str(self.allow.value),
            'deny': str(self.deny.value),
        }


class OverwriteBuckets(NamedTuple):
    """The overwrites of a channel that apply to one member, grouped by what
    they target.

    Attributes
    -----------
    everyone: Optional[:class:`ChannelOverwrite`]
        The overwrite for the ``@everyone`` role, if any.
    member: Optional[:class:`ChannelOverwrite`]
        The overwrite for the member themself, if any.
    roles: List[:class:`ChannelOverwrite`]
        The overwrites for roles that the member holds.
    """
    everyone: Optional[ChannelOverwrite]
    member: Optional[ChannelOverwrite]
    roles: List[ChannelOverwrite]
