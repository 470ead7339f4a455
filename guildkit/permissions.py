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
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Iterator, Optional, Tuple, Union

if TYPE_CHECKING:
    from typing_extensions import Self

__all__ = (
    'Permissions',
    'PermissionOverwrite',
)


class _flag:
    """A read-only descriptor for a single permission bit."""

    def __init__(self, value: int, doc: str):
        self.value = value
        self.__doc__ = doc

    def __get__(self, instance: Optional[Permissions], owner) -> Any:
        if instance is None:
            return self
        return (instance.value & self.value) == self.value

    def __set__(self, instance: Permissions, value: bool) -> None:
        raise AttributeError('Permissions are immutable, use add() or remove() instead.')


# https://discord.com/developers/docs/topics/permissions#permissions-bitwise-permission-flags
VALID_FLAGS: Dict[str, int] = {
    'create_instant_invite': 1 << 0,
    'kick_members': 1 << 1,
    'ban_members': 1 << 2,
    'administrator': 1 << 3,
    'manage_channels': 1 << 4,
    'manage_guild': 1 << 5,
    'add_reactions': 1 << 6,
    'view_audit_log': 1 << 7,
    'priority_speaker': 1 << 8,
    'stream': 1 << 9,
    'view_channel': 1 << 10,
    'send_messages': 1 << 11,
    'send_tts_messages': 1 << 12,
    'manage_messages': 1 << 13,
    'embed_links': 1 << 14,
    'attach_files': 1 << 15,
    'read_message_history': 1 << 16,
    'mention_everyone': 1 << 17,
    'external_emojis': 1 << 18,
    'view_guild_insights': 1 << 19,
    'connect': 1 << 20,
    'speak': 1 << 21,
    'mute_members': 1 << 22,
    'deafen_members': 1 << 23,
    'move_members': 1 << 24,
    'use_voice_activation': 1 << 25,
    'change_nickname': 1 << 26,
    'manage_nicknames': 1 << 27,
    'manage_roles': 1 << 28,
    'manage_webhooks': 1 << 29,
    'manage_emojis': 1 << 30,
}

ALIASES: Dict[str, str] = {
    'read_messages': 'view_channel',
    'use_external_emojis': 'external_emojis',
    'manage_permissions': 'manage_roles',
    'manage_server': 'manage_guild',
}

ALL_PERMISSIONS: int = 0
for _value in VALID_FLAGS.values():
    ALL_PERMISSIONS |= _value
del _value


PermissionsLike = Union['Permissions', int]


def _to_value(other: PermissionsLike) -> int:
    if isinstance(other, Permissions):
        return other.value
    if isinstance(other, int) and not isinstance(other, bool):
        return other
    raise TypeError(f'Expected int or Permissions, received {other.__class__.__name__}')


class Permissions:
    """Wraps up a Discord permission bitfield.

    Instances are immutable values: :meth:`add` and :meth:`remove` return
    new objects instead of changing this one. They can be constructed from
    a raw integer, from keyword arguments naming permissions, or both: ::

        # A `Permissions` instance representing the ability
        # to view a channel and send messages in it.
        guildkit.Permissions(view_channel=True, send_messages=True)


    .. container:: operations

        .. describe:: x == y

            Checks if two permissions are equal.

        .. describe:: x != y

            Checks if two permissions are not equal.

        .. describe:: x <= y

            Checks if a permission is a subset of another permission.

        .. describe:: x >= y

            Checks if a permission is a superset of another permission.

        .. describe:: x | y, x & y, x ^ y

            Returns a new :class:`Permissions` with the bitwise result.

        .. describe:: ~x

            Returns a new :class:`Permissions` with every defined bit
            flipped.

        .. describe:: hash(x)

            Returns the permission's hash.

        .. describe:: iter(x)

           Returns an iterator of ``(perm, value)`` pairs. Note that aliases
           are not shown.

    Attributes
    -----------
    value: :class:`int`
        The raw bitfield.
        You should use the properties available on this class instead of
        inspecting this attribute directly.
    """

    __slots__: Tuple[str, ...] = ('_value',)

    VALID_FLAGS: ClassVar[Dict[str, int]] = VALID_FLAGS

    def __init__(self, permissions: int = 0, **kwargs: bool):
        if not isinstance(permissions, int) or isinstance(permissions, bool):
            raise TypeError(f'Expected int parameter, received {permissions.__class__.__name__} instead.')
        if permissions < 0:
            raise ValueError('Permissions cannot be negative.')

        value = permissions
        for key, toggle in kwargs.items():
            key = ALIASES.get(key, key)
            try:
                flag = VALID_FLAGS[key]
            except KeyError:
                raise TypeError(f'{key!r} is not a valid permission name.') from None

            if toggle:
                value |= flag
            else:
                value &= ~flag

        self._value: int = value

    @property
    def value(self) -> int:
        """:class:`int`: The raw bitfield."""
        return self._value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Permissions) and self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f'<Permissions value={self._value}>'

    def __int__(self) -> int:
        return self._value

    def __iter__(self) -> Iterator[Tuple[str, bool]]:
        for name, flag in VALID_FLAGS.items():
            yield name, (self._value & flag) == flag

    def __or__(self, other: PermissionsLike) -> Self:
        return self.__class__(self._value | _to_value(other))

    def __and__(self, other: PermissionsLike) -> Self:
        return self.__class__(self._value & _to_value(other))

    def __xor__(self, other: PermissionsLike) -> Self:
        return self.__class__(self._value ^ _to_value(other))

    def __invert__(self) -> Self:
        return self.__class__(~self._value & ALL_PERMISSIONS)

    def is_subset(self, other: Permissions) -> bool:
        """Returns ``True`` if self has the same or fewer permissions as other."""
        if isinstance(other, Permissions):
            return (self._value | other._value) == other._value
        raise TypeError(f"cannot compare {self.__class__.__name__} with {other.__class__.__name__}")

    def is_superset(self, other: Permissions) -> bool:
        """Returns ``True`` if self has the same or more permissions as other."""
        if isinstance(other, Permissions):
            return (self._value | other._value) == self._value
        raise TypeError(f"cannot compare {self.__class__.__name__} with {other.__class__.__name__}")

    def is_strict_subset(self, other: Permissions) -> bool:
        """Returns ``True`` if the permissions on other are a strict subset of those on self."""
        return self.is_subset(other) and self != other

    def is_strict_superset(self, other: Permissions) -> bool:
        """Returns ``True`` if the permissions on other are a strict superset of those on self."""
        return self.is_superset(other) and self != other

    __le__ = is_subset
    __ge__ = is_superset
    __lt__ = is_strict_subset
    __gt__ = is_strict_superset

    @classmethod
    def all(cls) -> Self:
        """A factory method that creates a :class:`Permissions` with every
        defined permission bit set.

        This is what owners and administrators resolve to in a channel.
        """
        return cls(ALL_PERMISSIONS)

    @classmethod
    def none(cls) -> Self:
        """A factory method that creates a :class:`Permissions` with all
        permissions set to ``False``."""
        return cls(0)

    @classmethod
    def general(cls) -> Self:
        """A factory method that creates a :class:`Permissions` with all
        "General" permissions from the official client set to ``True``."""
        return cls(
            view_channel=True,
            manage_channels=True,
            manage_roles=True,
            manage_emojis=True,
            view_audit_log=True,
            view_guild_insights=True,
            manage_webhooks=True,
            manage_guild=True,
        )

    @classmethod
    def text(cls) -> Self:
        """A factory method that creates a :class:`Permissions` with all
        "Text" permissions from the official client set to ``True``."""
        return cls(
            send_messages=True,
            send_tts_messages=True,
            manage_messages=True,
            embed_links=True,
            attach_files=True,
            read_message_history=True,
            mention_everyone=True,
            external_emojis=True,
            add_reactions=True,
        )

    @classmethod
    def voice(cls) -> Self:
        """A factory method that creates a :class:`Permissions` with all
        "Voice" permissions from the official client set to ``True``."""
        return cls(
            connect=True,
            speak=True,
            stream=True,
            mute_members=True,
            deafen_members=True,
            move_members=True,
            use_voice_activation=True,
            priority_speaker=True,
        )

    def has(self, permission: Union[str, PermissionsLike]) -> bool:
        """Checks whether every bit of ``permission`` is set.

        Parameters
        -----------
        permission: Union[:class:`str`, :class:`int`, :class:`Permissions`]
            A permission name (e.g. ``'administrator'``), a raw bitfield, or
            another :class:`Permissions`.
        """
        if isinstance(permission, str):
            name = ALIASES.get(permission, permission)
            try:
                bits = VALID_FLAGS[name]
            except KeyError:
                raise ValueError(f'No such permission: {permission}') from None
        else:
            bits = _to_value(permission)

        return (self._value & bits) == bits

    def add(self, other: PermissionsLike) -> Self:
        """Returns a new :class:`Permissions` with the bits of ``other``
        set in addition to these."""
        return self.__class__(self._value | _to_value(other))

    def remove(self, other: PermissionsLike) -> Self:
        """Returns a new :class:`Permissions` with the bits of ``other``
        cleared from these."""
        return self.__class__(self._value & ~_to_value(other))

    def handle_overwrite(self, allow: PermissionsLike, deny: PermissionsLike) -> Self:
        """Applies one overwrite layer: the ``allow`` bits are added first,
        then the ``deny`` bits are removed.

        Returns
        --------
        :class:`Permissions`
            The resulting permissions.
        """
        return self.add(allow).remove(deny)

    if TYPE_CHECKING:
        create_instant_invite: bool
        kick_members: bool
        ban_members: bool
        administrator: bool
        manage_channels: bool
        manage_guild: bool
        manage_server: bool
        add_reactions: bool
        view_audit_log: bool
        priority_speaker: bool
        stream: bool
        view_channel: bool
        read_messages: bool
        send_messages: bool
        send_tts_messages: bool
        manage_messages: bool
        embed_links: bool
        attach_files: bool
        read_message_history: bool
        mention_everyone: bool
        external_emojis: bool
        use_external_emojis: bool
        view_guild_insights: bool
        connect: bool
        speak: bool
        mute_members: bool
        deafen_members: bool
        move_members: bool
        use_voice_activation: bool
        change_nickname: bool
        manage_nicknames: bool
        manage_roles: bool
        manage_permissions: bool
        manage_webhooks: bool
        manage_emojis: bool


for _name, _bit in VALID_FLAGS.items():
    setattr(
        Permissions,
        _name,
        _flag(_bit, f':class:`bool`: Returns ``True`` if the ``{_name}`` permission is set.'),
    )

for _alias, _name in ALIASES.items():
    setattr(Permissions, _alias, getattr(Permissions, _name))

del _name, _bit, _alias


class PermissionOverwrite:
    r"""An allow/deny pair of :class:`Permissions`.

    Unlike a regular :class:`Permissions`\, every permission here has three
    states: allowed (bit set in :attr:`allow`), denied (bit set in
    :attr:`deny`), or untouched (set in neither).

    .. container:: operations

        .. describe:: x == y

            Checks if two overwrites are equal.

        .. describe:: x != y

            Checks if two overwrites are not equal.

    Parameters
    -----------
    allow: Union[:class:`int`, :class:`Permissions`]
        The permissions to explicitly allow.
    deny: Union[:class:`int`, :class:`Permissions`]
        The permissions to explicitly deny.
    """

    __slots__: Tuple[str, ...] = ('allow', 'deny')

    def __init__(self, allow: PermissionsLike = 0, deny: PermissionsLike = 0):
        self.allow: Permissions = Permissions(_to_value(allow))
        self.deny: Permissions = Permissions(_to_value(deny))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PermissionOverwrite) and self.pair() == other.pair()

    def __repr__(self) -> str:
        return f'<PermissionOverwrite allow={self.allow.value} deny={self.deny.value}>'

    def pair(self) -> Tuple[Permissions, Permissions]:
        """Tuple[:class:`Permissions`, :class:`Permissions`]: Returns the (allow, deny) pair from this overwrite."""
        return self.allow, self.deny

    @classmethod
    def from_pair(cls, allow: PermissionsLike, deny: PermissionsLike) -> Self:
        """Creates an overwrite from an allow/deny pair."""
        return cls(allow, deny)

    def is_empty(self) -> bool:
        """Checks if the permission overwrite is currently empty.

        An empty permission overwrite is one that neither allows nor denies
        anything.

        Returns
        -------
        :class:`bool`
            Indicates if the overwrite is empty.
        """
        return self.allow.value == 0 and self.deny.value == 0

    def apply(self, base: Permissions) -> Permissions:
        """Applies this overwrite on top of ``base`` and returns the result."""
        return base.handle_overwrite(self.allow, self.deny)
