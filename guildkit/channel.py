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

from typing import TYPE_CHECKING, Dict, FrozenSet, List, Optional, Type, Union

from .abc import GuildChannel
from .enums import ChannelType, try_enum

if TYPE_CHECKING:
    from .types.channel import GuildChannel as GuildChannelPayload


__all__ = (
    'TextChannel',
    'NewsChannel',
    'VoiceChannel',
    'StageChannel',
    'CategoryChannel',
)


EDITABLE_FIELDS: FrozenSet[str] = frozenset({
    'name',
    'position',
    'topic',
    'nsfw',
    'bitrate',
    'user_limit',
})

_TEXT_FIELDS = frozenset({'name', 'position', 'topic', 'nsfw'})
_VOICE_FIELDS = frozenset({'name', 'position', 'bitrate', 'user_limit'})

# The options that `GuildChannel.edit` accepts for each kind of channel.
CHANNEL_FIELDS: Dict[ChannelType, FrozenSet[str]] = {
    ChannelType.text: _TEXT_FIELDS,
    ChannelType.news: _TEXT_FIELDS,
    ChannelType.voice: _VOICE_FIELDS,
    ChannelType.stage_voice: _VOICE_FIELDS | {'topic'},
    ChannelType.category: frozenset({'name', 'position'}),
}


def editable_fields(channel_type: ChannelType) -> FrozenSet[str]:
    """Returns the options that can be edited on a channel of
    ``channel_type``. Unknown types can only be renamed and moved."""
    return CHANNEL_FIELDS.get(channel_type, frozenset({'name', 'position'}))


class TextChannel(GuildChannel):
    """Represents a text channel in a :class:`.Guild`."""

    def __repr__(self) -> str:
        return f'<TextChannel id={self.id!r} name={self.name!r} position={self.position!r} nsfw={self.nsfw!r}>'

    def is_nsfw(self) -> bool:
        """:class:`bool`: Checks if the channel is NSFW."""
        return self.nsfw

    def is_news(self) -> bool:
        """:class:`bool`: Checks if the channel is a news channel."""
        return self.type == ChannelType.news


class NewsChannel(TextChannel):
    """Represents a news (announcement) channel in a :class:`.Guild`."""
    pass


class VoiceChannel(GuildChannel):
    """Represents a voice channel in a :class:`.Guild`.

    Attributes
    -----------
    bitrate: :class:`int`
        The channel's preferred audio bitrate in bits per second.
    user_limit: :class:`int`
        The channel's limit for number of members that can be in it.
        ``0`` means there is no limit.
    """

    def __init__(self, *, state, guild, data: GuildChannelPayload):
        self.bitrate: int = 64000
        self.user_limit: int = 0
        super().__init__(state=state, guild=guild, data=data)

    def _update(self, data: GuildChannelPayload) -> None:
        super()._update(data)

        if 'bitrate' in data:
            self.bitrate = data['bitrate']

        if 'user_limit' in data:
            self.user_limit = data['user_limit']

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} id={self.id!r} name={self.name!r} position={self.position!r} bitrate={self.bitrate!r} user_limit={self.user_limit!r}>'


class StageChannel(VoiceChannel):
    """Represents a stage channel in a :class:`.Guild`."""
    pass


class CategoryChannel(GuildChannel):
    """Represents a category in a :class:`.Guild`.

    Categories group other channels, which may copy the category's
    permission overwrites with :meth:`~.abc.GuildChannel.lock_permissions`.
    """

    def __repr__(self) -> str:
        return f'<CategoryChannel id={self.id!r} name={self.name!r} position={self.position!r}>'

    @property
    def channels(self) -> List[GuildChannel]:
        """List[:class:`.abc.GuildChannel`]: The channels in this category,
        sorted by position."""
        channels = [c for c in self.guild.channels if c.parent_id == self.id]
        channels.sort(key=lambda c: (c.position, c.id))
        return channels


_CHANNEL_CLASSES: Dict[ChannelType, Type[GuildChannel]] = {
    ChannelType.text: TextChannel,
    ChannelType.news: NewsChannel,
    ChannelType.voice: VoiceChannel,
    ChannelType.stage_voice: StageChannel,
    ChannelType.category: CategoryChannel,
}


def _channel_factory(channel_type: Union[int, ChannelType]) -> Optional[Type[GuildChannel]]:
    if not isinstance(channel_type, ChannelType):
        channel_type = try_enum(ChannelType, channel_type)
    return _CHANNEL_CLASSES.get(channel_type)
