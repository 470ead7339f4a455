"""Tests for GuildChannel.reorder_position and GuildChannel.set_position."""

from __future__ import annotations

import pytest

from guildkit.errors import InvalidArgument


class TestReorderPosition:
    """Tests for computing the position batch."""

    def test_move_up(self, guild, voice_channel):
        # Channels sit at 50:0, 10:1, 11:2, 12:3
        payload = voice_channel.reorder_position(1)

        assert payload == [
            {'id': '12', 'position': 1},
            {'id': '10', 'position': 2},
            {'id': '11', 'position': 3},
        ]

    def test_move_down(self, category):
        payload = category.reorder_position(2)

        assert payload == [
            {'id': '50', 'position': 2},
            {'id': '10', 'position': 0},
            {'id': '11', 'position': 1},
        ]

    def test_move_to_end(self, category):
        payload = category.reorder_position(3)

        assert payload[0] == {'id': '50', 'position': 3}
        assert {entry['id'] for entry in payload[1:]} == {'10', '11', '12'}

    def test_unchanged_position_still_listed(self, text_channel):
        payload = text_channel.reorder_position(1)

        assert payload == [{'id': '10', 'position': 1}]

    def test_closes_gaps(self, guild):
        for channel, position in zip(guild.channels, (0, 4, 7, 9)):
            channel.position = position

        payload = guild.get_channel(11).reorder_position(0)

        assert payload == [
            {'id': '11', 'position': 0},
            {'id': '50', 'position': 1},
            {'id': '10', 'position': 2},
            {'id': '12', 'position': 3},
        ]

    def test_positions_are_dense(self, guild, voice_channel):
        payload = voice_channel.reorder_position(0)

        final = {str(c.id): c.position for c in guild.channels}
        final.update({entry['id']: entry['position'] for entry in payload})

        assert sorted(final.values()) == [0, 1, 2, 3]

    @pytest.mark.parametrize('position', [-1, -10])
    def test_negative_position(self, text_channel, position):
        with pytest.raises(InvalidArgument):
            text_channel.reorder_position(position)


class TestSetPosition:
    """Tests for submitting the position batch."""

    @pytest.mark.asyncio
    async def test_submits_batch_once(self, state, guild, voice_channel):
        await voice_channel.set_position(1, reason='tidy up')

        state.modify_guild_channel_positions.assert_awaited_once_with(
            guild.id,
            [
                {'id': '12', 'position': 1},
                {'id': '10', 'position': 2},
                {'id': '11', 'position': 3},
            ],
            reason='tidy up',
        )

    @pytest.mark.asyncio
    async def test_local_positions_untouched(self, guild, voice_channel):
        await voice_channel.set_position(0)

        assert [c.position for c in guild.channels] == [0, 1, 2, 3]

    @pytest.mark.asyncio
    async def test_negative_position_not_dispatched(self, state, text_channel):
        with pytest.raises(InvalidArgument):
            await text_channel.set_position(-1)

        state.modify_guild_channel_positions.assert_not_called()
