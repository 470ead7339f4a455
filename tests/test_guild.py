"""Tests for the guild cache and the objects built from it."""

from __future__ import annotations

import pytest

from conftest import GUILD_ID, OWNER_ID
from guildkit.channel import (
    CategoryChannel,
    NewsChannel,
    StageChannel,
    TextChannel,
    VoiceChannel,
    _channel_factory,
    editable_fields,
)
from guildkit.enums import ChannelType, OverwriteType, try_enum
from guildkit.errors import ObjectNotFound
from guildkit.utils import Object


class TestGuild:
    def test_caches_from_payload(self, guild):
        assert guild.id == GUILD_ID
        assert guild.owner.id == OWNER_ID
        assert len(guild.channels) == 4
        assert len(guild.members) == 6
        assert [role.id for role in guild.roles] == [GUILD_ID, 200, 300, 400]

    def test_default_role(self, guild):
        role = guild.default_role

        assert role.is_default()
        assert role.mention == '@everyone'
        assert not guild.get_role(200).is_default()
        assert guild.get_role(200).mention == '<@&200>'

    def test_channel_classes(self, guild):
        assert isinstance(guild.get_channel(50), CategoryChannel)
        assert isinstance(guild.get_channel(10), TextChannel)
        assert isinstance(guild.get_channel(12), VoiceChannel)

    def test_category_children(self, category):
        assert [channel.id for channel in category.channels] == [10, 12]

    def test_parent(self, guild, text_channel):
        assert text_channel.parent is guild.get_channel(50)
        assert text_channel.category is text_channel.parent
        assert guild.get_channel(11).parent is None

    def test_sync_patches_and_adds(self, guild, text_channel):
        guild._sync_channels([
            {'id': '10', 'type': 0, 'name': 'renamed'},
            {'id': '13', 'type': 5, 'name': 'news', 'position': 4},
            {'id': '14', 'type': 13, 'name': 'stage', 'position': 5},
        ])

        assert guild.get_channel(10) is text_channel
        assert text_channel.name == 'renamed'
        assert text_channel.topic == 'Talk here'
        assert isinstance(guild.get_channel(13), NewsChannel)
        assert guild.get_channel(13).is_news()
        assert isinstance(guild.get_channel(14), StageChannel)

    def test_sync_skips_unsupported_types(self, guild):
        guild._sync_channels([{'id': '15', 'type': 99, 'name': 'mystery'}])

        assert guild.get_channel(15) is None

    def test_sync_drops_missing_channels(self, guild, text_channel):
        payloads = [{'id': str(channel.id), 'type': channel.type.value} for channel in guild.channels if channel.id != 11]

        guild._sync_channels(payloads)

        assert guild.get_channel(11) is None
        assert guild.get_channel(10) is text_channel
        assert len(guild.channels) == 3

    def test_sync_rebuilds_changed_type(self, guild, text_channel):
        guild._sync_channels([{'id': '10', 'type': 5, 'name': 'announcements'}])

        channel = guild.get_channel(10)
        assert channel is not text_channel
        assert isinstance(channel, NewsChannel)
        assert channel.type == ChannelType.news
        assert channel.name == 'announcements'

    def test_sync_drops_channel_turned_unsupported(self, guild):
        guild._sync_channels([{'id': '10', 'type': 99}])

        assert guild.get_channel(10) is None


class TestResolution:
    @pytest.mark.parametrize('value', [3, '3', Object(3)])
    def test_resolve_member(self, guild, value):
        assert guild.resolve_member(value) is guild.get_member(3)

    def test_resolve_member_missing(self, guild):
        with pytest.raises(ObjectNotFound) as exc_info:
            guild.resolve_member(42)

        assert exc_info.value.kind == 'member'
        assert exc_info.value.target == 42

    @pytest.mark.parametrize('value', [None, True, 'abc', 3.9, 3.0])
    def test_resolve_member_rejects_garbage(self, guild, value):
        with pytest.raises(ObjectNotFound):
            guild.resolve_member(value)

    def test_overwrite_target_prefers_member(self, guild):
        kind, resolved = guild.resolve_overwrite_target(2)

        assert kind is OverwriteType.member
        assert resolved is guild.get_member(2)

    def test_overwrite_target_falls_back_to_role(self, guild):
        kind, resolved = guild.resolve_overwrite_target(guild.get_role(300))

        assert kind is OverwriteType.role
        assert resolved is guild.get_role(300)

    def test_overwrite_target_missing(self, guild):
        with pytest.raises(ObjectNotFound) as exc_info:
            guild.resolve_overwrite_target(999)

        assert exc_info.value.kind == 'role'


class TestMember:
    def test_roles_sorted_by_position(self, guild):
        member = guild.get_member(3)

        assert [role.id for role in member.roles] == [200, 300]
        assert member.has_role(300)
        assert not member.has_role(400)

    def test_uncached_roles_are_skipped(self, guild):
        member = guild.get_member(2)
        member._role_ids.add(12345)

        assert [role.id for role in member.roles] == [200]
        assert 12345 in member.role_ids

    def test_everyone_is_not_implied(self, guild):
        assert guild.get_member(5).roles == []

    def test_is_owner(self, guild):
        assert guild.get_member(OWNER_ID).is_owner()
        assert not guild.get_member(2).is_owner()


class TestChannelKinds:
    def test_factory(self):
        assert _channel_factory(0) is TextChannel
        assert _channel_factory(ChannelType.voice) is VoiceChannel
        assert _channel_factory(4) is CategoryChannel
        assert _channel_factory(1) is None
        assert _channel_factory(99) is None

    def test_editable_fields(self):
        assert 'bitrate' in editable_fields(ChannelType.voice)
        assert 'bitrate' not in editable_fields(ChannelType.text)
        assert 'topic' in editable_fields(ChannelType.stage_voice)
        assert editable_fields(ChannelType.category) == {'name', 'position'}
        assert editable_fields(try_enum(ChannelType, 99)) == {'name', 'position'}

    def test_unknown_channel_type(self):
        value = try_enum(ChannelType, 99)

        assert value.value == 99
        assert value.name == 'unknown_99'

    def test_voice_defaults(self, guild):
        guild._sync_channels([{'id': '16', 'type': 2, 'name': 'plain'}])
        channel = guild.get_channel(16)

        assert channel.bitrate == 64000
        assert channel.user_limit == 0


class TestChannelOverwrite:
    def test_copy_rebinds_channel(self, category, text_channel):
        original = category.overwrites[300]

        copy = original.copy(channel=text_channel)

        assert copy == original
        assert copy is not original
        assert copy.channel is text_channel
        assert copy.to_dict() == {'id': '300', 'type': 'role', 'allow': str(1 << 11), 'deny': '0'}

    def test_is_nsfw(self, text_channel):
        assert not text_channel.is_nsfw()
        text_channel._update({'nsfw': True})
        assert text_channel.is_nsfw()

    def test_hashable(self, category):
        original = category.overwrites[300]

        assert {original, original.copy()} == {original}
        assert original in {original.copy(): 'kept'}
