"""Tests for GuildChannel.permissions_for and GuildChannel.overwrites_for."""

from __future__ import annotations

import pytest

from conftest import (
    ATTACH_FILES,
    GUILD_ID,
    MANAGE_MESSAGES,
    OWNER_ID,
    SEND_MESSAGES,
    VIEW_CHANNEL,
)
from guildkit.errors import ObjectNotFound
from guildkit.override import ChannelOverwrite
from guildkit.permissions import Permissions
from guildkit.utils import Object


def set_overwrite(channel, target_id: int, type: str, allow: int = 0, deny: int = 0) -> None:
    overwrite = ChannelOverwrite(
        data={'id': str(target_id), 'type': type, 'allow': str(allow), 'deny': str(deny)},
        channel=channel,
    )
    channel._overwrites[overwrite.id] = overwrite


class TestOverwritesFor:
    """Tests for sorting overwrites into everyone/member/roles buckets."""

    def test_classifies_each_kind(self, text_channel):
        set_overwrite(text_channel, GUILD_ID, 'role', deny=SEND_MESSAGES)
        set_overwrite(text_channel, 200, 'role', allow=SEND_MESSAGES)
        set_overwrite(text_channel, 300, 'role', allow=ATTACH_FILES)
        set_overwrite(text_channel, 3, 'user', deny=ATTACH_FILES)

        buckets = text_channel.overwrites_for(3)

        assert buckets.everyone.id == GUILD_ID
        assert buckets.member.id == 3
        assert sorted(o.id for o in buckets.roles) == [200, 300]

    def test_ignores_unrelated_overwrites(self, text_channel):
        set_overwrite(text_channel, 300, 'role', allow=SEND_MESSAGES)
        set_overwrite(text_channel, 4, 'user', allow=SEND_MESSAGES)

        buckets = text_channel.overwrites_for(2)

        assert buckets.everyone is None
        assert buckets.member is None
        assert buckets.roles == []

    def test_everyone_overwrite_not_counted_as_role(self, text_channel, guild):
        # erin explicitly holds the @everyone role
        set_overwrite(text_channel, GUILD_ID, 'role', deny=SEND_MESSAGES)

        buckets = text_channel.overwrites_for(guild.get_member(6))

        assert buckets.everyone is not None
        assert buckets.roles == []

    def test_unknown_member(self, text_channel):
        with pytest.raises(ObjectNotFound) as exc_info:
            text_channel.overwrites_for(999)

        assert exc_info.value.kind == 'member'


class TestPermissionsFor:
    """Tests for the effective permission calculation."""

    def test_owner_gets_everything(self, text_channel):
        set_overwrite(text_channel, GUILD_ID, 'role', deny=VIEW_CHANNEL)
        set_overwrite(text_channel, OWNER_ID, 'user', deny=Permissions.all().value)

        assert text_channel.permissions_for(OWNER_ID) == Permissions.all()

    def test_administrator_gets_everything(self, text_channel):
        set_overwrite(text_channel, GUILD_ID, 'role', deny=VIEW_CHANNEL | SEND_MESSAGES)
        set_overwrite(text_channel, 400, 'role', deny=Permissions.all().value)
        set_overwrite(text_channel, 4, 'user', deny=Permissions.all().value)

        assert text_channel.permissions_for(4) == Permissions.all()

    def test_no_roles_no_overwrites_is_empty(self, text_channel):
        assert text_channel.permissions_for(5) == Permissions.none()

    def test_base_is_union_of_roles(self, text_channel):
        perms = text_channel.permissions_for(3)

        assert perms.value == ATTACH_FILES | MANAGE_MESSAGES

    def test_everyone_overwrite_only(self, text_channel):
        allow = VIEW_CHANNEL
        deny = ATTACH_FILES
        set_overwrite(text_channel, GUILD_ID, 'role', allow=allow, deny=deny)

        base = ATTACH_FILES  # alice only holds the Member role
        assert text_channel.permissions_for(2).value == (base | allow) & ~deny

    def test_member_allow_beats_role_deny(self, text_channel):
        set_overwrite(text_channel, 200, 'role', deny=SEND_MESSAGES)
        set_overwrite(text_channel, 2, 'user', allow=SEND_MESSAGES)

        assert text_channel.permissions_for(2).send_messages

    def test_role_allow_beats_everyone_deny(self, text_channel):
        set_overwrite(text_channel, GUILD_ID, 'role', deny=SEND_MESSAGES)
        set_overwrite(text_channel, 300, 'role', allow=SEND_MESSAGES)

        assert text_channel.permissions_for(3).send_messages
        assert not text_channel.permissions_for(2).send_messages

    def test_member_deny_beats_role_allow(self, text_channel):
        set_overwrite(text_channel, 200, 'role', allow=SEND_MESSAGES)
        set_overwrite(text_channel, 2, 'user', deny=SEND_MESSAGES)

        assert not text_channel.permissions_for(2).send_messages

    def test_overwrite_for_role_not_held_is_ignored(self, text_channel):
        set_overwrite(text_channel, 300, 'role', allow=VIEW_CHANNEL)

        assert not text_channel.permissions_for(2).view_channel

    def test_held_everyone_role_contributes_to_base(self, text_channel):
        perms = text_channel.permissions_for(6)

        assert perms.value == VIEW_CHANNEL | SEND_MESSAGES | ATTACH_FILES

    def test_category_overwrites(self, category):
        # @everyone cannot send, moderators can
        assert category.permissions_for(3).send_messages
        assert not category.permissions_for(6).send_messages

    def test_accepts_member_and_object(self, text_channel, guild):
        member = guild.get_member(3)

        assert text_channel.permissions_for(member) == text_channel.permissions_for(Object(3))

    def test_unknown_member(self, text_channel):
        with pytest.raises(ObjectNotFound):
            text_channel.permissions_for('nobody')
