"""Tests for guildkit.utils."""

from __future__ import annotations

import datetime

import pytest

from guildkit import utils
from guildkit.utils import Object, _get_as_snowflake, _get_id


class TestLookupHelpers:
    def test_get_by_attribute(self, guild):
        channel = utils.get(guild.channels, name='chat')

        assert channel is guild.get_channel(10)

    def test_get_by_several_attributes(self, guild):
        channel = utils.get(guild.channels, parent_id=50, name='Lounge')

        assert channel is guild.get_channel(12)
        assert utils.get(guild.channels, parent_id=50, name='off-topic') is None

    def test_get_nested_attribute(self, guild):
        role = utils.get(guild.roles, guild__id=guild.id, name='Moderator')

        assert role is guild.get_role(300)

    def test_find(self, guild):
        member = utils.find(lambda m: m.name.startswith('c'), guild.members)

        assert member.id == 4
        assert utils.find(lambda m: m.bot, guild.members) is None


class TestIds:
    @pytest.mark.parametrize('value, expected', [(5, 5), ('5', 5), (Object(5), 5)])
    def test_get_id(self, value, expected):
        assert _get_id(value) == expected

    @pytest.mark.parametrize('value', [True, 3.9, 3.0, None])
    def test_get_id_rejects_non_integers(self, value):
        with pytest.raises(TypeError):
            _get_id(value)

    def test_get_as_snowflake(self):
        assert _get_as_snowflake({'parent_id': '50'}, 'parent_id') == 50
        assert _get_as_snowflake({'parent_id': None}, 'parent_id') is None
        assert _get_as_snowflake({}, 'parent_id') is None

    def test_object(self):
        obj = Object('175928847299117063')

        assert obj.id == 175928847299117063
        assert obj == Object(175928847299117063)
        assert obj.created_at == utils.snowflake_time(obj.id)
        with pytest.raises(TypeError):
            Object('abc')

    def test_snowflake_time(self):
        # 2016-04-30 11:18:25.796 UTC
        created = utils.snowflake_time(175928847299117063)

        assert created.tzinfo is datetime.timezone.utc
        assert (created.year, created.month, created.day) == (2016, 4, 30)
        assert utils.snowflake_time(0) == datetime.datetime(2015, 1, 1, tzinfo=datetime.timezone.utc)
