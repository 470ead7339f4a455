"""Shared fixtures for guildkit tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from guildkit.guild import Guild
from guildkit.http import HTTPClient


GUILD_ID = 100
OWNER_ID = 1

# Permission bits used throughout the tests
ADMINISTRATOR = 1 << 3
MANAGE_MESSAGES = 1 << 13
VIEW_CHANNEL = 1 << 10
SEND_MESSAGES = 1 << 11
ATTACH_FILES = 1 << 15

ENDPOINTS = (
    'edit_channel',
    'delete_channel',
    'create_channel_invite',
    'get_channel_invites',
    'edit_channel_permissions',
    'create_guild_channel',
    'modify_guild_channel_positions',
    'get_guild',
    'get_guild_channels',
)


def make_guild_data() -> dict:
    return {
        'id': str(GUILD_ID),
        'name': 'Test Guild',
        'owner_id': str(OWNER_ID),
        'roles': [
            # @everyone shares the guild's ID
            {'id': str(GUILD_ID), 'name': '@everyone', 'permissions': str(VIEW_CHANNEL | SEND_MESSAGES), 'position': 0},
            {'id': '200', 'name': 'Member', 'permissions': str(ATTACH_FILES), 'position': 1},
            {'id': '300', 'name': 'Moderator', 'permissions': str(MANAGE_MESSAGES), 'position': 2},
            {'id': '400', 'name': 'Admin', 'permissions': str(ADMINISTRATOR), 'position': 3},
        ],
        'members': [
            {'user': {'id': str(OWNER_ID), 'username': 'owner'}, 'roles': []},
            {'user': {'id': '2', 'username': 'alice'}, 'roles': ['200']},
            {'user': {'id': '3', 'username': 'bob'}, 'roles': ['200', '300']},
            {'user': {'id': '4', 'username': 'carol'}, 'roles': ['400']},
            {'user': {'id': '5', 'username': 'dave'}, 'roles': []},
            {'user': {'id': '6', 'username': 'erin'}, 'roles': [str(GUILD_ID), '200']},
        ],
        'channels': [
            {
                'id': '50',
                'type': 4,
                'name': 'General',
                'position': 0,
                'permission_overwrites': [
                    {'id': str(GUILD_ID), 'type': 'role', 'allow': '0', 'deny': str(SEND_MESSAGES)},
                    {'id': '300', 'type': 'role', 'allow': str(SEND_MESSAGES), 'deny': '0'},
                ],
            },
            {
                'id': '10',
                'type': 0,
                'name': 'chat',
                'position': 1,
                'parent_id': '50',
                'topic': 'Talk here',
                'nsfw': False,
                'permission_overwrites': [],
            },
            {
                'id': '11',
                'type': 0,
                'name': 'off-topic',
                'position': 2,
                'parent_id': None,
                'permission_overwrites': [],
            },
            {
                'id': '12',
                'type': 2,
                'name': 'Lounge',
                'position': 3,
                'parent_id': '50',
                'bitrate': 96000,
                'user_limit': 10,
                'permission_overwrites': [],
            },
        ],
    }


def make_http_error(cls, status: int, message: str = 'error', code: int = 0):
    response = MagicMock()
    response.status = status
    response.reason = 'Error'
    return cls(response, {'message': message, 'code': code})


@pytest.fixture
def state() -> MagicMock:
    """An HTTPClient stand-in whose endpoints are async mocks."""
    http = MagicMock(spec=HTTPClient)
    for name in ENDPOINTS:
        setattr(http, name, AsyncMock(name=name))
    return http


@pytest.fixture
def guild(state: MagicMock) -> Guild:
    return Guild(state=state, data=make_guild_data())


@pytest.fixture
def category(guild: Guild):
    return guild.get_channel(50)


@pytest.fixture
def text_channel(guild: Guild):
    return guild.get_channel(10)


@pytest.fixture
def voice_channel(guild: Guild):
    return guild.get_channel(12)
