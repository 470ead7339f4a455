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
from typing import List, Optional, TypedDict
from typing_extensions import NotRequired

from .channel import GuildChannel


class Role(TypedDict):
    id: str
    name: str
    permissions: str
    position: int
    color: NotRequired[int]
    hoist: NotRequired[bool]
    managed: NotRequired[bool]
    mentionable: NotRequired[bool]


class User(TypedDict):
    id: str
    username: str
    discriminator: NotRequired[str]
    global_name: NotRequired[Optional[str]]
    bot: NotRequired[bool]


class Member(TypedDict):
    user: User
    roles: List[str]
    nick: NotRequired[Optional[str]]
    joined_at: NotRequired[str]


class Guild(TypedDict):
    id: str
    name: str
    owner_id: str
    roles: List[Role]
    members: NotRequired[List[Member]]
    channels: NotRequired[List[GuildChannel]]
