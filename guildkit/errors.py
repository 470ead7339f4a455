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

__all__ = (
    'GuildkitException',
    'ClientException',
    'HTTPException',
    'Forbidden',
    'NotFound',
    'DiscordServerError',
    'InvalidData',
    'InvalidArgument',
    'ObjectNotFound',
    'PreconditionFailed',
)


class GuildkitException(Exception):
    """Base class for all guildkit exceptions."""
    pass


class ClientException(GuildkitException):
    """Thrown when an operation in the :class:`Client` fails locally,
    before anything is sent to Discord."""
    pass


class HTTPException(GuildkitException):
    """A non-ok response from Discord was returned whilst performing an HTTP
    request.

    These are never retried or rewritten by channel operations; they reach
    the caller exactly as the transport raised them.

    Attributes
    -----------
    response: :class:`aiohttp.ClientResponse`
        The :class:`aiohttp.ClientResponse` of the failed request.
    status: :class:`int`
        The HTTP status code of the request.
    code: :class:`int`
        The Discord-specific error code, or ``0`` if none was sent.
    text: :class:`str`
        The message that came with the error.
    """
    def __init__(self, response, data):
        self.response = response
        self.status: int = response.status
        if isinstance(data, dict):
            self.code: int = data.get('code', 0)
            self.text: str = data.get('message', '')
        else:
            self.code = 0
            self.text = data or ''

        message = f'{self.status} {getattr(response, "reason", "") or ""} (error code: {self.code})'
        if self.text:
            message = f'{message}: {self.text}'

        super().__init__(message)


class Forbidden(HTTPException):
    """Thrown on status code 403"""
    pass


class NotFound(HTTPException):
    """Thrown on status code 404"""
    pass


class DiscordServerError(HTTPException):
    """Thrown on status code 500 and above"""
    pass


class InvalidData(ClientException):
    """Exception that's raised when the library encounters unknown or invalid
    data from Discord.
    """
    pass


class InvalidArgument(ClientException):
    """Thrown when an argument to a function is invalid some way (e.g. wrong
    value or wrong type).

    This could be considered the analogous of ``ValueError`` and
    ``TypeError`` except inherited from :exc:`ClientException` and thus
    :exc:`GuildkitException`.
    """
    pass


class ObjectNotFound(ClientException):
    """Thrown when a member or role could not be resolved from the guild's
    cache.

    Attributes
    -----------
    kind: :class:`str`
        What was being looked up, ``'member'`` or ``'role'``.
    target: Any
        The value that failed to resolve.
    """
    def __init__(self, kind: str, target):
        self.kind: str = kind
        self.target = target
        super().__init__(f'No {kind} found for {target!r}')


class PreconditionFailed(ClientException):
    """Thrown when a channel is not in a state that allows the operation,
    e.g. locking permissions on a channel without a parent."""
    pass
