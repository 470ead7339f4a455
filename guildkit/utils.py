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

import datetime
from operator import attrgetter
from typing import Any, Callable, Iterable, Optional, TypeVar, Union


__all__ = (
    'Object',
    'find',
    'get',
    'snowflake_time',
)


DISCORD_EPOCH = 1420070400000


T = TypeVar('T')


def _get_as_snowflake(data: Any, key: str) -> Optional[int]:
    try:
        value = data[key]
    except KeyError:
        return None
    else:
        return value and int(value)


def _get_id(obj: Any) -> int:
    """Returns the integer ID of an object with an ``id`` attribute, or of a
    raw ID."""
    if hasattr(obj, 'id'):
        obj = obj.id

    if isinstance(obj, bool) or not isinstance(obj, (int, str)):
        raise TypeError(f'{obj.__class__.__name__} is not a valid ID')

    return int(obj)


def snowflake_time(id: int) -> datetime.datetime:
    """Returns the creation time of the given snowflake.

    Parameters
    -----------
    id: :class:`int`
        The snowflake ID.

    Returns
    --------
    :class:`datetime.datetime`
        An aware datetime in UTC representing the creation time of the snowflake.
    """
    timestamp = ((id >> 22) + DISCORD_EPOCH) / 1000
    return datetime.datetime.fromtimestamp(timestamp, tz=datetime.timezone.utc)


def find(predicate: Callable[[T], Any], sequence: Iterable[T]) -> Optional[T]:
    """Iterate through ``sequence`` to find a matching object for ``predicate``.

    If nothing is found, ``None`` is returned.

    Parameters
    -----------
    predicate: Callable
        A function that returns a boolean or boolean-like result.
    sequence
        An iterable to search through.
    """
    for element in sequence:
        if predicate(element):
            return element
    return None


def get(sequence, **attributes):
    """Return an object from ``sequence`` that matches the ``attributes``.

    If nothing is found, ``None`` is returned.

    Parameters
    -----------
    sequence
        An iterable to search through.
    **attrs
        Keyword arguments representing attributes of each item to match with.
    """
    # global -> local
    _all = all
    attrget = attrgetter

    # Special case the single element call
    if len(attributes) == 1:
        k, v = attributes.popitem()
        pred = attrget(k.replace('__', '.'))
        for elem in sequence:
            if pred(elem) == v:
                return elem
        return None

    converted = [
        (attrget(attr.replace('__', '.')), value)
        for attr, value in attributes.items()
    ]

    for elem in sequence:
        if _all(pred(elem) == value for pred, value in converted):
            return elem
    return None


class Object:
    """Represents a generic Discord object.

    Useful when only an ID is known, e.g. to pass a role or member that is
    not cached to a function expecting a model.

    .. container:: operations

        .. describe:: x == y

            Checks if two objects are equal.

        .. describe:: x != y

            Checks if two objects are not equal.

        .. describe:: hash(x)

            Returns the object's hash.

    Attributes
    -----------
    id: :class:`int`
        The ID of the object.
    """

    def __init__(self, id: Union[str, int]):
        try:
            id = int(id)
        except (TypeError, ValueError):
            raise TypeError(f'id must be int-convertible, not {id.__class__.__name__}') from None

        self.id: int = id

    def __repr__(self) -> str:
        return f'<Object id={self.id!r}>'

    def __eq__(self, other) -> bool:
        return hasattr(other, 'id') and self.id == other.id

    def __hash__(self) -> int:
        return self.id >> 22

    @property
    def created_at(self) -> datetime.datetime:
        """:class:`datetime.datetime`: Returns the snowflake's creation time in UTC."""
        return snowflake_time(self.id)
