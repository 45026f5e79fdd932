#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

"""
Model of the values exchanged with the store, mirroring the RESP2/RESP3 reply types.

Values are immutable and compare by value, so a decoded reply can be checked directly against an expected value:

>>> from_python([b'id', b'7', 'label', None])
Array(items=(BulkString(data=b'id'), BulkString(data=b'7'), SimpleString(text='label'), Nil()))
>>> from_python({b'id': 7}) == Map(((BulkString(b'id'), Int(7)),))
True
>>> is_null_sentinel(BulkString(b'null')), is_null_sentinel(SimpleString('nil'))
(True, False)
"""

from dataclasses import dataclass
from typing import Any, TypeAlias, Union

NULL_SENTINEL = b'null'
NULL_SENTINEL_TEXT = NULL_SENTINEL.decode('ascii')


@dataclass(frozen=True, slots=True)
class Nil:
    pass


@dataclass(frozen=True, slots=True)
class BulkString:
    data: bytes


@dataclass(frozen=True, slots=True)
class SimpleString:
    text: str


@dataclass(frozen=True, slots=True)
class VerbatimString:
    format: str
    text: str


@dataclass(frozen=True, slots=True)
class Int:
    value: int


@dataclass(frozen=True, slots=True)
class Double:
    value: float


@dataclass(frozen=True, slots=True)
class Boolean:
    value: bool


@dataclass(frozen=True, slots=True)
class ErrorReply:
    message: str


@dataclass(frozen=True, slots=True)
class Array:
    items: tuple['WireValue', ...]


@dataclass(frozen=True, slots=True)
class Map:
    items: tuple[tuple['WireValue', 'WireValue'], ...]


WireValue: TypeAlias = Union[
    Nil, BulkString, SimpleString, VerbatimString, Int, Double, Boolean, ErrorReply, Array, Map,
]

WIRE_VALUE_CLASSES: tuple[type, ...] = (
    Nil, BulkString, SimpleString, VerbatimString, Int, Double, Boolean, ErrorReply, Array, Map,
)

# textual scalars, the ones that carry bytes or text that can be parsed into other types
TEXT_VALUE_CLASSES: tuple[type, ...] = (BulkString, SimpleString, VerbatimString)

NIL = Nil()


def is_wire_value(obj: Any) -> bool:
    return isinstance(obj, WIRE_VALUE_CLASSES)


def text_bytes(value: WireValue) -> bytes | None:
    """ Returns the raw content of a textual scalar, or None if the value is not textual.

    `SimpleString` and `VerbatimString` are always ASCII/UTF-8 on the wire, so they're encoded back with UTF-8.
    """
    match value:
        case BulkString(data):
            return data
        case SimpleString(text):
            return text.encode('utf-8')
        case VerbatimString(_, text):
            return text.encode('utf-8')
        case _:
            return None


def is_null_sentinel(value: WireValue) -> bool:
    """ Whether a value stands for an absent optional field.

    Besides nil, any textual scalar that is exactly `null` matches, whichever of the textual reply types carried it.
    """
    match value:
        case Nil():
            return True
        case BulkString(data):
            return data == NULL_SENTINEL
        case SimpleString(text):
            return text == NULL_SENTINEL_TEXT
        case VerbatimString(_, text):
            return text == NULL_SENTINEL_TEXT
        case _:
            return False


def from_python(obj: Any) -> WireValue:
    """ Convert a reply as returned by common Python clients into a WireValue.

    WireValue instances are returned as they are, containers are converted recursively.
    """
    if is_wire_value(obj):
        return obj
    if obj is None:
        return NIL
    # XXX: bool must come before int because bool is a subclass of int
    if isinstance(obj, bool):
        return Boolean(obj)
    if isinstance(obj, int):
        return Int(obj)
    if isinstance(obj, float):
        return Double(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BulkString(bytes(obj))
    if isinstance(obj, str):
        return SimpleString(obj)
    if isinstance(obj, (list, tuple)):
        return Array(tuple(from_python(i) for i in obj))
    if isinstance(obj, dict):
        return Map(tuple((from_python(k), from_python(v)) for k, v in obj.items()))
    raise TypeError(f'cannot convert {type(obj).__name__} to a wire value')


def describe(value: WireValue) -> str:
    """Short description of a value for error messages."""
    match value:
        case Array(items):
            return f'array of {len(items)}'
        case Map(items):
            return f'map of {len(items)}'
        case Nil():
            return 'nil'
        case _:
            return repr(value)
