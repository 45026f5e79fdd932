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

r"""
This module implements the RESP framing used by Redis, version 2 and 3.

Commands are always sent as an array of bulk strings:

>>> se = Serializer.build_bytes_serializer()
>>> encode_command(se, [b'HGETALL', b'user:1'])
>>> bytes(se.finalize())
b'*2\r\n$7\r\nHGETALL\r\n$6\r\nuser:1\r\n'

Replies can be any value, a RESP2 server answers `HGETALL` with a flat array and a RESP3 server with a map:

>>> de = Deserializer.build_bytes_deserializer(b'*2\r\n$2\r\nid\r\n$1\r\n7\r\n')
>>> decode_value(de)
Array(items=(BulkString(data=b'id'), BulkString(data=b'7')))
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(b'%1\r\n+id\r\n:7\r\n')
>>> decode_value(de)
Map(items=((SimpleString(text='id'), Int(value=7)),))
>>> de.finalize()

Both nil forms of RESP2 and the null of RESP3 are decoded to the same value:

>>> de = Deserializer.build_bytes_deserializer(b'$-1\r\n*-1\r\n_\r\n')
>>> decode_value(de), decode_value(de), decode_value(de)
(Nil(), Nil(), Nil())

Values written by `encode_value` use RESP3:

>>> se = Serializer.build_bytes_serializer()
>>> encode_value(se, VerbatimString('txt', 'hi'))
>>> encode_value(se, Boolean(True))
>>> bytes(se.finalize())
b'=6\r\ntxt:hi\r\n#t\r\n'
"""

from collections.abc import Sequence

from redis_record.serialization import Deserializer, Serializer
from redis_record.serialization.consts import DEFAULT_MAX_DEPTH
from redis_record.serialization.exceptions import BadDataError, TooLongError
from redis_record.wire.value import (
    NIL,
    Array,
    Boolean,
    BulkString,
    Double,
    ErrorReply,
    Int,
    Map,
    Nil,
    SimpleString,
    VerbatimString,
    WireValue,
)


def encode_bulk_string(serializer: Serializer, data: bytes) -> None:
    """ Encodes a byte-sequence as a RESP bulk string, `$<length>\r\n<data>\r\n`.
    """
    serializer.write_line(b'$%d' % len(data))
    serializer.write_bytes(data)
    serializer.write_bytes(b'\r\n')


def encode_command(serializer: Serializer, args: Sequence[bytes]) -> None:
    """ Encodes a command, that is, its name followed by its arguments, as an array of bulk strings.
    """
    if not args:
        raise ValueError('a command needs at least its name')
    serializer.write_line(b'*%d' % len(args))
    for arg in args:
        assert isinstance(arg, (bytes, bytearray, memoryview)), 'command arguments must be bytes'
        encode_bulk_string(serializer, bytes(arg))


def encode_value(serializer: Serializer, value: WireValue) -> None:
    """ Encodes any wire value using RESP3.
    """
    match value:
        case Nil():
            serializer.write_line(b'_')
        case BulkString(data):
            encode_bulk_string(serializer, data)
        case SimpleString(text):
            serializer.write_line(b'+' + text.encode('utf-8'))
        case ErrorReply(message):
            serializer.write_line(b'-' + message.encode('utf-8'))
        case VerbatimString(format_, text):
            if len(format_) != 3:
                raise ValueError('verbatim string format must have exactly 3 characters')
            data = format_.encode('ascii') + b':' + text.encode('utf-8')
            serializer.write_line(b'=%d' % len(data))
            serializer.write_bytes(data)
            serializer.write_bytes(b'\r\n')
        case Int(number):
            serializer.write_line(b':%d' % number)
        case Double(number):
            serializer.write_line(b',' + repr(number).encode('ascii'))
        case Boolean(flag):
            serializer.write_line(b'#t' if flag else b'#f')
        case Array(items):
            serializer.write_line(b'*%d' % len(items))
            for item in items:
                encode_value(serializer, item)
        case Map(items):
            serializer.write_line(b'%%%d' % len(items))
            for key, item in items:
                encode_value(serializer, key)
                encode_value(serializer, item)
        case _:
            raise TypeError(f'not a wire value: {value!r}')


def decode_value(deserializer: Deserializer, *, max_depth: int = DEFAULT_MAX_DEPTH) -> WireValue:
    """ Decodes a single RESP2 or RESP3 reply.

    Sets and pushes are decoded as arrays, big numbers as integers, attributes are skipped.
    """
    if max_depth < 0:
        raise TooLongError('reply is nested too deep')
    type_byte = deserializer.read_byte()
    match chr(type_byte):
        case '+':
            return SimpleString(_read_text(deserializer))
        case '-':
            return ErrorReply(_read_text(deserializer))
        case ':' | '(':
            return Int(_read_int(deserializer))
        case '$':
            data = _read_blob(deserializer)
            return NIL if data is None else BulkString(data)
        case '!':
            data = _read_blob(deserializer)
            return NIL if data is None else ErrorReply(data.decode('utf-8', errors='replace'))
        case '=':
            data = _read_blob(deserializer)
            if data is None:
                return NIL
            if len(data) < 4 or data[3:4] != b':':
                raise BadDataError('invalid verbatim string')
            try:
                return VerbatimString(data[:3].decode('ascii'), data[4:].decode('utf-8'))
            except UnicodeDecodeError as e:
                raise BadDataError('invalid verbatim string') from e
        case '_':
            if len(deserializer.read_line()):
                raise BadDataError('null must be empty')
            return NIL
        case ',':
            text = _read_text(deserializer)
            try:
                return Double(float(text))
            except ValueError as e:
                raise BadDataError(f'invalid double {text!r}') from e
        case '#':
            text = _read_text(deserializer)
            if text not in ('t', 'f'):
                raise BadDataError(f'invalid boolean {text!r}')
            return Boolean(text == 't')
        case '*' | '~' | '>':
            length = _read_int(deserializer)
            if length < 0:
                return NIL
            return Array(tuple(decode_value(deserializer, max_depth=max_depth - 1) for _ in range(length)))
        case '%':
            length = _read_int(deserializer)
            if length < 0:
                raise BadDataError('map length cannot be negative')
            return Map(tuple(_decode_pair(deserializer, max_depth - 1) for _ in range(length)))
        case '|':
            length = _read_int(deserializer)
            for _ in range(length):
                _decode_pair(deserializer, max_depth - 1)
            # XXX: an attribute counts as a nesting level, so chained attributes hit the limit too
            return decode_value(deserializer, max_depth=max_depth - 1)
        case _:
            raise BadDataError(f'unknown reply type {bytes([type_byte])!r}')


def _decode_pair(deserializer: Deserializer, max_depth: int) -> tuple[WireValue, WireValue]:
    key = decode_value(deserializer, max_depth=max_depth)
    value = decode_value(deserializer, max_depth=max_depth)
    return key, value


def _read_text(deserializer: Deserializer) -> str:
    line = deserializer.read_line()
    try:
        return bytes(line).decode('utf-8')
    except UnicodeDecodeError as e:
        raise BadDataError('invalid utf-8 in reply') from e


def _read_int(deserializer: Deserializer) -> int:
    text = _read_text(deserializer)
    try:
        return int(text)
    except ValueError as e:
        raise BadDataError(f'invalid integer {text!r}') from e


def _read_blob(deserializer: Deserializer) -> bytes | None:
    """ Read `<length>\r\n<data>\r\n`, returns None for the RESP2 nil `-1` length.
    """
    length = _read_int(deserializer)
    if length == -1:
        return None
    data = bytes(deserializer.read_bytes(length))
    deserializer.expect_crlf()
    return data
