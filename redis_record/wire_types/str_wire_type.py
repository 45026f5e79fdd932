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

from __future__ import annotations

from typing import Any

from typing_extensions import Self, override

from redis_record.exception import DescriptorError, ValueTypeError
from redis_record.wire.value import BulkString, Double, Int, SimpleString, VerbatimString, WireValue
from redis_record.wire_types.wire_type import WireType


class StrWireType(WireType[str]):
    """ Represents builtin `str` values.

    Bulk strings carry raw bytes, the configured encoding is used to go from and to `str`.
    """

    __slots__ = ('_encoding',)

    _encoding: str

    def __init__(self, encoding: str = 'utf-8') -> None:
        self._encoding = encoding

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: WireType.TypeMap) -> Self:
        from redis_record.conf.get_settings import get_global_settings
        if type_ is not str:
            raise DescriptorError('expected str type')
        settings = get_global_settings()
        return cls(settings.STRING_ENCODING)

    @override
    def _eq_key(self) -> tuple[Any, ...]:
        return (self._encoding,)

    @override
    def type_name(self) -> str:
        return 'str'

    @override
    def _check_value(self, value: str, /) -> None:
        if not isinstance(value, str):
            raise ValueTypeError(f'expected str, got {type(value).__name__}')

    @override
    def _write_args(self, value: str, out: list[bytes], /) -> None:
        out.append(value.encode(self._encoding))

    @override
    def _from_wire(self, wire_value: WireValue, /) -> str:
        match wire_value:
            case BulkString(data):
                try:
                    return data.decode(self._encoding)
                except UnicodeDecodeError:
                    raise self._conversion_error(wire_value, f'invalid {self._encoding}') from None
            case SimpleString(text) | VerbatimString(_, text):
                return text
            case Int(number):
                return str(number)
            case Double(number):
                return repr(number)
        raise self._conversion_error(wire_value)
