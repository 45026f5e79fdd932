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
from redis_record.wire.value import Boolean, Int, WireValue, text_bytes
from redis_record.wire_types.wire_type import WireType

_TRUE_TEXTS = frozenset([b'1', b'true'])
_FALSE_TEXTS = frozenset([b'0', b'false'])


class BoolWireType(WireType[bool]):
    """ Represents builtin `bool` values, written as `1` or `0`.
    """

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: WireType.TypeMap) -> Self:
        if type_ is not bool:
            raise DescriptorError('expected bool type')
        return cls()

    @override
    def type_name(self) -> str:
        return 'bool'

    @override
    def _check_value(self, value: bool, /) -> None:
        if not isinstance(value, bool):
            raise ValueTypeError(f'expected bool, got {type(value).__name__}')

    @override
    def _write_args(self, value: bool, out: list[bytes], /) -> None:
        out.append(b'1' if value else b'0')

    @override
    def _from_wire(self, wire_value: WireValue, /) -> bool:
        match wire_value:
            case Boolean(flag):
                return flag
            case Int(0):
                return False
            case Int(1):
                return True
        raw = text_bytes(wire_value)
        if raw is not None:
            if raw in _TRUE_TEXTS:
                return True
            if raw in _FALSE_TEXTS:
                return False
        raise self._conversion_error(wire_value)
