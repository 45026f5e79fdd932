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
from redis_record.wire.value import Double, Int, WireValue, text_bytes
from redis_record.wire_types.wire_type import WireType


class FloatWireType(WireType[float]):
    """ Represents builtin `float` values, written with `repr` so that they're read back exactly.

    As usual in annotations, a `float` field also accepts `int` values.
    """

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: WireType.TypeMap) -> Self:
        if type_ is not float:
            raise DescriptorError('expected float type')
        return cls()

    @override
    def type_name(self) -> str:
        return 'float'

    @override
    def _check_value(self, value: float, /) -> None:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ValueTypeError(f'expected float, got {type(value).__name__}')
        if isinstance(value, int):
            try:
                float(value)
            except OverflowError:
                raise ValueTypeError('int value is too large to be written as float') from None

    @override
    def _write_args(self, value: float, out: list[bytes], /) -> None:
        out.append(repr(float(value)).encode('ascii'))

    @override
    def _from_wire(self, wire_value: WireValue, /) -> float:
        match wire_value:
            case Double(number):
                return number
            case Int(number):
                return float(number)
        raw = text_bytes(wire_value)
        if raw is None:
            raise self._conversion_error(wire_value)
        try:
            return float(raw.decode('ascii'))
        except (UnicodeDecodeError, ValueError):
            raise self._conversion_error(wire_value, 'not a number') from None
