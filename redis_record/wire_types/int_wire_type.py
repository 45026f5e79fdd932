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

import re
from typing import Any

from typing_extensions import Self, override

from redis_record.exception import DescriptorError, ValueTypeError
from redis_record.wire.value import Int, WireValue, text_bytes
from redis_record.wire_types.wire_type import WireType

_INT_RE = re.compile(rb'[+-]?[0-9]+')


class IntWireType(WireType[int]):
    """ Represents builtin `int` values, written in decimal.

    Textual replies are parsed strictly, surrounding spaces or digit separators are not accepted.
    """

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: WireType.TypeMap) -> Self:
        if type_ is not int:
            raise DescriptorError('expected int type')
        return cls()

    @override
    def type_name(self) -> str:
        return 'int'

    @override
    def _check_value(self, value: int, /) -> None:
        # XXX: bool is a subclass of int, but it has its own encoding
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueTypeError(f'expected int, got {type(value).__name__}')

    @override
    def _write_args(self, value: int, out: list[bytes], /) -> None:
        out.append(b'%d' % value)

    @override
    def _from_wire(self, wire_value: WireValue, /) -> int:
        if isinstance(wire_value, Int):
            return wire_value.value
        raw = text_bytes(wire_value)
        if raw is None:
            raise self._conversion_error(wire_value)
        if _INT_RE.fullmatch(raw) is None:
            raise self._conversion_error(wire_value, 'not an integer')
        return int(raw)
