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
from redis_record.wire.value import WireValue, text_bytes
from redis_record.wire_types.wire_type import WireType


class BytesWireType(WireType[bytes]):
    """ Represents builtin `bytes` values, written verbatim.
    """

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: WireType.TypeMap) -> Self:
        if type_ is not bytes:
            raise DescriptorError('expected bytes type')
        return cls()

    @override
    def type_name(self) -> str:
        return 'bytes'

    @override
    def _check_value(self, value: bytes, /) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise ValueTypeError(f'expected bytes, got {type(value).__name__}')

    @override
    def _write_args(self, value: bytes, out: list[bytes], /) -> None:
        out.append(bytes(value))

    @override
    def _from_wire(self, wire_value: WireValue, /) -> bytes:
        raw = text_bytes(wire_value)
        if raw is None:
            raise self._conversion_error(wire_value)
        return raw
