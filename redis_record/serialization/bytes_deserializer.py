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

from typing_extensions import override

from .consts import DEFAULT_LINE_MAX_LENGTH
from .deserializer import Deserializer
from .exceptions import OutOfDataError, SerializationError, TooLongError


class BytesDeserializer(Deserializer):
    """Simple implementation of a Deserializer to parse values from a byte sequence.

    This implementation keeps the whole sequence and a cursor that is advanced as the bytes are read.
    """

    def __init__(self, data: bytes | memoryview) -> None:
        self._data = bytes(data)
        self._pos = 0

    @override
    def finalize(self) -> None:
        if not self.is_empty():
            raise SerializationError('trailing data')

    @override
    def is_empty(self) -> bool:
        return self._pos >= len(self._data)

    @override
    def peek_byte(self) -> int:
        if self.is_empty():
            raise OutOfDataError('not enough bytes to read')
        return self._data[self._pos]

    @override
    def read_byte(self) -> int:
        b = self.peek_byte()
        self._pos += 1
        return b

    @override
    def _read_bytes(self, n: int) -> memoryview:
        end = self._pos + n
        if end > len(self._data):
            raise OutOfDataError('not enough bytes to read')
        b = memoryview(self._data)[self._pos:end]
        self._pos = end
        return b

    @override
    def read_line(self, *, max_bytes: int | None = DEFAULT_LINE_MAX_LENGTH) -> memoryview:
        end = self._data.find(b'\r\n', self._pos)
        if end < 0:
            if max_bytes is not None and len(self._data) - self._pos > max_bytes:
                raise TooLongError('line exceeds maximum length')
            raise OutOfDataError('line is not terminated')
        if max_bytes is not None and end - self._pos > max_bytes:
            raise TooLongError('line exceeds maximum length')
        b = memoryview(self._data)[self._pos:end]
        self._pos = end + 2
        return b
