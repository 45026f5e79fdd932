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

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, final

from .consts import DEFAULT_BYTES_MAX_LENGTH, DEFAULT_LINE_MAX_LENGTH
from .exceptions import BadDataError, TooLongError

if TYPE_CHECKING:
    from .bytes_deserializer import BytesDeserializer


class Deserializer(ABC):
    @staticmethod
    def build_bytes_deserializer(data: bytes | memoryview) -> BytesDeserializer:
        from .bytes_deserializer import BytesDeserializer
        return BytesDeserializer(data)

    @abstractmethod
    def finalize(self) -> None:
        """Check that all data was consumed, raises SerializationError otherwise."""
        raise NotImplementedError

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def peek_byte(self) -> int:
        """Read a single byte but don't consume from buffer."""
        raise NotImplementedError

    @abstractmethod
    def read_byte(self) -> int:
        """Read a single byte as unsigned int."""
        raise NotImplementedError

    @abstractmethod
    def _read_bytes(self, n: int) -> memoryview:
        # XXX: it is recommended that implementors of Deserializer specialize this implementation
        return memoryview(bytes(self.read_byte() for _ in range(n)))

    @final
    def read_bytes(self, n: int, *, max_bytes: int | None = DEFAULT_BYTES_MAX_LENGTH) -> memoryview:
        """Read n bytes, errors if there isn't enough data"""
        if n < 0:
            raise BadDataError('length cannot be negative')
        if max_bytes is not None and n > max_bytes:
            raise TooLongError('requested length exceeds maximum length')
        return self._read_bytes(n)

    def read_line(self, *, max_bytes: int | None = DEFAULT_LINE_MAX_LENGTH) -> memoryview:
        """Read bytes up to the next CRLF, the CRLF is consumed but not included in the result."""
        # XXX: it is recommended that implementors of Deserializer specialize this implementation
        line = bytearray()
        while True:
            byte = self.read_byte()
            if byte == 0x0d:
                if self.read_byte() != 0x0a:
                    raise BadDataError('expected LF after CR')
                return memoryview(bytes(line))
            line.append(byte)
            if max_bytes is not None and len(line) > max_bytes:
                raise TooLongError('line exceeds maximum length')

    def expect_crlf(self) -> None:
        """Consume a CRLF, raises BadDataError if something else is found."""
        if bytes(self.read_bytes(2)) != b'\r\n':
            raise BadDataError('expected CRLF')
