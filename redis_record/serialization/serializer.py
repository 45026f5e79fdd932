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

from .consts import DEFAULT_BYTES_MAX_LENGTH
from .exceptions import TooLongError

if TYPE_CHECKING:
    from .bytes_serializer import BytesSerializer

CRLF = b'\r\n'


class Serializer(ABC):
    @staticmethod
    def build_bytes_serializer() -> BytesSerializer:
        from .bytes_serializer import BytesSerializer
        return BytesSerializer()

    @abstractmethod
    def write_byte(self, data: int) -> None:
        """Write a single byte."""
        raise NotImplementedError

    @abstractmethod
    def _write_bytes(self, data: bytes | memoryview) -> None:
        # XXX: it is recommended that implementors of Serializer specialize this implementation
        for byte in data:
            self.write_byte(byte)

    @final
    def write_bytes(self, data: bytes | memoryview, *, max_bytes: int | None = DEFAULT_BYTES_MAX_LENGTH) -> None:
        """Write a byte sequence.

        To avoid accidental big writes, there is a default limit on the length of data written per call, the limit can
        be removed with `max_bytes=None` or set to what is appropriate.
        """
        if max_bytes is not None and len(data) > max_bytes:
            raise TooLongError('result is too long')
        self._write_bytes(data)

    @final
    def write_line(self, data: bytes) -> None:
        """Write a byte sequence followed by CRLF, the sequence itself cannot contain CR or LF."""
        if b'\r' in data or b'\n' in data:
            raise ValueError('line cannot contain CR or LF')
        self._write_bytes(data)
        self._write_bytes(CRLF)
