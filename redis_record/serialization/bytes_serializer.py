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

from .serializer import Serializer


class BytesSerializer(Serializer):
    """Serializer that accumulates everything in a single in-memory buffer."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def finalize(self) -> memoryview:
        """Get the resulting byte sequence, the serializer should not be used afterwards."""
        return memoryview(bytes(self._buffer))

    @override
    def write_byte(self, data: int) -> None:
        # XXX: bytearray.append checks that data is in range(256)
        self._buffer.append(data)

    @override
    def _write_bytes(self, data: bytes | memoryview) -> None:
        self._buffer += data
