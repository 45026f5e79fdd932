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

"""
Argument lists of the commands that store and fetch records as hashes.

The lists can be given to any client that accepts raw command arguments, or framed with
`redis_record.serialization.encoding.resp.encode_command`.
"""

from typing import Any

from redis_record.encoder import to_hset_pairs, write_record_args


def _key_bytes(key: str | bytes) -> bytes:
    if isinstance(key, str):
        return key.encode('utf-8')
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise TypeError(f'key must be str or bytes, got {type(key).__name__}')


def hset_command(key: str | bytes, record: Any) -> list[bytes]:
    """`HSET key name value [name value ...]` with the flat form of the record."""
    args = [b'HSET', _key_bytes(key)]
    write_record_args(record, args)
    return args


def hmset_command(key: str | bytes, record: Any) -> list[bytes]:
    """`HMSET key name value [name value ...]` with the pair form of the record, one value per field."""
    args = [b'HMSET', _key_bytes(key)]
    for name, value in to_hset_pairs(record):
        args.append(name.encode('utf-8'))
        args.append(value)
    return args


def hgetall_command(key: str | bytes) -> list[bytes]:
    """`HGETALL key`, its reply can be given to `from_wire_value`."""
    return [b'HGETALL', _key_bytes(key)]
