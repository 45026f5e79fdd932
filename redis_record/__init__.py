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
Conversion of records to and from the hash representation used with Redis.

This module exports the main API:

    @redis_record(rename_all='camelCase')
    @dataclass
    class User:
        user_id: int
        display_name: str | None = None

    write_record_args(User(7))                          # [b'userId', b'7', b'displayName', b'null']
    from_wire_value(User, [b'userId', b'7'])            # User(user_id=7, display_name=None)
"""

from redis_record.commands import hgetall_command, hmset_command, hset_command
from redis_record.decoder import from_wire_value
from redis_record.descriptor import FieldDescriptor, RecordKind, RecordTable, build_record_table, wire_field
from redis_record.encoder import encode_record, num_of_args, to_hset_pairs, write_record_args
from redis_record.exception import (
    ConversionError,
    DecodeError,
    DescriptorError,
    ElementTypeError,
    FieldTypeError,
    MissingFieldError,
    NullRecordError,
    RecordCodecError,
    ShapeError,
    ValueTypeError,
)
from redis_record.naming import RenameRule
from redis_record.registry import get_record_table, redis_record, register_record_table
from redis_record.version import __version__

__all__ = [
    'ConversionError',
    'DecodeError',
    'DescriptorError',
    'ElementTypeError',
    'FieldDescriptor',
    'FieldTypeError',
    'MissingFieldError',
    'NullRecordError',
    'RecordCodecError',
    'RecordKind',
    'RecordTable',
    'RenameRule',
    'ShapeError',
    'ValueTypeError',
    'build_record_table',
    'encode_record',
    'from_wire_value',
    'get_record_table',
    'hgetall_command',
    'hmset_command',
    'hset_command',
    'num_of_args',
    'redis_record',
    'register_record_table',
    'to_hset_pairs',
    'wire_field',
    'write_record_args',
    '__version__',
]
