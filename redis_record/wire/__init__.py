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

from redis_record.wire.value import (
    NIL,
    NULL_SENTINEL,
    Array,
    Boolean,
    BulkString,
    Double,
    ErrorReply,
    Int,
    Map,
    Nil,
    SimpleString,
    VerbatimString,
    WireValue,
    describe,
    from_python,
    is_null_sentinel,
    is_wire_value,
    text_bytes,
)

__all__ = [
    'NIL',
    'NULL_SENTINEL',
    'Array',
    'Boolean',
    'BulkString',
    'Double',
    'ErrorReply',
    'Int',
    'Map',
    'Nil',
    'SimpleString',
    'VerbatimString',
    'WireValue',
    'describe',
    'from_python',
    'is_null_sentinel',
    'is_wire_value',
    'text_bytes',
]
