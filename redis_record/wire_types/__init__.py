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

from typing import Any

from redis_record.wire_types.bool_wire_type import BoolWireType
from redis_record.wire_types.bytes_wire_type import BytesWireType
from redis_record.wire_types.collection_wire_type import (
    FrozenSetWireType,
    ListWireType,
    SetWireType,
    TupleWireType,
)
from redis_record.wire_types.float_wire_type import FloatWireType
from redis_record.wire_types.int_wire_type import IntWireType
from redis_record.wire_types.str_wire_type import StrWireType
from redis_record.wire_types.utils import TypeAliasMap, TypeToWireTypeMap, is_optional_type, split_optional_type
from redis_record.wire_types.wire_type import WireType

__all__ = [
    'DEFAULT_TYPE_ALIAS_MAP',
    'DEFAULT_TYPE_MAP',
    'FIELD_TYPE_TO_WIRE_TYPE_MAP',
    'BoolWireType',
    'BytesWireType',
    'FloatWireType',
    'FrozenSetWireType',
    'IntWireType',
    'ListWireType',
    'SetWireType',
    'StrWireType',
    'TupleWireType',
    'TypeAliasMap',
    'TypeToWireTypeMap',
    'WireType',
    'is_optional_type',
    'make_wire_type',
    'split_optional_type',
]

# types that are accepted in annotations and are encoded as another type
DEFAULT_TYPE_ALIAS_MAP: TypeAliasMap = {
    bytearray: bytes,
}

# Mapping between types and WireType classes.
FIELD_TYPE_TO_WIRE_TYPE_MAP: TypeToWireTypeMap = {
    # scalars:
    bool: BoolWireType,
    bytes: BytesWireType,
    float: FloatWireType,
    int: IntWireType,
    str: StrWireType,
    # collections, each item is its own argument:
    frozenset: FrozenSetWireType,
    list: ListWireType,
    set: SetWireType,
    tuple: TupleWireType,
}

DEFAULT_TYPE_MAP = WireType.TypeMap(DEFAULT_TYPE_ALIAS_MAP, FIELD_TYPE_TO_WIRE_TYPE_MAP)


def make_wire_type(type_: Any, /) -> WireType:
    """ Like WireType.from_type, but with the default maps for field annotations.

    If you need to customize the mapping use `WireType.from_type` instead.
    """
    return WireType.from_type(type_, type_map=DEFAULT_TYPE_MAP)
