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
Decoding of records from a single wire value.

Named records are read from a flat array of alternating keys and values (RESP2 `HGETALL`) or from a map (RESP3). The
entries are first collected by key, then every field of the table is looked up in order. Positional records are read
from an array with exactly one element per field. Unit records ignore the value.

Any failure aborts the whole decode with a DecodeError, no partially built record is ever returned.
"""

from typing import Any, TypeVar

from structlog import get_logger

from redis_record.descriptor import FieldDescriptor, RecordKind, RecordTable
from redis_record.exception import (
    ConversionError,
    ElementTypeError,
    FieldTypeError,
    MissingFieldError,
    NullRecordError,
    ShapeError,
)
from redis_record.registry import get_record_table
from redis_record.wire.value import Array, Map, Nil, WireValue, describe, from_python, is_null_sentinel
from redis_record.wire_types import StrWireType

logger = get_logger()

R = TypeVar('R')

# keys are always read as text, regardless of the configured encoding for values
_KEY_WIRE_TYPE = StrWireType('utf-8')


def from_wire_value(record_type: type[R], value: Any) -> R:
    """ Decode a record of the given type, `value` can be a WireValue or a reply from a Python client.
    """
    table = get_record_table(record_type)
    if table.kind is RecordKind.UNIT:
        return table.build({})

    wire_value = from_python(value)
    if isinstance(wire_value, Nil):
        raise NullRecordError(f'cannot decode {record_type.__name__} from nil')

    if table.kind is RecordKind.POSITIONAL:
        return _decode_positional(table, wire_value)

    bag = build_bag(table, wire_value)
    return _decode_named(table, bag)


def build_bag(table: RecordTable, wire_value: WireValue) -> dict[str, WireValue]:
    """ Collect the entries of a flat key/value array or of a map by key, a repeated key keeps its last value.
    """
    bag: dict[str, WireValue] = {}
    match wire_value:
        case Array(items):
            if len(items) % 2 != 0:
                raise ShapeError(
                    f'expected an even number of items for {table.record_type.__name__}, got {len(items)}',
                    actual=len(items),
                )
            for i in range(0, len(items), 2):
                bag[_decode_key(items[i])] = items[i + 1]
        case Map(items):
            for key, item in items:
                bag[_decode_key(key)] = item
        case _:
            raise ShapeError(
                f'expected an array or a map for {table.record_type.__name__}, got {describe(wire_value)}'
            )
    return bag


def _decode_key(key: WireValue) -> str:
    try:
        return _KEY_WIRE_TYPE.from_wire(key)
    except ConversionError as e:
        raise ShapeError(f'invalid key: {e}') from e


def _decode_named(table: RecordTable, bag: dict[str, WireValue]) -> Any:
    values: dict[str, Any] = {}
    for descriptor in table.fields:
        values[descriptor.attr] = _decode_field(descriptor, bag)
    _check_unknown_keys(table, bag)
    return table.build(values)


def _decode_field(descriptor: FieldDescriptor, bag: dict[str, WireValue]) -> Any:
    if descriptor.name not in bag:
        if descriptor.optional:
            return None
        raise MissingFieldError(descriptor.name)
    item = bag[descriptor.name]
    if descriptor.optional and is_null_sentinel(item):
        return None
    try:
        return descriptor.wire_type.from_wire(item)
    except ConversionError as e:
        raise FieldTypeError(descriptor.name, e) from e


def _decode_positional(table: RecordTable, wire_value: WireValue) -> Any:
    if not isinstance(wire_value, Array):
        raise ShapeError(
            f'expected an array for {table.record_type.__name__}, got {describe(wire_value)}',
            expected=len(table),
        )
    items = wire_value.items
    if len(items) != len(table):
        raise ShapeError(
            f'expected {len(table)} items for {table.record_type.__name__}, got {len(items)}',
            expected=len(table),
            actual=len(items),
        )
    values: dict[str, Any] = {}
    for descriptor, item in zip(table.fields, items):
        if descriptor.optional and is_null_sentinel(item):
            values[descriptor.attr] = None
            continue
        try:
            values[descriptor.attr] = descriptor.wire_type.from_wire(item)
        except ConversionError as e:
            raise ElementTypeError(descriptor.index, e) from e
    return table.build(values)


def _check_unknown_keys(table: RecordTable, bag: dict[str, WireValue]) -> None:
    from redis_record.conf.get_settings import get_global_settings
    if not get_global_settings().WARN_UNKNOWN_FIELDS:
        return
    unknown = bag.keys() - set(table.names())
    if unknown:
        log = logger.new(type=table.record_type.__name__)
        log.warn('unknown fields ignored', fields=sorted(unknown))
