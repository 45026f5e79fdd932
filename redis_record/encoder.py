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
Encoding of records into the arguments of hash commands.

There are two forms. The flat form is a single list of arguments, for a named record it alternates names and values:

    @dataclass
    class Item:
        id: int
        label: str | None

    write_record_args(Item(7, None))  # [b'id', b'7', b'label', b'null']
    num_of_args(Item(7, 'x'))  # 4

The pair form has exactly one value per name, values that expand into more than one argument are joined with a space:

    @dataclass
    class Tagged:
        tags: list[str]

    to_hset_pairs(Tagged(['a', 'b']))  # [('tags', b'a b')]

An absent optional field is always written as the literal `null`, so a present `str` field holding the text `null` can't
be told apart from an absent one when it's read back.
"""

from typing import Any

from redis_record.descriptor import FieldDescriptor, RecordKind, RecordTable
from redis_record.exception import ValueTypeError
from redis_record.registry import get_record_table
from redis_record.wire.value import NULL_SENTINEL

# separator used to join the arguments of a multi-argument value in the pair form
ARGS_SEPARATOR = b' '


def write_record_args(record: Any, out: list[bytes] | None = None) -> list[bytes]:
    """ Append the flat form of a record to `out` (a new list if not given) and return it.
    """
    table = get_record_table(type(record))
    table.check_record(record)
    if out is None:
        out = []
    for descriptor in table.fields:
        value = table.get_value(record, descriptor)
        if table.kind is RecordKind.NAMED:
            out.append(descriptor.name.encode('utf-8'))
        _write_field_args(descriptor, value, out)
    return out


def num_of_args(record: Any) -> int:
    """ Number of arguments that `write_record_args` produces for the record, computed field by field with the same
    rules, without producing them.
    """
    table = get_record_table(type(record))
    table.check_record(record)
    count = 0
    for descriptor in table.fields:
        value = table.get_value(record, descriptor)
        if table.kind is RecordKind.NAMED:
            count += 1  # field name
        count += _field_num_of_args(descriptor, value)
    return count


def encode_record(record: Any) -> tuple[list[bytes], int]:
    """ Flat form of a record with its argument count.
    """
    args = write_record_args(record)
    count = num_of_args(record)
    assert count == len(args), f'{type(record).__name__}: counted {count} arguments, wrote {len(args)}'
    return args, count


def to_hset_pairs(record: Any) -> list[tuple[str, bytes]]:
    """ Pair form of a named record, a list of `(name, value)` with exactly one value per field.
    """
    table = get_record_table(type(record))
    table.check_record(record)
    _check_named(table)
    pairs: list[tuple[str, bytes]] = []
    for descriptor in table.fields:
        args: list[bytes] = []
        _write_field_args(descriptor, table.get_value(record, descriptor), args)
        if len(args) == 1:
            pairs.append((descriptor.name, args[0]))
        else:
            pairs.append((descriptor.name, ARGS_SEPARATOR.join(args)))
    return pairs


def _check_named(table: RecordTable) -> None:
    if table.kind is not RecordKind.NAMED:
        raise TypeError(f'{table.record_type.__name__} is a {table.kind.value} record, only named records have pairs')


def _write_field_args(descriptor: FieldDescriptor, value: Any, out: list[bytes]) -> None:
    if value is None and descriptor.optional:
        out.append(NULL_SENTINEL)
        return
    try:
        descriptor.wire_type.write_args(value, out)
    except ValueTypeError as e:
        raise ValueTypeError(f'field {descriptor.name!r}: {e}') from e


def _field_num_of_args(descriptor: FieldDescriptor, value: Any) -> int:
    if value is None and descriptor.optional:
        return 1  # the literal "null"
    try:
        return descriptor.wire_type.num_of_args(value)
    except ValueTypeError as e:
        raise ValueTypeError(f'field {descriptor.name!r}: {e}') from e
