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
Process-wide registry of record tables.

Tables are immutable and only ever added, so reading them needs no locking. Building a table for the same type twice
produces equal tables, so a race between two first uses is harmless.

A type that was never registered gets its table on first use, with the options given to `@redis_record` on its
nearest decorated base class, if any.
"""

from typing import Any, Callable, Optional, TypeVar, overload

from structlog import get_logger

from redis_record.descriptor import RecordKind, RecordTable, build_record_table
from redis_record.exception import DescriptorError
from redis_record.naming import RenameRule

logger = get_logger()

C = TypeVar('C', bound=type)

_tables: dict[type, RecordTable] = {}

# options given to the decorator, inherited by subclasses that are not decorated themselves
_options: dict[type, tuple[Optional[RecordKind], str | RenameRule | None]] = {}


@overload
def redis_record(cls: C, /) -> C:
    ...


@overload
def redis_record(
    *,
    rename_all: str | RenameRule | None = None,
    kind: Optional[RecordKind] = None,
) -> Callable[[C], C]:
    ...


def redis_record(
    cls: Any = None,
    /,
    *,
    rename_all: str | RenameRule | None = None,
    kind: Optional[RecordKind] = None,
) -> Any:
    """ Class decorator that builds and registers the table of a record type when the class is defined.

    It must be applied on top of `@dataclass`, it can be used with or without arguments:

        @redis_record(rename_all='camelCase')
        @dataclass
        class User:
            user_id: int
            display_name: str | None = None

    Declaration problems raise DescriptorError right away.
    """
    def wrap(record_type: C) -> C:
        register_record_table(build_record_table(record_type, kind=kind, rename_all=rename_all))
        _options[record_type] = (kind, rename_all)
        return record_type

    if cls is None:
        return wrap
    return wrap(cls)


def register_record_table(table: RecordTable) -> None:
    """ Register a table built by hand or with `build_record_table`, replacing a table for the same type is an error.
    """
    existing = _tables.get(table.record_type)
    if existing is not None and existing != table:
        raise DescriptorError(f'{table.record_type.__name__} already has a different record table')
    _tables[table.record_type] = table
    if existing is None:
        logger.debug('record table registered', type=table.record_type.__name__, kind=table.kind.value)


def get_record_table(record_type: type) -> RecordTable:
    """ Get the table of a record type, building it if the type was never registered.

    The new table uses the decorator options of the nearest base class that has them, or the default options.
    """
    table = _tables.get(record_type)
    if table is None:
        kind, rename_all = _inherited_options(record_type)
        table = build_record_table(record_type, kind=kind, rename_all=rename_all)
        register_record_table(table)
    return table


def _inherited_options(record_type: type) -> tuple[Optional[RecordKind], str | RenameRule | None]:
    for base in record_type.__mro__[1:]:
        if base in _options:
            return _options[base]
    return None, None
