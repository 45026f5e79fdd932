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
Field descriptor tables, the static description of how a record type maps to the wire.

A table is built once per record type from the class itself: dataclasses describe named records (or unit records when
they have no fields) and NamedTuple subclasses describe positional records. The behavior of individual fields of a
named record can be adjusted with `wire_field`:

    @dataclass
    class User:
        user_id: int = wire_field(rename='id')
        nickname: str | None = None
        cache: dict = wire_field(skip=True, default_factory=dict)

Every problem with a declaration is reported with a DescriptorError when the table is built, never while encoding or
decoding.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Optional, get_type_hints

from structlog import get_logger

from redis_record.exception import DescriptorError, ValueTypeError
from redis_record.naming import RenameRule, transform_field_name
from redis_record.wire_types import WireType, make_wire_type, split_optional_type

logger = get_logger()

# key used in `dataclasses.field(metadata=...)` to hold the FieldDirectives
FIELD_METADATA_KEY = 'redis_record'


@unique
class RecordKind(Enum):
    NAMED = 'named'
    POSITIONAL = 'positional'
    UNIT = 'unit'


@dataclass(frozen=True, slots=True)
class FieldDirectives:
    rename: Optional[str] = None
    skip: bool = False


def wire_field(*, rename: Optional[str] = None, skip: bool = False, **kwargs: Any) -> Any:
    """ Same as `dataclasses.field`, but also takes the directives that apply to the field on the wire.
    """
    if rename is not None and (not isinstance(rename, str) or not rename):
        raise DescriptorError('rename must be a non-empty str')
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[FIELD_METADATA_KEY] = FieldDirectives(rename=rename, skip=skip)
    return dataclasses.field(metadata=metadata, **kwargs)


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    # key used on the wire, for positional records this is just the attribute name and it is never written
    name: str
    # attribute of the record that holds the value
    attr: str
    # position among the serialized fields
    index: int
    optional: bool
    # converter of the value when present, optionality is not part of it
    wire_type: WireType

    def source_field(self, kind: RecordKind) -> str | int:
        """How the record locates this field: by attribute for named records and by index for positional ones."""
        return self.index if kind is RecordKind.POSITIONAL else self.attr


@dataclass(frozen=True)
class RecordTable:
    record_type: type
    kind: RecordKind
    fields: tuple[FieldDescriptor, ...]
    rename_all: Optional[RenameRule] = None
    # attributes left out by a skip directive
    skipped: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.fields)

    def names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def check_record(self, record: Any) -> None:
        if not isinstance(record, self.record_type):
            raise ValueTypeError(f'expected {self.record_type.__name__} instance, got {type(record).__name__}')

    def get_value(self, record: Any, descriptor: FieldDescriptor) -> Any:
        if self.kind is RecordKind.POSITIONAL and isinstance(record, tuple):
            return record[descriptor.index]
        return getattr(record, descriptor.attr)

    def build(self, values: Mapping[str, Any]) -> Any:
        """ Construct a record from a mapping of attribute to value, skipped fields are left to their defaults.
        """
        match self.kind:
            case RecordKind.UNIT:
                return self.record_type()
            case RecordKind.POSITIONAL:
                return self.record_type(*(values[f.attr] for f in self.fields))
            case RecordKind.NAMED:
                return self.record_type(**{f.attr: values[f.attr] for f in self.fields})
        raise NotImplementedError(self.kind)


def is_namedtuple_type(type_: type) -> bool:
    return isinstance(type_, type) and issubclass(type_, tuple) and hasattr(type_, '_fields')


def build_record_table(
    record_type: type,
    *,
    kind: Optional[RecordKind] = None,
    rename_all: str | RenameRule | None = None,
) -> RecordTable:
    """ Describe a record type, reflecting over its fields.

    When `rename_all` isn't given the configured DEFAULT_RENAME_ALL is used for named records, use `'none'` to opt out
    of it.
    """
    if not isinstance(record_type, type):
        raise DescriptorError(f'expected a class, got {record_type!r}')

    if is_namedtuple_type(record_type):
        attrs = [(name, None) for name in record_type._fields]  # type: ignore[attr-defined]
        default_kind = RecordKind.POSITIONAL if attrs else RecordKind.UNIT
    elif dataclasses.is_dataclass(record_type):
        attrs = [(f.name, f) for f in dataclasses.fields(record_type)]
        default_kind = RecordKind.NAMED if attrs else RecordKind.UNIT
    else:
        raise DescriptorError(f'{record_type.__name__} must be a dataclass or a NamedTuple')

    kind = kind or default_kind
    if kind is RecordKind.UNIT:
        table = RecordTable(record_type, kind, ())
        _log_table(table)
        return table
    if kind is RecordKind.NAMED and is_namedtuple_type(record_type):
        raise DescriptorError(f'{record_type.__name__}: a NamedTuple can only be a positional record')

    rule = _resolve_rename_all(record_type, kind, rename_all)
    try:
        type_hints = get_type_hints(record_type)
    except NameError as e:
        raise DescriptorError(f'{record_type.__name__}: cannot resolve annotations: {e}') from e

    descriptors: list[FieldDescriptor] = []
    skipped: list[str] = []
    seen_names: dict[str, str] = {}
    for attr, field in attrs:
        directives = _get_directives(field)
        if kind is RecordKind.POSITIONAL and (directives.skip or directives.rename is not None):
            raise DescriptorError(f'{record_type.__name__}.{attr}: positional fields cannot be renamed or skipped')
        if directives.skip:
            _check_skippable(record_type, attr, field)
            skipped.append(attr)
            continue
        if field is not None and not field.init:
            raise DescriptorError(f'{record_type.__name__}.{attr}: fields with init=False must be skipped')

        declared_type = type_hints[attr]
        inner_type, optional = split_optional_type(declared_type)
        try:
            wire_type = make_wire_type(inner_type)
        except DescriptorError as e:
            raise DescriptorError(f'{record_type.__name__}.{attr}: {e}') from e

        if kind is RecordKind.NAMED:
            name = transform_field_name(attr, rule, directives.rename)
            if name in seen_names:
                raise DescriptorError(
                    f'{record_type.__name__}: fields {seen_names[name]!r} and {attr!r} share the wire name {name!r}'
                )
            seen_names[name] = attr
        else:
            name = attr
        descriptors.append(FieldDescriptor(
            name=name,
            attr=attr,
            index=len(descriptors),
            optional=optional,
            wire_type=wire_type,
        ))

    table = RecordTable(record_type, kind, tuple(descriptors), rule, tuple(skipped))
    _log_table(table)
    return table


def _resolve_rename_all(
    record_type: type,
    kind: RecordKind,
    rename_all: str | RenameRule | None,
) -> Optional[RenameRule]:
    if kind is RecordKind.POSITIONAL:
        if RenameRule.parse(rename_all) is not None:
            raise DescriptorError(f'{record_type.__name__}: positional records cannot be renamed')
        return None
    if rename_all is None:
        from redis_record.conf.get_settings import get_global_settings
        return get_global_settings().DEFAULT_RENAME_ALL
    return RenameRule.parse(rename_all)


def _get_directives(field: Optional[dataclasses.Field]) -> FieldDirectives:
    if field is None:
        return FieldDirectives()
    directives = field.metadata.get(FIELD_METADATA_KEY, FieldDirectives())
    if not isinstance(directives, FieldDirectives):
        raise DescriptorError(f'{field.name}: use wire_field() to declare field directives')
    return directives


def _check_skippable(record_type: type, attr: str, field: Optional[dataclasses.Field]) -> None:
    assert field is not None
    has_default = field.default is not dataclasses.MISSING or field.default_factory is not dataclasses.MISSING
    if field.init and not has_default:
        raise DescriptorError(f'{record_type.__name__}.{attr}: a skipped field must have a default')


def _log_table(table: RecordTable) -> None:
    logger.debug(
        'record table built',
        type=table.record_type.__name__,
        kind=table.kind.value,
        fields=list(table.names()),
        skipped=list(table.skipped),
    )
