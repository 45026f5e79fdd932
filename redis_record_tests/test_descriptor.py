from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Union
from unittest.mock import patch

from structlog.testing import capture_logs

from redis_record import (
    DescriptorError,
    RecordKind,
    RenameRule,
    build_record_table,
    get_record_table,
    redis_record,
    register_record_table,
    wire_field,
)
from redis_record.conf.settings import RecordCodecSettings
from redis_record.wire_types import BoolWireType, IntWireType, ListWireType, StrWireType
from redis_record_tests.unittest import TestCase
from redis_record_tests.utils import Item, Marker, MaybePoint, Pair, Point, UserProfile


class DescriptorTest(TestCase):
    def test_named_table(self) -> None:
        table = build_record_table(Item)
        self.assertIs(table.kind, RecordKind.NAMED)
        self.assertEqual(table.names(), ('id', 'label'))
        self.assertEqual(len(table), 2)
        id_field, label_field = table.fields
        self.assertEqual((id_field.index, id_field.optional, id_field.wire_type), (0, False, IntWireType()))
        self.assertEqual((label_field.index, label_field.optional, label_field.wire_type), (1, True, StrWireType()))

    def test_postponed_annotations(self) -> None:
        # this module uses `from __future__ import annotations`, so every annotation is a string
        @dataclass
        class Late:
            flags: list[bool]
            count: Optional[int] = None

        table = build_record_table(Late)
        self.assertEqual(table.fields[0].wire_type, ListWireType(BoolWireType()))
        self.assertTrue(table.fields[1].optional)

    def test_rename_and_skip(self) -> None:
        table = get_record_table(UserProfile)
        self.assertIs(table.rename_all, RenameRule.CAMEL)
        self.assertEqual(
            table.names(),
            ('userId', 'displayName', 'email', 'isAdmin', 'score', 'tags', 'avatar', 'legacy'),
        )
        self.assertEqual(table.skipped, ('session_token',))
        self.assertEqual(table.fields[-1].attr, 'legacy_id')
        self.assertEqual(table.fields[-1].source_field(table.kind), 'legacy_id')

    def test_positional_tables(self) -> None:
        table = build_record_table(Point)
        self.assertIs(table.kind, RecordKind.POSITIONAL)
        self.assertEqual([f.source_field(table.kind) for f in table.fields], [0, 1])
        self.assertTrue(build_record_table(MaybePoint).fields[1].optional)
        self.assertIs(get_record_table(Pair).kind, RecordKind.POSITIONAL)

    def test_unit_table(self) -> None:
        table = build_record_table(Marker)
        self.assertIs(table.kind, RecordKind.UNIT)
        self.assertEqual(len(table), 0)

    def test_forced_unit(self) -> None:
        @dataclass
        class Ignored:
            value: int = 0

        table = build_record_table(Ignored, kind=RecordKind.UNIT)
        self.assertEqual(table.fields, ())
        self.assertEqual(table.build({}), Ignored())

    def test_rename_rule_instance(self) -> None:
        table = build_record_table(Item, rename_all=RenameRule.UPPER)
        self.assertEqual(table.names(), ('ID', 'LABEL'))

    def test_default_rename_all_setting(self) -> None:
        settings = RecordCodecSettings(DEFAULT_RENAME_ALL='SCREAMING-KEBAB-CASE')
        with patch('redis_record.conf.get_settings.get_global_settings', return_value=settings):
            self.assertEqual(build_record_table(UserProfile).names()[:2], ('USER-ID', 'DISPLAY-NAME'))
            self.assertEqual(build_record_table(UserProfile, rename_all='none').names()[:2], ('user_id', 'display_name'))

    def test_bytearray_alias(self) -> None:
        @dataclass
        class Blob:
            data: bytearray

        self.assertEqual(build_record_table(Blob).fields[0].wire_type.type_name(), 'bytes')

    def test_build(self) -> None:
        table = get_record_table(UserProfile)
        values = {f.attr: None for f in table.fields}
        values.update(user_id=1, display_name='Ann', is_admin=False, score=0.0, tags=[])
        self.assertEqual(table.build(values), UserProfile(user_id=1, display_name='Ann'))


class DescriptorErrorTest(TestCase):
    def test_not_a_record_type(self) -> None:
        class Plain:
            pass

        with self.assertRaises(DescriptorError):
            build_record_table(Plain)
        with self.assertRaises(DescriptorError):
            build_record_table(Item(1, None))  # type: ignore[arg-type]

    def test_duplicate_wire_names(self) -> None:
        @dataclass
        class Clash:
            user_id: int
            other: int = wire_field(rename='userId', default=0)

        with self.assertRaises(DescriptorError) as cm:
            build_record_table(Clash, rename_all='camelCase')
        self.assertIn("'userId'", str(cm.exception))

    def test_unknown_rule(self) -> None:
        with self.assertRaises(DescriptorError):
            build_record_table(Item, rename_all='Title Case')

    def test_unsupported_types(self) -> None:
        @dataclass
        class WithDict:
            data: dict[str, int]

        @dataclass
        class WithUnion:
            value: Union[int, str, None]

        @dataclass
        class WithNestedList:
            rows: list[list[int]]

        @dataclass
        class WithOptionalItems:
            values: list[Optional[int]]

        @dataclass
        class WithFixedTuple:
            point: tuple[int, int]

        for record_type in [WithDict, WithUnion, WithNestedList, WithOptionalItems, WithFixedTuple]:
            with self.assertRaises(DescriptorError):
                build_record_table(record_type)

    def test_skip_without_default(self) -> None:
        @dataclass
        class NoDefault:
            value: int = wire_field(skip=True)

        with self.assertRaises(DescriptorError):
            build_record_table(NoDefault)

    def test_skip_with_default_factory(self) -> None:
        @dataclass
        class WithCache:
            key: str
            cache: dict = wire_field(skip=True, default_factory=dict)

        table = build_record_table(WithCache)
        self.assertEqual(table.names(), ('key',))
        self.assertEqual(table.skipped, ('cache',))

    def test_init_false_must_be_skipped(self) -> None:
        @dataclass
        class Derived:
            value: int
            double: int = field(init=False, default=0)

        with self.assertRaises(DescriptorError):
            build_record_table(Derived)

    def test_positional_rename(self) -> None:
        @dataclass
        class Renamed:
            value: int = wire_field(rename='v')

        with self.assertRaises(DescriptorError):
            build_record_table(Renamed, kind=RecordKind.POSITIONAL)
        with self.assertRaises(DescriptorError):
            build_record_table(Point, rename_all='camelCase')

    def test_namedtuple_cannot_be_named(self) -> None:
        class Pt(NamedTuple):
            x: int

        with self.assertRaises(DescriptorError):
            build_record_table(Pt, kind=RecordKind.NAMED)

    def test_empty_rename(self) -> None:
        with self.assertRaises(DescriptorError):
            wire_field(rename='')

    def test_foreign_metadata(self) -> None:
        @dataclass
        class Foreign:
            value: int = field(default=0, metadata={'redis_record': 'skip'})

        with self.assertRaises(DescriptorError):
            build_record_table(Foreign)

    def test_other_metadata_kept(self) -> None:
        @dataclass
        class Documented:
            value: int = wire_field(rename='v', default=0, metadata={'doc': 'a value'})

        self.assertEqual(dataclasses.fields(Documented)[0].metadata['doc'], 'a value')
        self.assertEqual(build_record_table(Documented).names(), ('v',))


class RegistryTest(TestCase):
    def test_decorator_registers(self) -> None:
        @redis_record(rename_all='kebab-case')
        @dataclass
        class Session:
            session_id: str

        self.assertEqual(get_record_table(Session).names(), ('session-id',))

    def test_bare_decorator(self) -> None:
        @redis_record
        @dataclass
        class Counter:
            hits: int

        self.assertIs(get_record_table(Counter), get_record_table(Counter))

    def test_decorator_fails_at_definition(self) -> None:
        with self.assertRaises(DescriptorError):
            @redis_record
            @dataclass
            class Broken:
                data: dict[str, str]

    def test_register_same_table(self) -> None:
        register_record_table(build_record_table(Item))
        self.assertEqual(get_record_table(Item), build_record_table(Item))

    def test_register_different_table(self) -> None:
        @dataclass
        class Once:
            value_a: int

        register_record_table(build_record_table(Once))
        with self.assertRaises(DescriptorError):
            register_record_table(build_record_table(Once, rename_all='camelCase'))

    def test_subclass_inherits_decorator_options(self) -> None:
        @dataclass
        class AdminProfile(UserProfile):
            admin_level: Optional[int] = None

        table = get_record_table(AdminProfile)
        self.assertIs(table.rename_all, RenameRule.CAMEL)
        self.assertEqual(table.names()[:2], ('userId', 'displayName'))
        self.assertEqual(table.names()[-1], 'adminLevel')
        self.assertEqual(table.skipped, ('session_token',))

    def test_subclass_inherits_kind(self) -> None:
        @dataclass
        class TaggedPair(Pair):
            tag: str = ''

        table = get_record_table(TaggedPair)
        self.assertIs(table.kind, RecordKind.POSITIONAL)
        self.assertEqual(len(table), 3)

    def test_registration_is_logged(self) -> None:
        @dataclass
        class Logged:
            value: int

        with capture_logs() as log_list:
            get_record_table(Logged)
            get_record_table(Logged)
        events = [i for i in log_list if i['event'] == 'record table registered']
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0]['type'], 'Logged')
