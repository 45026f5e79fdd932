from dataclasses import dataclass, field

from structlog.testing import capture_logs

from redis_record import (
    DecodeError,
    ElementTypeError,
    FieldTypeError,
    MissingFieldError,
    NullRecordError,
    ShapeError,
    from_wire_value,
)
from redis_record.wire import NIL, Array, Boolean, BulkString, Int, Map, SimpleString, VerbatimString
from redis_record_tests.unittest import TestCase, bulk_array
from redis_record_tests.utils import Item, Marker, MaybePoint, Pair, Point, UserProfile


@dataclass
class Tagged:
    name: str
    tags: list[str] = field(default_factory=list)


class NamedDecoderTest(TestCase):
    def test_flat_array(self) -> None:
        item = from_wire_value(Item, bulk_array('id', '7', 'label', 'x'))
        self.assertEqual(item, Item(7, 'x'))

    def test_null_sentinel(self) -> None:
        self.assertEqual(from_wire_value(Item, bulk_array('id', '7', 'label', 'null')), Item(7, None))
        self.assertEqual(from_wire_value(Item, bulk_array('id', '7', 'label', None)), Item(7, None))
        self.assertEqual(from_wire_value(Item, [b'id', b'7', b'label', 'null']), Item(7, None))
        label = VerbatimString('txt', 'null')
        self.assertEqual(from_wire_value(Item, Map(((SimpleString('id'), Int(7)), (SimpleString('label'), label)))),
                         Item(7, None))

    def test_missing_optional(self) -> None:
        self.assertEqual(from_wire_value(Item, bulk_array('id', '7')), Item(7, None))

    def test_missing_required(self) -> None:
        with self.assertRaises(MissingFieldError) as cm:
            from_wire_value(Item, bulk_array('label', 'x'))
        self.assertEqual(cm.exception.field, 'id')
        self.assertEqual(str(cm.exception), "missing required field 'id'")

    def test_null_on_required_field(self) -> None:
        with self.assertRaises(FieldTypeError) as cm:
            from_wire_value(Item, bulk_array('id', 'null'))
        self.assertEqual(cm.exception.field, 'id')

    def test_map(self) -> None:
        item = from_wire_value(Item, {b'id': 7, b'label': b'x'})
        self.assertEqual(item, Item(7, 'x'))

    def test_key_order_does_not_matter(self) -> None:
        self.assertEqual(from_wire_value(Item, bulk_array('label', 'x', 'id', '7')), Item(7, 'x'))

    def test_repeated_key_keeps_last(self) -> None:
        self.assertEqual(from_wire_value(Item, bulk_array('id', '1', 'id', '2')), Item(2, None))

    def test_unknown_keys_are_ignored(self) -> None:
        self.assertEqual(from_wire_value(Item, bulk_array('id', '1', 'other', 'x')), Item(1, None))

    def test_unknown_keys_are_logged(self) -> None:
        with capture_logs() as log_list:
            from_wire_value(Item, bulk_array('id', '1', 'zeta', 'x', 'alpha', 'y'))
        warnings = [i for i in log_list if i['event'] == 'unknown fields ignored']
        self.assertEqual(len(warnings), 1)
        self.assertEqual(warnings[0]['fields'], ['alpha', 'zeta'])
        self.assertEqual(warnings[0]['type'], 'Item')

    def test_odd_array(self) -> None:
        with self.assertRaises(ShapeError) as cm:
            from_wire_value(Item, bulk_array('id', '7', 'label'))
        self.assertEqual(cm.exception.actual, 3)

    def test_not_a_container(self) -> None:
        for value in [BulkString(b'id'), Int(7), Boolean(True)]:
            with self.assertRaises(ShapeError):
                from_wire_value(Item, value)

    def test_nil(self) -> None:
        with self.assertRaises(NullRecordError):
            from_wire_value(Item, NIL)
        with self.assertRaises(NullRecordError):
            from_wire_value(Item, None)

    def test_invalid_key(self) -> None:
        with self.assertRaises(ShapeError):
            from_wire_value(Item, Array((Array(()), BulkString(b'7'))))

    def test_field_type_error(self) -> None:
        with self.assertRaises(FieldTypeError) as cm:
            from_wire_value(Item, bulk_array('id', 'seven'))
        self.assertEqual(cm.exception.field, 'id')
        self.assertIn("field 'id'", str(cm.exception))
        self.assertIsInstance(cm.exception, DecodeError)

    def test_renamed_fields(self) -> None:
        reply = bulk_array(
            'userId', '1',
            'displayName', 'Ann',
            'isAdmin', 'true',
            'score', '2',
            'tags', 'a b',
            'legacy', 'null',
            'session_token', 'ignored',
        )
        profile = from_wire_value(UserProfile, reply)
        self.assertEqual(profile, UserProfile(user_id=1, display_name='Ann', is_admin=True, score=2.0, tags=['a', 'b']))
        self.assertEqual(profile.session_token, '')

    def test_attribute_names_are_not_wire_names(self) -> None:
        with self.assertRaises(MissingFieldError) as cm:
            from_wire_value(UserProfile, bulk_array('user_id', '1', 'display_name', 'Ann'))
        self.assertEqual(cm.exception.field, 'userId')

    def test_missing_field_with_default_is_still_required(self) -> None:
        with self.assertRaises(MissingFieldError) as cm:
            from_wire_value(UserProfile, bulk_array('userId', '1', 'displayName', 'Ann'))
        self.assertEqual(cm.exception.field, 'isAdmin')

    def test_collection_from_array(self) -> None:
        reply = Map(((BulkString(b'name'), BulkString(b'x')), (BulkString(b'tags'), bulk_array('a', 'b'))))
        self.assertEqual(from_wire_value(Tagged, reply), Tagged('x', ['a', 'b']))

    def test_collection_from_empty_text(self) -> None:
        self.assertEqual(from_wire_value(Tagged, bulk_array('name', 'x', 'tags', '')), Tagged('x', []))


class PositionalDecoderTest(TestCase):
    def test_namedtuple(self) -> None:
        self.assertEqual(from_wire_value(Point, [3, True]), Point(3, True))
        self.assertEqual(from_wire_value(Point, bulk_array('3', '0')), Point(3, False))

    def test_wrong_length(self) -> None:
        with self.assertRaises(ShapeError) as cm:
            from_wire_value(Point, [3])
        self.assertEqual((cm.exception.expected, cm.exception.actual), (2, 1))
        with self.assertRaises(ShapeError) as cm:
            from_wire_value(Point, [3, True, 4])
        self.assertEqual((cm.exception.expected, cm.exception.actual), (2, 3))

    def test_not_an_array(self) -> None:
        with self.assertRaises(ShapeError) as cm:
            from_wire_value(Point, {b'x': 3, b'flag': True})
        self.assertEqual(cm.exception.expected, 2)

    def test_element_type_error(self) -> None:
        with self.assertRaises(ElementTypeError) as cm:
            from_wire_value(Point, [3, b'maybe'])
        self.assertEqual(cm.exception.index, 1)
        self.assertIn('element at index 1', str(cm.exception))

    def test_optional_element(self) -> None:
        self.assertEqual(from_wire_value(MaybePoint, [3, None]), MaybePoint(3, None))
        self.assertEqual(from_wire_value(MaybePoint, bulk_array('3', 'null')), MaybePoint(3, None))
        self.assertEqual(from_wire_value(MaybePoint, bulk_array('3', '4')), MaybePoint(3, 4))

    def test_null_on_required_element(self) -> None:
        with self.assertRaises(ElementTypeError) as cm:
            from_wire_value(MaybePoint, [None, 4])
        self.assertEqual(cm.exception.index, 0)

    def test_dataclass(self) -> None:
        self.assertEqual(from_wire_value(Pair, [b'l', 5]), Pair('l', 5))

    def test_nil(self) -> None:
        with self.assertRaises(NullRecordError):
            from_wire_value(Pair, NIL)


class UnitDecoderTest(TestCase):
    def test_any_value(self) -> None:
        for value in [NIL, Int(1), bulk_array('a'), Map(()), None]:
            self.assertEqual(from_wire_value(Marker, value), Marker())
