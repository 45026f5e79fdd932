import pytest

from redis_record.wire import (
    NIL,
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
    describe,
    from_python,
    is_null_sentinel,
    is_wire_value,
    text_bytes,
)


def test_from_python_scalars() -> None:
    assert from_python(None) is NIL
    assert from_python(True) == Boolean(True)
    assert from_python(0) == Int(0)
    assert from_python(0.5) == Double(0.5)
    assert from_python(b'x') == BulkString(b'x')
    assert from_python(bytearray(b'x')) == BulkString(b'x')
    assert from_python(memoryview(b'x')) == BulkString(b'x')
    assert from_python('x') == SimpleString('x')


def test_from_python_containers() -> None:
    assert from_python([1, [None]]) == Array((Int(1), Array((NIL,))))
    assert from_python((b'a',)) == Array((BulkString(b'a'),))
    assert from_python({'a': [1]}) == Map(((SimpleString('a'), Array((Int(1),))),))


def test_from_python_passes_wire_values() -> None:
    value = Array((Int(1),))
    assert from_python(value) is value
    assert from_python([value]) == Array((value,))


def test_from_python_unknown() -> None:
    with pytest.raises(TypeError):
        from_python(object())
    with pytest.raises(TypeError):
        from_python({1, 2})


@pytest.mark.parametrize(
    ['value', 'expected'],
    [
        (NIL, True),
        (Nil(), True),
        (BulkString(b'null'), True),
        (SimpleString('null'), True),
        (VerbatimString('txt', 'null'), True),
        (BulkString(b'NULL'), False),
        (BulkString(b'null '), False),
        (BulkString(b''), False),
        (SimpleString('nil'), False),
        (ErrorReply('null'), False),
        (Int(0), False),
        (Array(()), False),
        (Array((NIL,)), False),
    ]
)
def test_is_null_sentinel(value, expected) -> None:
    assert is_null_sentinel(value) is expected


def test_text_bytes() -> None:
    assert text_bytes(BulkString(b'\xff')) == b'\xff'
    assert text_bytes(SimpleString('ç')) == 'ç'.encode('utf-8')
    assert text_bytes(VerbatimString('mkd', '# x')) == b'# x'
    assert text_bytes(Int(1)) is None
    assert text_bytes(NIL) is None


def test_describe() -> None:
    assert describe(Array((NIL, NIL))) == 'array of 2'
    assert describe(Map(())) == 'map of 0'
    assert describe(NIL) == 'nil'
    assert describe(Int(3)) == 'Int(value=3)'


def test_is_wire_value() -> None:
    assert is_wire_value(NIL)
    assert is_wire_value(ErrorReply('ERR'))
    assert not is_wire_value(None)
    assert not is_wire_value(b'x')


def test_values_are_frozen() -> None:
    value = BulkString(b'x')
    with pytest.raises(AttributeError):
        value.data = b'y'  # type: ignore[misc]
    assert hash(value) == hash(BulkString(b'x'))
