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

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection, Hashable, Iterable, Set
from typing import Any, TypeVar, get_args, get_origin

from typing_extensions import Self, override

from redis_record.exception import DescriptorError, ValueTypeError
from redis_record.wire.value import Array, BulkString, Double, Int, Nil, WireValue, text_bytes
from redis_record.wire_types.utils import is_union_type, pretty_type
from redis_record.wire_types.wire_type import WireType

T = TypeVar('T')
H = TypeVar('H', bound=Hashable)

# separator used when the items of a collection are read from a single textual value
ITEM_SEPARATOR = b' '


class _CollectionWireType(WireType[Collection[T]], ABC):
    """ Used as base for WireType classes that represent homogeneous collections.

    Each item is encoded into its own argument(s). When decoding, an array is read item by item, a nil is an empty
    collection, and a textual value is split on single spaces, which is how multiple arguments are joined in a hash
    pair.
    """
    __slots__ = ('_item',)

    _item: WireType[T]

    def __init__(self, item_wire_type: WireType[T], /) -> None:
        self._item = item_wire_type

    @property
    def item(self) -> WireType[T]:
        return self._item

    @abstractmethod
    def _build(self, items: Iterable[T]) -> Collection[T]:
        """ How to build the concrete collection from an iterable of items.
        """
        raise NotImplementedError

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: WireType.TypeMap) -> Self:
        member_type = cls._get_member_type(type_)
        if is_union_type(member_type):
            raise DescriptorError(f'{pretty_type(type_)}: optional or union items are not supported')
        member_wire_type = WireType.from_type(member_type, type_map=type_map)
        if member_wire_type.is_multi_arg:
            raise DescriptorError(f'{pretty_type(type_)}: nested collections are not supported')
        return cls(member_wire_type)

    @classmethod
    def _get_member_type(cls, type_: Any) -> Any:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, Collection):
            raise DescriptorError('expected Collection type')
        args = get_args(type_)
        if not args or len(args) != 1:
            raise DescriptorError(f'expected {origin_type.__name__}[<type>]')
        return args[0]

    @property
    @override
    def is_multi_arg(self) -> bool:
        return True

    @override
    def type_name(self) -> str:
        return f'{self._collection_name()}[{self._item.type_name()}]'

    @override
    def _eq_key(self) -> tuple[Any, ...]:
        return (self._item,)

    @abstractmethod
    def _collection_name(self) -> str:
        raise NotImplementedError

    @override
    def _check_value(self, value: Collection[T], /) -> None:
        if not isinstance(value, Collection) or isinstance(value, (str, bytes, bytearray)):
            raise ValueTypeError(f'expected {self.type_name()}, got {type(value).__name__}')
        for i in value:
            self._item.check_value(i)

    @override
    def _write_args(self, value: Collection[T], out: list[bytes], /) -> None:
        for i in value:
            self._item.write_args(i, out)

    @override
    def _num_of_args(self, value: Collection[T], /) -> int:
        return sum(self._item.num_of_args(i) for i in value)

    @override
    def _from_wire(self, wire_value: WireValue, /) -> Collection[T]:
        match wire_value:
            case Array(items):
                return self._build(self._item.from_wire(i) for i in items)
            case Nil():
                return self._build(())
            case Int() | Double():
                return self._build((self._item.from_wire(wire_value),))
        raw = text_bytes(wire_value)
        if raw is None:
            raise self._conversion_error(wire_value)
        if not raw:
            return self._build(())
        return self._build(self._item.from_wire(BulkString(part)) for part in raw.split(ITEM_SEPARATOR))


class ListWireType(_CollectionWireType[T]):
    """ Represents builtin `list` values.
    """

    @override
    def _collection_name(self) -> str:
        return 'list'

    @override
    def _build(self, items: Iterable[T]) -> list[T]:
        return list(items)


class TupleWireType(_CollectionWireType[T]):
    """ Represents builtin `tuple` values with homogeneous items, as in `tuple[T, ...]`.
    """

    @override
    @classmethod
    def _get_member_type(cls, type_: Any) -> Any:
        args = get_args(type_)
        if len(args) != 2 or args[1] is not Ellipsis:
            raise DescriptorError('only tuple[<type>, ...] is supported')
        return args[0]

    @override
    def _collection_name(self) -> str:
        return 'tuple'

    @override
    def type_name(self) -> str:
        return f'tuple[{self._item.type_name()}, ...]'

    @override
    def _build(self, items: Iterable[T]) -> tuple[T, ...]:
        return tuple(items)


class SetWireType(_CollectionWireType[H]):
    """ Represents builtin `set` values, the order of the arguments follows the iteration order of the set.
    """

    @override
    @classmethod
    def _get_member_type(cls, type_: Any) -> Any:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, Set):
            raise DescriptorError('expected Set type')
        return super()._get_member_type(type_)

    @override
    def _collection_name(self) -> str:
        return 'set'

    @override
    def _build(self, items: Iterable[H]) -> Set[H]:
        return set(items)


class FrozenSetWireType(SetWireType[H]):
    """ Represents builtin `frozenset` values.
    """

    @override
    def _collection_name(self) -> str:
        return 'frozenset'

    @override
    def _build(self, items: Iterable[H]) -> frozenset[H]:
        return frozenset(items)
