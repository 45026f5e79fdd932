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
from typing import Any, Generic, NamedTuple, TypeVar, final

from typing_extensions import Self

from redis_record.exception import ConversionError
from redis_record.wire.value import WireValue, describe
from redis_record.wire_types.utils import (
    TypeAliasMap,
    TypeToWireTypeMap,
    get_aliased_type,
    get_usable_origin_type,
)

T = TypeVar('T')


class WireType(ABC, Generic[T]):
    """ This class is used to model a leaf type with a known type signature and how it's converted to and from the wire.

    A value is encoded into one or more arguments (byte sequences), most types produce exactly one, collections produce
    one per item. Decoding takes a single wire value, which for collections can be an array or a textual scalar with
    the items separated by spaces.

    Instances are immutable and shared by every record field with the same declared type.
    """

    class TypeMap(NamedTuple):
        alias_map: TypeAliasMap
        wire_types_map: TypeToWireTypeMap

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    @final
    @staticmethod
    def from_type(type_: Any, /, *, type_map: TypeMap) -> WireType:
        """ Instantiate a WireType instance from a type signature using the given maps.

        Raises DescriptorError if the type is not supported.
        """
        usable_origin = get_usable_origin_type(type_, type_map=type_map)
        wire_type = type_map.wire_types_map[usable_origin]
        aliased_type = get_aliased_type(type_, type_map.alias_map, _verbose=False)
        return wire_type._from_type(aliased_type, type_map=type_map)

    @classmethod
    @abstractmethod
    def _from_type(cls, type_: Any, /, *, type_map: TypeMap) -> Self:
        """ Instantiate a WireType instance from a type signature.

        Compound types should use `WireType.from_type` with the given `type_map` to build the WireType of their items.
        """
        raise NotImplementedError

    @property
    def is_multi_arg(self) -> bool:
        """Whether a value of this type may be encoded into a number of arguments other than 1."""
        return False

    @final
    def check_value(self, value: T, /) -> None:
        """ Raise a ValueTypeError if the value's type is not compatible.
        """
        self._check_value(value)

    @final
    def write_args(self, value: T, out: list[bytes], /) -> None:
        """ Append the arguments that represent the value to `out`.

        The value is checked before anything is written, so a failure never leaves partial arguments behind.
        """
        self._check_value(value)
        self._write_args(value, out)

    @final
    def to_args(self, value: T, /) -> list[bytes]:
        """ Shortcut to get the arguments of a single value as a new list."""
        out: list[bytes] = []
        self.write_args(value, out)
        return out

    @final
    def num_of_args(self, value: T, /) -> int:
        """ Number of arguments that `write_args` produces for the given value.
        """
        self._check_value(value)
        return self._num_of_args(value)

    @final
    def from_wire(self, wire_value: WireValue, /) -> T:
        """ Convert a wire value into a value of this type, raises ConversionError when that's not possible.
        """
        return self._from_wire(wire_value)

    def _conversion_error(self, wire_value: WireValue, reason: str | None = None) -> ConversionError:
        message = f'cannot convert {describe(wire_value)} to {self.type_name()}'
        if reason is not None:
            message = f'{message}: {reason}'
        return ConversionError(message)

    @abstractmethod
    def type_name(self) -> str:
        """Name of the Python type, used in messages."""
        raise NotImplementedError

    @abstractmethod
    def _check_value(self, value: T, /) -> None:
        raise NotImplementedError

    @abstractmethod
    def _write_args(self, value: T, out: list[bytes], /) -> None:
        raise NotImplementedError

    def _num_of_args(self, value: T, /) -> int:
        # XXX: subclasses with `is_multi_arg` must override this
        return 1

    @abstractmethod
    def _from_wire(self, wire_value: WireValue, /) -> T:
        raise NotImplementedError

    def _eq_key(self) -> tuple[Any, ...]:
        """Properties that make two instances of the same class equivalent."""
        return ()

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        assert isinstance(other, WireType)
        return self._eq_key() == other._eq_key()

    def __hash__(self) -> int:
        return hash((type(self), self._eq_key()))

    def __repr__(self) -> str:
        return f'<{type(self).__name__} {self.type_name()}>'
