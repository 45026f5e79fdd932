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

from collections.abc import Mapping
from types import NoneType, UnionType
from typing import TYPE_CHECKING, Any, TypeAlias, TypeVar, Union, get_args, get_origin

from structlog import get_logger

from redis_record.exception import DescriptorError

if TYPE_CHECKING:
    from redis_record.wire_types import WireType


logger = get_logger()

T = TypeVar('T')
TypeAliasMap: TypeAlias = Mapping[Any, type]
TypeToWireTypeMap: TypeAlias = Mapping[type, type['WireType']]


def pretty_type(type_: Any) -> str:
    """ Shows a cleaner string representation for a type.

    >>> pretty_type(int)
    'int'
    >>> pretty_type(None)
    'None'
    >>> pretty_type(list[int])
    'list[int]'
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif hasattr(type_, '__args__'):
        return str(type_)
    else:
        return getattr(type_, '__name__', repr(type_))


def is_union_type(type_: Any) -> bool:
    """ Whether the type is an union, regardless of it being written as `A | B` or `Union[A, B]`.
    """
    return get_origin(type_) in (Union, UnionType)


def is_optional_type(type_: Any) -> bool:
    """ Whether the given type admits an absent value, that is, it is an union that has `None` as one of its members.

    >>> from typing import Optional
    >>> is_optional_type(int | None), is_optional_type(Optional[str]), is_optional_type(int)
    (True, True, False)
    >>> is_optional_type(int | str)
    False
    """
    return is_union_type(type_) and NoneType in get_args(type_)


def split_optional_type(type_: Any) -> tuple[Any, bool]:
    """ Separate the optionality of a type from the type of the value it carries when present.

    >>> split_optional_type(int | None)
    (<class 'int'>, True)
    >>> split_optional_type(str)
    (<class 'str'>, False)
    """
    if not is_union_type(type_):
        return type_, False
    args = get_args(type_)
    not_none_args = tuple(arg for arg in args if arg is not NoneType)
    if NoneType not in args or len(not_none_args) != 1:
        raise DescriptorError(f'type {pretty_type(type_)} is not supported, only `T | None` unions are')
    not_none_type, = not_none_args
    return not_none_type, True


# XXX: _verbose argument is used to help with doctest
def get_aliased_type(type_: Any, alias_map: TypeAliasMap, *, _verbose: bool = True) -> Any:
    """ Map the origin of a type to its substitute, type arguments are kept as they are.

    >>> get_aliased_type(bytearray, {bytearray: bytes}, _verbose=False)
    <class 'bytes'>
    >>> get_aliased_type(list[int], {bytearray: bytes}, _verbose=False)
    list[int]
    """
    origin_type = get_origin(type_) or type_
    if origin_type not in alias_map:
        return type_
    aliased_origin = alias_map[origin_type]
    if _verbose:
        logger.debug('type replaced', old=pretty_type(type_), new=pretty_type(aliased_origin))
    args = get_args(type_)
    if args:
        return aliased_origin[args]  # type: ignore[index]
    return aliased_origin


def get_usable_origin_type(
    type_: Any,
    /,
    *,
    type_map: 'WireType.TypeMap',
    _verbose: bool = True,
) -> type:
    """ The purpose of this function is to map a given type into a type that is usable in a WireType.TypeMap

    The returned type is guaranteed to exist in `type_map.wire_types_map`, a DescriptorError is raised when the type
    isn't supported:

    >>> from redis_record.wire_types import DEFAULT_TYPE_MAP
    >>> get_usable_origin_type(list[int], type_map=DEFAULT_TYPE_MAP)
    <class 'list'>
    >>> get_usable_origin_type(bytearray, type_map=DEFAULT_TYPE_MAP, _verbose=False)
    <class 'bytes'>
    """
    if isinstance(type_, str):
        raise DescriptorError(f'unresolved annotation {type_!r}')

    if is_union_type(type_):
        raise DescriptorError(f'type {pretty_type(type_)} is not supported by any WireType class')

    aliased_type = get_aliased_type(type_, type_map.alias_map, _verbose=_verbose)
    origin_aliased_type = get_origin(aliased_type) or aliased_type

    if origin_aliased_type in type_map.wire_types_map:
        return origin_aliased_type

    raise DescriptorError(f'type {pretty_type(type_)} is not supported by any WireType class')
