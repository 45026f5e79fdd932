from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from redis_record import RecordKind, redis_record, wire_field


@dataclass
class Item:
    id: int
    label: Optional[str]


@redis_record(rename_all='camelCase')
@dataclass
class UserProfile:
    user_id: int
    display_name: str
    email: str | None = None
    is_admin: bool = False
    score: float = 0.0
    tags: list[str] = field(default_factory=list)
    avatar: bytes | None = None
    session_token: str = wire_field(skip=True, default='')
    legacy_id: int | None = wire_field(rename='legacy', default=None)


class Point(NamedTuple):
    x: int
    flag: bool


class MaybePoint(NamedTuple):
    x: int
    y: Optional[int]


@redis_record(kind=RecordKind.POSITIONAL)
@dataclass
class Pair:
    left: str
    right: int


@dataclass
class Marker:
    pass


def make_profile(**kwargs) -> UserProfile:
    params = dict(
        user_id=1,
        display_name='Ann',
        email=None,
        is_admin=True,
        score=1.5,
        tags=['a', 'b'],
        avatar=None,
        legacy_id=3,
    )
    params.update(kwargs)
    return UserProfile(**params)  # type: ignore[arg-type]
