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
Case conventions that can be applied to every field name of a record.

Field names are expected to be written in `snake_case`, as is usual for Python attributes, the conventions below
transform from that:

>>> RenameRule.CAMEL.apply_to_field('user_id')
'userId'
>>> RenameRule.PASCAL.apply_to_field('user_id')
'UserId'
>>> RenameRule.SCREAMING_KEBAB.apply_to_field('user_id')
'USER-ID'
>>> transform_field_name('user_id', RenameRule.CAMEL, 'uid')
'uid'
>>> transform_field_name('user_id', None, None)
'user_id'
"""

from enum import Enum, unique
from typing import Optional

from redis_record.exception import DescriptorError

# spelling accepted as "no rule", kept for declarations that want to be explicit about it
NO_RULE = 'none'


@unique
class RenameRule(str, Enum):
    LOWER = 'lowercase'
    UPPER = 'UPPERCASE'
    PASCAL = 'PascalCase'
    CAMEL = 'camelCase'
    SNAKE = 'snake_case'
    SCREAMING_SNAKE = 'SCREAMING_SNAKE_CASE'
    KEBAB = 'kebab-case'
    SCREAMING_KEBAB = 'SCREAMING-KEBAB-CASE'

    @classmethod
    def parse(cls, rule: 'str | RenameRule | None') -> Optional['RenameRule']:
        """Parse a rule as given in a declaration, raises DescriptorError if it isn't known."""
        if rule is None or rule == NO_RULE:
            return None
        if isinstance(rule, RenameRule):
            return rule
        try:
            return cls(rule)
        except ValueError:
            known = ', '.join(repr(i.value) for i in cls)
            raise DescriptorError(f'unknown rename rule {rule!r}, expected one of: {known}') from None

    def apply_to_field(self, field: str) -> str:
        match self:
            case RenameRule.LOWER | RenameRule.SNAKE:
                return field
            case RenameRule.UPPER | RenameRule.SCREAMING_SNAKE:
                return field.upper()
            case RenameRule.PASCAL:
                return _to_pascal(field)
            case RenameRule.CAMEL:
                pascal = _to_pascal(field)
                return pascal[:1].lower() + pascal[1:]
            case RenameRule.KEBAB:
                return field.replace('_', '-')
            case RenameRule.SCREAMING_KEBAB:
                return field.upper().replace('_', '-')
        raise NotImplementedError(self)


def _to_pascal(field: str) -> str:
    parts: list[str] = []
    capitalize = True
    for ch in field:
        if ch == '_':
            capitalize = True
        elif capitalize:
            parts.append(ch.upper())
            capitalize = False
        else:
            parts.append(ch)
    return ''.join(parts)


def transform_field_name(field: str, rename_all: Optional[RenameRule], rename: Optional[str]) -> str:
    """Compute the wire name of a field, a field-level rename always wins over the type-level rule."""
    if rename is not None:
        return rename
    if rename_all is not None:
        return rename_all.apply_to_field(field)
    return field
