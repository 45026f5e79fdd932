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

from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from redis_record.naming import RenameRule


class RecordCodecSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    # Encoding used to turn `str` values into wire arguments and textual replies back into `str`
    STRING_ENCODING: str = 'utf-8'

    # Rename rule applied to records that don't declare their own `rename_all`, `None` keeps the attribute names
    DEFAULT_RENAME_ALL: Optional[RenameRule] = None

    # Log a warning when a decoded hash carries keys that the record doesn't know about
    WARN_UNKNOWN_FIELDS: bool = False

    @field_validator('STRING_ENCODING')
    @classmethod
    def _check_encoding(cls, encoding: str) -> str:
        import codecs
        try:
            codecs.lookup(encoding)
        except LookupError as e:
            raise ValueError(f'unknown encoding {encoding!r}') from e
        return encoding

    @field_validator('DEFAULT_RENAME_ALL', mode='before')
    @classmethod
    def _parse_rename_all(cls, rename_all: Union[str, RenameRule, None]) -> Optional[RenameRule]:
        # XXX: DescriptorError is a TypeError, pydantic only turns ValueError into a validation error
        try:
            return RenameRule.parse(rename_all)
        except TypeError as e:
            raise ValueError(str(e)) from e

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'RecordCodecSettings':
        """Takes a filepath to a yaml file and returns a validated RecordCodecSettings instance."""
        from redis_record.conf.loader import load_settings_dict
        settings_dict = load_settings_dict(filepath)
        return cls.model_validate(settings_dict)
