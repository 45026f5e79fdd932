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
Exceptions raised by the record codec.

Errors raised while a record type is being described (bad directives, unsupported field types) are DescriptorError
and surface when the class is decorated or first used. Errors raised while decoding inherit from DecodeError, every one
of them aborts the whole decode, a partially built record is never returned.
"""

from typing import Optional


class RecordCodecError(Exception):
    """Base class for exceptions in redis-record."""
    pass


class DescriptorError(RecordCodecError, TypeError):
    """Raised when a record type cannot be described by a field table."""
    pass


class ValueTypeError(RecordCodecError, TypeError):
    """Raised when encoding a value whose Python type does not match the declared field type."""
    pass


class ConversionError(RecordCodecError, ValueError):
    """Raised when a wire value cannot be converted to a leaf type."""
    pass


class DecodeError(RecordCodecError):
    """Base class for failures while reconstructing a record from a wire value."""
    pass


class ShapeError(DecodeError):
    """Raised when the top-level wire value does not have an accepted shape or length."""

    def __init__(self, message: str, *, expected: Optional[int] = None, actual: Optional[int] = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NullRecordError(DecodeError):
    """Raised when a nil value is received where a record was expected."""
    pass


class MissingFieldError(DecodeError):
    """Raised when a required named field is absent."""

    def __init__(self, field: str) -> None:
        super().__init__(f'missing required field {field!r}')
        self.field = field


class FieldTypeError(DecodeError):
    """Raised when the value of a named field cannot be converted to the declared type."""

    def __init__(self, field: str, cause: Exception) -> None:
        super().__init__(f'field {field!r}: {cause}')
        self.field = field
        self.cause = cause


class ElementTypeError(DecodeError):
    """Raised when an element of a positional record cannot be converted to the declared type."""

    def __init__(self, index: int, cause: Exception) -> None:
        super().__init__(f'element at index {index}: {cause}')
        self.index = index
        self.cause = cause
