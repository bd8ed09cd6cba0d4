# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Exception hierarchy for jsonvariant.

Every error raised by the codec derives from :class:`JsonVariantError`, and
additionally from the builtin it refines (``ValueError`` or ``TypeError``),
so callers may catch either the library-specific or the generic type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jsonvariant.core.model_types import ValueKind

__all__ = [
    "ConfigValidationError",
    "DepthExceededError",
    "DuplicateKeyError",
    "JsonVariantDecodeError",
    "JsonVariantError",
    "JsonVariantTypeError",
    "JsonVariantValidationError",
    "MalformedInputError",
    "TypeMismatchError",
    "UnrepresentableNumberError",
    "ValueConstructionError",
    "ValueRangeError",
]


class JsonVariantError(Exception):
    """Base error for all jsonvariant exceptions."""


class JsonVariantValidationError(JsonVariantError, ValueError):
    """Raised when input data fails validation checks."""


class JsonVariantTypeError(JsonVariantError, TypeError):
    """Raised when input data has an unexpected type."""


class JsonVariantDecodeError(JsonVariantValidationError):
    """Raised when JSON text cannot be turned into a value."""


class MalformedInputError(JsonVariantDecodeError):
    """Raised when decode input is not syntactically valid JSON text."""

    def __init__(self, reason: str, *, position: int | None = None) -> None:
        """Initialize the exception with the parser's reason and offset.

        Args:
            reason: Human readable description of the syntax problem.
            position: Character offset into the input, when known.
        """
        self.reason = reason
        self.position = position
        suffix = f" (char {position})" if position is not None else ""
        super().__init__(f"Malformed JSON input: {reason}{suffix}")


class DuplicateKeyError(JsonVariantDecodeError):
    """Raised when a JSON object repeats a key under the ``reject`` policy."""

    def __init__(self, key: str) -> None:
        """Initialize the exception with the repeated key.

        Args:
            key: Object key that appeared more than once.
        """
        self.key = key
        super().__init__(f"Duplicate object key {key!r}")


class UnrepresentableNumberError(JsonVariantValidationError):
    """Raised when a float has no JSON representation (NaN or infinity)."""

    def __init__(self, value: float | str) -> None:
        """Initialize the exception with the offending number.

        Args:
            value: The non-finite float, or the source token that overflowed.
        """
        self.value = value
        super().__init__(f"Number {value!r} cannot be represented in JSON")


class DepthExceededError(JsonVariantValidationError):
    """Raised when nesting goes beyond the configured maximum depth."""

    def __init__(self, max_depth: int) -> None:
        """Initialize the exception with the depth bound that was crossed.

        Args:
            max_depth: Configured maximum container nesting depth.
        """
        self.max_depth = max_depth
        super().__init__(f"Nesting exceeds maximum depth of {max_depth}")


class TypeMismatchError(JsonVariantTypeError):
    """Raised when an accessor asks for a kind the value does not hold."""

    def __init__(self, expected: ValueKind, actual: ValueKind) -> None:
        """Initialize the exception with requested and held kinds.

        Args:
            expected: Kind requested by the caller.
            actual: Kind the value actually holds.
        """
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected a {expected} value, found {actual}")


class ValueConstructionError(JsonVariantTypeError):
    """Raised when a value is built from a payload of the wrong Python type."""


class ValueRangeError(JsonVariantValidationError):
    """Raised when a payload has the right type but an invalid value."""


class ConfigValidationError(JsonVariantValidationError):
    """Raised when codec configuration data contains invalid values."""
