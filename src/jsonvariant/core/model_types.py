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

"""Enumerations shared across jsonvariant.

This module defines:

- ``ValueKind``: the closed set of variants a value can hold
- ``DuplicateKeyPolicy``: how the decoder treats repeated object keys
- ``LogFormat`` and ``LogComponent``: logging configuration enums
"""

from __future__ import annotations

from jsonvariant.compat import StrEnum

__all__ = ["DuplicateKeyPolicy", "LogComponent", "LogFormat", "ValueKind"]


class ValueKind(StrEnum):
    """Enumeration of the JSON value variants.

    Attributes:
        NULL: JSON ``null``.
        BOOL: JSON ``true``/``false``.
        INT: Whole number within the signed 64-bit range.
        FLOAT: IEEE-754 double.
        STRING: UTF-8 text.
        LIST: Ordered sequence of values.
        MAP: String-keyed mapping of values.
    """

    NULL = "null"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    LIST = "list"
    MAP = "map"


class DuplicateKeyPolicy(StrEnum):
    """Enumeration of duplicate object key handling policies.

    Attributes:
        REJECT: Fail decoding with ``DuplicateKeyError``.
        LAST_WINS: Keep the last value, at the position of the first key.
    """

    REJECT = "reject"
    LAST_WINS = "last_wins"

    @classmethod
    def from_str(cls, raw: str) -> DuplicateKeyPolicy:
        """Create a DuplicateKeyPolicy enum from a string value.

        Args:
            raw: String representation of the policy. Hyphens are accepted
                in place of underscores.

        Returns:
            DuplicateKeyPolicy enum value.

        Raises:
            ValueError: If the string does not match any policy value.
        """
        value = raw.strip().lower().replace("-", "_")
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown duplicate key policy '{raw}'"
            raise ValueError(msg) from exc


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Enumeration of loggable components."""

    DECODER = "decoder"
    ENCODER = "encoder"
    ENVELOPE = "envelope"
    CONFIG = "config"
