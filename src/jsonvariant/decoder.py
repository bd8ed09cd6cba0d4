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

"""Decode JSON text into values.

The stdlib parser only knows one generic number token, so the kind of every
number is decided here from its lexical form rather than left to library
defaults:

==========================================  =========
Token                                       Variant
==========================================  =========
``null``                                    ``Null``
``true`` / ``false``                        ``Bool``
digits only, within the signed 64-bit range ``Int``
digits only, outside that range             ``Float``
contains ``.``, ``e`` or ``E``              ``Float``
string                                      ``String``
array                                       ``List``
object                                      ``Map``
==========================================  =========

``1.0`` and ``1e0`` therefore decode to ``Float`` even though they are
mathematically whole. Numbers that overflow a double are rejected, as are the
non-standard ``NaN``/``Infinity`` literals the stdlib would otherwise accept.
"""

from __future__ import annotations

import json
import logging
import math
import re
import time
from typing import TYPE_CHECKING, Final, cast

from jsonvariant._internal.logging_utils import structured_extra
from jsonvariant.config import DEFAULT_CONFIG
from jsonvariant.core.model_types import DuplicateKeyPolicy, LogComponent
from jsonvariant.exceptions import (
    DepthExceededError,
    DuplicateKeyError,
    MalformedInputError,
    UnrepresentableNumberError,
    ValueRangeError,
)
from jsonvariant.value import INT64_MAX, INT64_MIN, BaseValue, Bool, Float, Int, List, Map, Null, String

if TYPE_CHECKING:
    from collections.abc import Callable

    from jsonvariant.config import CodecConfig
    from jsonvariant.value import Value

__all__ = ["decode", "nesting_depth"]

logger: logging.Logger = logging.getLogger("jsonvariant.decoder")

_STRING_TOKEN: Final[re.Pattern[str]] = re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL)
_BRACKETS: Final[re.Pattern[str]] = re.compile(r"[\[\]{}]")
_INT64_DIGITS: Final[int] = len(str(INT64_MAX))


class _ObjectPairs(tuple[tuple[str, object], ...]):
    """Marker for parsed object members awaiting conversion into a ``Map``."""

    __slots__ = ()


def nesting_depth(text: str) -> int:
    """Return the deepest bracket nesting in JSON text, ignoring string contents.

    Args:
        text: JSON text, not necessarily well formed.

    Returns:
        Maximum number of simultaneously open ``[``/``{`` brackets.
    """
    deepest = 0
    depth = 0
    for match in _BRACKETS.finditer(_STRING_TOKEN.sub('""', text)):
        if match.group() in "[{":
            depth += 1
            deepest = max(deepest, depth)
        else:
            depth -= 1
    return deepest


def _parse_int(token: str) -> Int | Float:
    # Longer tokens cannot fit in 64 bits and may exceed int() digit limits.
    if len(token.lstrip("-")) <= _INT64_DIGITS:
        number = int(token)
        if INT64_MIN <= number <= INT64_MAX:
            return Int(number)
    return _parse_float(token)


def _parse_float(token: str) -> Float:
    number = float(token)
    if not math.isfinite(number):
        raise UnrepresentableNumberError(token)
    return Float(number)


def _reject_constant(token: str) -> object:
    message = f"non-standard literal {token}"
    raise MalformedInputError(message)


def _make_pairs_hook(policy: DuplicateKeyPolicy) -> Callable[[list[tuple[str, object]]], _ObjectPairs]:
    def _collect(pairs: list[tuple[str, object]]) -> _ObjectPairs:
        if policy is DuplicateKeyPolicy.LAST_WINS:
            # dict keeps the first key's position and the last key's value.
            return _ObjectPairs(dict(pairs).items())
        seen: set[str] = set()
        for key, _ in pairs:
            if key in seen:
                raise DuplicateKeyError(key)
            seen.add(key)
        return _ObjectPairs(pairs)

    return _collect


def _lift(node: object) -> Value:
    """Convert the parser's intermediate output into a value graph."""
    if isinstance(node, BaseValue):
        return cast("Value", node)
    if node is None:
        return Null()
    if isinstance(node, bool):
        return Bool(node)
    if isinstance(node, str):
        return String(node)
    if isinstance(node, _ObjectPairs):
        pairs: list[tuple[str, Value]] = []
        for key, item in node:
            pairs.append((key, _lift(item)))
        return Map(pairs)
    if isinstance(node, list):
        items: list[Value] = []
        for item in cast("list[object]", node):
            items.append(_lift(item))
        return List(items)
    message = f"unexpected parser output {type(node).__name__}"
    raise MalformedInputError(message)


def _as_text(data: bytes | bytearray | memoryview | str) -> str:
    if isinstance(data, str):
        return data
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        message = f"input is not UTF-8 ({exc.reason})"
        raise MalformedInputError(message, position=exc.start) from exc


def decode(data: bytes | bytearray | memoryview | str, *, config: CodecConfig | None = None) -> Value:
    """Decode JSON text into a value.

    Args:
        data: UTF-8 encoded JSON bytes, or already decoded text.
        config: Codec settings; ``None`` uses ``DEFAULT_CONFIG``.

    Returns:
        The decoded value. Object key order is preserved.

    Raises:
        MalformedInputError: If ``data`` is not well-formed JSON text.
        DuplicateKeyError: If an object repeats a key and the policy rejects it.
        UnrepresentableNumberError: If a number overflows a 64-bit double.
        DepthExceededError: If nesting exceeds ``config.max_depth``.
    """
    settings = config or DEFAULT_CONFIG
    started = time.perf_counter()
    text = _as_text(data)
    depth = nesting_depth(text)
    if depth > settings.max_depth:
        raise DepthExceededError(settings.max_depth)
    try:
        parsed = json.loads(
            text,
            parse_int=_parse_int,
            parse_float=_parse_float,
            parse_constant=_reject_constant,
            object_pairs_hook=_make_pairs_hook(settings.duplicate_keys),
        )
        value = _lift(parsed)
    except json.JSONDecodeError as exc:
        raise MalformedInputError(exc.msg, position=exc.pos) from exc
    except ValueRangeError as exc:
        # Lone surrogate escapes parse but are not valid UTF-8 text.
        raise MalformedInputError(str(exc)) from exc
    logger.debug(
        "Decoded %s value",
        value.kind,
        extra=structured_extra(
            component=LogComponent.DECODER,
            kind=value.kind,
            size=len(text),
            depth=depth,
            duration_ms=(time.perf_counter() - started) * 1000,
        ),
    )
    return value
