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

"""Immutable tagged-variant model for JSON values.

A value is exactly one of ``Null``, ``Bool``, ``Int``, ``Float``, ``String``,
``List`` or ``Map``. The ``Value`` alias is the closed union of those classes
and every consumer dispatches over it with ``match`` and ``assert_never`` so a
missing variant is a type error rather than a silent fall-through.

Containers only accept already-built values and never expose a mutable view,
so a value graph is always finite and acyclic.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar, Final, TypeAlias, cast

from jsonvariant.compat import assert_never, override
from jsonvariant.config import DEFAULT_MAX_DEPTH
from jsonvariant.core.model_types import ValueKind
from jsonvariant.exceptions import (
    DepthExceededError,
    DuplicateKeyError,
    TypeMismatchError,
    ValueConstructionError,
    ValueRangeError,
)

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "BaseValue",
    "Bool",
    "Float",
    "Int",
    "JSONValue",
    "List",
    "Map",
    "Null",
    "String",
    "Value",
    "from_native",
]

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

JSONValue: TypeAlias = "None | bool | int | float | str | list[JSONValue] | dict[str, JSONValue]"
"""Plain Python data produced by :meth:`BaseValue.to_native`."""


def _require_utf8(text: str, *, what: str) -> str:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        message = f"{what} is not valid UTF-8 text: {exc.reason}"
        raise ValueRangeError(message) from exc
    return text


def _require_value(item: object, *, where: str) -> Value:
    if not isinstance(item, BaseValue):
        message = f"{where} must hold jsonvariant values, got {type(item).__name__}"
        raise ValueConstructionError(message)
    return cast("Value", item)


class BaseValue:
    """Common behaviour of every value variant.

    Each accessor returns the held payload when the variant matches and raises
    :class:`~jsonvariant.exceptions.TypeMismatchError` otherwise. Accessors
    never convert between kinds; ``Int(1).as_float()`` fails.
    """

    __slots__ = ()

    kind: ClassVar[ValueKind]

    def is_null(self) -> bool:
        """Return whether this value is ``Null``."""
        return self.kind is ValueKind.NULL

    def as_bool(self) -> bool:
        """Return the held boolean."""
        raise TypeMismatchError(ValueKind.BOOL, self.kind)

    def as_int(self) -> int:
        """Return the held integer."""
        raise TypeMismatchError(ValueKind.INT, self.kind)

    def as_float(self) -> float:
        """Return the held float."""
        raise TypeMismatchError(ValueKind.FLOAT, self.kind)

    def as_str(self) -> str:
        """Return the held string."""
        raise TypeMismatchError(ValueKind.STRING, self.kind)

    def as_list(self) -> tuple[Value, ...]:
        """Return the held elements."""
        raise TypeMismatchError(ValueKind.LIST, self.kind)

    def as_map(self) -> Mapping[str, Value]:
        """Return a read-only view of the held entries."""
        raise TypeMismatchError(ValueKind.MAP, self.kind)

    def to_native(self, *, max_depth: int = DEFAULT_MAX_DEPTH) -> JSONValue:
        """Unwrap this value into plain Python data.

        Args:
            max_depth: Maximum container nesting depth to unwrap.

        Returns:
            ``None``, ``bool``, ``int``, ``float``, ``str``, or freshly built
            ``list``/``dict`` containers of those.

        Raises:
            DepthExceededError: If the graph nests deeper than ``max_depth``.
        """
        return _unwrap(cast("Value", self), 0, max_depth)


@dataclass(frozen=True, slots=True)
class Null(BaseValue):
    """JSON ``null``."""

    kind: ClassVar[ValueKind] = ValueKind.NULL


@dataclass(frozen=True, slots=True)
class Bool(BaseValue):
    """JSON ``true`` or ``false``."""

    kind: ClassVar[ValueKind] = ValueKind.BOOL

    value: bool

    def __post_init__(self) -> None:
        if type(self.value) is not bool:
            message = f"Bool requires a bool payload, got {type(self.value).__name__}"
            raise ValueConstructionError(message)

    @override
    def as_bool(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class Int(BaseValue):
    """Whole number within the signed 64-bit range."""

    kind: ClassVar[ValueKind] = ValueKind.INT

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            message = f"Int requires an int payload, got {type(self.value).__name__}"
            raise ValueConstructionError(message)
        if not INT64_MIN <= self.value <= INT64_MAX:
            message = f"Int payload {self.value} is outside the signed 64-bit range"
            raise ValueRangeError(message)

    @override
    def as_int(self) -> int:
        return self.value


@dataclass(frozen=True, slots=True, eq=False)
class Float(BaseValue):
    """IEEE-754 double. Compares with float semantics, so ``NaN != NaN``."""

    kind: ClassVar[ValueKind] = ValueKind.FLOAT

    value: float

    def __post_init__(self) -> None:
        if not isinstance(self.value, float):
            message = f"Float requires a float payload, got {type(self.value).__name__}"
            raise ValueConstructionError(message)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        return self.value == other.value

    @override
    def __hash__(self) -> int:
        return hash((ValueKind.FLOAT, self.value))

    def is_finite(self) -> bool:
        """Return whether the payload has a JSON representation."""
        return math.isfinite(self.value)

    @override
    def as_float(self) -> float:
        return self.value


@dataclass(frozen=True, slots=True)
class String(BaseValue):
    """UTF-8 text."""

    kind: ClassVar[ValueKind] = ValueKind.STRING

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            message = f"String requires a str payload, got {type(self.value).__name__}"
            raise ValueConstructionError(message)
        _require_utf8(self.value, what="String payload")

    @override
    def as_str(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True, eq=False, init=False)
class List(BaseValue):
    """Ordered sequence of values."""

    kind: ClassVar[ValueKind] = ValueKind.LIST

    items: tuple[Value, ...]

    def __init__(self, items: Iterable[Value] = ()) -> None:
        frozen = tuple(_require_value(item, where="List") for item in items)
        object.__setattr__(self, "items", frozen)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, List):
            return NotImplemented
        return _graph_equal(self, other)

    @override
    def __hash__(self) -> int:
        return _graph_hash(self)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    @override
    def as_list(self) -> tuple[Value, ...]:
        return self.items


@dataclass(frozen=True, slots=True, eq=False, init=False)
class Map(BaseValue):
    """String-keyed mapping of values.

    Insertion order is kept so encoding is stable, but equality ignores it.
    Building from ``(key, value)`` pairs rejects repeated keys.
    """

    kind: ClassVar[ValueKind] = ValueKind.MAP

    entries: Mapping[str, Value]

    def __init__(self, entries: Mapping[str, Value] | Iterable[tuple[str, Value]] = ()) -> None:
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        built: dict[str, Value] = {}
        for key, item in pairs:
            if not isinstance(key, str):
                message = f"Map keys must be str, got {type(key).__name__}"
                raise ValueConstructionError(message)
            if key in built:
                raise DuplicateKeyError(key)
            built[_require_utf8(key, what="Map key")] = _require_value(item, where="Map")
        object.__setattr__(self, "entries", MappingProxyType(built))

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return _graph_equal(self, other)

    @override
    def __hash__(self) -> int:
        return _graph_hash(self)

    @override
    def __repr__(self) -> str:
        return f"Map({dict(self.entries)!r})"

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __getitem__(self, key: str) -> Value:
        return self.entries[key]

    def get(self, key: str, default: Value | None = None) -> Value | None:
        """Return the value stored under ``key``, or ``default`` when absent."""
        return self.entries.get(key, default)

    @override
    def as_map(self) -> Mapping[str, Value]:
        return self.entries


Value: TypeAlias = Null | Bool | Int | Float | String | List | Map
"""Closed union of every value variant."""


def _graph_equal(left: Value, right: Value) -> bool:
    """Compare two value graphs pair by pair from an explicit stack.

    Containers at the maximum configurable depth would otherwise exhaust the
    interpreter stack. Elements are compared individually, so a shared NaN
    element keeps its containers unequal.
    """
    pending: list[tuple[Value, Value]] = [(left, right)]
    while pending:
        mine, theirs = pending.pop()
        if isinstance(mine, List) and isinstance(theirs, List):
            if len(mine.items) != len(theirs.items):
                return False
            pending.extend(zip(mine.items, theirs.items, strict=True))
        elif isinstance(mine, Map) and isinstance(theirs, Map):
            if mine.entries.keys() != theirs.entries.keys():
                return False
            for key, item in mine.entries.items():
                pending.append((item, theirs.entries[key]))
        elif mine != theirs:
            return False
    return True


def _graph_hash(root: Value) -> int:
    """Hash a value graph bottom-up from an explicit stack.

    ``Map`` hashes ignore key order to agree with ``Map`` equality.
    """
    hashes: dict[int, int] = {}
    pending: list[tuple[Value, bool]] = [(root, False)]
    while pending:
        node, children_done = pending.pop()
        if isinstance(node, List):
            if children_done:
                hashes[id(node)] = hash((ValueKind.LIST, tuple(hashes[id(item)] for item in node.items)))
            else:
                pending.append((node, True))
                pending.extend((item, False) for item in node.items)
        elif isinstance(node, Map):
            if children_done:
                members = frozenset((key, hashes[id(item)]) for key, item in node.entries.items())
                hashes[id(node)] = hash((ValueKind.MAP, members))
            else:
                pending.append((node, True))
                pending.extend((item, False) for item in node.entries.values())
        else:
            hashes[id(node)] = hash(node)
    return hashes[id(root)]


def _unwrap(value: Value, depth: int, max_depth: int) -> JSONValue:
    match value:
        case Null():
            return None
        case Bool(flag):
            return flag
        case Int(number):
            return number
        case Float(number):
            return number
        case String(text):
            return text
        case List(items):
            if depth >= max_depth:
                raise DepthExceededError(max_depth)
            unwrapped: list[JSONValue] = []
            for item in items:
                unwrapped.append(_unwrap(item, depth + 1, max_depth))
            return unwrapped
        case Map(entries):
            if depth >= max_depth:
                raise DepthExceededError(max_depth)
            fields: dict[str, JSONValue] = {}
            for key, item in entries.items():
                fields[key] = _unwrap(item, depth + 1, max_depth)
            return fields
        case _:
            assert_never(value)


def _wrap(obj: object, depth: int, max_depth: int) -> Value:
    if isinstance(obj, BaseValue):
        return cast("Value", obj)
    if obj is None:
        return Null()
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, int):
        return Int(obj)
    if isinstance(obj, float):
        return Float(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, (list, tuple)):
        if depth >= max_depth:
            raise DepthExceededError(max_depth)
        sequence = cast("list[object] | tuple[object, ...]", obj)
        items: list[Value] = []
        for item in sequence:
            items.append(_wrap(item, depth + 1, max_depth))
        return List(items)
    if isinstance(obj, Mapping):
        if depth >= max_depth:
            raise DepthExceededError(max_depth)
        mapping = cast("Mapping[object, object]", obj)
        pairs: list[tuple[str, Value]] = []
        for key, item in mapping.items():
            if not isinstance(key, str):
                message = f"Map keys must be str, got {type(key).__name__}"
                raise ValueConstructionError(message)
            pairs.append((key, _wrap(item, depth + 1, max_depth)))
        return Map(pairs)
    message = f"Cannot wrap {type(obj).__name__} as a JSON value"
    raise ValueConstructionError(message)


def from_native(obj: object, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    """Wrap plain Python data as a value.

    Args:
        obj: ``None``, ``bool``, ``int``, ``float``, ``str``, a ``list`` or
            ``tuple`` of such data, a mapping with ``str`` keys, or an
            existing value (returned as is).
        max_depth: Maximum container nesting depth to accept.

    Returns:
        The wrapped value. ``bool`` becomes ``Bool`` rather than ``Int``.

    Raises:
        ValueConstructionError: If ``obj`` contains an unsupported type.
        ValueRangeError: If an ``int`` falls outside the signed 64-bit range.
        DepthExceededError: If ``obj`` nests deeper than ``max_depth``.
    """
    return _wrap(obj, 0, max_depth)
