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

"""Encode values as compact JSON text.

Every variant maps to exactly one JSON form. Floats are written with
``repr``, the shortest text that parses back to the same double, and that
text always carries a ``.`` or an exponent so the value decodes as a
``Float`` again. Map keys are written in insertion order.
"""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING

from jsonvariant._internal.logging_utils import structured_extra
from jsonvariant.compat import assert_never
from jsonvariant.config import DEFAULT_CONFIG
from jsonvariant.core.model_types import LogComponent
from jsonvariant.exceptions import DepthExceededError, UnrepresentableNumberError
from jsonvariant.value import Bool, Float, Int, List, Map, Null, String

if TYPE_CHECKING:
    from jsonvariant.config import CodecConfig
    from jsonvariant.value import Value

__all__ = ["encode", "encode_text"]

logger: logging.Logger = logging.getLogger("jsonvariant.encoder")


def _emit(value: Value, out: list[str], depth: int, settings: CodecConfig) -> None:
    match value:
        case Null():
            out.append("null")
        case Bool(flag):
            out.append("true" if flag else "false")
        case Int(number):
            out.append(str(number))
        case Float(number):
            if not value.is_finite():
                raise UnrepresentableNumberError(number)
            out.append(repr(number))
        case String(text):
            out.append(json.dumps(text, ensure_ascii=settings.ensure_ascii))
        case List(items):
            if depth >= settings.max_depth:
                raise DepthExceededError(settings.max_depth)
            out.append("[")
            for index, item in enumerate(items):
                if index:
                    out.append(",")
                _emit(item, out, depth + 1, settings)
            out.append("]")
        case Map(entries):
            if depth >= settings.max_depth:
                raise DepthExceededError(settings.max_depth)
            out.append("{")
            for index, (key, item) in enumerate(entries.items()):
                if index:
                    out.append(",")
                out.append(json.dumps(key, ensure_ascii=settings.ensure_ascii))
                out.append(":")
                _emit(item, out, depth + 1, settings)
            out.append("}")
        case _:
            assert_never(value)


def encode_text(value: Value, *, config: CodecConfig | None = None) -> str:
    """Encode a value as a JSON string.

    Args:
        value: Value graph to encode.
        config: Codec settings; ``None`` uses ``DEFAULT_CONFIG``.

    Returns:
        Compact JSON text without insignificant whitespace.

    Raises:
        UnrepresentableNumberError: If the graph holds a NaN or infinite float.
        DepthExceededError: If the graph nests deeper than ``config.max_depth``.
    """
    settings = config or DEFAULT_CONFIG
    started = time.perf_counter()
    out: list[str] = []
    _emit(value, out, 0, settings)
    text = "".join(out)
    logger.debug(
        "Encoded %s value",
        value.kind,
        extra=structured_extra(
            component=LogComponent.ENCODER,
            kind=value.kind,
            size=len(text),
            duration_ms=(time.perf_counter() - started) * 1000,
        ),
    )
    return text


def encode(value: Value, *, config: CodecConfig | None = None) -> bytes:
    """Encode a value as UTF-8 JSON bytes.

    See :func:`encode_text` for the arguments and failure modes.
    """
    return encode_text(value, config=config).encode("utf-8")
