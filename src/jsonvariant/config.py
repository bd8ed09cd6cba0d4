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

"""Codec configuration for jsonvariant.

``CodecConfig`` is a frozen Pydantic model holding the knobs shared by the
encoder and decoder. Callers either pass a config explicitly or rely on
``DEFAULT_CONFIG``; ``load_config`` builds one from ``JSONVARIANT_*``
environment variables.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jsonvariant._internal.logging_utils import structured_extra
from jsonvariant.core.model_types import DuplicateKeyPolicy, LogComponent
from jsonvariant.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_MAX_DEPTH",
    "DUPLICATE_KEYS_ENV",
    "ENSURE_ASCII_ENV",
    "MAX_DEPTH_ENV",
    "MAX_DEPTH_LIMIT",
    "CodecConfig",
    "load_config",
]

logger: logging.Logger = logging.getLogger("jsonvariant.config")

DEFAULT_MAX_DEPTH: Final[int] = 256
# Leaves headroom under the default recursion limit of 1000 frames.
MAX_DEPTH_LIMIT: Final[int] = 512

MAX_DEPTH_ENV: Final[str] = "JSONVARIANT_MAX_DEPTH"
DUPLICATE_KEYS_ENV: Final[str] = "JSONVARIANT_DUPLICATE_KEYS"
ENSURE_ASCII_ENV: Final[str] = "JSONVARIANT_ENSURE_ASCII"

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSY: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


class CodecConfig(BaseModel):
    """Settings shared by :func:`~jsonvariant.decode` and :func:`~jsonvariant.encode`.

    Attributes:
        max_depth: Maximum container nesting depth accepted in either
            direction. A bare scalar has depth 0, ``[]`` has depth 1.
        duplicate_keys: How the decoder treats an object that repeats a key.
        ensure_ascii: Escape non-ASCII characters in encoded strings.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=MAX_DEPTH_LIMIT)
    duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.REJECT
    ensure_ascii: bool = False

    @field_validator("duplicate_keys", mode="before")
    @classmethod
    def _coerce_policy(cls, value: object) -> object:
        if isinstance(value, str) and not isinstance(value, DuplicateKeyPolicy):
            return DuplicateKeyPolicy.from_str(value)
        return value


DEFAULT_CONFIG: Final[CodecConfig] = CodecConfig()


def _parse_flag(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    message = f"{name} must be a boolean flag (got {raw!r})"
    raise ConfigValidationError(message)


def load_config(environ: Mapping[str, str] | None = None) -> CodecConfig:
    """Build a codec configuration from ``JSONVARIANT_*`` environment variables.

    Args:
        environ: Mapping to read from. ``None`` reads ``os.environ``.

    Returns:
        A validated ``CodecConfig``; unset variables keep their defaults.

    Raises:
        ConfigValidationError: If any variable holds an invalid value.
    """
    source = os.environ if environ is None else environ
    payload: dict[str, object] = {}
    if raw_depth := source.get(MAX_DEPTH_ENV, "").strip():
        payload["max_depth"] = raw_depth
    if raw_policy := source.get(DUPLICATE_KEYS_ENV, "").strip():
        payload["duplicate_keys"] = raw_policy
    if raw_ascii := source.get(ENSURE_ASCII_ENV, "").strip():
        payload["ensure_ascii"] = _parse_flag(ENSURE_ASCII_ENV, raw_ascii)
    try:
        config = CodecConfig.model_validate(payload)
    except ValidationError as exc:
        message = f"Invalid jsonvariant configuration: {exc}"
        raise ConfigValidationError(message) from exc
    logger.debug(
        "Loaded codec configuration from environment",
        extra=structured_extra(
            component=LogComponent.CONFIG,
            depth=config.max_depth,
            details={"overrides": sorted(payload)},
        ),
    )
    return config
