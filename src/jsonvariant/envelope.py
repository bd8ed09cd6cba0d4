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

"""Pydantic glue for embedding values in larger message models.

Request and response models declare their opaque payload fields with
``ValueField`` or ``OptionalValueField``::

    class Response(BaseModel):
        request_id: str
        success: bool
        result: OptionalValueField = None

An optional field is either absent (``None``) or present and holding a value.
Only JSON input can make a field present with ``Null()``: a ``null`` read by
:func:`load_model` or ``model_validate_json`` becomes ``Null()`` and is written
back as ``null``. A Python ``None`` always means absent and :func:`dump_model`
omits it.

The envelope object itself is one level of nesting, so :func:`dump_model` and
:func:`load_model` allow ``config.max_depth + 1`` levels of JSON text. Each
value field is still bounded by ``config.max_depth``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Any, Final, TypeVar, cast

from pydantic import BaseModel, PlainSerializer, PlainValidator, SerializationInfo, ValidationInfo
from pydantic_core import PydanticCustomError

from jsonvariant._internal.logging_utils import structured_extra
from jsonvariant.config import DEFAULT_CONFIG, CodecConfig
from jsonvariant.core.model_types import LogComponent
from jsonvariant.decoder import decode
from jsonvariant.encoder import encode, encode_text
from jsonvariant.exceptions import JsonVariantError
from jsonvariant.value import BaseValue, JSONValue, Null, from_native

if TYPE_CHECKING:
    from jsonvariant.value import Value

__all__ = [
    "CONFIG_CONTEXT_KEY",
    "WIRE_CONTEXT_KEY",
    "OptionalValueField",
    "ValueField",
    "dump_model",
    "load_model",
]

logger: logging.Logger = logging.getLogger("jsonvariant.envelope")

ModelT = TypeVar("ModelT", bound=BaseModel)

# Validation and serialization context keys set by load_model and dump_model.
WIRE_CONTEXT_KEY: Final[str] = "jsonvariant_wire"
CONFIG_CONTEXT_KEY: Final[str] = "jsonvariant_config"


def _context_config(context: object) -> CodecConfig:
    if isinstance(context, dict):
        config = cast("dict[str, object]", context).get(CONFIG_CONTEXT_KEY)
        if isinstance(config, CodecConfig):
            return config
    return DEFAULT_CONFIG


def _from_wire(info: ValidationInfo) -> bool:
    if info.mode == "json":
        return True
    context = info.context
    return isinstance(context, dict) and bool(cast("dict[str, object]", context).get(WIRE_CONTEXT_KEY))


def _wrap_payload(raw: object, info: ValidationInfo) -> BaseValue:
    try:
        return from_native(raw, max_depth=_context_config(info.context).max_depth)
    except JsonVariantError as exc:
        raise PydanticCustomError(
            "jsonvariant.value",
            "Invalid JSON value: {reason}",
            {"reason": str(exc)},
        ) from exc


def _validate_value(raw: object, info: ValidationInfo) -> BaseValue:
    if raw is None:
        return Null()
    return _wrap_payload(raw, info)


def _validate_optional_value(raw: object, info: ValidationInfo) -> BaseValue | None:
    if raw is None:
        return Null() if _from_wire(info) else None
    return _wrap_payload(raw, info)


def _serialize_value(value: BaseValue, info: SerializationInfo) -> JSONValue:
    settings = _context_config(info.context)
    if info.mode_is_json():
        # Rejects NaN/infinity instead of letting pydantic write them as null.
        encode_text(cast("Value", value), config=settings)
    return value.to_native(max_depth=settings.max_depth)


ValueField = Annotated[
    BaseValue,
    PlainValidator(_validate_value),
    PlainSerializer(_serialize_value, return_type=Any, when_used="always"),
]
"""A required field holding any value; ``None`` and JSON ``null`` become ``Null()``."""

OptionalValueField = Annotated[
    BaseValue | None,
    PlainValidator(_validate_optional_value),
    PlainSerializer(_serialize_value, return_type=Any, when_used="unless-none"),
]
"""An optional field; Python ``None`` means absent, JSON ``null`` is ``Null()``."""


def _envelope_settings(settings: CodecConfig) -> CodecConfig:
    # model_copy skips validation, so the extra level may pass MAX_DEPTH_LIMIT.
    return settings.model_copy(update={"max_depth": settings.max_depth + 1})


def dump_model(model: BaseModel, *, config: CodecConfig | None = None) -> bytes:
    """Encode a model as JSON bytes through the value encoder.

    Absent optional fields are omitted. Value fields keep their exact kinds,
    so an ``Int`` is written without a fraction and a ``Float`` with one.

    Args:
        model: Model whose non-value fields hold JSON-native data.
        config: Codec settings; ``None`` uses ``DEFAULT_CONFIG``.

    Returns:
        UTF-8 encoded JSON text.

    Raises:
        ValueConstructionError: If a non-value field holds a non-JSON type.
        UnrepresentableNumberError: If any float is NaN or infinite.
        DepthExceededError: If a value field nests deeper than ``config.max_depth``.
    """
    settings = config or DEFAULT_CONFIG
    outer = _envelope_settings(settings)
    payload = model.model_dump(mode="python", exclude_none=True, context={CONFIG_CONTEXT_KEY: settings})
    return encode(from_native(payload, max_depth=outer.max_depth), config=outer)


def load_model(model_type: type[ModelT], data: bytes | str, *, config: CodecConfig | None = None) -> ModelT:
    """Decode JSON bytes and validate them into ``model_type``.

    Decoding goes through :func:`~jsonvariant.decode` first, so number kinds
    follow its lexical policy rather than pydantic's parser.

    Args:
        model_type: Pydantic model class to validate into.
        data: JSON bytes or text holding an object.
        config: Codec settings; ``None`` uses ``DEFAULT_CONFIG``.

    Returns:
        A validated ``model_type`` instance.

    Raises:
        MalformedInputError: If ``data`` is not well-formed JSON text.
        DepthExceededError: If the text nests deeper than the envelope allows.
        pydantic.ValidationError: If the decoded object does not fit the model.
    """
    settings = config or DEFAULT_CONFIG
    outer = _envelope_settings(settings)
    value = decode(data, config=outer)
    model = model_type.model_validate(
        value.to_native(max_depth=outer.max_depth),
        context={WIRE_CONTEXT_KEY: True, CONFIG_CONTEXT_KEY: settings},
    )
    logger.debug(
        "Loaded %s envelope",
        model_type.__name__,
        extra=structured_extra(
            component=LogComponent.ENVELOPE,
            kind=value.kind,
            size=len(data),
            details={"model": model_type.__name__},
        ),
    )
    return model
