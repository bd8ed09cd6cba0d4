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

"""jsonvariant - a type-preserving JSON value container.

Values hold exactly one JSON kind (null, bool, int, float, string, list or
map). ``decode`` infers each number's kind from its lexical form and
``encode`` writes every kind back in a form that decodes to the same value.
"""

from __future__ import annotations

from .config import DEFAULT_CONFIG, CodecConfig, load_config
from .core.model_types import DuplicateKeyPolicy, ValueKind
from .decoder import decode
from .encoder import encode, encode_text
from .exceptions import (
    ConfigValidationError,
    DepthExceededError,
    DuplicateKeyError,
    JsonVariantDecodeError,
    JsonVariantError,
    JsonVariantTypeError,
    JsonVariantValidationError,
    MalformedInputError,
    TypeMismatchError,
    UnrepresentableNumberError,
    ValueConstructionError,
    ValueRangeError,
)
from .value import BaseValue, Bool, Float, Int, JSONValue, List, Map, Null, String, Value, from_native

__all__ = [
    "DEFAULT_CONFIG",
    "BaseValue",
    "Bool",
    "CodecConfig",
    "ConfigValidationError",
    "DepthExceededError",
    "DuplicateKeyError",
    "DuplicateKeyPolicy",
    "Float",
    "Int",
    "JSONValue",
    "JsonVariantDecodeError",
    "JsonVariantError",
    "JsonVariantTypeError",
    "JsonVariantValidationError",
    "List",
    "MalformedInputError",
    "Map",
    "Null",
    "String",
    "TypeMismatchError",
    "UnrepresentableNumberError",
    "Value",
    "ValueConstructionError",
    "ValueKind",
    "ValueRangeError",
    "decode",
    "encode",
    "encode_text",
    "from_native",
    "load_config",
]
