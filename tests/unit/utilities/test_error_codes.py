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

"""Unit tests for the error code registry."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from jsonvariant import (
    DepthExceededError,
    DuplicateKeyError,
    JsonVariantError,
    MalformedInputError,
    TypeMismatchError,
    UnrepresentableNumberError,
    ValueKind,
)
from jsonvariant._internal.error_codes import error_code_catalog, error_code_for
from jsonvariant.exceptions import (
    ConfigValidationError,
    JsonVariantDecodeError,
    JsonVariantTypeError,
    JsonVariantValidationError,
    ValueConstructionError,
    ValueRangeError,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (JsonVariantError("x"), "JV000"),
        (JsonVariantValidationError("x"), "JV100"),
        (JsonVariantTypeError("x"), "JV101"),
        (ConfigValidationError("x"), "JV110"),
        (ValueRangeError("x"), "JV120"),
        (ValueConstructionError("x"), "JV121"),
        (TypeMismatchError(ValueKind.INT, ValueKind.STRING), "JV122"),
        (JsonVariantDecodeError("x"), "JV200"),
        (MalformedInputError("unexpected end", position=3), "JV201"),
        (DuplicateKeyError("id"), "JV202"),
        (UnrepresentableNumberError(float("nan")), "JV300"),
        (DepthExceededError(8), "JV301"),
    ],
)
def test_error_code_for_known_hierarchy(exc: BaseException, code: str) -> None:
    assert error_code_for(exc) == code


def test_error_code_for_subclasses_inherits_parent_code() -> None:
    class CustomDecodeError(MalformedInputError):
        pass

    assert error_code_for(CustomDecodeError("x")) == "JV201"


def test_error_code_for_unknown_defaults_to_base() -> None:
    class CustomError(RuntimeError):
        pass

    assert error_code_for(CustomError("x")) == "JV000"


def test_error_code_catalog_uniqueness() -> None:
    catalog = error_code_catalog()
    codes = list(catalog.values())
    assert len(set(codes)) == len(codes)
    assert catalog["jsonvariant.exceptions.JsonVariantError"] == "JV000"


def test_error_code_documentation_is_in_sync() -> None:
    catalog = error_code_catalog()
    repo_root = Path(__file__).resolve().parents[3]
    doc_path = repo_root / "docs" / "EXCEPTIONS.md"
    content = doc_path.read_text(encoding="utf-8")
    documented_codes = set(re.findall(r"JV\d{3}", content))
    registry_codes = set(catalog.values())
    assert registry_codes == documented_codes
