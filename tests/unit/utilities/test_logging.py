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

"""Unit tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
import os
from typing import TYPE_CHECKING

from pytest import fixture, mark

from jsonvariant import Int, List, Map, String, decode, encode, load_config
from jsonvariant._internal.logging_utils import (
    CHILD_LOGGERS,
    LOG_FORMATS,
    LOG_LEVELS,
    configure_logging,
    structured_extra,
)
from jsonvariant.core.model_types import LogComponent, LogFormat, ValueKind

if TYPE_CHECKING:
    from collections.abc import Generator

    from _pytest.capture import CaptureFixture
    from _pytest.monkeypatch import MonkeyPatch

pytestmark = mark.unit


def test_configure_logging_json_emits_structured_logs(capsys: CaptureFixture[str]) -> None:
    _ = configure_logging("json")
    logger = logging.getLogger("jsonvariant")
    logger.info(
        "hello",
        extra=structured_extra(
            component=LogComponent.DECODER,
            kind="map",
            size=12,
            depth=2,
            duration_ms=1.23456,
        ),
    )
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.exception("broken")
    captured = capsys.readouterr()
    stream = captured.err or captured.out
    lines = [line for line in stream.strip().splitlines() if line]
    payload = json.loads(lines[-2])
    assert payload["message"] == "hello"
    assert payload["level"] == "info"
    assert payload["logger"] == "jsonvariant"
    assert payload["component"] == "decoder"
    assert payload["kind"] == "map"
    assert payload["size"] == 12
    assert payload["depth"] == 2
    assert payload["duration_ms"] == 1.235

    exception_payload = json.loads(lines[-1])
    assert exception_payload["message"] == "broken"
    assert "exc_info" in exception_payload


def test_configure_logging_respects_level(capsys: CaptureFixture[str]) -> None:
    assert LOG_LEVELS == ("debug", "info", "warning", "error")
    assert LOG_FORMATS == ("text", "json")
    config = configure_logging("text", log_level="warning")
    assert config.format is LogFormat.TEXT
    assert config.level == logging.WARNING
    logger = logging.getLogger("jsonvariant")
    logger.info("ignored")
    logger.warning("recorded")
    captured = capsys.readouterr()
    combined = captured.out + captured.err
    assert "ignored" not in combined
    assert "[WARNING] jsonvariant: recorded" in combined


def test_configure_logging_honors_env_overrides(
    capsys: CaptureFixture[str],
    monkeypatch: MonkeyPatch,
) -> None:
    monkeypatch.setenv("JSONVARIANT_LOG_FORMAT", "json")
    monkeypatch.setenv("JSONVARIANT_LOG_LEVEL", "error")
    config = configure_logging()
    assert config.format is LogFormat.JSON
    assert config.level_name == "error"
    logger = logging.getLogger("jsonvariant")
    logger.warning("warned")
    logger.error("failed", extra=structured_extra(component=LogComponent.CONFIG))
    captured = capsys.readouterr()
    lines = [line for line in (captured.out + captured.err).splitlines() if line]
    assert json.loads(lines[-1])["message"] == "failed"
    assert json.loads(lines[-1])["component"] == "config"
    assert all("warned" not in line for line in lines)


def test_codec_emits_debug_records(capsys: CaptureFixture[str]) -> None:
    _ = configure_logging(LogFormat.JSON, log_level="debug")
    value = decode(b'{"items": [1, 2]}')
    _ = encode(value)
    captured = capsys.readouterr()
    records = [json.loads(line) for line in (captured.out + captured.err).splitlines() if line]
    by_component = {record["component"]: record for record in records}
    decoded = by_component["decoder"]
    assert decoded["logger"] == "jsonvariant.decoder"
    assert decoded["kind"] == "map"
    assert decoded["depth"] == 2
    assert decoded["size"] == len('{"items": [1, 2]}')
    encoded = by_component["encoder"]
    assert encoded["logger"] == "jsonvariant.encoder"
    assert encoded["size"] == len('{"items":[1,2]}')
    assert value == Map({"items": List([Int(1), Int(2)])})


def test_load_config_emits_debug_record(capsys: CaptureFixture[str]) -> None:
    _ = configure_logging(LogFormat.JSON, log_level="debug")
    _ = load_config({"JSONVARIANT_MAX_DEPTH": "32"})
    captured = capsys.readouterr()
    record = json.loads((captured.out + captured.err).splitlines()[-1])
    assert record["logger"] == "jsonvariant.config"
    assert record["component"] == "config"
    assert record["depth"] == 32
    assert record["details"] == {"overrides": ["max_depth"]}


def test_codec_is_silent_at_info(capsys: CaptureFixture[str]) -> None:
    _ = configure_logging("text", log_level="info")
    _ = encode(String("quiet"))
    captured = capsys.readouterr()
    assert captured.out + captured.err == ""


def test_structured_extra_normalises_inputs() -> None:
    extra = structured_extra(
        component=LogComponent.ENCODER,
        kind=" LIST ",
        size=10,
        duration_ms=0.0004,
        details={"model": "Response"},
    )
    assert "kind" in extra and extra["kind"] is ValueKind.LIST
    assert "duration_ms" in extra and extra["duration_ms"] == 0.0
    assert "details" in extra and extra["details"] == {"model": "Response"}
    assert "depth" not in extra


def test_structured_extra_drops_empty_details() -> None:
    extra = structured_extra(component=LogComponent.ENVELOPE, details={})
    assert extra == {"component": LogComponent.ENVELOPE}


@fixture(autouse=True)
def reset_jsonvariant_logging() -> Generator[None, None, None]:
    logger = logging.getLogger("jsonvariant")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    children = {name: logging.getLogger(name).level for name in CHILD_LOGGERS}
    env_log_format = os.environ.get("JSONVARIANT_LOG_FORMAT")
    env_log_level = os.environ.get("JSONVARIANT_LOG_LEVEL")
    yield
    logger.handlers.clear()
    logger.handlers.extend(handlers)
    logger.setLevel(level)
    logger.propagate = propagate
    for name, child_level in children.items():
        logging.getLogger(name).setLevel(child_level)
    if env_log_format is None:
        _ = os.environ.pop("JSONVARIANT_LOG_FORMAT", None)
    else:
        os.environ["JSONVARIANT_LOG_FORMAT"] = env_log_format
    if env_log_level is None:
        _ = os.environ.pop("JSONVARIANT_LOG_LEVEL", None)
    else:
        os.environ["JSONVARIANT_LOG_LEVEL"] = env_log_level
