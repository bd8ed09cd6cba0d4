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

"""Fixtures for multi-component integration tests."""

from __future__ import annotations

import pytest


@pytest.fixture
def echo_params() -> bytes:
    """Provide a request payload mixing every value kind.

    Returns:
        UTF-8 JSON text for an echo request envelope.
    """
    return (
        b'{"request_id":"req-42","channel_id":"control","method":"echo",'
        b'"params":{"text":"h\\u00e9llo","count":3,"ratio":3.0,"tiny":5e-324,'
        b'"big":9223372036854775807,"flags":[true,false,null],"nested":{"empty":{},"list":[]}}}'
    )
