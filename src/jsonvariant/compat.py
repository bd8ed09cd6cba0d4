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

"""Compatibility re-exports for typing and enum helpers.

Modules that need version-tolerant typing constructs import them from here
instead of branching on the interpreter version themselves.

Re-exported symbols:

- StrEnum: stdlib string-valued enum base class
- Typing helpers: TypedDict, Unpack, assert_never, override

Notes:
    - ``override`` only exists in :mod:`typing` from Python 3.12; older
      interpreters use the ``typing_extensions`` backport.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing_extensions import TypedDict, Unpack, assert_never, override
else:
    try:
        from typing import override  # py>=3.12
    except ImportError:
        from typing_extensions import override

    from typing import TypedDict, Unpack, assert_never

__all__ = [
    "StrEnum",
    "TypedDict",
    "Unpack",
    "assert_never",
    "override",
]
