# Copyright 2025 Ant Group Co., Ltd.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Attribute values: text, or the explicit unset marker.

Attribute storage is textual. A cell that was declared without a default and
never assigned holds ``UNSET``, which is distinct from the empty string.
"""

from __future__ import annotations

from typing import Any, Final


class Unset:
    """Singleton marking a declared but never assigned attribute."""

    _instance: Unset | None = None

    def __new__(cls) -> Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = Unset()

AttrValue = str | Unset


def to_value(value: Any) -> AttrValue:
    """Coerce a Python value into attribute storage form."""
    if value is UNSET:
        return UNSET
    if value is None:
        return ""
    return str(value)


def to_text(value: AttrValue) -> str:
    """Render a stored value for callers; ``UNSET`` reads as ``""``."""
    return "" if value is UNSET else value


__all__ = ["UNSET", "AttrValue", "Unset", "to_text", "to_value"]
