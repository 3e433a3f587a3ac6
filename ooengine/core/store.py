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

"""AttributeStore: per-object attribute records with visibility checks."""

from __future__ import annotations

import logging
from typing import Any

from ooengine.core.declaration import AttributeDescriptor, Visibility
from ooengine.core.errors import UndefinedAttributeError
from ooengine.core.value import UNSET, AttrValue, to_value

logger = logging.getLogger(__name__)

CellKey = tuple[str, Visibility]


class AttributeRecord:
    """Attribute cells of a single object, keyed by (name, visibility)."""

    def __init__(self) -> None:
        self.cells: dict[CellKey, AttrValue] = {}
        self.constructed = False

    def find(self, name: str, internal: bool) -> CellKey | None:
        if (name, Visibility.PUBLIC) in self.cells:
            return (name, Visibility.PUBLIC)
        if internal and (name, Visibility.PRIVATE) in self.cells:
            return (name, Visibility.PRIVATE)
        return None


class AttributeStore:
    """Owns the attribute record of every live object identity."""

    def __init__(self) -> None:
        self._records: dict[str, AttributeRecord] = {}

    def record(self, identity: str) -> AttributeRecord:
        """Get the record for ``identity``, creating an empty one if needed."""
        rec = self._records.get(identity)
        if rec is None:
            rec = AttributeRecord()
            self._records[identity] = rec
        return rec

    def exists(self, identity: str) -> bool:
        return identity in self._records

    def declare(self, identity: str, descriptor: AttributeDescriptor) -> bool:
        """Create the cell for ``descriptor`` unless it already exists.

        Returns:
            True if a new cell was created.
        """
        rec = self.record(identity)
        key = (descriptor.name, descriptor.visibility)
        if key in rec.cells:
            return False

        default = descriptor.default
        if callable(default):
            default = to_value(default())
        rec.cells[key] = default
        return True

    def read(self, identity: str, name: str, internal: bool) -> AttrValue:
        """Read the raw stored value (``UNSET`` included)."""
        rec = self._records.get(identity)
        key = rec.find(name, internal) if rec is not None else None
        if key is None:
            raise UndefinedAttributeError(f"Undefined attribute '{name}'")
        return rec.cells[key]

    def write(self, identity: str, name: str, value: Any, internal: bool) -> None:
        rec = self._records.get(identity)
        key = rec.find(name, internal) if rec is not None else None
        if key is None:
            raise UndefinedAttributeError(f"Undefined attribute '{name}'")
        rec.cells[key] = to_value(value)

    def cells(self, identity: str) -> dict[CellKey, AttrValue]:
        rec = self._records.get(identity)
        return dict(rec.cells) if rec is not None else {}

    def drop(self, identity: str) -> int:
        """Remove every cell of ``identity``; returns how many were removed."""
        rec = self._records.pop(identity, None)
        count = len(rec.cells) if rec is not None else 0
        logger.debug("Dropped %d cells of %s", count, identity)
        return count

    def copy(self, source: str, target: str) -> int:
        """Copy every cell of ``source`` onto ``target`` (overwriting)."""
        src = self._records.get(source)
        dst = self.record(target)
        if src is None:
            return 0
        dst.cells.update(src.cells)
        return len(src.cells)

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["UNSET", "AttributeRecord", "AttributeStore", "CellKey"]
