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

"""Class libraries: ``vendor/name`` files found on a search path.

A library is a Python file declaring classes against the runtime it is loaded
into (available to it as the global ``runtime``). ``vendor/name`` resolves to
``<root>/vendor/name.py`` under the first search root that has it; each
library runs at most once per runtime.
"""

from __future__ import annotations

import logging
import runpy
from pathlib import Path
from typing import TYPE_CHECKING

from ooengine.core.errors import UnknownLibraryError

if TYPE_CHECKING:
    from ooengine.runtime import Runtime

logger = logging.getLogger(__name__)


class LibraryLoader:
    def __init__(self, runtime: Runtime, search_path: list[str] | list[Path]) -> None:
        self._rt = runtime
        self.search_path: list[Path] = [Path(p) for p in search_path]
        self._loaded: dict[str, Path] = {}

    def add(self, path: str | Path) -> None:
        """Prepend a search root."""
        self.search_path.insert(0, Path(path))

    def find(self, name: str) -> Path:
        parts = name.split("/") if isinstance(name, str) else []
        if len(parts) != 2 or not all(parts):
            raise UnknownLibraryError(
                f"Library name must look like 'vendor/name', got {name!r}"
            )
        vendor, lib = parts
        for root in self.search_path:
            candidate = root / vendor / f"{lib}.py"
            if candidate.is_file():
                return candidate
        searched = ", ".join(str(p) for p in self.search_path) or "<empty>"
        raise UnknownLibraryError(f"Unknown library '{name}' (searched: {searched})")

    def is_loaded(self, name: str) -> bool:
        return name in self._loaded

    def load(self, name: str) -> bool:
        if name in self._loaded:
            return False
        path = self.find(name)
        # Marked before running so libraries importing each other terminate.
        self._loaded[name] = path
        logger.info("Loading library %s from %s", name, path)
        runpy.run_path(
            str(path),
            init_globals={"runtime": self._rt},
            run_name=f"ooengine_lib.{name.replace('/', '.')}",
        )
        return True
