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

"""Registry for class, trait and decorator declarations.

Declarations are registered here when a script declares them; the resolver
looks them up by name. Every registration bumps ``version`` so cached class
tables built from older declarations can be discarded.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from ooengine.core.declaration import Declaration, Kind
from ooengine.core.errors import UndefinedClassError

logger = logging.getLogger(__name__)


class Registry:
    """Name -> declaration lookup, one namespace per kind."""

    def __init__(self) -> None:
        self._decls: dict[Kind, dict[str, Declaration]] = {
            Kind.CLASS: {},
            Kind.TRAIT: {},
            Kind.DECORATOR: {},
        }
        self._decorators: dict[str, list[str]] = defaultdict(list)
        self.version = 0

    def register(self, decl: Declaration) -> Declaration:
        if decl.kind is Kind.DECORATOR:
            if not decl.target:
                raise ValueError(f"Decorator '{decl.name}' must name a target class")
            previous = self._decls[Kind.DECORATOR].get(decl.name)
            if previous is not None and previous.target:
                self._decorators[previous.target].remove(decl.name)
            self._decorators[decl.target].append(decl.name)

        self._decls[decl.kind][decl.name] = decl
        self.version += 1
        logger.debug(
            "Registered %s '%s' (parent=%s, target=%s)",
            decl.kind.value,
            decl.name,
            decl.parent,
            decl.target,
        )
        return decl

    def lookup(self, kind: Kind, name: str) -> Declaration:
        decl = self._decls[kind].get(name)
        if decl is None:
            raise UndefinedClassError(f"Undefined {kind.value} '{name}'")
        return decl

    def contains(self, kind: Kind, name: str) -> bool:
        return name in self._decls[kind]

    def decorators_for(self, target: str) -> list[Declaration]:
        return [self._decls[Kind.DECORATOR][n] for n in self._decorators.get(target, [])]

    def declarations(self, kind: Kind | None = None) -> list[Declaration]:
        kinds = [kind] if kind is not None else list(Kind)
        return [d for k in kinds for d in self._decls[k].values()]
