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

"""Resolver: builds class tables from declarations.

Resolution of ``name`` runs, in order:

1. the parent chain (explicit parent, an override base, or the implicit
   root class ``Object``), recursively, base first;
2. the body of ``name`` itself, where later method declarations overwrite
   earlier ones and ``body.use(trait)`` mixes traits in place;
3. for classes, the bodies of every decorator targeting ``name``, in
   registration order.

Class tables are cached per class name and rebuilt when the registry changes.
"""

from __future__ import annotations

import logging

from ooengine.core.declaration import ClassBody, ClassTable, Kind
from ooengine.core.errors import IllegalArgumentError
from ooengine.core.registry import Registry

logger = logging.getLogger(__name__)

ROOT_CLASS = "Object"


class Resolver:
    def __init__(self, registry: Registry) -> None:
        self._registry = registry
        self._cache: dict[str, ClassTable] = {}
        self._cache_version = registry.version
        self._active: list[tuple[Kind, str]] = []

    def resolve_class(self, name: str) -> ClassTable:
        """Resolve a class, reusing the cached table when declarations are unchanged."""
        if self._cache_version != self._registry.version:
            self._cache.clear()
            self._cache_version = self._registry.version

        table = self._cache.get(name)
        if table is None:
            table = self.resolve(Kind.CLASS, name)
            self._cache[name] = table
        return table

    def resolve(self, kind: Kind, name: str, base: str | None = None) -> ClassTable:
        """Build a fresh table for ``name``.

        Args:
            kind: ``Kind.CLASS`` or ``Kind.TRAIT``.
            name: Declaration to resolve.
            base: Overrides the declared parent of ``name``.

        Raises:
            UndefinedClassError: If ``name`` or any ancestor is not declared.
            IllegalArgumentError: If the inheritance chain is cyclic.
        """
        if kind is Kind.DECORATOR:
            raise ValueError("Decorators are resolved through their target class")
        table = ClassTable(name)
        self.apply(kind, name, table, base=base, owner=name)
        logger.debug("Resolved %s '%s': chain=%s", kind.value, name, table.chain)
        return table

    def apply(
        self,
        kind: Kind,
        name: str,
        table: ClassTable,
        *,
        owner: str,
        base: str | None = None,
    ) -> None:
        """Run the declarations of ``name`` (parent first) into ``table``."""
        decl = self._registry.lookup(kind, name)

        if (kind, name) in self._active:
            cycle = " -> ".join(n for _, n in self._active) + f" -> {name}"
            raise IllegalArgumentError(f"Cyclic {kind.value} chain: {cycle}")

        parent = base or decl.parent
        if parent is None and kind is Kind.CLASS and name != ROOT_CLASS:
            parent = ROOT_CLASS

        # Traits install under the including class, classes own their methods.
        if kind is Kind.CLASS:
            owner = name
            table.parents[name] = parent

        self._active.append((kind, name))
        try:
            if parent is not None:
                self.apply(kind, parent, table, owner=owner)

            table.chain.append(name)
            decl.body(ClassBody(table, owner, self))

            # Decorators target classes; a trait sharing the name is not decorated.
            if kind is Kind.CLASS:
                for deco in self._registry.decorators_for(name):
                    table.chain.append(deco.name)
                    deco.body(ClassBody(table, owner, self))
        finally:
            self._active.pop()
