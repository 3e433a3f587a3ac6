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

"""Declarations: classes, traits, decorators and what their bodies declare.

A declaration only records *where* a body lives. Bodies are plain functions
taking a :class:`ClassBody`; the resolver runs them (parent first) to build
a :class:`ClassTable`:

    >>> @runtime.declare_class("Counter")
    ... def counter(body):
    ...     body.private("n", "0")
    ...
    ...     @body.method
    ...     def increment(this):
    ...         this.set("n", int(this.get("n")) + 1)
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ooengine.core.value import UNSET, AttrValue

if TYPE_CHECKING:
    from ooengine.core.resolver import Resolver


class Visibility(enum.Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class Kind(enum.Enum):
    CLASS = "class"
    TRAIT = "trait"
    DECORATOR = "decorator"


Body = Callable[["ClassBody"], Any]


@dataclass(frozen=True)
class AttributeDescriptor:
    """(name, visibility, default) as declared by a body.

    ``default`` is text, ``UNSET`` or a zero-argument callable evaluated when
    the attribute cell is created for an object.
    """

    name: str
    visibility: Visibility
    default: AttrValue | Callable[[], Any] = UNSET


@dataclass(frozen=True)
class MethodEntry:
    name: str
    fn: Callable[..., Any]
    visibility: Visibility
    owner: str


@dataclass(frozen=True)
class Declaration:
    """A registered class, trait or decorator body."""

    kind: Kind
    name: str
    body: Body
    parent: str | None = None
    target: str | None = None


@dataclass
class ClassTable:
    """Resolved view of a class: descriptors and methods, built once.

    Attributes:
        name: Class the table was resolved for.
        chain: Resolved declarations, base first (traits and decorators
            included where they were applied).
        descriptors: Every attribute declaration in execution order.
        methods: Method table, later declarations overwrite earlier ones.
        parents: Declaring class -> its parent, used by the parent binding.
    """

    name: str
    chain: list[str] = field(default_factory=list)
    descriptors: list[AttributeDescriptor] = field(default_factory=list)
    methods: dict[str, MethodEntry] = field(default_factory=dict)
    parents: dict[str, str | None] = field(default_factory=dict)

    @property
    def parent(self) -> str | None:
        return self.parents.get(self.name)

    def lookup(self, method: str, internal: bool) -> MethodEntry | None:
        entry = self.methods.get(method)
        if entry is None:
            return None
        if entry.visibility is Visibility.PRIVATE and not internal:
            return None
        return entry

    def derives_from(self, name: str) -> bool:
        return name in self.chain


class ClassBody:
    """Declaration surface handed to class, trait and decorator bodies."""

    def __init__(self, table: ClassTable, owner: str, resolver: Resolver) -> None:
        self._table = table
        self._owner = owner
        self._resolver = resolver

    @property
    def name(self) -> str:
        """Class whose table is being built."""
        return self._table.name

    def public(self, name: str, default: Any = UNSET) -> None:
        self._declare(name, Visibility.PUBLIC, default)

    def private(self, name: str, default: Any = UNSET) -> None:
        self._declare(name, Visibility.PRIVATE, default)

    def _declare(self, name: str, visibility: Visibility, default: Any) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError(f"Attribute name must be a non-empty string, got {name!r}")
        if default is not UNSET and not callable(default):
            default = "" if default is None else str(default)
        self._table.descriptors.append(AttributeDescriptor(name, visibility, default))

    def method(
        self,
        fn: Callable[..., Any] | None = None,
        *,
        name: str | None = None,
        private: bool = False,
    ) -> Any:
        """Declare a method; usable as ``@body.method`` or ``@body.method(private=True)``."""
        visibility = Visibility.PRIVATE if private else Visibility.PUBLIC

        def register(f: Callable[..., Any]) -> Callable[..., Any]:
            method_name = name or f.__name__
            self._table.methods[method_name] = MethodEntry(
                method_name, f, visibility, self._owner
            )
            return f

        if fn is not None:
            return register(fn)
        return register

    def private_method(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        return self.method(fn, private=True)

    def use(self, trait: str) -> None:
        """Mix a trait's declarations into the class at this point of the body."""
        self._resolver.apply(Kind.TRAIT, trait, self._table, owner=self._owner)


__all__ = [
    "AttributeDescriptor",
    "Body",
    "ClassBody",
    "ClassTable",
    "Declaration",
    "Kind",
    "MethodEntry",
    "Visibility",
]
