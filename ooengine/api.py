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

"""Module-level API bound to a default runtime.

Scripts that do not want to carry a :class:`Runtime` around can use these
functions; they all act on the runtime returned by
:func:`get_default_runtime` (created on first use, replaced with
:func:`set_default_runtime`, which the CLI does before running a script).

    >>> import ooengine as oo
    >>> @oo.declare_class("Greeter")
    ... def greeter(body):
    ...     @body.method
    ...     def hello(this, who):
    ...         return f"hello {who}"
    >>> oo.new("Greeter")("hello", "world")
    'hello world'
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ooengine.core.declaration import Body
from ooengine.core.exceptions import Handler
from ooengine.core.reference import Reference
from ooengine.runtime import Runtime

_default_runtime: Runtime | None = None


def get_default_runtime() -> Runtime:
    global _default_runtime
    if _default_runtime is None:
        _default_runtime = Runtime()
    return _default_runtime


def set_default_runtime(runtime: Runtime | None) -> Runtime | None:
    """Install ``runtime`` as the default; returns the previous one.

    Passing None drops the default so the next call creates a fresh runtime.
    """
    global _default_runtime
    previous, _default_runtime = _default_runtime, runtime
    return previous


def declare_class(name: str, extends: str | None = None) -> Callable[[Body], Body]:
    return get_default_runtime().declare_class(name, extends=extends)


def declare_trait(name: str, extends: str | None = None) -> Callable[[Body], Body]:
    return get_default_runtime().declare_trait(name, extends=extends)


def declare_decorator(name: str, decorates: str) -> Callable[[Body], Body]:
    return get_default_runtime().declare_decorator(name, decorates=decorates)


def new(class_name: str, *args: Any) -> Reference:
    return get_default_runtime().new(class_name, *args)


def throw(class_name: str, message: Any = "") -> None:
    return get_default_runtime().throw(class_name, message)


def try_(block: Callable[[], Any]) -> None:
    get_default_runtime().try_(block)


def catch(class_name: str, handler: Handler) -> Any:
    return get_default_runtime().catch(class_name, handler)


def handling(class_name: str, handler: Handler) -> Any:
    return get_default_runtime().handling(class_name, handler)


def import_library(name: str) -> bool:
    return get_default_runtime().import_library(name)


def add_library_path(path: str) -> None:
    get_default_runtime().libraries.add(path)


__all__ = [
    "add_library_path",
    "catch",
    "declare_class",
    "declare_decorator",
    "declare_trait",
    "get_default_runtime",
    "handling",
    "import_library",
    "new",
    "set_default_runtime",
    "throw",
    "try_",
]
