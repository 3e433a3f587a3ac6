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

"""Handles through which objects are reached.

- :class:`Reference`: value returned by ``new``; calling it is an external
  dispatch (public methods and attributes only).
- :class:`SelfBinding`: the ``this`` handed to method bodies; calling it is an
  internal dispatch on the same object (private members reachable).
- :class:`ParentBinding`: ``this.parent``; runs the implementation declared by
  the parent of the class that declared the running method.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ooengine.core.context import Frame
    from ooengine.runtime import Runtime


class Reference:
    """Callable (class name, identity) pair."""

    __slots__ = ("_runtime", "class_name", "identity")

    def __init__(self, runtime: Runtime, class_name: str, identity: str) -> None:
        self._runtime = runtime
        self.class_name = class_name
        self.identity = identity

    def __call__(self, method: str, *args: Any) -> Any:
        return self._runtime.dispatcher.call(
            self.class_name, self.identity, method, *args
        )

    def __getitem__(self, name: str) -> Any:
        return self("get", name)

    def __setitem__(self, name: str, value: Any) -> None:
        self("set", name, value)

    def bind(self, method: str) -> Callable[..., Any]:
        """Callable that dispatches ``method`` on this object (e.g. as a handler)."""

        def bound(*args: Any) -> Any:
            return self(method, *args)

        bound.__name__ = f"{self.class_name}.{method}"
        return bound

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reference):
            return NotImplemented
        return self.identity == other.identity and self._runtime is other._runtime

    def __hash__(self) -> int:
        return hash(self.identity)

    def __str__(self) -> str:
        text = self("toString")
        return "" if text is None else str(text)

    def __repr__(self) -> str:
        return f"Reference({self.class_name!r}, {self.identity!r})"


class SelfBinding:
    """``this`` inside a method body."""

    __slots__ = ("_frame", "_runtime")

    def __init__(self, runtime: Runtime, frame: Frame) -> None:
        self._runtime = runtime
        self._frame = frame

    def __call__(self, method: str, *args: Any) -> Any:
        return self._runtime.dispatcher.inner_call(self._frame, method, *args)

    def get(self, name: str) -> Any:
        return self("get", name)

    def set(self, name: str, value: Any) -> Any:
        return self("set", name, value)

    @property
    def parent(self) -> ParentBinding:
        return ParentBinding(self._runtime, self._frame)

    @property
    def ref(self) -> Reference:
        return Reference(self._runtime, self._frame.object_class, self._frame.identity)

    @property
    def identity(self) -> str:
        return self._frame.identity

    @property
    def class_name(self) -> str:
        return self._frame.object_class

    @property
    def frame(self) -> Frame:
        return self._frame

    @property
    def runtime(self) -> Runtime:
        return self._runtime

    def __repr__(self) -> str:
        return f"SelfBinding({self._frame.describe()})"


class ParentBinding:
    """``this.parent`` inside a method body."""

    __slots__ = ("_frame", "_runtime")

    def __init__(self, runtime: Runtime, frame: Frame) -> None:
        self._runtime = runtime
        self._frame = frame

    def __call__(self, method: str, *args: Any) -> Any:
        return self._runtime.dispatcher.parent_call(self._frame, method, *args)

    def get(self, name: str) -> Any:
        return self("get", name)

    def set(self, name: str, value: Any) -> Any:
        return self("set", name, value)

    @property
    def class_name(self) -> str | None:
        return self._frame.base
