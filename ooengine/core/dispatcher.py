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

"""Dispatcher: the three ways into a method.

- ``call``: external entry through a :class:`Reference`. Only public methods
  are found and attribute access is unprivileged.
- ``inner_call``: ``this(method, ...)``. Same object and class table, public
  then private lookup, privileged attribute access.
- ``parent_call``: ``this.parent(method, ...)``. Runs against the table of the
  parent of the class that declared the running method, so private ancestor
  methods stay reachable, and attribute access is privileged. An accessor
  override (``get``/``set``) reached from outside that delegates to the
  inherited accessor keeps the caller's privilege, so private attributes
  stay private to external readers.

Each dispatch pushes its own frame and pops it on every exit path. Kernel
violations surfacing inside a dispatch are thrown as runtime exceptions by
that dispatch; any other Python error goes to the failure hook.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ooengine.core.context import Frame
from ooengine.core.declaration import ClassTable
from ooengine.core.errors import OOError, UndefinedMethodError
from ooengine.core.reference import SelfBinding

if TYPE_CHECKING:
    from ooengine.runtime import Runtime

logger = logging.getLogger(__name__)

ACCESSORS = frozenset({"get", "set"})


class Dispatcher:
    def __init__(self, runtime: Runtime) -> None:
        self._rt = runtime

    def call(self, class_name: str, identity: str, method: str, *args: Any) -> Any:
        """External dispatch (via a reference)."""
        return self._dispatch(
            class_name,
            class_name,
            identity,
            method,
            args,
            internal=False,
            privileged=False,
        )

    def inner_call(self, frame: Frame, method: str, *args: Any) -> Any:
        """Dispatch on the object of ``frame`` through the self binding."""
        return self._dispatch(
            frame.class_name,
            frame.object_class,
            frame.identity,
            method,
            args,
            internal=True,
            privileged=True,
            table=frame.table,
        )

    def parent_call(self, frame: Frame, method: str, *args: Any) -> Any:
        """Dispatch ``method`` as implemented by the parent of ``frame.owner``."""
        accessor_chain = frame.method in ACCESSORS and method in ACCESSORS
        return self._dispatch(
            frame.base,
            frame.object_class,
            frame.identity,
            method,
            args,
            internal=True,
            privileged=frame.privileged or not accessor_chain,
            caller=frame.owner,
        )

    def enter(
        self,
        class_name: str,
        identity: str,
        method: str,
        *,
        object_class: str | None = None,
        internal: bool = False,
        privileged: bool = False,
    ) -> Frame:
        """Resolve ``class_name`` and push a frame for ``identity``."""
        table = self._rt.resolver.resolve_class(class_name)
        frame = self._make_frame(
            table, object_class or class_name, identity, method, internal, privileged
        )
        self._rt.stack.push(frame)
        return frame

    def leave(self) -> Frame | None:
        return self._rt.stack.pop()

    def _make_frame(
        self,
        table: ClassTable,
        object_class: str,
        identity: str,
        method: str,
        internal: bool,
        privileged: bool,
    ) -> Frame:
        entry = table.lookup(method, internal)
        return Frame(
            class_name=table.name,
            object_class=object_class,
            table=table,
            identity=identity,
            method=method,
            internal=internal,
            privileged=privileged,
            owner=entry.owner if entry is not None else table.name,
        )

    def _dispatch(
        self,
        class_name: str | None,
        object_class: str,
        identity: str,
        method: str,
        args: tuple[Any, ...],
        *,
        internal: bool,
        privileged: bool,
        table: ClassTable | None = None,
        caller: str | None = None,
    ) -> Any:
        stack = self._rt.stack
        depth = stack.depth
        logger.debug(
            "Dispatch %s.%s on %s (internal=%s)", class_name, method, identity, internal
        )
        try:
            if class_name is None:
                raise UndefinedMethodError(
                    f"'{caller}' has no parent class to run '{method}'"
                )
            if table is None:
                table = self._rt.resolver.resolve_class(class_name)

            frame = self._make_frame(
                table, object_class, identity, method, internal, privileged
            )
            stack.push(frame)
            self._rt.lifecycle.ensure_constructed(frame)

            entry = table.lookup(method, internal)
            if entry is None:
                raise UndefinedMethodError(
                    f"Undefined method '{method}' in class '{table.name}'"
                )
            return entry.fn(SelfBinding(self._rt, frame), *args)
        except OOError as err:
            return self._rt.exceptions.violation(err)
        except Exception as err:
            self._rt.exceptions.fail(err, f"{object_class}.{method}")
        finally:
            while stack.depth > depth:
                stack.pop()
