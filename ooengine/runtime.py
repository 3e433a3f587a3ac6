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

"""Runtime: one self-contained object world.

A Runtime owns every piece of shared state (declarations, attribute records,
the frame stack, the handler stack) and is the handle scripts work through:

    >>> rt = Runtime()
    >>> @rt.declare_class("Counter")
    ... def counter(body):
    ...     body.private("n", "0")
    ...
    ...     @body.method
    ...     def increment(this):
    ...         this.set("n", int(this.get("n")) + 1)
    ...
    ...     @body.method
    ...     def value(this):
    ...         return this.get("n")
    >>> c = rt.new("Counter")
    >>> c("increment")
    >>> c("value")
    '1'
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TextIO

from ooengine.core import builtins
from ooengine.core.context import ContextStack
from ooengine.core.declaration import Body, Declaration, Kind
from ooengine.core.dispatcher import Dispatcher
from ooengine.core.errors import Abort, OOError
from ooengine.core.exceptions import ExceptionSubsystem, Handler
from ooengine.core.lifecycle import Lifecycle
from ooengine.core.reference import Reference
from ooengine.core.registry import Registry
from ooengine.core.resolver import Resolver
from ooengine.core.store import AttributeStore
from ooengine.library import LibraryLoader

if TYPE_CHECKING:
    from ooengine.config import RuntimeConfig

logger = logging.getLogger(__name__)


class Runtime:
    """Object runtime.

    Attributes:
        registry: Class, trait and decorator declarations.
        resolver: Builds and caches class tables.
        store: Per-object attribute records.
        stack: Active frames.
        dispatcher: External, self and parent dispatch.
        lifecycle: new / construct / destruct / clone.
        exceptions: throw / catch and the failure hook.
        libraries: Library search path and loader.
        stderr: Diagnostic stream used by the default exception handler.
    """

    def __init__(
        self,
        *,
        library_path: list[str] | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.registry = Registry()
        self.resolver = Resolver(self.registry)
        self.store = AttributeStore()
        self.stack = ContextStack()
        self.dispatcher = Dispatcher(self)
        self.lifecycle = Lifecycle(self)
        self.exceptions = ExceptionSubsystem(self)
        self.libraries = LibraryLoader(self, library_path or [])
        self._stderr = stderr
        builtins.install(self)

    @classmethod
    def from_config(cls, config: RuntimeConfig, **kwargs: Any) -> Runtime:
        return cls(library_path=list(config.library_path), **kwargs)

    @property
    def stderr(self) -> TextIO:
        # Resolved lazily so pytest's capsys and redirect_stderr apply
        return self._stderr if self._stderr is not None else sys.stderr

    # =========================================================================
    # Declarations
    # =========================================================================

    def declare_class(
        self, name: str, extends: str | None = None
    ) -> Callable[[Body], Body]:
        """Decorator registering a class body, optionally with a parent class."""
        return self._declare(Kind.CLASS, name, parent=extends)

    def declare_trait(
        self, name: str, extends: str | None = None
    ) -> Callable[[Body], Body]:
        return self._declare(Kind.TRAIT, name, parent=extends)

    def declare_decorator(self, name: str, decorates: str) -> Callable[[Body], Body]:
        """Decorator registering a body applied after ``decorates`` resolves."""
        return self._declare(Kind.DECORATOR, name, target=decorates)

    def _declare(
        self,
        kind: Kind,
        name: str,
        *,
        parent: str | None = None,
        target: str | None = None,
    ) -> Callable[[Body], Body]:
        if not isinstance(name, str) or not name:
            raise ValueError(f"{kind.value} name must be a non-empty string")

        def register(body: Body) -> Body:
            if not callable(body):
                raise TypeError(f"Body of {kind.value} '{name}' must be callable")
            self.registry.register(
                Declaration(kind, name, body, parent=parent, target=target)
            )
            return body

        return register

    # =========================================================================
    # Objects
    # =========================================================================

    def new(self, class_name: str, *args: Any) -> Reference:
        """Create an object; ``args`` are passed to its ``construct`` method."""
        return self.lifecycle.new(class_name, *args)

    # =========================================================================
    # Exceptions
    # =========================================================================

    def throw(self, class_name: str, message: Any = "") -> None:
        return self.exceptions.throw(class_name, message)

    def try_(self, block: Callable[[], Any]) -> None:
        self.exceptions.try_(block)

    def catch(self, class_name: str, handler: Handler) -> Any:
        return self.exceptions.catch(class_name, handler)

    def handling(self, class_name: str, handler: Handler) -> Any:
        return self.exceptions.handling(class_name, handler)

    # =========================================================================
    # Libraries
    # =========================================================================

    def import_library(self, name: str) -> bool:
        """Load ``vendor/name`` from the search path once.

        Returns:
            True if the library was executed by this call.
        """
        try:
            return self.libraries.load(name)
        except OOError as err:
            self.exceptions.violation(err)
            return False

    # =========================================================================
    # Top-level error boundary
    # =========================================================================

    @contextmanager
    def boundary(self, instruction: str = "<top level>") -> Iterator[None]:
        """Turn any failure inside the block into a runtime exception.

        Kernel violations are thrown as their runtime exception; any other
        error becomes a ``ShellErrorException`` followed by an abort.
        """
        try:
            yield
        except OOError as err:
            self.exceptions.violation(err)
        except Exception as err:
            self.exceptions.fail(err, instruction)

    def run(self, fn: Callable[..., Any], *args: Any) -> int:
        """Run ``fn`` inside the error boundary and return an exit status."""
        try:
            with self.boundary(getattr(fn, "__name__", repr(fn))):
                fn(*args)
        except Abort as abort:
            logger.info("Aborted with status %d: %s", abort.status, abort.reason)
            return abort.status
        return 0
