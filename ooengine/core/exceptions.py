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

"""Runtime exceptions: throw, catch and the failure hook.

Exceptions are ordinary objects of classes deriving from ``Exception``.
``throw`` builds one, then calls the handler registered for that exact class
name (no hierarchy matching) or the default handler. Handlers run as plain
forward calls: when a handler returns, ``throw`` returns and execution goes on
after it.

Handlers are scoped: ``catch`` and ``handling`` push a handler for one class
and pop it again on every exit path.

    >>> runtime.try_(lambda: runtime.throw("Foo", "boom"))
    >>> runtime.catch("Foo", lambda exc: print(exc))
    Foo: boom
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from ooengine.core.errors import Abort, OOError

if TYPE_CHECKING:
    from ooengine.core.reference import Reference
    from ooengine.runtime import Runtime

logger = logging.getLogger(__name__)

Handler = Callable[["Reference"], Any]

ROOT_EXCEPTION = "Exception"
SHELL_ERROR = "ShellErrorException"


class HandlerStack:
    """Per exception class name, a stack of active handlers."""

    def __init__(self) -> None:
        self._stacks: dict[str, list[Handler]] = defaultdict(list)

    def push(self, class_name: str, handler: Handler) -> None:
        if not callable(handler):
            raise TypeError(f"Handler for '{class_name}' must be callable, got {handler!r}")
        self._stacks[class_name].append(handler)

    def pop(self, class_name: str) -> Handler | None:
        stack = self._stacks.get(class_name)
        if not stack:
            return None
        handler = stack.pop()
        if not stack:
            del self._stacks[class_name]
        return handler

    def current(self, class_name: str) -> Handler | None:
        stack = self._stacks.get(class_name)
        return stack[-1] if stack else None

    @contextmanager
    def scoped(self, class_name: str, handler: Handler) -> Iterator[None]:
        self.push(class_name, handler)
        try:
            yield
        finally:
            self.pop(class_name)


class ExceptionSubsystem:
    def __init__(self, runtime: Runtime) -> None:
        self._rt = runtime
        self.handlers = HandlerStack()
        self._try_block: Callable[[], Any] | None = None

    # =========================================================================
    # try / catch
    # =========================================================================

    def try_(self, block: Callable[[], Any]) -> None:
        """Declare the deferred block guarded by the next ``catch``."""
        if not callable(block):
            raise TypeError(f"Try block must be callable, got {block!r}")
        self._try_block = block

    def catch(self, class_name: str, handler: Handler) -> Any:
        """Run the pending try block with ``handler`` active for ``class_name``."""
        block, self._try_block = self._try_block, None
        if block is None:
            return self.throw(
                "IllegalArgumentException",
                f"catch '{class_name}' without a preceding try block",
            )
        with self.handlers.scoped(class_name, handler):
            return block()

    def handling(self, class_name: str, handler: Handler) -> Any:
        """``with`` form of ``catch``."""
        return self.handlers.scoped(class_name, handler)

    # =========================================================================
    # throw
    # =========================================================================

    def throw(self, class_name: str, message: Any = "") -> None:
        """Construct an exception object and hand it to the active handler."""
        try:
            table = self._rt.resolver.resolve_class(class_name)
        except OOError as err:
            if err.exception_class == class_name:
                raise
            return self.throw(err.exception_class, str(err))

        if not table.derives_from(ROOT_EXCEPTION):
            return self.throw(
                "IllegalArgumentException",
                f"'{class_name}' does not derive from {ROOT_EXCEPTION}",
            )

        trace = "\n".join(self._rt.stack.snapshot())
        text = "" if message is None else str(message)
        exc = self._rt.new(class_name, text, trace)
        self._construct(exc, message=text, stack=trace)

        handler = self.handlers.current(class_name)
        if handler is None:
            handler = self.default_handler
        logger.debug("Throw %s: %s -> %r", class_name, message, handler)
        handler(exc)
        return None

    def _construct(self, exc: Reference, **fields: str) -> None:
        """Construct ``exc`` now and fill the fields its constructor left empty.

        A ``construct`` override that does not delegate to the parent still
        yields an exception carrying its message and stack.
        """
        dispatcher = self._rt.dispatcher
        frame = dispatcher.enter(
            exc.class_name, exc.identity, "construct", internal=True, privileged=True
        )
        try:
            self._rt.lifecycle.ensure_constructed(frame)
        finally:
            dispatcher.leave()

        store = self._rt.store
        if not store.exists(exc.identity):
            return
        for name, value in fields.items():
            if not store.read(exc.identity, name, internal=True):
                store.write(exc.identity, name, value, internal=True)

    def violation(self, err: OOError) -> None:
        """Throw the runtime exception matching a kernel violation."""
        return self.throw(err.exception_class, str(err))

    def default_handler(self, exc: Reference) -> None:
        """Print the exception and its stack, then abort."""
        rendered = str(exc)
        lines = [rendered]
        trace = exc("get", "stack") or ""
        lines.extend(f"    at {entry}" for entry in trace.splitlines())
        print("\n".join(lines), file=self._rt.stderr)
        logger.warning("Uncaught %s", rendered)
        raise Abort(1, rendered)

    # =========================================================================
    # failure hook
    # =========================================================================

    def fail(self, err: BaseException, instruction: str) -> None:
        """Convert an unexpected Python error into ``ShellErrorException`` and abort."""
        text = f"{instruction}: {type(err).__name__}: {err}"
        logger.error("Failing instruction %s", text, exc_info=err)
        self.throw(SHELL_ERROR, text)
        raise Abort(1, text) from err
