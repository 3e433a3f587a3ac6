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

"""Context: the stack of active object frames.

Every dispatch pushes a :class:`Frame` describing which object is "self",
which class table serves it and whether the call arrived through the self or
parent binding (internal access). The top of the stack is the current frame;
everything below it is suspended and resumes when the frame is popped.

Frames are scoped with ``with stack.entered(frame):`` so the stack is
restored on every exit path, including exceptions:

    >>> with stack.entered(frame):
    ...     assert stack.current is frame
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from ooengine.core.declaration import ClassTable


@dataclass(frozen=True)
class Frame:
    """One active object context.

    Attributes:
        class_name: Class whose table serves this frame (an ancestor for
            parent calls).
        object_class: Most-derived class of the object.
        table: Resolved class table of ``class_name``.
        identity: Object identity ("self").
        method: Method being executed.
        internal: True when entered via the self or parent binding (private
            methods are visible).
        privileged: True when private attributes may be read and written.
        owner: Class that declared ``method``; the parent binding targets
            its parent.
    """

    class_name: str
    object_class: str
    table: ClassTable
    identity: str
    method: str
    internal: bool
    privileged: bool
    owner: str

    @property
    def base(self) -> str | None:
        return self.table.parents.get(self.owner)

    def describe(self) -> str:
        arrow = "." if self.class_name == self.object_class else f"({self.class_name})."
        return f"{self.object_class}{arrow}{self.method} [{self.identity}]"


class ContextStack:
    """Explicit stack of frames; the last one is current."""

    def __init__(self) -> None:
        self._frames: list[Frame] = []

    @property
    def current(self) -> Frame | None:
        return self._frames[-1] if self._frames else None

    @property
    def depth(self) -> int:
        return len(self._frames)

    def push(self, frame: Frame) -> None:
        self._frames.append(frame)

    def pop(self) -> Frame | None:
        return self._frames.pop() if self._frames else None

    @contextmanager
    def entered(self, frame: Frame) -> Iterator[Frame]:
        """Push ``frame`` for the duration of the block."""
        self.push(frame)
        try:
            yield frame
        finally:
            self.pop()

    def find(self, predicate: Callable[[Frame], bool]) -> Frame | None:
        """Innermost frame matching ``predicate``."""
        for frame in reversed(self._frames):
            if predicate(frame):
                return frame
        return None

    def snapshot(self) -> list[str]:
        """Render the active frames, innermost first."""
        return [frame.describe() for frame in reversed(self._frames)]
