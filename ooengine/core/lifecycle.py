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

"""Object lifecycle: minting, lazy construction, destruction and cloning.

``new`` only mints an identity. The first dispatch on that identity declares
every attribute of the class table (base before derived) and then runs the
``construct`` method with the arguments given to ``new``. Destruction is
explicit and removes every attribute cell the object ever had. A destructed
identity is never constructed again: its attributes stay undeclared.
"""

from __future__ import annotations

import dataclasses
import logging
import re
import uuid
from typing import TYPE_CHECKING, Any

from ooengine.core.errors import IllegalArgumentError
from ooengine.core.reference import Reference

if TYPE_CHECKING:
    from ooengine.core.context import Frame
    from ooengine.runtime import Runtime

logger = logging.getLogger(__name__)

IDENTITY_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def is_identity(value: Any) -> bool:
    return isinstance(value, str) and IDENTITY_PATTERN.match(value) is not None


class Lifecycle:
    def __init__(self, runtime: Runtime) -> None:
        self._rt = runtime
        self._pending: dict[str, tuple[Any, ...]] = {}
        self._destructed: set[str] = set()

    def new(self, class_name: str, *args: Any) -> Reference:
        """Mint an identity for ``class_name``; construction happens on first dispatch."""
        if not isinstance(class_name, str) or not class_name:
            raise ValueError(f"Class name must be a non-empty string, got {class_name!r}")
        identity = uuid.uuid4().hex
        if args:
            self._pending[identity] = args
        logger.debug("New %s object %s", class_name, identity)
        return Reference(self._rt, class_name, identity)

    def is_destructed(self, identity: str) -> bool:
        return identity in self._destructed

    def ensure_constructed(self, frame: Frame) -> None:
        if frame.identity in self._destructed:
            return
        record = self._rt.store.record(frame.identity)
        if record.constructed:
            return
        # Flag first: construct() dispatches back into this object.
        record.constructed = True

        table = self._rt.resolver.resolve_class(frame.object_class)
        for descriptor in table.descriptors:
            self._rt.store.declare(frame.identity, descriptor)

        args = self._pending.pop(frame.identity, ())
        logger.debug(
            "Constructing %s object %s (%d attributes)",
            frame.object_class,
            frame.identity,
            len(table.descriptors),
        )
        ctor_frame = dataclasses.replace(
            frame,
            class_name=table.name,
            table=table,
            method="construct",
            internal=True,
            privileged=True,
            owner=table.name,
        )
        self._rt.dispatcher.inner_call(ctor_frame, "construct", *args)

    def destruct(self, identity: str) -> int:
        self._pending.pop(identity, None)
        self._destructed.add(identity)
        removed = self._rt.store.drop(identity)
        logger.debug("Destructed %s (%d cells)", identity, removed)
        return removed

    def clone(self, identity: str, target: Any) -> str:
        """Copy every attribute cell of ``identity`` onto ``target``.

        The target's constructor never runs: it is marked constructed.

        Raises:
            IllegalArgumentError: If ``target`` is neither a reference nor a
                well-formed identity, or names a destructed object.
        """
        target_id = target.identity if isinstance(target, Reference) else target
        if not is_identity(target_id):
            raise IllegalArgumentError(f"Not an object identity: {target!r}")
        if target_id in self._destructed:
            raise IllegalArgumentError(f"Object {target_id} was destructed")

        copied = self._rt.store.copy(identity, target_id)
        self._rt.store.record(target_id).constructed = True
        self._pending.pop(target_id, None)
        logger.debug("Cloned %d cells %s -> %s", copied, identity, target_id)
        return target_id
