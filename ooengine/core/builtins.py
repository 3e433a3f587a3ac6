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

"""Built-in classes every runtime starts with.

``Object`` is the implicit root of every class. Its methods (``construct``,
``destruct``, ``clone``, ``toString``, ``get``, ``set``) are ordinary methods,
so classes may override them and delegate back through ``this.parent``.
``Exception`` and the kernel exception classes derive from it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ooengine.core.value import UNSET, to_text

if TYPE_CHECKING:
    from ooengine.core.declaration import ClassBody
    from ooengine.core.reference import SelfBinding
    from ooengine.runtime import Runtime

KERNEL_EXCEPTIONS = (
    "UndefinedClassException",
    "UndefinedMethodException",
    "UndefinedAttributeException",
    "UnknownLibraryException",
    "IllegalArgumentException",
    "ShellErrorException",
)


def object_body(body: ClassBody) -> None:
    @body.method
    def construct(this: SelfBinding, *args: Any) -> None:
        return None

    @body.method
    def destruct(this: SelfBinding) -> None:
        this.runtime.lifecycle.destruct(this.identity)

    @body.method
    def clone(this: SelfBinding, target: Any) -> None:
        this.runtime.lifecycle.clone(this.identity, target)

    @body.method
    def toString(this: SelfBinding) -> str:
        return f"{this.class_name}@{this.identity}"

    @body.method
    def get(this: SelfBinding, name: str) -> str:
        value = this.runtime.store.read(this.identity, name, this.frame.privileged)
        return to_text(value)

    @body.method
    def set(this: SelfBinding, name: str, value: Any = UNSET) -> None:
        this.runtime.store.write(this.identity, name, value, this.frame.privileged)


def exception_body(body: ClassBody) -> None:
    body.public("message", "")
    body.public("stack", "")

    @body.method
    def construct(this: SelfBinding, message: str = "", stack: str = "") -> None:
        this.set("message", message)
        this.set("stack", stack)

    @body.method
    def toString(this: SelfBinding) -> str:
        return f"{this.class_name}: {this.get('message')}"


def _empty_body(body: ClassBody) -> None:
    pass


def install(runtime: Runtime) -> None:
    runtime.declare_class("Object")(object_body)
    runtime.declare_class("Exception")(exception_body)
    for name in KERNEL_EXCEPTIONS:
        runtime.declare_class(name, extends="Exception")(_empty_body)
