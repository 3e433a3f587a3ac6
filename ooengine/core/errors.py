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

"""Python-side errors raised by the kernel.

Kernel code (store, resolver, dispatcher) raises these. The innermost
dispatch boundary converts them into a ``throw`` of the runtime exception
class named by ``exception_class``, so script authors only ever see runtime
exception objects.
"""

from __future__ import annotations


class OOError(Exception):
    """Base class for kernel violations."""

    exception_class = "Exception"


class UndefinedClassError(OOError):
    exception_class = "UndefinedClassException"


class UndefinedMethodError(OOError):
    exception_class = "UndefinedMethodException"


class UndefinedAttributeError(OOError):
    exception_class = "UndefinedAttributeException"


class UnknownLibraryError(OOError):
    exception_class = "UnknownLibraryException"


class IllegalArgumentError(OOError):
    exception_class = "IllegalArgumentException"


class Abort(SystemExit):
    """Terminates the running script with a non-zero status.

    Raised by the default exception handler and by the failure hook. It is a
    ``SystemExit`` so that ``except Exception`` in method bodies never
    swallows it.
    """

    def __init__(self, status: int = 1, reason: str = "") -> None:
        super().__init__(status)
        self.status = status
        self.reason = reason


__all__ = [
    "Abort",
    "IllegalArgumentError",
    "OOError",
    "UndefinedAttributeError",
    "UndefinedClassError",
    "UndefinedMethodError",
    "UnknownLibraryError",
]
