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

"""Runtime kernel building blocks.

Most callers only need :class:`ooengine.Runtime`; this package exposes the
pieces it is assembled from (store, resolver, context stack, dispatcher,
lifecycle, exceptions) for tests and embedding.
"""

from __future__ import annotations

from .context import ContextStack, Frame
from .declaration import (
    AttributeDescriptor,
    ClassBody,
    ClassTable,
    Declaration,
    Kind,
    MethodEntry,
    Visibility,
)
from .dispatcher import Dispatcher
from .errors import (
    Abort,
    IllegalArgumentError,
    OOError,
    UndefinedAttributeError,
    UndefinedClassError,
    UndefinedMethodError,
    UnknownLibraryError,
)
from .exceptions import ExceptionSubsystem, HandlerStack
from .lifecycle import Lifecycle, is_identity
from .reference import ParentBinding, Reference, SelfBinding
from .registry import Registry
from .resolver import ROOT_CLASS, Resolver
from .store import AttributeRecord, AttributeStore
from .value import UNSET, AttrValue, Unset

__all__ = [
    "ROOT_CLASS",
    "UNSET",
    "Abort",
    "AttrValue",
    "AttributeDescriptor",
    "AttributeRecord",
    "AttributeStore",
    "ClassBody",
    "ClassTable",
    "ContextStack",
    "Declaration",
    "Dispatcher",
    "ExceptionSubsystem",
    "Frame",
    "HandlerStack",
    "IllegalArgumentError",
    "Kind",
    "Lifecycle",
    "MethodEntry",
    "OOError",
    "ParentBinding",
    "Reference",
    "Registry",
    "Resolver",
    "SelfBinding",
    "UndefinedAttributeError",
    "UndefinedClassError",
    "UndefinedMethodError",
    "UnknownLibraryError",
    "Unset",
    "Visibility",
    "is_identity",
]
