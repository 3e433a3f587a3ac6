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

"""Tests for ooengine.core.store module."""

import pytest

from ooengine.core.declaration import AttributeDescriptor, Visibility
from ooengine.core.errors import UndefinedAttributeError
from ooengine.core.store import AttributeStore
from ooengine.core.value import UNSET, to_text, to_value

OBJ = "0" * 32
OTHER = "1" * 32


def public(name, default=UNSET):
    return AttributeDescriptor(name, Visibility.PUBLIC, default)


def private(name, default=UNSET):
    return AttributeDescriptor(name, Visibility.PRIVATE, default)


class TestDeclare:
    """Test idempotent declaration."""

    def test_declare_with_default(self):
        store = AttributeStore()
        assert store.declare(OBJ, public("a", "hello")) is True
        assert store.read(OBJ, "a", internal=False) == "hello"

    def test_declare_without_default_is_unset(self):
        store = AttributeStore()
        store.declare(OBJ, public("a"))
        assert store.read(OBJ, "a", internal=False) is UNSET

    def test_redeclare_keeps_existing_value(self):
        store = AttributeStore()
        store.declare(OBJ, public("a", "first"))
        store.write(OBJ, "a", "changed", internal=False)

        assert store.declare(OBJ, public("a", "second")) is False
        assert store.read(OBJ, "a", internal=False) == "changed"

    def test_callable_default_evaluated_once(self):
        calls = []

        def default():
            calls.append(1)
            return 42

        store = AttributeStore()
        store.declare(OBJ, public("a", default))
        store.declare(OBJ, public("a", default))

        assert calls == [1]
        assert store.read(OBJ, "a", internal=False) == "42"


class TestVisibility:
    """Test public/private access checks."""

    def test_private_requires_internal(self):
        store = AttributeStore()
        store.declare(OBJ, private("secret", "x"))

        with pytest.raises(UndefinedAttributeError):
            store.read(OBJ, "secret", internal=False)
        with pytest.raises(UndefinedAttributeError):
            store.write(OBJ, "secret", "y", internal=False)

        store.write(OBJ, "secret", "y", internal=True)
        assert store.read(OBJ, "secret", internal=True) == "y"

    def test_public_shadows_private(self):
        store = AttributeStore()
        store.declare(OBJ, private("a", "private"))
        store.declare(OBJ, public("a", "public"))

        assert store.read(OBJ, "a", internal=True) == "public"

    def test_undeclared_attribute(self):
        store = AttributeStore()
        with pytest.raises(UndefinedAttributeError, match="'missing'"):
            store.read(OBJ, "missing", internal=True)


class TestValues:
    """Test the empty string vs unset distinction."""

    def test_empty_string_is_not_unset(self):
        store = AttributeStore()
        store.declare(OBJ, public("a", "x"))

        store.write(OBJ, "a", "", internal=False)
        assert store.read(OBJ, "a", internal=False) == ""

        store.write(OBJ, "a", UNSET, internal=False)
        assert store.read(OBJ, "a", internal=False) is UNSET

    def test_values_are_text(self):
        store = AttributeStore()
        store.declare(OBJ, public("a"))
        store.write(OBJ, "a", 3, internal=False)
        assert store.read(OBJ, "a", internal=False) == "3"

    def test_value_helpers(self):
        assert to_text(UNSET) == ""
        assert to_value(None) == ""
        assert to_value(UNSET) is UNSET
        assert not UNSET
        assert repr(UNSET) == "UNSET"


class TestRecords:
    """Test per-object isolation, drop and copy."""

    def test_objects_are_isolated(self):
        store = AttributeStore()
        store.declare(OBJ, public("a", "1"))
        store.declare(OTHER, public("a", "1"))

        store.write(OBJ, "a", "2", internal=False)
        assert store.read(OTHER, "a", internal=False) == "1"

    def test_drop_removes_every_cell(self):
        store = AttributeStore()
        store.declare(OBJ, public("a", "1"))
        store.declare(OBJ, private("b", "2"))

        assert store.drop(OBJ) == 2
        assert not store.exists(OBJ)
        with pytest.raises(UndefinedAttributeError):
            store.read(OBJ, "a", internal=True)

    def test_copy(self):
        store = AttributeStore()
        store.declare(OBJ, public("a", "1"))
        store.declare(OBJ, private("b", "2"))

        assert store.copy(OBJ, OTHER) == 2
        assert store.cells(OTHER) == store.cells(OBJ)

        store.write(OTHER, "a", "changed", internal=False)
        assert store.read(OBJ, "a", internal=False) == "1"
