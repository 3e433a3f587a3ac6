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

"""Tests for ooengine.core.dispatcher module."""

import pytest


@pytest.fixture
def test_class(runtime):
    @runtime.declare_class("TestClass")
    def test_class_body(body):
        body.public("attributePublic", "optional default value")
        body.private("attributePrivate", "secret")

        @body.method
        def publicTestMethod(this):
            return this("internalTestMethod", "hello world")

        @body.method(private=True)
        def internalTestMethod(this, msg):
            return f"internal: {msg}"

        @body.method
        def getAttributePrivate(this):
            return this.get("attributePrivate")

        @body.method
        def setAttributePrivate(this, value):
            this.set("attributePrivate", value)

    return runtime


@pytest.fixture
def hierarchy(runtime):
    calls = []

    @runtime.declare_class("Base")
    def base(body):
        body.private("base_secret", "b")

        @body.method
        def describe(this):
            calls.append("Base.describe")
            return f"base({this('helper')})"

        @body.method(private=True)
        def helper(this):
            return this.get("base_secret")

    @runtime.declare_class("Derived", extends="Base")
    def derived(body):
        @body.method
        def describe(this):
            calls.append("Derived.describe")
            return "derived+" + this.parent("describe")

    return runtime, calls


class TestExternalCall:
    """Test dispatch through a reference."""

    def test_public_method(self, test_class):
        obj = test_class.new("TestClass")
        assert obj("publicTestMethod") == "internal: hello world"

    def test_private_method_unreachable(self, test_class, recorder):
        obj = test_class.new("TestClass")
        with test_class.handling("UndefinedMethodException", recorder):
            assert obj("internalTestMethod", "x") is None

        assert len(recorder.seen) == 1
        assert recorder.seen[0].startswith("UndefinedMethodException: ")
        assert "internalTestMethod" in recorder.seen[0]

    def test_unknown_method_aborts_by_default(self, test_class, diag):
        obj = test_class.new("TestClass")
        with pytest.raises(SystemExit) as exc_info:
            obj("nope")

        assert exc_info.value.code == 1
        assert "UndefinedMethodException" in diag.getvalue()
        assert test_class.stack.depth == 0

    def test_unknown_class(self, runtime, recorder):
        obj = runtime.new("Ghost")
        with runtime.handling("UndefinedClassException", recorder):
            assert obj("anything") is None
        assert recorder.seen == ["UndefinedClassException: Undefined class 'Ghost'"]

    def test_private_attribute_via_getter(self, test_class):
        obj = test_class.new("TestClass")
        assert obj("getAttributePrivate") == "secret"
        obj("setAttributePrivate", "New value")
        assert obj("getAttributePrivate") == "New value"

    def test_private_attribute_external_access(self, test_class, recorder):
        obj = test_class.new("TestClass")
        with test_class.handling("UndefinedAttributeException", recorder):
            assert obj("get", "attributePrivate") is None
            assert obj("set", "attributePrivate", "hacked") is None

        assert len(recorder.seen) == 2
        assert obj("getAttributePrivate") == "secret"

    def test_public_attribute_shorthand(self, test_class):
        obj = test_class.new("TestClass")
        assert obj["attributePublic"] == "optional default value"
        obj["attributePublic"] = "New value"
        assert obj("get", "attributePublic") == "New value"


class TestParentCall:
    """Test delegation to the parent implementation."""

    def test_derived_runs_first_parent_once(self, hierarchy):
        runtime, calls = hierarchy
        obj = runtime.new("Derived")

        assert obj("describe") == "derived+base(b)"
        assert calls == ["Derived.describe", "Base.describe"]

    def test_base_instance(self, hierarchy):
        runtime, calls = hierarchy
        assert runtime.new("Base")("describe") == "base(b)"
        assert calls == ["Base.describe"]

    def test_parent_of_root(self, runtime, recorder):
        @runtime.declare_class("Lonely")
        def lonely(body):
            @body.method
            def toString(this):
                return "lonely/" + this.parent("toString")

            @body.method
            def up(this):
                return this.parent("nothing")

        obj = runtime.new("Lonely")
        assert str(obj).startswith("lonely/Lonely@")

        with runtime.handling("UndefinedMethodException", recorder):
            assert obj("up") is None
        assert len(recorder.seen) == 1

    def test_overridden_get_keeps_privacy(self, runtime, recorder):
        log = []

        @runtime.declare_class("Audited")
        def audited(body):
            body.public("visible", "v")
            body.private("hidden", "h")

            @body.method
            def get(this, name):
                log.append(name)
                return this.parent.get(name)

            @body.method
            def peek(this):
                return this.get("hidden")

        obj = runtime.new("Audited")
        assert obj("get", "visible") == "v"
        assert obj("peek") == "h"

        with runtime.handling("UndefinedAttributeException", recorder):
            assert obj("get", "hidden") is None

        assert log == ["visible", "hidden", "hidden"]
        assert len(recorder.seen) == 1

    def test_parent_get_from_method_is_privileged(self, runtime):
        @runtime.declare_class("Vault")
        def vault(body):
            body.private("secret", "s3")

        @runtime.declare_class("Teller", extends="Vault")
        def teller(body):
            @body.method
            def reveal(this):
                return this.parent("get", "secret")

            @body.method
            def rotate(this, value):
                this.parent.set("secret", value)

        obj = runtime.new("Teller")
        assert obj("reveal") == "s3"
        obj("rotate", "s4")
        assert obj("reveal") == "s4"

    def test_overridden_set_keeps_privacy(self, runtime, recorder):
        @runtime.declare_class("Guarded")
        def guarded(body):
            body.public("open", "o")
            body.private("closed", "c")

            @body.method
            def set(this, name, value=""):
                this.parent.set(name, value.strip())

            @body.method
            def closed(this):
                return this.get("closed")

        obj = runtime.new("Guarded")
        obj["open"] = "  padded  "
        assert obj["open"] == "padded"

        with runtime.handling("UndefinedAttributeException", recorder):
            obj("set", "closed", "forced")

        assert len(recorder.seen) == 1
        assert obj("closed") == "c"


class TestReentrancy:
    """Test nested dispatch across objects."""

    def test_calls_into_other_objects(self, runtime):
        depths = []

        @runtime.declare_class("Node")
        def node(body):
            body.public("label", "")

            @body.method
            def construct(this, label):
                this.set("label", label)

            @body.method
            def visit(this, other=None):
                depths.append(runtime.stack.depth)
                mine = this.get("label")
                if other is None:
                    return mine
                return mine + ">" + other("visit")

        a = runtime.new("Node", "a")
        b = runtime.new("Node", "b")

        assert a("visit", b) == "a>b"
        assert a["label"] == "a"
        assert depths == [1, 2]
        assert runtime.stack.depth == 0

    def test_self_reference_roundtrip(self, runtime):
        @runtime.declare_class("Echo")
        def echo(body):
            body.public("word", "ping")

            @body.method
            def me(this):
                return this.ref

            @body.method
            def shout(this):
                return this.get("word").upper()

        obj = runtime.new("Echo")
        ref = obj("me")
        assert ref == obj
        assert ref("shout") == "PING"


class TestEnterLeave:
    """Test explicit frame entry."""

    def test_enter_and_leave(self, counter):
        frame = counter.dispatcher.enter("Counter", "a" * 32, "value")

        assert counter.stack.current is frame
        assert frame.owner == "Counter"
        assert frame.base == "Object"
        assert not frame.internal

        assert counter.dispatcher.leave() is frame
        assert counter.stack.depth == 0

    def test_enter_inherited_method_owner(self, counter):
        frame = counter.dispatcher.enter("Counter", "a" * 32, "toString")
        try:
            assert frame.owner == "Object"
            assert frame.base is None
        finally:
            counter.dispatcher.leave()
