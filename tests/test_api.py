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

"""Tests for the module-level API bound to the default runtime."""

import ooengine as oo
from ooengine.runtime import Runtime


def test_default_runtime_is_shared():
    rt = oo.get_default_runtime()
    assert isinstance(rt, Runtime)
    assert oo.get_default_runtime() is rt


def test_set_default_runtime(runtime):
    previous = oo.set_default_runtime(runtime)
    assert oo.get_default_runtime() is runtime
    oo.set_default_runtime(previous)


def test_declare_and_call():
    @oo.declare_class("Greeter")
    def greeter(body):
        body.private("greeting", "hello")

        @body.method
        def hello(this, who):
            return f"{this.get('greeting')} {who}"

    assert oo.new("Greeter")("hello", "world") == "hello world"


def test_trait_and_decorator():
    @oo.declare_trait("Polite")
    def polite(body):
        @body.method
        def thanks(this):
            return "thank you"

    @oo.declare_class("Clerk")
    def clerk(body):
        body.use("Polite")

    @oo.declare_decorator("Shouting", decorates="Clerk")
    def shouting(body):
        @body.method
        def thanks(this):
            return "THANK YOU"

    assert oo.new("Clerk")("thanks") == "THANK YOU"


def test_throw_and_catch():
    seen = []

    @oo.declare_class("Oops", extends="Exception")
    def oops(body):
        pass

    oo.try_(lambda: oo.throw("Oops", "again"))
    oo.catch("Oops", lambda exc: seen.append(str(exc)))

    with oo.handling("Oops", lambda exc: seen.append("scoped")):
        oo.throw("Oops")

    assert seen == ["Oops: again", "scoped"]


def test_version():
    assert isinstance(oo.__version__, str)
