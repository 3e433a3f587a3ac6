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

import io

import pytest

import ooengine.api
from ooengine.runtime import Runtime


@pytest.fixture
def diag():
    """Diagnostic stream the default exception handler writes to."""
    return io.StringIO()


@pytest.fixture
def runtime(diag):
    return Runtime(stderr=diag)


@pytest.fixture
def counter(runtime):
    """Declare the ``Counter`` class: private ``n``, ``increment`` and ``value``."""

    @runtime.declare_class("Counter")
    def counter_body(body):
        body.private("n", "0")

        @body.method
        def increment(this):
            this.set("n", int(this.get("n")) + 1)

        @body.method
        def value(this):
            return this.get("n")

    return runtime


@pytest.fixture
def recorder():
    """Handler that records every exception it receives as its string form."""

    class Recorder:
        def __init__(self):
            self.seen = []

        def __call__(self, exc):
            self.seen.append(str(exc))

    return Recorder()


@pytest.fixture(autouse=True)
def reset_default_runtime():
    """Give each test its own default runtime."""
    ooengine.api.set_default_runtime(None)
    yield
    ooengine.api.set_default_runtime(None)
