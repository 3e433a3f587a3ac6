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

"""Class-based objects over flat callables.

    import ooengine as oo

    rt = oo.Runtime()          # or use the module-level API below

Declare classes with ``declare_class``, create objects with ``new``, call
methods through the returned reference and signal errors with ``throw`` /
``catch``.
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("ooengine")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from ooengine.api import (
    add_library_path,
    catch,
    declare_class,
    declare_decorator,
    declare_trait,
    get_default_runtime,
    handling,
    import_library,
    new,
    set_default_runtime,
    throw,
    try_,
)
from ooengine.config import RuntimeConfig, load_config
from ooengine.core import (
    UNSET,
    Abort,
    ClassBody,
    OOError,
    ParentBinding,
    Reference,
    SelfBinding,
    Visibility,
)
from ooengine.logging_config import disable_logging, get_logger, setup_logging
from ooengine.runtime import Runtime

__all__ = [
    "UNSET",
    "Abort",
    "ClassBody",
    "OOError",
    "ParentBinding",
    "Reference",
    "Runtime",
    "RuntimeConfig",
    "SelfBinding",
    "Visibility",
    "__version__",
    "add_library_path",
    "catch",
    "declare_class",
    "declare_decorator",
    "declare_trait",
    "disable_logging",
    "get_default_runtime",
    "get_logger",
    "handling",
    "import_library",
    "load_config",
    "new",
    "set_default_runtime",
    "setup_logging",
    "throw",
    "try_",
]
