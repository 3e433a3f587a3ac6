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

"""Runtime configuration.

Configuration comes from an optional YAML file:

    library_path:
      - ./lib
      - /usr/share/ooengine
    log_level: INFO
    log_file: ooengine.log

and the ``OOENGINE_PATH`` environment variable, whose entries are prepended
to ``library_path``.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from typing import Any

import yaml

ENV_LIBRARY_PATH = "OOENGINE_PATH"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RuntimeConfig:
    library_path: list[str] = field(default_factory=list)
    log_level: str = "WARNING"
    log_file: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RuntimeConfig:
        unknown = set(data) - {"library_path", "log_level", "log_file"}
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")

        library_path = data.get("library_path") or []
        if isinstance(library_path, str):
            library_path = [library_path]
        if not isinstance(library_path, list):
            raise ValueError("library_path must be a list of directories")

        log_level = str(data.get("log_level", "WARNING")).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {log_level}")

        return cls(
            library_path=[str(p) for p in library_path],
            log_level=log_level,
            log_file=data.get("log_file"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_config(path: str | None = None, env: dict[str, str] | None = None) -> RuntimeConfig:
    """Load configuration from ``path`` (optional) and the environment."""
    data: dict[str, Any] = {}
    if path:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

    config = RuntimeConfig.from_dict(data)

    env = os.environ if env is None else env
    extra = [p for p in env.get(ENV_LIBRARY_PATH, "").split(os.pathsep) if p]
    config.library_path = extra + config.library_path
    return config


def dump_config(config: RuntimeConfig) -> str:
    return yaml.safe_dump(config.to_dict(), sort_keys=False)
