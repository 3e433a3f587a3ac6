#!/usr/bin/env python3
# Copyright 2025 Ant Group Co., Ltd.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Command-line interface for ooengine scripts.

Examples:
    # Generate a config file
    python -m ooengine.cli config gen -I ./lib -o ooengine.yaml

    # Run a script (its module globals get `runtime`)
    python -m ooengine.cli run my_script.py -c ooengine.yaml

    # Call an entry function after loading the script
    python -m ooengine.cli run my_script.py --entry main --args a b

    # List what a script declares
    python -m ooengine.cli classes my_script.py
"""

import argparse
import importlib.util
import os
import sys
from collections.abc import Callable
from types import ModuleType
from typing import Any, cast

from ooengine.api import set_default_runtime
from ooengine.config import RuntimeConfig, dump_config, load_config
from ooengine.core.declaration import Kind
from ooengine.logging_config import setup_logging
from ooengine.runtime import Runtime


def load_user_module(path: str, runtime: Runtime) -> ModuleType:
    """Load a script as a module with ``runtime`` in its globals."""
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    spec = importlib.util.spec_from_file_location("oo_user_module", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot import module from {path}")
    module = importlib.util.module_from_spec(spec)
    module.runtime = runtime  # type: ignore[attr-defined]
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


def resolve_entry(module: ModuleType, name: str) -> Callable[..., Any]:
    entry = getattr(module, name, None)
    if entry is None or not callable(entry):
        raise AttributeError(f"Entry function '{name}' not found or not callable")
    return cast(Callable[..., Any], entry)


def build_runtime(args: argparse.Namespace) -> Runtime:
    """Config file + environment + -I flags -> configured default runtime."""
    config = load_config(args.config)
    if args.log_level:
        config.log_level = args.log_level.upper()
    setup_logging(level=config.log_level, filename=config.log_file, force=True)

    runtime = Runtime.from_config(config)
    for path in reversed(args.include or []):
        runtime.libraries.add(path)
    set_default_runtime(runtime)
    return runtime


def cmd_run(args: argparse.Namespace) -> int:
    """Run a script inside the runtime's error boundary."""
    runtime = build_runtime(args)

    def main() -> None:
        module = load_user_module(args.file, runtime)
        if args.entry:
            result = resolve_entry(module, args.entry)(*args.args)
            if result is not None:
                print(result)

    main.__name__ = args.file
    return runtime.run(main)


def cmd_classes(args: argparse.Namespace) -> int:
    """Load a script and list its declarations."""
    runtime = build_runtime(args)
    status = runtime.run(load_user_module, args.file, runtime)
    if status != 0:
        return status

    print(f"{'Kind':<10} | {'Name':<30} | Parent / Target")
    print("-" * 64)
    for decl in runtime.registry.declarations():
        if decl.kind is Kind.DECORATOR:
            related = f"decorates {decl.target}"
        else:
            related = decl.parent or ""
        print(f"{decl.kind.value:<10} | {decl.name:<30} | {related}")
    return 0


def cmd_config_gen(args: argparse.Namespace) -> int:
    """Generate a configuration file."""
    config = RuntimeConfig(
        library_path=list(args.include or []),
        log_level=args.log_level.upper(),
    )
    yaml_content = dump_config(config)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(yaml_content)
        print(f"Config written to {args.output}")
    else:
        print(yaml_content)
    return 0


def add_runtime_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="Path to the script")
    parser.add_argument("-c", "--config", type=str, help="Path to a YAML config")
    parser.add_argument(
        "-I",
        "--include",
        action="append",
        help="Prepend a library search directory (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override the configured log level",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ooengine",
        description="Run and inspect ooengine scripts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'run' subcommand
    run_parser = subparsers.add_parser("run", help="Run a script")
    add_runtime_args(run_parser)
    run_parser.add_argument(
        "--entry",
        default=None,
        help="Function in the script to call after loading it",
    )
    run_parser.add_argument(
        "--args",
        nargs="*",
        default=[],
        help="Arguments passed to the entry function",
    )

    # 'classes' subcommand
    classes_parser = subparsers.add_parser(
        "classes", help="List classes, traits and decorators a script declares"
    )
    add_runtime_args(classes_parser)

    # 'config' subcommand
    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(
        dest="config_command", help="Config commands"
    )
    gen_parser = config_subparsers.add_parser("gen", help="Generate a config file")
    gen_parser.add_argument(
        "-I", "--include", action="append", help="Library search directory"
    )
    gen_parser.add_argument("--log-level", default="WARNING", help="Log level")
    gen_parser.add_argument("-o", "--output", type=str, help="Output file path")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        return cmd_run(args)
    if args.command == "classes":
        return cmd_classes(args)
    if args.command == "config":
        if args.config_command == "gen":
            return cmd_config_gen(args)
    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
