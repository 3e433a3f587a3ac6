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
Logging configuration for ooengine.

Every kernel module logs under the ``ooengine`` logger; resolution and
dispatch are traced at DEBUG. As a library the logger stays silent (a
NullHandler) until the host or the CLI calls :func:`setup_logging`.

Example usage:
    >>> import ooengine as oo
    >>> oo.setup_logging(level="DEBUG", filename="dispatch.log")
"""

import logging
import sys
from typing import IO

OOENGINE_LOGGER_NAME = "ooengine"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    filename: str | None = None,
    stream: IO[str] | None = None,
    force: bool = False,
) -> None:
    """
    Route ooengine logs to a stream and optionally a file.

    Args:
        level: Level name (``"DEBUG"`` .. ``"CRITICAL"``) or number.
        format: Record format; defaults to ``DEFAULT_FORMAT``.
        filename: Also append records to this file.
        stream: Stream for records, ``sys.stderr`` when omitted.
        force: Drop the handlers installed by earlier calls first.
    """
    logger = logging.getLogger(OOENGINE_LOGGER_NAME)
    log_level = getattr(logging, level.upper()) if isinstance(level, str) else level
    logger.setLevel(log_level)

    if force:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
    logger.propagate = False

    fmt = format or DEFAULT_FORMAT
    logger.addHandler(
        _handler(logging.StreamHandler(stream or sys.stderr), log_level, fmt)
    )
    if filename:
        logger.addHandler(_handler(logging.FileHandler(filename), log_level, fmt))


def disable_logging() -> None:
    """Silence ooengine again (library mode)."""
    logger = logging.getLogger(OOENGINE_LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Logger below ``ooengine``; scripts run by the CLI log next to the kernel.

    Example:
        >>> get_logger("my_script").name
        'ooengine.my_script'
    """
    if name != OOENGINE_LOGGER_NAME and not name.startswith(
        f"{OOENGINE_LOGGER_NAME}."
    ):
        name = f"{OOENGINE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


# Library mode: silent until setup_logging() is called
_root_logger = logging.getLogger(OOENGINE_LOGGER_NAME)
if not _root_logger.handlers:
    _root_logger.addHandler(logging.NullHandler())
    _root_logger.propagate = False
