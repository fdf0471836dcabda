# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Thin wrapper over the standard logging module with lazy message support.

Messages may be passed either as strings or as zero-argument callables. A callable
is only evaluated when the level is enabled, which keeps expensive f-strings (like
dumping the whole device index) off the hot path::

    _logger = PodMapperLogger(__name__)
    _logger.debug(lambda: f"Device to pod mapping: {index}")
"""

import logging
from collections.abc import Callable
from typing import Any

_TRACE = 5
_DEBUG = logging.DEBUG
_INFO = logging.INFO
_WARNING = logging.WARNING
_ERROR = logging.ERROR
_CRITICAL = logging.CRITICAL

logging.addLevelName(_TRACE, "TRACE")

MessageT = str | Callable[[], str]


class PodMapperLogger:
    """Logger that accepts lazily evaluated messages and a TRACE level."""

    def __init__(self, logger_name: str) -> None:
        self.logger_name = logger_name
        self._logger = logging.getLogger(logger_name)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def log(self, level: int, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if callable(msg):
            msg = msg()
        # stacklevel=3 points the record at the caller of trace/debug/etc.
        kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, msg, *args, **kwargs)

    def trace(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_TRACE, msg, *args, **kwargs)

    def debug(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_DEBUG, msg, *args, **kwargs)

    def info(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_INFO, msg, *args, **kwargs)

    def warning(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_WARNING, msg, *args, **kwargs)

    def error(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_ERROR, msg, *args, **kwargs)

    def exception(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self.log(_ERROR, msg, *args, **kwargs)

    def critical(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_CRITICAL, msg, *args, **kwargs)
