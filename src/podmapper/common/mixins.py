# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Any

from podmapper.common.logger import MessageT, PodMapperLogger


class LoggerMixin:
    """Mixin that gives a class `self.debug(...)`-style logging helpers.

    The logger is named after the concrete class unless `logger_name` is passed.
    """

    def __init__(self, logger_name: str | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._podmapper_logger = PodMapperLogger(
            logger_name or self.__class__.__name__
        )

    @property
    def logger(self) -> PodMapperLogger:
        return self._podmapper_logger

    def trace(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("stacklevel", 4)
        self._podmapper_logger.trace(msg, *args, **kwargs)

    def debug(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("stacklevel", 4)
        self._podmapper_logger.debug(msg, *args, **kwargs)

    def info(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("stacklevel", 4)
        self._podmapper_logger.info(msg, *args, **kwargs)

    def warning(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("stacklevel", 4)
        self._podmapper_logger.warning(msg, *args, **kwargs)

    def error(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("stacklevel", 4)
        self._podmapper_logger.error(msg, *args, **kwargs)

    def exception(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("stacklevel", 4)
        self._podmapper_logger.exception(msg, *args, **kwargs)
