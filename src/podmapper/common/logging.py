# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Rich console logging for the podmapper CLI.

Each line renders as::

    HH:MM:SS.mmm LEVEL    message content (logger_name:lineno)
"""

import logging
from datetime import datetime

from rich.console import Console, ConsoleRenderable, Group
from rich.logging import RichHandler
from rich.text import Text
from rich.traceback import Traceback

from podmapper.common.enums import PodMapperLogLevel
from podmapper.common.environment import Environment
from podmapper.common.logger import _TRACE, PodMapperLogger

_logger = PodMapperLogger(__name__)


def setup_rich_logging(
    level: PodMapperLogLevel | str = Environment.LOGGING.LEVEL,
    console: Console | None = None,
) -> None:
    """Install a CustomRichHandler on the root logger, replacing existing handlers."""
    level_name = str(level).upper()
    numeric_level = _TRACE if level_name == "TRACE" else logging.getLevelName(level_name)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)

    rich_handler = CustomRichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console or Console(stderr=True),
        show_time=False,
        show_level=False,
        tracebacks_show_locals=False,
    )
    rich_handler.setLevel(numeric_level)
    root_logger.addHandler(rich_handler)

    _logger.debug(lambda: f"Logging initialized with level: {level_name}")


class CustomRichHandler(RichHandler):
    """RichHandler with a compact `time level message (logger:lineno)` layout."""

    LOG_LEVEL_STYLES = {
        "TRACE": "dim",
        "DEBUG": "dim",
        "INFO": "cyan",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold red",
    }

    def render(
        self,
        *,
        record: logging.LogRecord,
        traceback: Traceback | None,
        message_renderable: ConsoleRenderable,
    ) -> ConsoleRenderable:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level_style = self.LOG_LEVEL_STYLES.get(record.levelname, "white")
        message = record.getMessage()[: Environment.LOGGING.MAX_CONSOLE_MESSAGE_LENGTH]

        formatted_log = Text.assemble(
            Text(f"{timestamp} ", style="log.time"),
            Text(f"{record.levelname:<8} ", style=level_style),
            Text(f"{message} "),
            Text(f"({record.name}:{record.lineno})", style="dim italic"),
        )
        return Group(formatted_log, traceback) if traceback else formatted_log

    def emit(self, record: logging.LogRecord) -> None:
        traceback = None
        if (
            self.rich_tracebacks
            and record.exc_info
            and record.exc_info != (None, None, None)
        ):
            traceback = Traceback.from_exception(*record.exc_info)

        log_renderable = self.render(
            record=record, traceback=traceback, message_renderable=Text("")
        )
        self.console.print(log_renderable)
