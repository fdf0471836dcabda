# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import sys
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.panel import Panel

from podmapper.common.exceptions import PodMapperError


@contextmanager
def exit_on_error(title: str = "Error", console: Console | None = None) -> Iterator[None]:
    """Print any exception raised in the block as a rich panel and exit with status 1."""
    try:
        yield
    except (KeyboardInterrupt, SystemExit):
        raise
    except Exception as e:
        console = console or Console(stderr=True)
        message = e.raw_str() if isinstance(e, PodMapperError) else repr(e)
        console.print(
            Panel(
                message,
                title=f"[bold red]{title}: {e.__class__.__name__}[/bold red]",
                border_style="red",
                title_align="left",
            )
        )
        sys.exit(1)
