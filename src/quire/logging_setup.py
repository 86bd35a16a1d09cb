# ABOUTME: Logging configuration for the quire CLI, rendered through rich.
# ABOUTME: Library modules only create loggers; this is the one place handlers are set.

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int | str = logging.WARNING) -> None:
    """Route all log records to stderr through a RichHandler.

    Call once at CLI startup. Replaces any handlers already installed on
    the root logger.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        force=True,
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_path=False,
            )
        ],
    )
