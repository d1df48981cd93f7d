"""Logging setup for the quote0 command-line tool.

The SDK only emits through logging.getLogger(__name__); handlers are
installed here, once, by the CLI.
"""

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import AppConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(config: "AppConfig") -> None:
    """Send log records at config.log_level and above to stderr."""
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stderr,
        force=True,
    )
