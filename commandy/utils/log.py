# commandy/utils/log.py
from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> None:
    """Route the ``commandy`` loggers to stderr through rich. COMMANDY_LOG_LEVEL wins over --verbose."""
    level = os.environ.get("COMMANDY_LOG_LEVEL", "").upper() or ("DEBUG" if verbose else "WARNING")
    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    root = logging.getLogger("commandy")
    root.handlers[:] = [handler]
    root.setLevel(level)
