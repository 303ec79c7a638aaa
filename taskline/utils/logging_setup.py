"""Logging configuration for taskline command-line use."""
from __future__ import annotations
import logging
import sys
from typing import List, Optional

DEFAULT_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'

# Records below this level would be drawn over the spinner line
CONSOLE_FLOOR = logging.WARNING

def configure_logging(level: str = "WARNING",
                      log_file: Optional[str] = None,
                      format_str: Optional[str] = None) -> List[logging.Handler]:
    """Install root handlers for the CLI and return them.

    The console handler writes to stderr, the same stream the spinner uses
    by default. When ``log_file`` is given it takes everything at ``level``
    and the console only shows WARNING and above, so DEBUG traces of task
    transitions never tear the spinner line.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs to
        format_str: Optional custom format string
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    formatter = logging.Formatter(format_str or DEFAULT_FORMAT)
    handlers: List[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            file_handler.setLevel(numeric_level)
            handlers.append(file_handler)
            console_handler.setLevel(max(numeric_level, CONSOLE_FLOOR))
        except OSError as e:
            print(f"Warning: Could not configure log file: {e}", file=sys.stderr)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    return handlers
