"""Logging setup for the editor.

Streamlit reruns the page script on every interaction, so setup has to be
safe to call repeatedly: existing handlers on the package loggers are
replaced, not stacked.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional


LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Module loggers that belong to the editor
MODULES = (
    "app",
    "assignments",
    "config_store",
    "conflicts",
    "eligibility",
    "pdf_export",
    "storage",
)

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    console_output: bool = True,
    simple_format: bool = False,
) -> None:
    """Attach handlers to the editor's module loggers.

    Args:
        log_level: name from LEVELS, unknown names fall back to INFO
        log_file: rotating log file, None for no file output
        console_output: log to stderr as well
        simple_format: drop timestamps and logger names
    """
    level = LEVELS.get(log_level.upper(), logging.INFO)
    if simple_format:
        formatter = logging.Formatter(SIMPLE_FORMAT)
    else:
        formatter = logging.Formatter(DETAILED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers = []
    if console_output:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in MODULES:
        module_logger = logging.getLogger(name)
        module_logger.setLevel(level)
        for old in list(module_logger.handlers):
            module_logger.removeHandler(old)
            old.close()
        for handler in handlers:
            module_logger.addHandler(handler)
        module_logger.propagate = not handlers
