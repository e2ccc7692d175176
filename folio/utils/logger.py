"""
Generic logger setup for folio entry points.

Library modules never configure sinks; they log through their context's
logger.py wrappers. Scripts call setup_logger() once at startup.
"""

import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

LOG_LEVEL = os.getenv("FOLIO_LOG_LEVEL", "INFO").upper()

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    level: str = LOG_LEVEL,
    extra_provenance: Optional[dict] = None,
) -> Optional[Path]:
    """
    Configure loguru for a folio entry point.

    Console output goes to stderr so that commands printing HTML or JSON to
    stdout stay pipeable. When log_dir is given, a DEBUG-level file sink is
    added as well.

    Args:
        context_name: Name of the entry point (used for the log file name)
        log_dir: Optional directory for a session log file
        level: Console level (default: FOLIO_LOG_LEVEL or INFO)
        extra_provenance: Additional key-value pairs for the provenance header

    Returns:
        Path to the log file, or None when logging to console only
    """
    logger.remove()

    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    log_file = None
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"{context_name}.log"
        logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
        log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[dict] = None) -> None:
    """Log command, working directory and interpreter version, plus extras."""
    logger.debug("=" * 80)
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")

    if extra_context:
        for key, value in extra_context.items():
            logger.debug(f"{key}: {value}")

    logger.debug("=" * 80)
