"""
Composition context logger.

Logging interface for the composition context with automatic [compose] prefix.
All composition modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[compose]"


def _log_info(message: str) -> None:
    """Log info message with [compose] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [compose] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [compose] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [compose] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [compose] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_render_complete(resume_id: str, template: str, mode: str, render_time_ms: float) -> None:
    """Log a finished content render."""
    _log_info(f"Rendered {resume_id} with '{template}' for {mode} ({render_time_ms:.0f}ms)")
