"""
Styling context logger.

Logging interface for the styling context with automatic [style] prefix.
All styling modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[style]"


def _log_info(message: str) -> None:
    """Log info message with [style] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [style] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [style] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [style] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_css_assembly(cache_key: str, layer_sizes: dict, total: int) -> None:
    """Log the size of each CSS layer in an assembly."""
    _log_debug(f"Assembled CSS for {cache_key}: {total} chars")
    for layer, size in layer_sizes.items():
        _log_debug(f"  {layer}: {size} chars")
