"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[template]"


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [template] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_data_loaded(resume_id: str, markdown_loaded: int, markdown_missing: int) -> None:
    """Log how many markdown references resolved for a resume."""
    _log_debug(f"Loaded resume data for {resume_id}")
    if markdown_missing:
        _log_info(
            f"  {resume_id}: {markdown_loaded} markdown files loaded, {markdown_missing} missing"
        )
    else:
        _log_debug(f"  {markdown_loaded} markdown files loaded")


def log_template_compiled(template_name: str, style: str, components: int) -> None:
    """Log a template compilation (style is 'component' or 'legacy')."""
    if style == "component":
        _log_debug(f"Compiled component template '{template_name}' ({components} components)")
    else:
        _log_debug(f"Compiled legacy template '{template_name}'")
