"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[render]"


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_generation_start(resume_id: str, template: str) -> None:
    _log_info(f"Starting PDF generation: {resume_id} ({template})")


def log_optimization(original_size: int, optimized_size: int) -> None:
    """Log size change from the optimization pass."""
    if original_size:
        reduction = (original_size - optimized_size) / original_size * 100
    else:
        reduction = 0.0
    _log_debug(
        f"PDF optimization: {original_size} bytes -> {optimized_size} bytes ({reduction:.1f}% reduction)"
    )


def log_generation_result(
    resume_id: str,
    result,  # PDFGenerationResult
) -> None:
    """
    Log PDF generation result.

    Args:
        resume_id: Resume identity
        result: PDFGenerationResult from PDFGenerator.generate_pdf()
    """
    elapsed = result.generation_time_ms / 1000
    if result.success:
        _log_success(f"{resume_id}: PDF generated ({elapsed:.2f}s)")
        _log_info(f"  Output: {result.file_path}")
        if result.width_px and result.height_px:
            _log_debug(f"  Page: {result.width_px}x{result.height_px}px")
        if result.page_count is not None:
            _log_debug(f"  Pages: {result.page_count}")
    else:
        _log_error(f"Failed to generate PDF for {resume_id} ({elapsed:.2f}s)")
        _log_error(f"  Stage: {result.failed_stage.value if result.failed_stage else 'unknown'}")
        _log_error(f"  Error: {result.error}")
