"""
PDF Generation Module

Renders a resume to PDF with a headless browser. The composed PDF document
(inline CSS, embedded fonts) is injected into a fresh page, the content root
is measured, and the PDF page is sized to that box: one continuous page that
matches the content length instead of a fixed paper size.

Per call:
    uninitialized -> browser-launching -> page-open -> content-set
    -> fonts-settled -> content-measured -> pdf-rendered -> optimized
    -> written -> closed

A failure at any stage ends in `failed`; the page is still closed, the shared
browser is left running.
"""

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from folio.contexts.composition.composer import ResumeComposer
from folio.contexts.rendering.browser import Launcher, SharedBrowser, launch_chromium
from folio.contexts.rendering.logger import (
    _log_debug,
    _log_warning,
    log_generation_result,
    log_generation_start,
    log_optimization,
)
from folio.contexts.rendering.pdf_config import PDFConfig, load_pdf_config, to_pdf_kwargs
from folio.contexts.styling.render_context import DEFAULT_TEMPLATE
from folio.utils.async_tools import try_with_timeout, write_bytes
from folio.utils.errors import (
    ContentLoadTimeoutError,
    ContentRootNotFoundError,
    InvalidContentDimensionsError,
)
from folio.utils.pdf_processing import optimize_pdf, page_count
from folio.utils.timestamp import filename_timestamp

# Returns null when the element is missing so the caller can raise a typed error
MEASURE_CONTENT_JS = """
(selector) => {
  const element = document.querySelector(selector);
  if (!element) {
    return null;
  }
  const rect = element.getBoundingClientRect();
  return { width: Math.ceil(rect.width), height: Math.ceil(rect.height) };
}
"""

FONTS_READY_JS = "() => document.fonts.ready.then(() => true)"

HEALTH_CHECK_HTML = "<html><body>Test</body></html>"


class GenerationStage(str, Enum):
    UNINITIALIZED = "uninitialized"
    BROWSER_LAUNCHING = "browser-launching"
    PAGE_OPEN = "page-open"
    CONTENT_SET = "content-set"
    FONTS_SETTLED = "fonts-settled"
    CONTENT_MEASURED = "content-measured"
    PDF_RENDERED = "pdf-rendered"
    OPTIMIZED = "optimized"
    WRITTEN = "written"
    CLOSED = "closed"
    FAILED = "failed"


@dataclass
class PDFGenerationResult:
    """
    Result of PDF generation.

    Attributes:
        success: Whether a PDF was written
        file_path: Path to the written PDF (None if failed)
        error: Error description (None if succeeded)
        generation_time_ms: Elapsed time, up to the failure point on failure
        stage: Final stage (closed on success, failed otherwise)
        failed_stage: Stage that was in progress when the failure happened
        width_px: Measured content width used as page width
        height_px: Measured content height used as page height
        page_count: Pages in the written PDF (None if unreadable)
    """

    success: bool
    file_path: Optional[Path] = None
    error: Optional[str] = None
    generation_time_ms: float = 0.0
    stage: GenerationStage = GenerationStage.UNINITIALIZED
    failed_stage: Optional[GenerationStage] = None
    width_px: Optional[int] = None
    height_px: Optional[int] = None
    page_count: Optional[int] = None


class PDFGenerator:
    """
    Content-measured PDF generation over a shared headless browser.

    Args:
        composer: Produces the self-contained PDF document
        config: PDF settings (default: load_pdf_config())
        launcher: Browser launcher (default: Playwright Chromium)
        output_dir: Where PDFs are written (default: project generated-pdfs/)
    """

    def __init__(
        self,
        composer: ResumeComposer,
        config: Optional[PDFConfig] = None,
        launcher: Launcher = launch_chromium,
        output_dir: Optional[Path] = None,
    ):
        self.composer = composer
        self.config = config or load_pdf_config()
        self.browser = SharedBrowser(self.config.browser, launcher)
        self.output_dir = Path(output_dir) if output_dir else composer.paths.output_dir
        self._metrics: Dict[str, float] = {}

    async def generate_pdf(
        self,
        resume_id: str,
        options: Optional[Mapping[str, Any]] = None,
        template: str = DEFAULT_TEMPLATE,
    ) -> PDFGenerationResult:
        """
        Render one resume to a PDF file.

        Never raises: every failure is returned as a result with success=False.

        Args:
            resume_id: Resume identity
            options: page.pdf() options shallow-merged over the configured defaults
            template: Template name

        Returns:
            PDFGenerationResult
        """
        start = time.perf_counter()
        stage = GenerationStage.UNINITIALIZED
        page = None
        rendering = self.config.rendering
        log_generation_start(resume_id, template)

        try:
            stage = GenerationStage.BROWSER_LAUNCHING
            await self.browser.get()

            stage = GenerationStage.PAGE_OPEN
            page = await self.browser.new_page(rendering.viewport, rendering.user_agent)

            stage = GenerationStage.CONTENT_SET
            html = await self.composer.compose_for_pdf(
                resume_id, template, include_fonts=True, include_icons=True
            )
            await self._set_content(page, html)

            stage = GenerationStage.FONTS_SETTLED
            await self._wait_for_fonts(page)

            stage = GenerationStage.CONTENT_MEASURED
            width, height = await self._measure_content(page)

            stage = GenerationStage.PDF_RENDERED
            pdf_options = self.config.merge_options(options)
            buffer = await page.pdf(**to_pdf_kwargs(pdf_options, width, height))

            stage = GenerationStage.OPTIMIZED
            buffer = await self._optimize(buffer)

            stage = GenerationStage.WRITTEN
            file_path = await self._write(resume_id, buffer)

        except Exception as e:
            result = PDFGenerationResult(
                success=False,
                error=f"PDF generation failed: {e}",
                generation_time_ms=self._elapsed_ms(start),
                stage=GenerationStage.FAILED,
                failed_stage=stage,
            )
            log_generation_result(resume_id, result)
            return result

        finally:
            if page is not None:
                await self._close_page(page)

        generation_time_ms = self._elapsed_ms(start)
        self._metrics[resume_id] = generation_time_ms

        result = PDFGenerationResult(
            success=True,
            file_path=file_path,
            generation_time_ms=generation_time_ms,
            stage=GenerationStage.CLOSED,
            width_px=width,
            height_px=height,
            page_count=page_count(buffer),
        )
        log_generation_result(resume_id, result)
        return result

    async def _set_content(self, page: Any, html: str) -> None:
        """Inject the document; exceeding the budget is fatal."""
        budget = self.config.rendering.content_timeout
        outcome = await try_with_timeout(
            page.set_content(html, wait_until="networkidle", timeout=budget),
            budget,
            timeout_errors=(PlaywrightTimeoutError,),
        )
        if outcome.timed_out:
            raise ContentLoadTimeoutError(budget)

    async def _wait_for_fonts(self, page: Any) -> None:
        """Wait for document.fonts.ready and the content root; timeouts are tolerated."""
        rendering = self.config.rendering

        fonts = await try_with_timeout(
            page.evaluate(FONTS_READY_JS), rendering.font_timeout, (PlaywrightTimeoutError,)
        )
        if fonts.timed_out:
            _log_warning(f"Font loading did not settle within {fonts.budget_ms}ms, continuing")

        selector = await try_with_timeout(
            page.wait_for_selector(rendering.content_selector, timeout=rendering.selector_timeout),
            rendering.selector_timeout,
            (PlaywrightTimeoutError,),
        )
        if selector.timed_out:
            _log_warning(
                f"Content element {rendering.content_selector} did not appear within "
                f"{selector.budget_ms}ms, continuing"
            )

    async def _measure_content(self, page: Any) -> Tuple[int, int]:
        """
        Bounding box of the content root, rounded up to whole pixels.

        Raises:
            ContentRootNotFoundError: Element absent
            InvalidContentDimensionsError: Width or height not positive
        """
        selector = self.config.rendering.content_selector
        box = await page.evaluate(MEASURE_CONTENT_JS, selector)
        if box is None:
            raise ContentRootNotFoundError(selector)

        width, height = box["width"], box["height"]
        if width <= 0 or height <= 0:
            raise InvalidContentDimensionsError(width, height)

        _log_debug(f"Measured content dimensions: {width}x{height}px")
        return int(width), int(height)

    async def _optimize(self, buffer: bytes) -> bytes:
        """Best-effort recompression; falls back to the original buffer."""
        optimization = self.config.optimization
        if not optimization.enabled:
            return buffer

        try:
            optimized = await asyncio.to_thread(
                optimize_pdf, buffer, optimization.level, optimization.compression
            )
        except Exception as e:
            _log_warning(f"PDF optimization failed, using unoptimized output: {e}")
            return buffer

        log_optimization(len(buffer), len(optimized))
        return optimized

    async def _write(self, resume_id: str, buffer: bytes) -> Path:
        await asyncio.to_thread(self.output_dir.mkdir, parents=True, exist_ok=True)
        file_path = self.output_dir / f"{resume_id}-{filename_timestamp()}.pdf"
        await write_bytes(file_path, buffer)
        return file_path

    async def _close_page(self, page: Any) -> None:
        try:
            await page.close()
        except Exception as e:
            _log_warning(f"Failed to close page: {e}")

    @staticmethod
    def _elapsed_ms(start: float) -> float:
        return (time.perf_counter() - start) * 1000

    async def health_check(self) -> bool:
        """
        Check that the browser launches and renders a trivial page.

        Never raises; any failure is reported as unhealthy.
        """
        page = None
        try:
            page = await self.browser.new_page()
            await page.set_content(HEALTH_CHECK_HTML)
            return True
        except Exception as e:
            _log_warning(f"Browser health check failed: {e}")
            return False
        finally:
            if page is not None:
                await self._close_page(page)

    async def close(self) -> None:
        """Shut down the shared browser."""
        await self.browser.close()

    def get_performance_metrics(self) -> Dict[str, float]:
        """Last generation time (ms) per resume identity."""
        return dict(self._metrics)

    def clear_performance_metrics(self) -> None:
        self._metrics.clear()
