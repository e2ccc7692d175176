"""
Shared headless browser.

One Chromium process is launched lazily on first use and shared by every PDF
generation; each generation opens its own page. close() tears the process
down and the next use launches a fresh one.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from playwright.async_api import async_playwright

from folio.contexts.rendering.logger import _log_debug, _log_info
from folio.contexts.rendering.pdf_config import BrowserConfig, ViewportConfig
from folio.utils.errors import BrowserLaunchError


@dataclass
class BrowserSession:
    """
    A launched browser and the driver that owns it.

    Attributes:
        browser: Object exposing async new_page(**kwargs) and close()
        driver: Object exposing async stop() (None when nothing to stop)
    """

    browser: Any
    driver: Optional[Any] = None

    async def close(self) -> None:
        try:
            await self.browser.close()
        finally:
            if self.driver is not None:
                await self.driver.stop()


Launcher = Callable[[BrowserConfig], Awaitable[BrowserSession]]


async def launch_chromium(config: BrowserConfig) -> BrowserSession:
    """Start Playwright and launch headless Chromium with the configured args."""
    playwright = await async_playwright().start()
    launch_options = {
        "headless": config.headless,
        "args": list(config.args),
        "timeout": config.launch_timeout,
    }
    if config.executable_path:
        launch_options["executable_path"] = config.executable_path

    try:
        browser = await playwright.chromium.launch(**launch_options)
    except BaseException:
        await playwright.stop()
        raise
    return BrowserSession(browser=browser, driver=playwright)


class SharedBrowser:
    """
    Lazily launched browser shared across concurrent generations.

    Args:
        config: Launch settings
        launcher: Coroutine function producing a BrowserSession (replaceable in tests)
    """

    def __init__(self, config: BrowserConfig, launcher: Launcher = launch_chromium):
        self.config = config
        self.launcher = launcher
        self._session: Optional[BrowserSession] = None
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._session is not None

    async def get(self) -> Any:
        """
        The shared browser, launching it on first use.

        Raises:
            BrowserLaunchError: If the launch fails
        """
        if self._session is not None:
            return self._session.browser

        async with self._lock:
            if self._session is None:
                _log_info("Launching headless browser")
                try:
                    self._session = await self.launcher(self.config)
                except Exception as e:
                    raise BrowserLaunchError(f"Failed to launch browser: {e}") from e
                _log_debug("Browser launched")
        return self._session.browser

    async def new_page(
        self, viewport: Optional[ViewportConfig] = None, user_agent: Optional[str] = None
    ) -> Any:
        """Open a fresh page with a deterministic viewport and user agent."""
        browser = await self.get()
        page_options = {}
        if viewport is not None:
            page_options["viewport"] = {"width": viewport.width, "height": viewport.height}
            page_options["device_scale_factor"] = viewport.device_scale_factor
        if user_agent:
            page_options["user_agent"] = user_agent
        return await browser.new_page(**page_options)

    async def close(self) -> None:
        """Close the browser; the next get() launches a new one."""
        async with self._lock:
            session, self._session = self._session, None
        if session is not None:
            await session.close()
            _log_debug("Browser closed")
