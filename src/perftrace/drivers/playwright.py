"""Playwright (Chromium) page driver.

Capture goes through Chromium's ``Browser.start_tracing`` /
``Browser.stop_tracing``, which return the raw Chrome trace-event JSON the
trace engine consumes.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from perftrace.config.models import BrowserConfig
from perftrace.core.errors import DriverError

if TYPE_CHECKING:
    from playwright.async_api import Browser, Page

    from perftrace.trace.protocols import WaitUntil

log = structlog.get_logger(__name__)


class PlaywrightPageDriver:
    """PageDriver over one Playwright page of a Chromium browser."""

    def __init__(self, browser: Browser, page: Page) -> None:
        self._browser = browser
        self._page = page

    @property
    def page(self) -> Page:
        return self._page

    def url(self) -> str:
        return self._page.url

    async def goto(self, url: str, *, wait_until: WaitUntil) -> None:
        try:
            await self._page.goto(url, wait_until=wait_until)
        except PlaywrightError as e:
            raise DriverError.create(f"Navigation to {url} failed: {e.message}", url=url) from e

    async def start_tracing(self, categories: Sequence[str]) -> None:
        try:
            await self._browser.start_tracing(page=self._page, categories=list(categories))
        except PlaywrightError as e:
            raise DriverError.create(f"Could not start tracing: {e.message}") from e

    async def stop_tracing(self) -> bytes:
        try:
            return await self._browser.stop_tracing()
        except PlaywrightError as e:
            raise DriverError.create(f"Could not stop tracing: {e.message}") from e


@asynccontextmanager
async def launch_page(config: BrowserConfig | None = None) -> AsyncIterator[PlaywrightPageDriver]:
    """Launch Chromium, open one page, and yield a driver for it.

    The browser is closed when the context exits.
    """
    config = config or BrowserConfig()
    async with async_playwright() as pw:
        browser = await pw.chromium.launch(headless=config.headless, channel=config.channel)
        try:
            page = await browser.new_page(
                viewport={"width": config.viewport_width, "height": config.viewport_height}
            )
            if config.start_url:
                await page.goto(config.start_url)
            log.info(
                "browser_launched",
                headless=config.headless,
                channel=config.channel,
                start_url=config.start_url,
            )
            yield PlaywrightPageDriver(browser, page)
        finally:
            await browser.close()
