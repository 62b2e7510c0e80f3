"""
Playwright browser backend.

Drives a real Chromium window. Selectors produced by the resolver use the
jQuery-style ``:contains("...")`` pseudo-class, which is rewritten to
Playwright's ``:has-text("...")`` before querying. Chromium exposes no
bookmark API to Playwright, so bookmarks are kept per backend instance.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from .base import BrowserBackend, build_search_url
from ..config import BROWSER_HEADLESS, NAVIGATION_TIMEOUT_MS
from ..errors import BackendUnavailableError, ExecutionFailure

logger = logging.getLogger(__name__)

CLICK_TIMEOUT_MS = 1800
FILL_TIMEOUT_MS = 3500

_CONTAINS_RE = re.compile(r':contains\(')


def to_playwright_selector(selector: str) -> str:
    """Rewrite ``:contains(`` pseudo-classes to Playwright's ``:has-text(``."""
    return _CONTAINS_RE.sub(':has-text(', selector)


def compact_playwright_error(exc: Exception) -> str:
    text = str(exc).replace("\r", " ").replace("\n", " ")
    for marker in ("Browser logs:", "Call log:"):
        if marker in text:
            text = text.split(marker, 1)[0]
    text = re.sub(r"\s+", " ", text).strip()
    if len(text) > 220:
        text = text[:217] + "..."
    return text


class PlaywrightBrowser(BrowserBackend):
    """Browser backend backed by Playwright's async Chromium driver."""

    name = "playwright"

    def __init__(self, headless: Optional[bool] = None):
        self._headless = BROWSER_HEADLESS if headless is None else headless
        self._playwright = None
        self._browser = None
        self._context = None
        self._current_page = None
        self.bookmarks: List[Dict[str, str]] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        if self._context is not None:
            return

        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self._headless,
                args=["--start-maximized"],
            )
            self._context = await self._browser.new_context(no_viewport=True)
            self._current_page = await self._context.new_page()
        except PlaywrightError as exc:
            await self.stop()
            raise BackendUnavailableError(
                f"Could not launch Chromium: {compact_playwright_error(exc)}"
            ) from exc
        logger.info(f"Playwright browser started (headless={self._headless})")

    async def stop(self) -> None:
        try:
            if self._context is not None:
                await self._context.close()
        finally:
            self._context = None
            self._current_page = None
            if self._browser is not None:
                await self._browser.close()
                self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
        logger.info("Playwright browser stopped")

    async def _page(self):
        if self._context is None:
            raise BackendUnavailableError("Browser is not started")
        if self._current_page is None or self._current_page.is_closed():
            pages = self._context.pages
            self._current_page = pages[-1] if pages else await self._context.new_page()
        return self._current_page

    async def _run(self, coro):
        """Await a Playwright call, converting its errors."""
        try:
            return await coro
        except PlaywrightError as exc:
            raise ExecutionFailure(compact_playwright_error(exc)) from exc

    # ------------------------------------------------------------------
    # Tabs
    # ------------------------------------------------------------------

    async def open_tab(self, url: str) -> Dict[str, Any]:
        if self._context is None:
            raise BackendUnavailableError("Browser is not started")
        page = await self._context.new_page()
        try:
            await self._run(page.goto(url, wait_until="domcontentloaded", timeout=NAVIGATION_TIMEOUT_MS))
        except ExecutionFailure:
            # A retry opens its own tab
            await page.close()
            raise
        self._current_page = page
        return {"message": f"Opened new tab: {url}"}

    async def close_tab(self) -> Dict[str, Any]:
        page = await self._page()
        await self._run(page.close())
        self._current_page = None
        if self._context.pages:
            self._current_page = self._context.pages[-1]
            await self._run(self._current_page.bring_to_front())
        return {"message": "Tab closed"}

    async def switch_tab(self, direction: str) -> Dict[str, Any]:
        page = await self._page()
        pages = self._context.pages
        index = pages.index(page)
        if direction == "next":
            index = (index + 1) % len(pages)
        elif direction == "previous":
            index = (index - 1 + len(pages)) % len(pages)
        else:
            raise ExecutionFailure("Invalid direction")
        self._current_page = pages[index]
        await self._run(self._current_page.bring_to_front())
        return {"message": f"Switched to {direction} tab"}

    async def reload_tab(self) -> Dict[str, Any]:
        page = await self._page()
        await self._run(page.reload(wait_until="domcontentloaded"))
        return {"message": "Tab reloaded"}

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def navigate(self, url: str) -> Dict[str, Any]:
        page = await self._page()
        await self._run(page.goto(url, wait_until="domcontentloaded", timeout=NAVIGATION_TIMEOUT_MS))
        return {"message": f"Navigated to {url}"}

    async def search(self, query: str, engine: str = "google") -> Dict[str, Any]:
        await self.open_tab(build_search_url(query, engine))
        return {"message": f'Searching for "{query}" on {engine}'}

    # ------------------------------------------------------------------
    # Page interaction
    # ------------------------------------------------------------------

    async def scroll(self, direction: str, amount: int = 500) -> Dict[str, Any]:
        page = await self._page()
        delta = amount if direction == "down" else -amount
        await self._run(page.mouse.wheel(0, delta))
        return {"message": f"Scrolled {direction}"}

    async def click(self, selector: str) -> Dict[str, Any]:
        page = await self._page()
        locator = page.locator(to_playwright_selector(selector)).first
        await self._run(locator.click(timeout=CLICK_TIMEOUT_MS))
        return {"message": f"Clicked element: {selector}"}

    async def fill(self, selector: str, value: str) -> Dict[str, Any]:
        page = await self._page()
        locator = page.locator(to_playwright_selector(selector)).first
        await self._run(locator.fill(value, timeout=FILL_TIMEOUT_MS))
        return {"message": f"Filled input: {selector}"}

    # ------------------------------------------------------------------
    # Bookmarks and window
    # ------------------------------------------------------------------

    async def bookmark(self, action: str) -> Dict[str, Any]:
        page = await self._page()

        if action == "add":
            title = await self._run(page.title())
            self.bookmarks.append({"title": title or page.url, "url": page.url})
            return {"message": "Bookmark added"}

        if action == "remove":
            for index, entry in enumerate(self.bookmarks):
                if entry["url"] == page.url:
                    del self.bookmarks[index]
                    return {"message": "Bookmark removed"}
            raise ExecutionFailure("Bookmark not found")

        raise ExecutionFailure(f"Invalid bookmark action: {action}")

    async def window(self, action: str) -> Dict[str, Any]:
        if action not in ("minimize", "maximize"):
            raise ExecutionFailure(f"Invalid window action: {action}")

        page = await self._page()
        state = "minimized" if action == "minimize" else "maximized"
        cdp = await self._run(self._context.new_cdp_session(page))
        win = await self._run(cdp.send("Browser.getWindowForTarget"))
        await self._run(cdp.send(
            "Browser.setWindowBounds",
            {"windowId": win["windowId"], "bounds": {"windowState": state}},
        ))
        return {"message": f"Window {state}"}
