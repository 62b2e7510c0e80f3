"""
In-process browser model.

MemoryBrowser keeps tabs, bookmarks, scroll offsets and window state in
plain Python objects. It gives the console and API a backend that needs no
installed browser, and makes every command's effect observable in tests.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .base import BrowserBackend, build_search_url
from ..errors import ExecutionFailure
from ..urls import extract_domain

logger = logging.getLogger(__name__)

BLANK_URL = "about:blank"


@dataclass
class Tab:
    """A single tab in the in-memory browser."""
    id: int
    url: str
    scroll_y: int = 0
    reloads: int = 0
    clicks: List[str] = field(default_factory=list)
    fields: Dict[str, str] = field(default_factory=dict)

    @property
    def title(self) -> str:
        if self.url == BLANK_URL:
            return "New Tab"
        return extract_domain(self.url)


class MemoryBrowser(BrowserBackend):
    """Browser backend that simulates a single window in memory."""

    name = "memory"

    def __init__(self, start_url: Optional[str] = BLANK_URL):
        self._ids = itertools.count(1)
        self.tabs: List[Tab] = []
        self.active_index: int = -1
        self.bookmarks: List[Dict[str, str]] = []
        self.window_state: str = "normal"
        if start_url:
            self._add_tab(start_url)

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------

    @property
    def active_tab(self) -> Optional[Tab]:
        if 0 <= self.active_index < len(self.tabs):
            return self.tabs[self.active_index]
        return None

    def _require_tab(self) -> Tab:
        tab = self.active_tab
        if tab is None:
            raise ExecutionFailure("No active tab")
        return tab

    def _add_tab(self, url: str) -> Tab:
        tab = Tab(id=next(self._ids), url=url)
        self.tabs.append(tab)
        self.active_index = len(self.tabs) - 1
        return tab

    def snapshot(self) -> Dict[str, Any]:
        """Describe the current browser state."""
        return {
            "tabs": [{"id": t.id, "url": t.url, "title": t.title} for t in self.tabs],
            "active_tab": self.active_tab.id if self.active_tab else None,
            "bookmarks": list(self.bookmarks),
            "window_state": self.window_state,
        }

    # ------------------------------------------------------------------
    # Tabs
    # ------------------------------------------------------------------

    async def open_tab(self, url: str) -> Dict[str, Any]:
        tab = self._add_tab(url)
        logger.debug(f"Opened tab {tab.id}: {url}")
        return {"message": f"Opened new tab: {url}", "tabId": tab.id}

    async def close_tab(self) -> Dict[str, Any]:
        tab = self._require_tab()
        self.tabs.pop(self.active_index)
        self.active_index = min(self.active_index, len(self.tabs) - 1)
        logger.debug(f"Closed tab {tab.id}")
        return {"message": "Tab closed"}

    async def switch_tab(self, direction: str) -> Dict[str, Any]:
        self._require_tab()
        count = len(self.tabs)
        if direction == "next":
            self.active_index = (self.active_index + 1) % count
        elif direction == "previous":
            self.active_index = (self.active_index - 1 + count) % count
        else:
            raise ExecutionFailure("Invalid direction")
        return {"message": f"Switched to {direction} tab", "tabId": self.active_tab.id}

    async def reload_tab(self) -> Dict[str, Any]:
        tab = self._require_tab()
        tab.reloads += 1
        return {"message": "Tab reloaded"}

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def navigate(self, url: str) -> Dict[str, Any]:
        tab = self.active_tab or self._add_tab(url)
        tab.url = url
        tab.scroll_y = 0
        return {"message": f"Navigated to {url}"}

    async def search(self, query: str, engine: str = "google") -> Dict[str, Any]:
        tab = self._add_tab(build_search_url(query, engine))
        return {"message": f'Searching for "{query}" on {engine}', "tabId": tab.id}

    # ------------------------------------------------------------------
    # Page interaction
    # ------------------------------------------------------------------

    async def scroll(self, direction: str, amount: int = 500) -> Dict[str, Any]:
        tab = self._require_tab()
        delta = amount if direction == "down" else -amount
        tab.scroll_y = max(0, tab.scroll_y + delta)
        return {"message": f"Scrolled {direction}"}

    async def click(self, selector: str) -> Dict[str, Any]:
        tab = self._require_tab()
        tab.clicks.append(selector)
        return {"message": f"Clicked element: {selector}"}

    async def fill(self, selector: str, value: str) -> Dict[str, Any]:
        tab = self._require_tab()
        tab.fields[selector] = value
        return {"message": f"Filled input: {selector}"}

    # ------------------------------------------------------------------
    # Bookmarks and window
    # ------------------------------------------------------------------

    async def bookmark(self, action: str) -> Dict[str, Any]:
        tab = self._require_tab()

        if action == "add":
            self.bookmarks.append({"title": tab.title, "url": tab.url})
            return {"message": "Bookmark added"}

        if action == "remove":
            for index, entry in enumerate(self.bookmarks):
                if entry["url"] == tab.url:
                    del self.bookmarks[index]
                    return {"message": "Bookmark removed"}
            raise ExecutionFailure("Bookmark not found")

        raise ExecutionFailure(f"Invalid bookmark action: {action}")

    async def window(self, action: str) -> Dict[str, Any]:
        if action == "minimize":
            self.window_state = "minimized"
            return {"message": "Window minimized"}
        if action == "maximize":
            self.window_state = "maximized"
            return {"message": "Window maximized"}
        raise ExecutionFailure(f"Invalid window action: {action}")
