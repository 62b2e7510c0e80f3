"""
Base class for browser backends.

A backend performs exactly one side-effecting browser action per call and
reports what it did as a dict with at least a human-readable "message".
Failures are raised as ExecutionFailure.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict
from urllib.parse import quote

SEARCH_URLS = {
    "google": "https://www.google.com/search?q={query}",
    "youtube": "https://www.youtube.com/results?search_query={query}",
}


def build_search_url(query: str, engine: str = "google") -> str:
    """Build the results URL for a search engine, defaulting to Google."""
    template = SEARCH_URLS.get(engine, SEARCH_URLS["google"])
    return template.format(query=quote(query, safe=""))


class BrowserBackend(ABC):
    """Side-effecting browser capability behind the command executor."""

    name: str = "base"

    async def start(self) -> None:
        """Acquire browser resources. No-op by default."""

    async def stop(self) -> None:
        """Release browser resources. No-op by default."""

    @abstractmethod
    async def open_tab(self, url: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def close_tab(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def switch_tab(self, direction: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def reload_tab(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def navigate(self, url: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def search(self, query: str, engine: str = "google") -> Dict[str, Any]:
        pass

    @abstractmethod
    async def scroll(self, direction: str, amount: int) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def click(self, selector: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def fill(self, selector: str, value: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def bookmark(self, action: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def window(self, action: str) -> Dict[str, Any]:
        pass
