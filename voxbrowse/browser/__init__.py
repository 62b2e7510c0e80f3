"""
Browser backends for voxbrowse.

- MemoryBrowser: in-process model, no browser required
- PlaywrightBrowser: real Chromium via Playwright (imported lazily)
"""

from .base import BrowserBackend, build_search_url, SEARCH_URLS
from .memory import MemoryBrowser, Tab

__all__ = [
    "BrowserBackend",
    "build_search_url",
    "SEARCH_URLS",
    "MemoryBrowser",
    "Tab",
    "create_backend",
]


def create_backend(name: str, **kwargs) -> BrowserBackend:
    """Create a backend by name.

    Args:
        name: "memory" or "playwright".

    Raises:
        ValueError: If the name is not a known backend.
    """
    name = (name or "").strip().lower()
    if name == "memory":
        return MemoryBrowser(**kwargs)
    if name == "playwright":
        from .playwright_backend import PlaywrightBrowser
        return PlaywrightBrowser(**kwargs)
    raise ValueError(f"Unknown browser backend: {name}")
