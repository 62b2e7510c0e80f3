"""
voxbrowse - voice command layer for the browser.

Turns spoken transcripts into browser actions: tabs, navigation, search,
clicks, form filling, bookmarks and window state.
"""

from .intents import CommandType, Intent, CommandResult
from .urls import normalize_url
from .dom import element_to_selector
from .core import parse, VoxEngine, VoiceSession, CommandExecutor

__version__ = "0.1.0"

__all__ = [
    "CommandType",
    "Intent",
    "CommandResult",
    "normalize_url",
    "element_to_selector",
    "parse",
    "VoxEngine",
    "VoiceSession",
    "CommandExecutor",
]
