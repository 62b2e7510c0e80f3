"""Bookmark Intent Handler - Handles bookmarking the current page."""
from typing import List, Optional

from .base import IntentHandler, Intent, CommandType


class BookmarkIntentHandler(IntentHandler):
    """Handler for bookmark intents.

    Recognizes and processes commands like:
    - "add bookmark" / "save a bookmark" / "create bookmark"
    - "remove bookmark" / "delete this bookmark"
    """

    COMMAND = CommandType.BOOKMARK

    ADD_PATTERN = r'(?:add|save|create)\s+(?:a\s+)?bookmark'
    REMOVE_PATTERN = r'(?:remove|delete)\s+(?:this\s+)?bookmark'

    PATTERNS: List[str] = [ADD_PATTERN, REMOVE_PATTERN]

    KEYWORDS: List[str] = ["bookmark", "save bookmark", "add bookmark"]

    ACTIONS = [
        ("add", ADD_PATTERN),
        ("remove", REMOVE_PATTERN),
    ]

    def match(self, text: str) -> Optional[Intent]:
        for action, pattern in self.ACTIONS:
            if self._search(pattern, text):
                return self._intent(action=action)
        return None
