"""Tab Intent Handlers - Handle browser tab management.

This module provides the handlers for opening, closing, switching between
and reloading tabs.
"""
from typing import List, Optional

from .base import IntentHandler, Intent, CommandType
from ..urls import normalize_url


class OpenTabIntentHandler(IntentHandler):
    """Handler for open tab intents.

    Recognizes and processes commands like:
    - "open youtube"
    - "new tab for github.com"
    - "create tab news.ycombinator.com"
    - "launch google"

    Plain "open X" lands here rather than in navigate, because this family
    is registered first. That precedence is intended: opening a site by
    voice should not replace the page the user is on.
    """

    COMMAND = CommandType.OPEN_TAB

    PATTERNS: List[str] = [
        r'(?:open|new tab|create tab|launch)\s+(?:a\s+)?(?:new\s+)?(?:tab\s+)?(?:for\s+)?(.+)',
    ]

    KEYWORDS: List[str] = ["open", "new tab", "create tab", "launch"]

    def match(self, text: str) -> Optional[Intent]:
        match = self._search(self.PATTERNS[0], text)
        if not match:
            return None

        target = self._capture(match)
        if not target:
            return None

        return self._intent(url=normalize_url(target))


class CloseTabIntentHandler(IntentHandler):
    """Handler for close tab intents.

    Recognizes and processes commands like:
    - "close tab"
    - "close this tab"
    - "close current tab"
    """

    COMMAND = CommandType.CLOSE_TAB

    PATTERNS: List[str] = [
        r'close\s+(?:this\s+)?(?:current\s+)?tab',
    ]

    KEYWORDS: List[str] = ["close tab", "close this tab", "close current tab"]

    def match(self, text: str) -> Optional[Intent]:
        if self._search(self.PATTERNS[0], text):
            return self._intent()
        return None


class SwitchTabIntentHandler(IntentHandler):
    """Handler for switch tab intents.

    Recognizes and processes commands like:
    - "next tab"
    - "switch to next tab"
    - "right tab"
    - "previous tab" / "prev tab" / "left tab"

    "next" is tested before "previous".
    """

    COMMAND = CommandType.SWITCH_TAB

    NEXT_PATTERN = r'(?:switch\s+to\s+)?(?:next|right)\s+tab'
    PREVIOUS_PATTERN = r'(?:switch\s+to\s+)?(?:previous|prev|left)\s+tab'

    PATTERNS: List[str] = [NEXT_PATTERN, PREVIOUS_PATTERN]

    KEYWORDS: List[str] = ["switch tab", "next tab", "previous tab", "change tab"]

    # Sub-pattern order decides which direction wins
    DIRECTIONS = [
        ("next", NEXT_PATTERN),
        ("previous", PREVIOUS_PATTERN),
    ]

    def match(self, text: str) -> Optional[Intent]:
        for direction, pattern in self.DIRECTIONS:
            if self._search(pattern, text):
                return self._intent(direction=direction)
        return None


class ReloadTabIntentHandler(IntentHandler):
    """Handler for reload intents.

    Recognizes and processes commands like:
    - "reload"
    - "refresh the page"
    - "reload this tab"
    """

    COMMAND = CommandType.RELOAD_TAB

    PATTERNS: List[str] = [
        r'(?:reload|refresh)(?:\s+(?:this\s+)?(?:tab|page))?',
    ]

    KEYWORDS: List[str] = ["reload", "refresh", "reload tab", "refresh page"]

    def match(self, text: str) -> Optional[Intent]:
        if self._search(self.PATTERNS[0], text):
            return self._intent()
        return None
