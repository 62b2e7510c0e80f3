"""Scroll Intent Handler - Handles page scrolling.

This module provides the handler for scrolling the current page up or down.
"""
from typing import List, Optional

from .base import IntentHandler, Intent, CommandType
from ..config import SCROLL_AMOUNT


class ScrollIntentHandler(IntentHandler):
    """Handler for scroll intents.

    Recognizes and processes commands like:
    - "scroll down" / "scroll bottom"
    - "scroll up" / "scroll top"

    The amount is never taken from speech; every scroll moves the page by
    the configured SCROLL_AMOUNT.
    """

    COMMAND = CommandType.SCROLL

    DOWN_PATTERN = r'scroll\s+(?:down|bottom)'
    UP_PATTERN = r'scroll\s+(?:up|top)'

    PATTERNS: List[str] = [DOWN_PATTERN, UP_PATTERN]

    KEYWORDS: List[str] = ["scroll", "scroll down", "scroll up"]

    DIRECTIONS = [
        ("down", DOWN_PATTERN),
        ("up", UP_PATTERN),
    ]

    def match(self, text: str) -> Optional[Intent]:
        for direction, pattern in self.DIRECTIONS:
            if self._search(pattern, text):
                return self._intent(direction=direction, amount=SCROLL_AMOUNT)
        return None
