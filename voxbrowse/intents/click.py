"""Click Intent Handler - Handles clicks on page elements.

This module provides the handler for clicking a DOM element described by
voice, such as a button or a link.
"""
from typing import List, Optional

from .base import IntentHandler, Intent, CommandType
from ..dom import element_to_selector


class ClickIntentHandler(IntentHandler):
    """Handler for click intents.

    Recognizes and processes commands like:
    - "click the sign in button"
    - "click on the pricing link"
    - "press submit button"
    - "select the search box"
    """

    COMMAND = CommandType.CLICK

    PATTERNS: List[str] = [
        r'(?:click|press|select)\s+(?:on\s+)?(?:the\s+)?(.+)',
    ]

    KEYWORDS: List[str] = ["click", "press", "select"]

    def match(self, text: str) -> Optional[Intent]:
        match = self._search(self.PATTERNS[0], text)
        if not match:
            return None

        description = self._capture(match)
        if not description:
            return None

        return self._intent(selector=element_to_selector(description))
