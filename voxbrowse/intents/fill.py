"""Fill Intent Handler - Handles filling in form fields.

This module provides the handler for setting the value of an input element,
e.g. "fill in the email field with me@example.com".
"""
from typing import List, Optional

from .base import IntentHandler, Intent, CommandType
from ..dom import element_to_selector


class FillIntentHandler(IntentHandler):
    """Handler for fill intents.

    Recognizes and processes commands like:
    - "fill in the email field with test@example.com"
    - "type the search box as wireless headphones"
    - "enter username input with jdoe"

    The field description is matched lazily so that the value keeps
    everything after the first "with"/"as". Both groups are required.
    """

    COMMAND = CommandType.FILL

    PATTERNS: List[str] = [
        r'(?:fill|type|enter|input)\s+(?:in\s+)?(?:the\s+)?(.+?)\s+(?:with|as)\s+(.+)',
    ]

    KEYWORDS: List[str] = ["fill", "type", "enter", "input"]

    def match(self, text: str) -> Optional[Intent]:
        match = self._search(self.PATTERNS[0], text)
        if not match:
            return None

        description = self._capture(match, 1)
        value = self._capture(match, 2)
        if not description or not value:
            return None

        return self._intent(selector=element_to_selector(description), value=value)
