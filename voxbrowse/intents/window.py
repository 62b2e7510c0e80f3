"""Window Intent Handler - Handles browser window state."""
from typing import List, Optional

from .base import IntentHandler, Intent, CommandType


class WindowIntentHandler(IntentHandler):
    """Handler for window intents.

    Recognizes and processes commands like:
    - "minimize" / "minimize window" / "minimize browser"
    - "maximize" / "maximize window"
    """

    COMMAND = CommandType.WINDOW

    MINIMIZE_PATTERN = r'minimize(?:\s+(?:window|browser))?'
    MAXIMIZE_PATTERN = r'maximize(?:\s+(?:window|browser))?'

    PATTERNS: List[str] = [MINIMIZE_PATTERN, MAXIMIZE_PATTERN]

    KEYWORDS: List[str] = ["minimize", "maximize", "minimize window", "maximize window"]

    ACTIONS = [
        ("minimize", MINIMIZE_PATTERN),
        ("maximize", MAXIMIZE_PATTERN),
    ]

    def match(self, text: str) -> Optional[Intent]:
        for action, pattern in self.ACTIONS:
            if self._search(pattern, text):
                return self._intent(action=action)
        return None
