"""Navigation Intent Handlers - Handle URL navigation and web search.

This module provides the handlers for loading a URL in the current tab and
for running a Google or YouTube search.
"""
from typing import List, Optional

from .base import IntentHandler, Intent, CommandType
from ..urls import normalize_url


class NavigateIntentHandler(IntentHandler):
    """Handler for navigate intents.

    Recognizes and processes commands like:
    - "go to github.com"
    - "navigate to example.org/docs"
    - "visit twitter"

    The pattern also accepts "open", but the open tab family is evaluated
    first and claims those transcripts.
    """

    COMMAND = CommandType.NAVIGATE

    PATTERNS: List[str] = [
        r'(?:go\s+to|navigate\s+to|visit|open)\s+(.+)',
    ]

    KEYWORDS: List[str] = ["go to", "navigate to", "visit", "open"]

    def match(self, text: str) -> Optional[Intent]:
        match = self._search(self.PATTERNS[0], text)
        if not match:
            return None

        target = self._capture(match)
        if not target:
            return None

        return self._intent(url=normalize_url(target))


class SearchIntentHandler(IntentHandler):
    """Handler for search intents.

    Recognizes and processes commands like:
    - "search youtube for cats"
    - "youtube lofi beats"
    - "search for python tutorials"
    - "google weather tomorrow"

    The YouTube pattern is tried before the generic one, otherwise
    "search youtube for cats" would become a Google search for
    "youtube for cats".
    """

    COMMAND = CommandType.SEARCH

    YOUTUBE_PATTERN = r'(?:youtube|search\s+youtube\s+for)\s+(.+)'
    GOOGLE_PATTERN = r'(?:search\s+(?:for\s+)?|google\s+)(.+)'

    PATTERNS: List[str] = [YOUTUBE_PATTERN, GOOGLE_PATTERN]

    KEYWORDS: List[str] = ["search", "search for", "google", "youtube"]

    ENGINES = [
        ("youtube", YOUTUBE_PATTERN),
        ("google", GOOGLE_PATTERN),
    ]

    def match(self, text: str) -> Optional[Intent]:
        for engine, pattern in self.ENGINES:
            match = self._search(pattern, text)
            if not match:
                continue

            query = self._capture(match)
            if query:
                return self._intent(query=query, engine=engine)

        return None
