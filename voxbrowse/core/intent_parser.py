"""Intent Parser - Core parsing logic for spoken browser commands.

This module handles the task of converting a voice transcript into a
structured Intent. It is simple and deterministic:
- Normalization is lowercase + trim, nothing else
- Command families are tried in the fixed registry order
- The first family that produces an intent wins

The parser is a pure function of its input. Unrecognized, empty or
malformed input yields None rather than an exception.
"""
import logging
from typing import Optional, List

from ..intents import INTENT_HANDLERS, get_handler_for_command
from ..intents.base import Intent, CommandType

logger = logging.getLogger(__name__)


# =============================================================================
# NORMALIZATION
# =============================================================================

def normalize_transcript(text: Optional[str]) -> str:
    """Normalize a transcript for matching.

    Args:
        text: The raw transcript.

    Returns:
        The lowercased, trimmed transcript ("" for None).
    """
    if not text:
        return ""
    return text.lower().strip()


# =============================================================================
# MAIN PARSER FUNCTION
# =============================================================================

def parse(text: Optional[str]) -> Optional[Intent]:
    """Parse a voice transcript into a structured Intent.

    This is the main entry point for intent parsing. Each command family in
    INTENT_HANDLERS is asked in turn; evaluation stops at the first one
    that matches.

    Args:
        text: The raw transcript text.

    Returns:
        The matched Intent, or None if no command family recognized it.

    Example:
        >>> parse("open youtube").to_dict()
        {'command': 'openTab', 'params': {'url': 'https://www.youtube.com'}}
        >>> parse("what time is it") is None
        True
    """
    normalized = normalize_transcript(text)
    if not normalized:
        return None

    for handler in INTENT_HANDLERS:
        intent = handler.match(normalized)
        if intent is not None:
            logger.debug(f"Parsed {normalized!r} as {intent.name} {dict(intent.params)}")
            return intent

    logger.debug(f"No command matched: {normalized!r}")
    return None


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def get_supported_commands() -> List[str]:
    """Get the wire names of all commands, in evaluation order.

    Returns:
        List of command names.
    """
    return [handler.COMMAND.value for handler in INTENT_HANDLERS]


def get_command_keywords(command: CommandType) -> List[str]:
    """Get keywords associated with a command.

    Args:
        command: The command to get keywords for.

    Returns:
        List of trigger keywords for that command family.
    """
    return list(get_handler_for_command(command).KEYWORDS)


def is_command_keyword(word: str) -> bool:
    """Check if a word or phrase is a recognized trigger keyword.

    Args:
        word: The word to check.

    Returns:
        True if any command family lists it as a keyword.
    """
    word = normalize_transcript(word)
    return any(word in handler.KEYWORDS for handler in INTENT_HANDLERS)
