"""Intent handlers for voxbrowse.

This package contains all intent-related classes including:
- Base classes for intent representation and results
- One handler per browser command family (open tab, search, click, ...)
- The ordered registry the intent parser walks

Example usage:
    from voxbrowse.intents import Intent, CommandType, INTENT_HANDLERS

    # Create an intent
    intent = Intent(command=CommandType.SCROLL, params={"direction": "down", "amount": 500})

    # Try the families in registry order
    for handler in INTENT_HANDLERS:
        intent = handler.match("scroll down")
        if intent:
            break
"""

from typing import List

from .base import (
    CommandType,
    Intent,
    CommandResult,
    IntentHandler,
)

from .tab import (
    OpenTabIntentHandler,
    CloseTabIntentHandler,
    SwitchTabIntentHandler,
    ReloadTabIntentHandler,
)
from .navigate import NavigateIntentHandler, SearchIntentHandler
from .scroll import ScrollIntentHandler
from .click import ClickIntentHandler
from .fill import FillIntentHandler
from .bookmark import BookmarkIntentHandler
from .window import WindowIntentHandler

__all__ = [
    # Base classes
    "CommandType",
    "Intent",
    "CommandResult",
    "IntentHandler",
    # Handlers
    "OpenTabIntentHandler",
    "CloseTabIntentHandler",
    "SwitchTabIntentHandler",
    "ReloadTabIntentHandler",
    "NavigateIntentHandler",
    "SearchIntentHandler",
    "ScrollIntentHandler",
    "ClickIntentHandler",
    "FillIntentHandler",
    "BookmarkIntentHandler",
    "WindowIntentHandler",
    # Registry
    "INTENT_HANDLERS",
    "get_handler_for_command",
    "get_all_handlers",
]


# Registry of all command families, in evaluation order. The order is part
# of the parser contract: "open" triggers both open tab and navigate, and
# open tab comes first so it wins.
INTENT_HANDLERS: List[IntentHandler] = [
    OpenTabIntentHandler(),
    CloseTabIntentHandler(),
    SwitchTabIntentHandler(),
    ReloadTabIntentHandler(),
    NavigateIntentHandler(),
    SearchIntentHandler(),
    ScrollIntentHandler(),
    ClickIntentHandler(),
    FillIntentHandler(),
    BookmarkIntentHandler(),
    WindowIntentHandler(),
]


def get_handler_for_command(command: CommandType) -> IntentHandler:
    """Get the registered handler for a command.

    Args:
        command: The command to look up.

    Returns:
        The handler instance bound to that command.

    Raises:
        ValueError: If no handler exists for the command.
    """
    for handler in INTENT_HANDLERS:
        if handler.COMMAND is command:
            return handler
    raise ValueError(f"No handler registered for command: {command}")


def get_all_handlers() -> List[IntentHandler]:
    """Get all registered handlers in evaluation order.

    Returns:
        A new list of handler instances.
    """
    return list(INTENT_HANDLERS)
