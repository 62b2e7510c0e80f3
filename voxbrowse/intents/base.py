"""Base classes for intent handling.

This module provides the foundational data structures for the intent parsing system.
It defines the closed set of browser commands that can be recognized, the structure
of parsed intents, the results from executing those intents, and the base class
every command family handler derives from.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Optional, Dict, Any, List, Mapping, Union


ParamValue = Union[str, int]


class CommandType(Enum):
    """Enumeration of all supported browser commands.

    The values are the wire names handed to the command executor, so they
    must stay stable.
    """
    OPEN_TAB = "openTab"        # Open a URL in a new tab
    CLOSE_TAB = "closeTab"      # Close the current tab
    SWITCH_TAB = "switchTab"    # Activate the next/previous tab
    RELOAD_TAB = "reloadTab"    # Reload the current tab
    NAVIGATE = "navigate"       # Load a URL in the current tab
    SEARCH = "search"           # Google or YouTube search
    SCROLL = "scroll"           # Scroll the page up/down
    CLICK = "click"             # Click a DOM element
    FILL = "fill"               # Set the value of a form field
    BOOKMARK = "bookmark"       # Add/remove a bookmark for the page
    WINDOW = "window"           # Minimize/maximize the browser window


@dataclass(frozen=True)
class Intent:
    """Represents a parsed browser command.

    An intent is immutable once constructed: the params mapping is frozen
    into a read-only view, so an intent can be replayed by the retry
    wrapper without risk of a handler mutating it.

    Attributes:
        command: The command family that matched (from CommandType enum).
        params: Parameter name to value, following the executor wire contract.

    Example:
        >>> intent = Intent(
        ...     command=CommandType.SWITCH_TAB,
        ...     params={"direction": "next"},
        ... )
        >>> intent.to_dict()
        {'command': 'switchTab', 'params': {'direction': 'next'}}
    """
    command: CommandType
    params: Mapping[str, ParamValue] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def __hash__(self) -> int:
        return hash((self.command, tuple(sorted(self.params.items()))))

    @property
    def name(self) -> str:
        """The wire name of the command."""
        return self.command.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert intent to its wire representation.

        Returns:
            Dictionary with the command name and a plain params dict.
        """
        return {
            "command": self.command.value,
            "params": dict(self.params),
        }


@dataclass
class CommandResult:
    """Result from executing an intent.

    This class represents the outcome of attempting to execute a parsed intent,
    including whether it succeeded, any response message, and additional data
    or error information.

    Attributes:
        success: Whether the command execution succeeded.
        response: Human-readable response message.
        data: Optional additional data from the execution.
        error: Error code if execution failed.

    Example:
        >>> result = CommandResult(
        ...     success=True,
        ...     response="Tab closed",
        ...     data={"command": "closeTab"}
        ... )
    """
    success: bool
    response: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @classmethod
    def success_result(cls, response: str, data: Optional[Dict[str, Any]] = None) -> "CommandResult":
        """Create a successful result.

        Args:
            response: The success message.
            data: Optional additional data.

        Returns:
            A CommandResult with success=True.
        """
        return cls(success=True, response=response, data=data)

    @classmethod
    def error_result(cls, error: str, response: Optional[str] = None,
                     data: Optional[Dict[str, Any]] = None) -> "CommandResult":
        """Create an error result.

        Args:
            error: The error code.
            response: Optional human-readable response.
            data: Optional additional data.

        Returns:
            A CommandResult with success=False.
        """
        return cls(
            success=False,
            response=response or f"Error: {error}",
            data=data,
            error=error
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary representation.

        Returns:
            Dictionary containing all result attributes.
        """
        return {
            "success": self.success,
            "response": self.response,
            "data": self.data,
            "error": self.error
        }


class IntentHandler:
    """Base class for command family handlers.

    Each subclass recognizes one command family. PATTERNS are evaluated in
    their declared order with an unanchored search over the normalized
    transcript, and the first rule that fires produces the intent.
    """

    # Subclasses must bind their command and define their trigger patterns
    COMMAND: CommandType
    PATTERNS: List[str] = []
    KEYWORDS: List[str] = []

    def can_handle(self, text: str) -> bool:
        """Check whether any of this family's patterns fires on the text.

        Args:
            text: The normalized transcript.

        Returns:
            True if at least one pattern matches.
        """
        if not text:
            return False
        return any(re.search(pattern, text, re.IGNORECASE) for pattern in self.PATTERNS)

    def match(self, text: str) -> Optional[Intent]:
        """Build an intent from the text if this family's rules fire.

        Args:
            text: The normalized transcript.

        Returns:
            The intent, or None if no rule produced a complete one.
        """
        raise NotImplementedError("Subclasses must implement match()")

    def _intent(self, **params: ParamValue) -> Intent:
        return Intent(command=self.COMMAND, params=params)

    @staticmethod
    def _search(pattern: str, text: str) -> Optional["re.Match"]:
        return re.search(pattern, text, re.IGNORECASE)

    @staticmethod
    def _capture(match: "re.Match", group: int = 1) -> Optional[str]:
        """Return a trimmed capture group, or None if it is blank.

        A required group that is empty after trimming means the rule did not
        really fire, so callers treat None as no match.
        """
        value = match.group(group)
        if value is None:
            return None
        value = value.strip()
        return value or None
