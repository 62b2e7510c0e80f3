"""Vox Engine - Main processing pipeline.

This module provides the high-level API for processing spoken commands.
It orchestrates the complete flow from transcript to executed action:

1. Parses the transcript into a structured Intent
2. Dispatches the intent through the CommandExecutor, with retries
3. Returns a CommandResult with outcome and response

Example:
    from voxbrowse.core import VoxEngine
    from voxbrowse.browser import MemoryBrowser

    engine = VoxEngine(MemoryBrowser())

    result = await engine.process("open youtube")
    print(result.response)  # "Opened new tab: https://www.youtube.com"
"""
import asyncio
import logging
from typing import Optional, Dict, Any

from .intent_parser import parse, get_supported_commands
from .executor import CommandExecutor
from ..browser import BrowserBackend, create_backend
from ..config import BROWSER_BACKEND, RETRY_MAX_ATTEMPTS, RETRY_DELAY_MS
from ..errors import ExecutionFailure, DispatchCancelled
from ..intents.base import Intent, CommandResult

# Set up logging
logger = logging.getLogger(__name__)

NOT_RECOGNIZED_MESSAGE = "Command not recognized. Please try again."


class VoxEngine:
    """Main voxbrowse processing engine.

    Combines the parser and the executor. Results are always returned as
    CommandResult values; execution failures are converted here.

    Attributes:
        _executor: CommandExecutor bound to the browser backend
        _max_attempts: Attempts per dispatch
        _retry_delay: Seconds between attempts

    Example:
        engine = VoxEngine(MemoryBrowser())

        result = await engine.process("scroll down")
        print(result.success)  # True

        capabilities = engine.get_capabilities()
        print(capabilities["supported_commands"])
    """

    def __init__(self, backend: BrowserBackend,
                 max_attempts: int = RETRY_MAX_ATTEMPTS,
                 retry_delay: float = RETRY_DELAY_MS / 1000.0):
        """Initialize the engine with a browser backend."""
        self._executor = CommandExecutor(backend)
        self._max_attempts = max_attempts
        self._retry_delay = retry_delay
        logger.info(f"VoxEngine initialized (backend: {backend.name})")

    @property
    def backend(self) -> BrowserBackend:
        return self._executor.backend

    @property
    def executor(self) -> CommandExecutor:
        return self._executor

    def parse(self, text: str) -> Optional[Intent]:
        """Parse a transcript without executing it."""
        return parse(text)

    async def process(self, text: str,
                      cancel_event: Optional[asyncio.Event] = None) -> CommandResult:
        """Parse and execute a transcript.

        Args:
            text: The transcript.
            cancel_event: Optional signal that stops retries between attempts.

        Returns:
            CommandResult with the outcome of the request:
            - success: True if the command was executed
            - response: Human-readable description of what happened
            - error: EMPTY_INPUT, NO_MATCH, CANCELLED or EXECUTION_FAILED
        """
        if not text or not text.strip():
            logger.warning("Empty input received")
            return CommandResult.error_result(
                error="EMPTY_INPUT",
                response="No command provided"
            )

        logger.debug(f"Processing input: {text}")

        intent = parse(text)
        if intent is None:
            logger.info(f"No command recognized: {text}")
            return CommandResult.error_result(
                error="NO_MATCH",
                response=NOT_RECOGNIZED_MESSAGE,
                data={"raw_text": text}
            )

        return await self.process_intent(intent, cancel_event=cancel_event)

    async def process_intent(self, intent: Intent,
                             cancel_event: Optional[asyncio.Event] = None) -> CommandResult:
        """Execute an already parsed intent.

        Args:
            intent: The intent to dispatch.
            cancel_event: Optional signal that stops retries between attempts.

        Returns:
            The CommandResult of the dispatch.
        """
        try:
            result = await self._executor.execute_with_retry(
                intent,
                max_attempts=self._max_attempts,
                delay=self._retry_delay,
                cancel_event=cancel_event,
            )
        except DispatchCancelled as e:
            logger.info(f"Dispatch cancelled: {intent.name}")
            return CommandResult.error_result(
                error="CANCELLED",
                response=f"Error: {e}",
                data={"intent": intent.to_dict()}
            )
        except ExecutionFailure as e:
            logger.error(f"Command {intent.name} failed: {e}")
            return CommandResult.error_result(
                error="EXECUTION_FAILED",
                response=f"Error: {e}",
                data={"intent": intent.to_dict()}
            )

        logger.info(f"Execution result: success={result.success}, response={result.response}")
        return result

    def get_capabilities(self) -> Dict[str, Any]:
        """Describe what this engine can do.

        Returns:
            Dictionary with the command names, backend and retry settings.
        """
        return {
            "supported_commands": get_supported_commands(),
            "backend": self.backend.name,
            "max_attempts": self._max_attempts,
            "retry_delay": self._retry_delay,
        }


# =============================================================================
# MODULE-LEVEL ENGINE
# =============================================================================

_engine: Optional[VoxEngine] = None


def get_engine() -> VoxEngine:
    """Get or create the process-wide engine using the configured backend.

    Example:
        from voxbrowse.core.engine import get_engine
        engine = get_engine()
    """
    global _engine
    if _engine is None:
        _engine = VoxEngine(create_backend(BROWSER_BACKEND))
    return _engine


async def process(text: str) -> CommandResult:
    """Process a transcript with the module-level engine.

    Example:
        from voxbrowse.core.engine import process
        result = await process("reload the page")
    """
    return await get_engine().process(text)
