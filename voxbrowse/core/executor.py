"""Command Executor - Bridges intents to a browser backend.

This module takes parsed Intent objects and executes them against a
BrowserBackend, returning CommandResult objects.

The CommandExecutor is the bridge between the intent parser and the
side-effecting browser layer. It handles:
- Routing each of the eleven commands to the matching backend call
- Wrapping backend errors as ExecutionFailure
- Replaying a failed intent a fixed number of times

Example:
    from voxbrowse.browser import MemoryBrowser
    from voxbrowse.core.executor import CommandExecutor
    from voxbrowse.core.intent_parser import parse

    executor = CommandExecutor(MemoryBrowser())
    intent = parse("scroll down")
    result = await executor.execute_with_retry(intent)
    print(result.response)  # "Scrolled down"
"""
import asyncio
import logging
from typing import Optional, Dict, Any, Callable, Awaitable

from ..config import RETRY_MAX_ATTEMPTS, RETRY_DELAY_MS
from ..errors import ExecutionFailure, UnknownCommandError, DispatchCancelled
from ..browser.base import BrowserBackend
from ..intents.base import Intent, CommandType, CommandResult

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_MESSAGE = "Command executed successfully"


def _command_name(intent: Intent) -> str:
    return getattr(intent.command, "value", str(intent.command))


class CommandExecutor:
    """Executes intents against a BrowserBackend.

    The dispatch table is fixed at construction and covers every
    CommandType. Anything else is rejected with UnknownCommandError.

    Attributes:
        _backend: The browser backend performing the side effects
        _handlers: Command to coroutine dispatch table

    Example:
        executor = CommandExecutor(backend)

        intent = Intent(command=CommandType.CLOSE_TAB)
        result = await executor.execute(intent)
        print(result.response)  # "Tab closed"
    """

    def __init__(self, backend: BrowserBackend):
        """Initialize the command executor with a backend."""
        self._backend = backend

        # Map commands to handler methods
        self._handlers: Dict[CommandType, Callable[[Intent], Awaitable[Dict[str, Any]]]] = {
            CommandType.OPEN_TAB: self._execute_open_tab,
            CommandType.CLOSE_TAB: self._execute_close_tab,
            CommandType.SWITCH_TAB: self._execute_switch_tab,
            CommandType.RELOAD_TAB: self._execute_reload_tab,
            CommandType.NAVIGATE: self._execute_navigate,
            CommandType.SEARCH: self._execute_search,
            CommandType.SCROLL: self._execute_scroll,
            CommandType.CLICK: self._execute_click,
            CommandType.FILL: self._execute_fill,
            CommandType.BOOKMARK: self._execute_bookmark,
            CommandType.WINDOW: self._execute_window,
        }

    @property
    def backend(self) -> BrowserBackend:
        return self._backend

    async def execute(self, intent: Intent) -> CommandResult:
        """Execute an intent once.

        Args:
            intent: The parsed intent to execute.

        Returns:
            A successful CommandResult carrying the backend's message.

        Raises:
            UnknownCommandError: If the command has no handler.
            ExecutionFailure: If the backend could not perform the action.
        """
        name = _command_name(intent)
        logger.debug(f"Executing command: {name} with params: {dict(intent.params)}")

        handler = self._handlers.get(intent.command)
        if handler is None:
            logger.warning(f"Unknown command: {name}")
            raise UnknownCommandError(f"Unknown command: {name}")

        try:
            outcome = await handler(intent)
        except ExecutionFailure:
            raise
        except KeyError as e:
            raise ExecutionFailure(f"Missing parameter {e} for {name}") from e
        except Exception as e:
            logger.error(f"Error executing {name}: {e}", exc_info=True)
            raise ExecutionFailure(str(e)) from e

        outcome = dict(outcome or {})
        message = outcome.pop("message", None) or DEFAULT_SUCCESS_MESSAGE
        logger.debug(f"Command {name} succeeded: {message}")
        return CommandResult.success_result(
            response=message,
            data={"command": name, "params": dict(intent.params), **outcome}
        )

    async def execute_with_retry(self, intent: Intent,
                                 max_attempts: Optional[int] = None,
                                 delay: Optional[float] = None,
                                 cancel_event: Optional[asyncio.Event] = None) -> CommandResult:
        """Execute an intent, replaying it after failures.

        The same intent object is re-sent on every attempt; the transcript
        is never parsed again. Intermediate failures are logged and
        swallowed, the last one is raised.

        Args:
            intent: The parsed intent to execute.
            max_attempts: Total attempts, defaults to RETRY_MAX_ATTEMPTS.
            delay: Seconds between attempts, defaults to RETRY_DELAY_MS.
            cancel_event: When set, no further attempt is started.

        Returns:
            The first successful CommandResult.

        Raises:
            UnknownCommandError: Immediately, since replaying cannot help.
            DispatchCancelled: If cancel_event was set between attempts.
            ExecutionFailure: The last failure once attempts are exhausted.
        """
        attempts = RETRY_MAX_ATTEMPTS if max_attempts is None else max_attempts
        attempts = max(1, attempts)
        pause = RETRY_DELAY_MS / 1000.0 if delay is None else delay
        name = _command_name(intent)

        last_error: Optional[ExecutionFailure] = None
        for attempt in range(1, attempts + 1):
            try:
                return await self.execute(intent)
            except UnknownCommandError:
                raise
            except ExecutionFailure as e:
                last_error = e
                logger.warning(f"Command {name} attempt {attempt}/{attempts} failed: {e}")

            if attempt == attempts:
                break

            if await self._cancelled_during(pause, cancel_event):
                logger.info(f"Retries for {name} cancelled after attempt {attempt}")
                raise DispatchCancelled(f"Cancelled after {attempt} attempt(s): {last_error}") from last_error

        raise last_error

    @staticmethod
    async def _cancelled_during(pause: float, cancel_event: Optional[asyncio.Event]) -> bool:
        """Sleep between attempts; return True if cancellation was requested."""
        if cancel_event is None:
            await asyncio.sleep(pause)
            return False

        if cancel_event.is_set():
            return True

        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=pause)
        except asyncio.TimeoutError:
            return False
        return True

    # -------------------------------------------------------------------------
    # Command handlers
    # -------------------------------------------------------------------------

    async def _execute_open_tab(self, intent: Intent) -> Dict[str, Any]:
        return await self._backend.open_tab(intent.params["url"])

    async def _execute_close_tab(self, intent: Intent) -> Dict[str, Any]:
        return await self._backend.close_tab()

    async def _execute_switch_tab(self, intent: Intent) -> Dict[str, Any]:
        direction = intent.params["direction"]
        if direction not in ("next", "previous"):
            raise ExecutionFailure("Invalid direction")
        return await self._backend.switch_tab(direction)

    async def _execute_reload_tab(self, intent: Intent) -> Dict[str, Any]:
        return await self._backend.reload_tab()

    async def _execute_navigate(self, intent: Intent) -> Dict[str, Any]:
        return await self._backend.navigate(intent.params["url"])

    async def _execute_search(self, intent: Intent) -> Dict[str, Any]:
        return await self._backend.search(
            intent.params["query"],
            intent.params.get("engine", "google")
        )

    async def _execute_scroll(self, intent: Intent) -> Dict[str, Any]:
        return await self._backend.scroll(
            intent.params["direction"],
            int(intent.params.get("amount", 500))
        )

    async def _execute_click(self, intent: Intent) -> Dict[str, Any]:
        return await self._backend.click(intent.params["selector"])

    async def _execute_fill(self, intent: Intent) -> Dict[str, Any]:
        return await self._backend.fill(intent.params["selector"], intent.params["value"])

    async def _execute_bookmark(self, intent: Intent) -> Dict[str, Any]:
        action = intent.params["action"]
        if action not in ("add", "remove"):
            raise ExecutionFailure(f"Invalid bookmark action: {action}")
        return await self._backend.bookmark(action)

    async def _execute_window(self, intent: Intent) -> Dict[str, Any]:
        action = intent.params["action"]
        if action not in ("minimize", "maximize"):
            raise ExecutionFailure(f"Invalid window action: {action}")
        return await self._backend.window(action)
