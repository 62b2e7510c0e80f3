"""Exceptions raised while dispatching intents to a browser backend.

The parser never raises; only the execution side does.
"""


class ExecutionFailure(RuntimeError):
    """A backend could not carry out a command."""


class UnknownCommandError(ExecutionFailure):
    """The executor has no handler for the intent's command."""


class DispatchCancelled(ExecutionFailure):
    """A retry sequence was stopped before it succeeded."""


class BackendUnavailableError(ExecutionFailure):
    """The browser backend is not started or has gone away."""
