"""Plugin error hierarchy with stable exit-code mapping."""

from __future__ import annotations

from typing import Optional


class PluginKitError(Exception):
    """Base error for expected plugin failures.

    Carries the optional fields the structured error report reads:
    ``actions``, ``context``, ``data`` and an explicit ``cause``.
    """

    exit_code = 1

    def __init__(
        self,
        message: str,
        *,
        name: Optional[str] = None,
        actions: Optional[list[str]] = None,
        context: Optional[str] = None,
        data=None,
        cause: Optional[BaseException] = None,
        exit_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.name = name or type(self).__name__
        self.actions = actions
        self.context = context
        self.data = data
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(PluginKitError):
    exit_code = 2


class InvalidDurationError(UsageError):
    """Raised when a duration value is not an integer."""


class DurationBoundsError(UsageError):
    """Raised when a duration value falls outside its configured bounds."""

    def __init__(self, message: str, minimum=None, maximum=None, **kwargs):
        super().__init__(message, **kwargs)
        self.min = minimum
        self.max = maximum


class MessageNotFoundError(PluginKitError):
    exit_code = 1
