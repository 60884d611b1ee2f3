"""Exit-code resolution and error classification.

Errors may be live exceptions or mapping records (for example a serialized
error loaded from JSON). Every field is read through ``_field`` which returns
``_MISSING`` instead of raising, so the predicates work on partial objects.
"""

from __future__ import annotations

from typing import Iterator, Mapping, Optional

import logging
import re
import traceback

import click

from .errors import PluginKitError
from .util import remove_empty

GACK_EXIT_CODE = 20
TYPE_ERROR_EXIT_CODE = 10
DEFAULT_EXIT_CODE = 1

# see tests for samples
_GACK_PATTERN = re.compile(r"\d{9,}-\d{3,} \(-?\d{7,}\)")

_MISSING = object()

logger = logging.getLogger(__name__)


def _is_error_like(value) -> bool:
    return isinstance(value, (BaseException, Mapping))


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _field(error, *names: str):
    for name in names:
        if isinstance(error, Mapping):
            if name in error:
                return error[name]
        elif hasattr(error, name):
            return getattr(error, name)
    return _MISSING


def _message(error) -> str:
    message = _field(error, "message")
    if isinstance(message, str):
        return message
    if isinstance(error, BaseException):
        return str(error)
    return ""


def _stack(error) -> Optional[str]:
    stack = _field(error, "stack")
    if isinstance(stack, str):
        return stack
    if isinstance(error, BaseException):
        # chain=False keeps causes out; they are walked separately
        return "".join(
            traceback.format_exception(type(error), error, error.__traceback__, chain=False)
        )
    return None


def _name(error) -> Optional[str]:
    # builtins such as AttributeError use .name for the missing attribute
    if isinstance(error, PluginKitError):
        return error.name
    if isinstance(error, BaseException):
        return type(error).__name__
    name = _field(error, "name")
    return name if isinstance(name, str) else None


def _cause(error):
    cause = _field(error, "cause")
    if _is_error_like(cause):
        return cause
    if isinstance(error, BaseException) and error.__cause__ is not None:
        return error.__cause__
    return None


def iter_cause_chain(error) -> Iterator:
    """Yield ``error`` and each error down its cause chain.

    Stops on a node already visited, so cyclic chains terminate.
    """

    seen: set[int] = set()
    current = error
    while current is not None:
        if id(current) in seen:
            logger.debug("cause chain cycle detected at %r", current)
            return
        seen.add(id(current))
        yield current
        current = _cause(current)


def _looks_like_gack(error) -> bool:
    if _GACK_PATTERN.search(_message(error)):
        return True
    stack = _stack(error)
    return isinstance(stack, str) and bool(_GACK_PATTERN.search(stack))


def _looks_like_type_error(error) -> bool:
    if isinstance(error, TypeError) or _name(error) == "TypeError":
        return True
    if "TypeError" in _message(error):
        return True
    stack = _stack(error)
    return bool(stack and "TypeError" in stack)


def is_gack(error) -> bool:
    """Identify gacks in the message, the stack, or anywhere down the cause chain."""

    return any(_looks_like_gack(node) for node in iter_cause_chain(error))


def is_type_error(error) -> bool:
    """Identify TypeErrors in the error itself or anywhere down the cause chain."""

    return any(_looks_like_type_error(node) for node in iter_cause_chain(error))


def _framework_exit(error) -> Optional[int]:
    if isinstance(error, (click.exceptions.Exit, click.ClickException)):
        return error.exit_code
    if isinstance(error, SystemExit):
        return error.code if _is_int(error.code) else None
    marker = _field(error, "oclif")
    if isinstance(marker, Mapping) and _is_int(marker.get("exit")):
        return marker["exit"]
    return None


def compute_exit_code(error, default_exit_code: Optional[int] = None) -> int:
    """Take an error and return an exit code.

    - gacks always map to 20
    - TypeErrors always map to 10
    - exit code carried by a click/SystemExit exception or an ``oclif`` marker
    - the ``exit_code`` field if it is an int
    - the ``code`` field if it is an int, or 1 if present but not an int
    - ``default_exit_code`` if it is an int
    - otherwise 1
    """

    if is_gack(error):
        logger.debug("classified %r as gack", error)
        return GACK_EXIT_CODE

    if is_type_error(error):
        logger.debug("classified %r as TypeError", error)
        return TYPE_ERROR_EXIT_CODE

    framework_exit = _framework_exit(error)
    if framework_exit is not None:
        return framework_exit

    exit_code = _field(error, "exit_code", "exitCode")
    if _is_int(exit_code):
        return exit_code

    code = _field(error, "code")
    if code is not _MISSING:
        return code if _is_int(code) else DEFAULT_EXIT_CODE

    return default_exit_code if _is_int(default_exit_code) else DEFAULT_EXIT_CODE


def _optional(error, *names: str):
    value = _field(error, *names)
    return None if value is _MISSING else value


def to_command_error(code: int, error, command_name: str) -> dict:
    """Normalize any error into the structured report emitted by commands."""

    context = _optional(error, "context")
    reported_command = _optional(error, "command_name", "commandName")
    report = remove_empty(
        {
            "code": code,
            "actions": _optional(error, "actions"),
            "context": command_name if context is None else context,
            "commandName": command_name if reported_command is None else reported_command,
            "data": _optional(error, "data"),
            "result": _optional(error, "result"),
        }
    )
    report.update(
        {
            "message": _message(error),
            "name": _name(error) or "Error",
            "status": code,
            "stack": _stack(error),
            "exitCode": code,
        }
    )
    return report
