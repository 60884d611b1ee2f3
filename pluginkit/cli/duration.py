"""Duration flag with built-in default and min/max validation.

A unit is required. The default is None unless ``default_value`` is given::

    @click.command()
    @duration_option("--wait", "-w", unit="minutes", min=1, default_value=33,
                     help="Wait time in minutes.")
    def deploy(wait: Duration):
        ...
"""

from __future__ import annotations

from typing import Optional

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
import logging
import re

import click

from .errors import DurationBoundsError, InvalidDurationError
from .messages import Messages

_BUNDLE = "pluginkit"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)

logger = logging.getLogger(__name__)


class DurationUnit(str, Enum):
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"


_MILLISECONDS_PER_UNIT = {
    DurationUnit.MILLISECONDS: 1,
    DurationUnit.SECONDS: 1000,
    DurationUnit.MINUTES: 60 * 1000,
    DurationUnit.HOURS: 60 * 60 * 1000,
    DurationUnit.DAYS: 24 * 60 * 60 * 1000,
    DurationUnit.WEEKS: 7 * 24 * 60 * 60 * 1000,
}


@dataclass(frozen=True)
class Duration:
    """An amount of time in a specific unit."""

    quantity: int
    unit: DurationUnit

    @classmethod
    def of(cls, quantity: int, unit) -> "Duration":
        return getattr(cls, DurationUnit(unit).value)(quantity)

    @classmethod
    def milliseconds(cls, quantity: int) -> "Duration":
        return cls(quantity, DurationUnit.MILLISECONDS)

    @classmethod
    def seconds(cls, quantity: int) -> "Duration":
        return cls(quantity, DurationUnit.SECONDS)

    @classmethod
    def minutes(cls, quantity: int) -> "Duration":
        return cls(quantity, DurationUnit.MINUTES)

    @classmethod
    def hours(cls, quantity: int) -> "Duration":
        return cls(quantity, DurationUnit.HOURS)

    @classmethod
    def days(cls, quantity: int) -> "Duration":
        return cls(quantity, DurationUnit.DAYS)

    @classmethod
    def weeks(cls, quantity: int) -> "Duration":
        return cls(quantity, DurationUnit.WEEKS)

    @property
    def total_milliseconds(self) -> int:
        return self.quantity * _MILLISECONDS_PER_UNIT[self.unit]

    @property
    def total_seconds(self) -> float:
        return self.total_milliseconds / 1000

    def to_timedelta(self) -> timedelta:
        return timedelta(milliseconds=self.total_milliseconds)

    def __str__(self) -> str:
        label = self.unit.value
        if abs(self.quantity) == 1:
            label = label[:-1]
        return f"{self.quantity} {label}"


@dataclass(frozen=True)
class DurationFlagConfig:
    unit: DurationUnit
    default_value: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None

    def __post_init__(self):
        try:
            unit = DurationUnit(self.unit)
        except ValueError as exc:
            choices = ", ".join(member.value for member in DurationUnit)
            raise ValueError(
                f"unknown duration unit '{self.unit}' (expected one of: {choices})"
            ) from exc
        object.__setattr__(self, "unit", unit)


def _parse_int(raw_input) -> Optional[int]:
    """Parse the leading base-10 integer of ``raw_input``; "5abc" gives 5."""

    match = _LEADING_INT.match(str(raw_input))
    if match is None:
        return None
    return int(match.group(1))


def _bound_label(bound: Optional[int]):
    return "unbounded" if bound is None else bound


def validate(raw_input: str, config: DurationFlagConfig) -> Duration:
    """Parse ``raw_input`` into a Duration in ``config.unit``.

    Bounds of 0 are falsy and are not enforced.
    """

    messages = Messages.load(_BUNDLE)
    parsed = _parse_int(raw_input)
    if parsed is None:
        raise messages.create_error(
            "errors.InvalidDuration", error_cls=InvalidDurationError
        )

    bounds = (_bound_label(config.min), _bound_label(config.max))
    if config.min and parsed < config.min:
        raise messages.create_error(
            "errors.DurationBounds",
            bounds,
            bounds,
            error_cls=DurationBoundsError,
            minimum=config.min,
            maximum=config.max,
        )
    if config.max and parsed > config.max:
        raise messages.create_error(
            "errors.DurationBounds",
            bounds,
            bounds,
            error_cls=DurationBoundsError,
            minimum=config.min,
            maximum=config.max,
        )
    return Duration.of(parsed, config.unit)


def default_for(config: DurationFlagConfig) -> Optional[Duration]:
    if config.default_value:
        return Duration.of(config.default_value, config.unit)
    return None


class DurationType(click.ParamType):
    name = "duration"

    def __init__(self, config: DurationFlagConfig):
        self.config = config

    def get_metavar(self, param, *args, **kwargs) -> str:
        return self.config.unit.value.upper()

    def convert(self, value, param, ctx):
        if isinstance(value, Duration):
            return value
        try:
            return validate(value, self.config)
        except (InvalidDurationError, DurationBoundsError) as exc:
            logger.debug("rejected duration %r: %s", value, exc)
            self.fail(str(exc), param, ctx)


def duration_option(
    *param_decls: str,
    unit,
    default_value: Optional[int] = None,
    min: Optional[int] = None,
    max: Optional[int] = None,
    **attrs,
):
    """click.option for a Duration value with unit, default and bounds."""

    config = DurationFlagConfig(
        unit=unit, default_value=default_value, min=min, max=max
    )
    attrs.setdefault("type", DurationType(config))
    attrs.setdefault("default", lambda: default_for(config))
    if default_value:
        attrs.setdefault("show_default", str(default_for(config)))
    return click.option(*param_decls, **attrs)
