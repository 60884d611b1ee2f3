"""Exit-code and duration-flag helpers for click plugins."""

from .cli.duration import (
    Duration,
    DurationFlagConfig,
    DurationType,
    DurationUnit,
    default_for,
    duration_option,
    validate,
)
from .cli.error_handling import (
    compute_exit_code,
    is_gack,
    is_type_error,
    to_command_error,
)
from .cli.errors import (
    DurationBoundsError,
    InvalidDurationError,
    MessageNotFoundError,
    PluginKitError,
    UsageError,
)
from .cli.messages import Messages

__version__ = "0.1.0"
