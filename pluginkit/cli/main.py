"""Click-based diagnostic command line interface for pluginkit."""

from __future__ import annotations

from typing import Optional

from collections.abc import Mapping
import json
import logging
import sys

import click

from .config import configure_logging
from .duration import DurationFlagConfig, DurationUnit, validate
from .error_handling import compute_exit_code, is_gack, is_type_error, to_command_error
from .errors import UsageError
from .messages import Messages
from .output import CLIContext, emit_error, emit_success

_KNOWN_COMMANDS = {"classify", "parse-duration"}

logger = logging.getLogger(__name__)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--json", "json_output", is_flag=True, help="Output machine-readable JSON.")
@click.option("--verbose", is_flag=True, help="Enable debug logging and error stacks.")
@click.pass_context
def cli(ctx: click.Context, json_output: bool, verbose: bool):
    """pluginkit error and duration diagnostics."""

    configure_logging(verbose=verbose)
    ctx.obj = CLIContext(json_output=json_output, verbose=verbose)


def _run_command(ctx_cfg: CLIContext, command_name: str, action):
    try:
        payload = action() or {}
    except click.ClickException:
        raise
    except Exception as exc:
        exit_code = compute_exit_code(exc)
        logger.debug("%s failed with exit code %s", command_name, exit_code, exc_info=True)
        emit_error(ctx_cfg, command_name, to_command_error(exit_code, exc, command_name))
        raise SystemExit(exit_code) from exc
    emit_success(ctx_cfg, command_name, payload)


def _context_from_args(args: list[str]) -> CLIContext:
    return CLIContext(json_output="--json" in args, verbose="--verbose" in args)


def _infer_command_from_args(args: list[str]) -> str:
    for token in args:
        if token in _KNOWN_COMMANDS:
            return token
    return "cli"


def _load_error_record(source: str) -> Mapping:
    messages = Messages.load("pluginkit")
    try:
        if source == "-":
            record = json.load(sys.stdin)
        else:
            with open(source, "r", encoding="utf-8") as handle:
                record = json.load(handle)
    except (OSError, ValueError) as exc:
        raise messages.create_error(
            "errors.InvalidErrorRecord", (source, exc), error_cls=UsageError, cause=exc
        ) from exc

    if not isinstance(record, Mapping):
        raise messages.create_error(
            "errors.InvalidErrorRecord",
            (source, "expected a JSON object"),
            error_cls=UsageError,
        )
    return record


@cli.command("classify")
@click.option(
    "--in",
    "input_path",
    required=True,
    help="JSON error record path, or - for stdin.",
)
@click.option("--command-name", default="classify", show_default=True)
@click.option(
    "--default-exit-code",
    type=int,
    help="Exit code used when the record carries none.",
)
@click.pass_obj
def classify_command(
    ctx_cfg: CLIContext,
    input_path: str,
    command_name: str,
    default_exit_code: Optional[int],
):
    """Classify a serialized error and compute its exit code."""

    def _action():
        record = _load_error_record(input_path)
        exit_code = compute_exit_code(record, default_exit_code)
        return {
            "message": f"exit code {exit_code}",
            "data": {
                "gack": is_gack(record),
                "type_error": is_type_error(record),
                "exit_code": exit_code,
                "report": to_command_error(exit_code, record, command_name),
            },
        }

    _run_command(ctx_cfg, "classify", _action)


@cli.command("parse-duration")
@click.argument("value")
@click.option(
    "--unit",
    type=click.Choice([unit.value for unit in DurationUnit], case_sensitive=False),
    required=True,
)
@click.option("--min", "minimum", type=int, help="Smallest accepted value.")
@click.option("--max", "maximum", type=int, help="Largest accepted value.")
@click.pass_obj
def parse_duration_command(
    ctx_cfg: CLIContext,
    value: str,
    unit: str,
    minimum: Optional[int],
    maximum: Optional[int],
):
    """Validate a duration value against a unit and optional bounds."""

    def _action():
        config = DurationFlagConfig(unit=unit.lower(), min=minimum, max=maximum)
        duration = validate(value, config)
        return {
            "message": f"parsed {duration}",
            "data": {
                "quantity": duration.quantity,
                "unit": duration.unit.value,
                "seconds": duration.total_seconds,
            },
        }

    _run_command(ctx_cfg, "parse-duration", _action)


def main(argv: Optional[list[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    ctx_cfg = _context_from_args(args)
    command = _infer_command_from_args(args)

    try:
        cli.main(args=args, prog_name="pluginkit", standalone_mode=False)
        return 0
    except SystemExit as exc:
        if isinstance(exc.code, int):
            return exc.code
        return 1
    except click.ClickException as exc:
        exit_code = compute_exit_code(exc)
        if ctx_cfg.json_output:
            report = to_command_error(exit_code, exc, command)
            report["message"] = exc.format_message()
            emit_error(ctx_cfg, command, report)
        else:
            exc.show()
        return exit_code
    except click.exceptions.Abort as exc:
        exit_code = compute_exit_code(exc)
        emit_error(ctx_cfg, command, to_command_error(exit_code, exc, command))
        return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
