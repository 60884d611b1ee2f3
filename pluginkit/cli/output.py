"""Output helpers for consistent human and JSON CLI responses."""

from __future__ import annotations

from typing import Optional

from dataclasses import dataclass
from datetime import datetime, timezone
import json

import click

SCHEMA_VERSION = "1.0.0"


@dataclass
class CLIContext:
    json_output: bool
    verbose: bool


def _schema_key(command: str, kind: str) -> str:
    normalized = command.strip().replace(" ", "_").replace("-", "_")
    return f"pluginkit.cli.{normalized}.{kind}.v1"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def emit_success(ctx: CLIContext, command: str, payload: Optional[dict] = None) -> None:
    payload = payload or {}
    output = {
        "ok": True,
        "command": command,
        "schema_version": SCHEMA_VERSION,
        "schema": _schema_key(command, "success"),
        "generated_at": _timestamp(),
        "message": payload.get("message", f"{command} completed"),
        "data": payload.get("data"),
        "warnings": payload.get("warnings", []),
        "errors": [],
    }

    if ctx.json_output:
        click.echo(json.dumps(output, indent=2, default=str))
        return

    click.echo(output["message"])
    data = output["data"]
    if isinstance(data, dict):
        for key in sorted(data.keys()):
            if key == "report":
                continue
            click.echo(f"{key}: {data[key]}")

    for warning in output["warnings"]:
        click.echo(f"warning: {warning}")


def emit_error(ctx: CLIContext, command: str, report: dict) -> None:
    """Emit a structured error report built by ``to_command_error``."""

    output = {
        "ok": False,
        "command": command,
        "schema_version": SCHEMA_VERSION,
        "schema": _schema_key(command, "error"),
        "generated_at": _timestamp(),
        "message": report["message"],
        "data": None,
        "warnings": [],
        "errors": [report],
    }

    if ctx.json_output:
        click.echo(json.dumps(output, indent=2, default=str))
        return

    click.echo(f"error: {report['message']}", err=True)
    for action in report.get("actions") or []:
        click.echo(f"try this: {action}", err=True)
    if ctx.verbose and report.get("stack"):
        click.echo(report["stack"].rstrip(), err=True)
