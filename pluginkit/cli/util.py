"""Small shared helpers."""

from __future__ import annotations

from typing import Mapping


def remove_empty(values: Mapping) -> dict:
    """Return a copy of ``values`` without the keys whose value is None."""

    return {key: value for key, value in values.items() if value is not None}
