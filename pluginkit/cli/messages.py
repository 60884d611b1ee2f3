"""Localized message catalog lookups and catalog-backed error construction."""

from __future__ import annotations

from typing import Optional, Sequence

from functools import lru_cache
from pathlib import Path
import json
import logging

from .config import DEFAULT_LOCALE, Settings
from .errors import MessageNotFoundError, PluginKitError

_CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "messages.json"
_ERROR_KEY_PREFIXES = ("errors.", "error.")

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _read_catalog(path: Path = _CATALOG_PATH) -> dict:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _format(template: str, tokens: Sequence) -> str:
    if not tokens:
        return template
    return template % tuple(tokens)


def error_name_for_key(key: str) -> str:
    """Derive an error name from a catalog key: errors.Foo -> FooError."""

    name = key
    for prefix in _ERROR_KEY_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix) :]
            break
    return name if name.endswith("Error") else f"{name}Error"


class Messages:
    """Messages of one bundle in one locale."""

    def __init__(self, bundle: str, locale: str, entries: dict):
        self.bundle = bundle
        self.locale = locale
        self._entries = entries

    @classmethod
    def load(
        cls,
        bundle: str,
        locale: Optional[str] = None,
        *,
        catalog: Optional[dict] = None,
    ) -> "Messages":
        catalog = _read_catalog() if catalog is None else catalog
        if bundle not in catalog:
            raise MessageNotFoundError(f"message bundle not found: {bundle}")

        locales = catalog[bundle]
        requested = locale or Settings.from_env().locale
        if requested not in locales:
            logger.debug(
                "locale %s missing from bundle %s, falling back to %s",
                requested,
                bundle,
                DEFAULT_LOCALE,
            )
            requested = DEFAULT_LOCALE
        if requested not in locales:
            raise MessageNotFoundError(
                f"bundle '{bundle}' has no messages for locale {requested}"
            )
        return cls(bundle, requested, locales[requested])

    def get(self, key: str, tokens: Sequence = ()) -> str:
        if key not in self._entries:
            raise MessageNotFoundError(
                f"message '{key}' not found in bundle '{self.bundle}' ({self.locale})"
            )
        template = self._entries[key]
        if not isinstance(template, str):
            raise MessageNotFoundError(f"message '{key}' is not a string")
        return _format(template, tokens)

    def get_actions(self, key: str, tokens: Sequence = ()) -> Optional[list[str]]:
        actions = self._entries.get(f"{key}.actions")
        if not actions:
            return None
        return [_format(action, tokens) for action in actions]

    def create_error(
        self,
        key: str,
        tokens: Sequence = (),
        action_tokens: Sequence = (),
        *,
        error_cls: type[PluginKitError] = PluginKitError,
        **kwargs,
    ) -> PluginKitError:
        """Build an error whose message and actions come from the catalog."""

        kwargs.setdefault("name", error_name_for_key(key))
        kwargs.setdefault("actions", self.get_actions(key, action_tokens))
        return error_cls(self.get(key, tokens), **kwargs)
