"""Environment-driven settings for pluginkit."""

from __future__ import annotations

from typing import Optional

from dataclasses import dataclass
import logging
import os

DEFAULT_LOCALE = "en_US"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    locale: str = DEFAULT_LOCALE
    debug: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from PLUGINKIT_* environment variables."""

        locale = os.environ.get("PLUGINKIT_LOCALE", "").strip() or DEFAULT_LOCALE
        debug_env = os.environ.get("PLUGINKIT_DEBUG", "").lower()
        return cls(locale=locale, debug=debug_env in ("1", "true", "yes"))


def configure_logging(*, verbose: bool = False, settings: Optional[Settings] = None) -> None:
    settings = settings or Settings.from_env()
    level = logging.DEBUG if verbose or settings.debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("logging configured at %s", logging.getLevelName(level))
