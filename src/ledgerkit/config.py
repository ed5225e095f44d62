"""Settings loaded from the environment."""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"


class SettingsError(ValueError):
    """Invalid configuration value."""


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration.

    Immutable once loaded; tests build their own instances.
    """

    db_path: Optional[str] = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    enable_test_reset: bool = True


def load_settings() -> Settings:
    """Build Settings from LEDGERKIT_* environment variables.

    Raises:
        SettingsError: If LEDGERKIT_PORT is not an integer
    """
    port_value = os.environ.get("LEDGERKIT_PORT", str(DEFAULT_PORT))
    try:
        port = int(port_value)
    except ValueError as e:
        raise SettingsError(f"LEDGERKIT_PORT must be an integer, got '{port_value}'") from e

    return Settings(
        db_path=os.environ.get("LEDGERKIT_DB_PATH") or None,
        host=os.environ.get("LEDGERKIT_HOST", DEFAULT_HOST),
        port=port,
        log_level=os.environ.get("LEDGERKIT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        enable_test_reset=_env_flag("LEDGERKIT_ENABLE_TEST_RESET", True),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them once."""
    return load_settings()
