"""
Configuration for actions marketplace synchronization.
"""

import os
from dataclasses import dataclass
from typing import Any

from .exceptions import ConfigError

DEFAULT_TAG_WINDOW = 10
# Roughly a 64KB UTF-16 property limit in the remote store
DEFAULT_PAYLOAD_WARNING_CHARS = 32000
DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass
class SyncConfig:
    """Policy and connection settings for a sync run."""

    api_url: str | None = None
    function_key: str | None = None
    tag_window: int = DEFAULT_TAG_WINDOW
    payload_warning_chars: int = DEFAULT_PAYLOAD_WARNING_CHARS
    max_uploads: int | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self):
        """Validate policy values."""
        if self.tag_window < 1:
            raise ConfigError(f"tag_window must be positive, got {self.tag_window}")
        if self.payload_warning_chars < 1:
            raise ConfigError(
                "payload_warning_chars must be positive, "
                f"got {self.payload_warning_chars}"
            )
        if self.max_uploads is not None and self.max_uploads < 1:
            raise ConfigError(
                f"max_uploads must be a positive integer, got {self.max_uploads}"
            )
        if self.request_timeout <= 0:
            raise ConfigError(
                f"request_timeout must be positive, got {self.request_timeout}"
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> "SyncConfig":
        """
        Build configuration from environment variables.

        Explicit keyword overrides win over the environment; overrides set to
        None are ignored.

        Environment:
            ACTIONS_API_URL, ACTIONS_API_FUNCTION_KEY, SYNC_TAG_WINDOW,
            SYNC_PAYLOAD_WARNING_CHARS, SYNC_MAX_UPLOADS, ACTIONS_API_TIMEOUT
        """
        values: dict[str, Any] = {
            "api_url": os.getenv("ACTIONS_API_URL") or None,
            "function_key": os.getenv("ACTIONS_API_FUNCTION_KEY") or None,
            "tag_window": _env_number(
                "SYNC_TAG_WINDOW", int, DEFAULT_TAG_WINDOW
            ),
            "payload_warning_chars": _env_number(
                "SYNC_PAYLOAD_WARNING_CHARS", int, DEFAULT_PAYLOAD_WARNING_CHARS
            ),
            "max_uploads": _env_number("SYNC_MAX_UPLOADS", int, None),
            "request_timeout": _env_number(
                "ACTIONS_API_TIMEOUT", float, DEFAULT_REQUEST_TIMEOUT
            ),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _env_number(name: str, convert: type, default: Any) -> Any:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return convert(raw)
    except ValueError as e:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from e
