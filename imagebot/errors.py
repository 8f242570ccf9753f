"""
Error hierarchy.

Search errors are raised per message and handled by the message handler;
configuration errors are fatal at startup.
"""

import json
from typing import Any


class ImageBotError(Exception):
    """Base class for every error raised by ImageBot."""


# ── Search ────────────────────────────────────────────────────────────

class ImageSearchError(ImageBotError):
    """A single image search failed."""


class SearchTransportError(ImageSearchError):
    """The request could not be sent or its body could not be decoded."""


class UnexpectedResponseError(ImageSearchError):
    """The provider answered, but not with a string at the expected path."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Expected a string, got a '{_render(value)}'")


def _render(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"))
    except (TypeError, ValueError):
        return repr(value)


# ── Configuration ─────────────────────────────────────────────────────

class ConfigError(ImageBotError):
    """The process cannot start with the current configuration."""


class ConfigLoadError(ConfigError):
    """The config file is missing or unreadable."""


class ConfigParseError(ConfigError):
    """The config file is not valid TOML or has invalid fields."""


class StartupConfigError(ConfigError):
    """The settings are individually valid but inconsistent."""
