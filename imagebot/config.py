"""
Configuration — TOML file with environment overrides.

The file (``ImageBot.toml`` by default) holds the credentials and the
provider switch. Any field can be overridden with an ``IMAGEBOT_<FIELD>``
environment variable, e.g. ``IMAGEBOT_USE_GOOGLE_SEARCH=false``.
Explicit constructor arguments win over both.
"""

import logging
import os
from contextvars import ContextVar
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict, TomlConfigSettingsSource

from imagebot.errors import ConfigLoadError, ConfigParseError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "./ImageBot.toml"
CONFIG_PATH_ENV = "IMAGEBOT_CONFIG"

# File read by the TOML source while load_settings() builds a Settings
_config_file: ContextVar[Optional[Path]] = ContextVar("config_file", default=None)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="IMAGEBOT_", extra="ignore", frozen=True)

    # Credentials
    discord_api_key: str  # Discord bot token
    image_search_api_key: str  # Google API key or RapidAPI key, depending on provider

    # Provider selection
    google_cx_id: Optional[str] = None  # Programmable Search Engine id, Google only
    use_google_search: bool  # True = Google Custom Search, False = RapidAPI

    # HTTP
    http_timeout: float = 15.0  # Seconds per search request

    # Logging
    log_level: str = "INFO"
    log_json: bool = False  # One JSON object per log line

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=_config_file.get()),
        )

    @property
    def has_cx_id(self) -> bool:
        return bool(self.google_cx_id)


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Explicit path > ``IMAGEBOT_CONFIG`` > ``./ImageBot.toml``."""
    return Path(path or os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH)


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Read and validate the TOML config file.

    Raises:
        ConfigLoadError: the file is missing or cannot be read.
        ConfigParseError: the file is not TOML, or a field is missing/invalid.
    """
    config_path = resolve_config_path(path)

    # The TOML source skips missing files; a missing config is fatal here.
    if not config_path.is_file():
        raise ConfigLoadError(f"Error loading the config file {config_path}: not a file")

    token = _config_file.set(config_path)
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigParseError(f"Error parsing the config file {config_path}: {exc}") from exc
    except ValueError as exc:  # TOMLDecodeError, UnicodeDecodeError
        raise ConfigParseError(f"Error parsing the config file {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"Error loading the config file {config_path}: {exc}") from exc
    finally:
        _config_file.reset(token)

    logger.debug("[CONFIG] Loaded %s (use_google_search=%s)", config_path, settings.use_google_search)
    return settings
