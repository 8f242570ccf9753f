"""
Configuration tests — TOML loading, validation and environment overrides.
"""

import pytest

from imagebot.config import DEFAULT_CONFIG_PATH, Settings, load_settings, resolve_config_path
from imagebot.errors import ConfigError, ConfigLoadError, ConfigParseError

VALID_TOML = """
discord_api_key = "discord-token"
image_search_api_key = "search-key"
google_cx_id = "cx-123"
use_google_search = true
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "ImageBot.toml"
    path.write_text(VALID_TOML, encoding="utf-8")
    return path


class TestLoadSettings:
    def test_valid_file(self, config_file):
        settings = load_settings(config_file)
        assert settings.discord_api_key == "discord-token"
        assert settings.image_search_api_key == "search-key"
        assert settings.google_cx_id == "cx-123"
        assert settings.use_google_search is True

    def test_defaults(self, config_file):
        settings = load_settings(config_file)
        assert settings.log_level == "INFO"
        assert settings.log_json is False
        assert settings.http_timeout == 15.0

    def test_cx_id_optional(self, tmp_path):
        path = tmp_path / "ImageBot.toml"
        path.write_text(
            'discord_api_key = "d"\nimage_search_api_key = "s"\nuse_google_search = false\n',
            encoding="utf-8",
        )
        settings = load_settings(path)
        assert settings.google_cx_id is None
        assert settings.has_cx_id is False

    def test_accepts_str_path(self, config_file):
        assert load_settings(str(config_file)).use_google_search is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigLoadError):
            load_settings(tmp_path / "nope.toml")

    def test_directory_is_load_error(self, tmp_path):
        with pytest.raises(ConfigLoadError):
            load_settings(tmp_path)

    def test_malformed_toml(self, tmp_path):
        path = tmp_path / "ImageBot.toml"
        path.write_text('discord_api_key = "unterminated\n', encoding="utf-8")
        with pytest.raises(ConfigParseError):
            load_settings(path)

    def test_missing_required_field(self, tmp_path):
        path = tmp_path / "ImageBot.toml"
        path.write_text('discord_api_key = "d"\nuse_google_search = false\n', encoding="utf-8")
        with pytest.raises(ConfigParseError) as exc_info:
            load_settings(path)
        assert "image_search_api_key" in str(exc_info.value)

    def test_wrong_type(self, tmp_path):
        path = tmp_path / "ImageBot.toml"
        path.write_text(
            'discord_api_key = "d"\nimage_search_api_key = "s"\nuse_google_search = "maybe"\n',
            encoding="utf-8",
        )
        with pytest.raises(ConfigParseError):
            load_settings(path)

    def test_errors_share_base(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(tmp_path / "nope.toml")

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "ImageBot.toml"
        path.write_text(VALID_TOML + 'legacy_option = 1\n', encoding="utf-8")
        assert load_settings(path).discord_api_key == "discord-token"


class TestEnvironmentOverrides:
    def test_env_overrides_file(self, config_file, monkeypatch):
        monkeypatch.setenv("IMAGEBOT_USE_GOOGLE_SEARCH", "false")
        monkeypatch.setenv("IMAGEBOT_LOG_LEVEL", "DEBUG")
        settings = load_settings(config_file)
        assert settings.use_google_search is False
        assert settings.log_level == "DEBUG"
        assert settings.discord_api_key == "discord-token"

    def test_env_supplies_missing_field(self, tmp_path, monkeypatch):
        path = tmp_path / "ImageBot.toml"
        path.write_text('image_search_api_key = "s"\nuse_google_search = false\n', encoding="utf-8")
        monkeypatch.setenv("IMAGEBOT_DISCORD_API_KEY", "from-env")
        assert load_settings(path).discord_api_key == "from-env"

    def test_config_path_env(self, config_file, monkeypatch):
        monkeypatch.setenv("IMAGEBOT_CONFIG", str(config_file))
        assert resolve_config_path() == config_file
        assert load_settings().google_cx_id == "cx-123"

    def test_explicit_path_beats_env(self, config_file, monkeypatch, tmp_path):
        monkeypatch.setenv("IMAGEBOT_CONFIG", str(tmp_path / "other.toml"))
        assert resolve_config_path(config_file) == config_file

    def test_default_path(self):
        assert str(resolve_config_path()) == str(resolve_config_path(DEFAULT_CONFIG_PATH))


class TestSettings:
    def test_frozen(self):
        settings = Settings(discord_api_key="d", image_search_api_key="s", use_google_search=False)
        with pytest.raises(Exception):
            settings.discord_api_key = "other"

    def test_has_cx_id(self):
        settings = Settings(
            discord_api_key="d", image_search_api_key="s", use_google_search=True, google_cx_id="x"
        )
        assert settings.has_cx_id is True

    def test_init_kwargs_beat_env(self, monkeypatch):
        monkeypatch.setenv("IMAGEBOT_DISCORD_API_KEY", "from-env")
        monkeypatch.setenv("IMAGEBOT_USE_GOOGLE_SEARCH", "true")
        settings = Settings(
            discord_api_key="from-init", image_search_api_key="s", use_google_search=False
        )
        assert settings.discord_api_key == "from-init"
        assert settings.use_google_search is False

    def test_env_fills_fields_not_given(self, monkeypatch):
        monkeypatch.setenv("IMAGEBOT_LOG_JSON", "true")
        settings = Settings(discord_api_key="d", image_search_api_key="s", use_google_search=False)
        assert settings.log_json is True

    def test_no_file_without_load_settings(self, tmp_path, monkeypatch):
        (tmp_path / "ImageBot.toml").write_text('log_level = "DEBUG"\n', encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        settings = Settings(discord_api_key="d", image_search_api_key="s", use_google_search=False)
        assert settings.log_level == "INFO"
