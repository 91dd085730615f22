"""
Unit tests for application settings
"""

import pytest
from pydantic import ValidationError

from spreadsheet_grid.config.cors_config import get_cors_config, validate_cors_origins
from spreadsheet_grid.config.logging_config import _parse_size
from spreadsheet_grid.config.settings import EditSwitchPolicy, OutOfBoundsPolicy, Settings


class TestSettings:

    def test_defaults(self, settings):
        assert settings.GRID_ROWS == 30
        assert settings.GRID_COLUMNS == 26
        assert settings.MIN_COLUMN_WIDTH == 50
        assert settings.MIN_ROW_HEIGHT == 20
        assert settings.SYNC_TIMEOUT is None
        assert settings.EDIT_SWITCH_POLICY == EditSwitchPolicy.DISCARD
        assert settings.OUT_OF_BOUNDS_POLICY == OutOfBoundsPolicy.REJECT
        assert settings.GUARD_STALE_RESPONSES is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("EDIT_SWITCH_POLICY", "commit")
        monkeypatch.setenv("GUARD_STALE_RESPONSES", "false")
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.EDIT_SWITCH_POLICY == EditSwitchPolicy.COMMIT
        assert settings.GUARD_STALE_RESPONSES is False
        assert settings.CORS_ORIGINS == ["http://a.test", "http://b.test"]
        assert settings.LOG_LEVEL == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="LOUD")

    def test_invalid_dimensions(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, GRID_ROWS=0)

    def test_default_sizes_must_respect_minimums(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, DEFAULT_ROW_HEIGHT=10)

    def test_config_dictionaries(self, settings):
        assert settings.get_grid_config()["default_column_width"] == 100
        assert settings.get_sync_config()["timeout"] is None


class TestCorsAndLogging:

    def test_development_cors_is_permissive(self):
        config = get_cors_config(Settings(_env_file=None, DEBUG=True))
        assert config["allow_origins"] == ["*"]

    def test_origins_are_normalized(self):
        assert validate_cors_origins(["localhost:3000", "example.com/", " "]) == [
            "http://localhost:3000",
            "https://example.com",
        ]

    @pytest.mark.parametrize("size,expected", [
        ("10MB", 10 * 1024 ** 2),
        ("512KB", 512 * 1024),
        ("100", 100),
        ("junk", 10 * 1024 ** 2),
    ])
    def test_parse_size(self, size, expected):
        assert _parse_size(size) == expected
