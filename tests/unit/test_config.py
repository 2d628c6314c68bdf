"""
Unit Tests - Configuration
"""
import pytest
from pydantic import ValidationError

from catalog.config import Settings
from catalog.config.settings import DatabaseSettings, GenerationSettings


class TestDatabaseSettings:
    """Tests for DatabaseSettings"""

    def test_file_url(self):
        """Test a file path becomes an aiosqlite URL"""
        assert DatabaseSettings(path="catalog.sqlite").url == "sqlite+aiosqlite:///catalog.sqlite"

    def test_memory_url(self):
        """Test the memory marker selects an in-memory store"""
        assert DatabaseSettings(path=":memory:").url == "sqlite+aiosqlite://"

    def test_path_from_environment(self, monkeypatch):
        """Test DATABASE_PATH overrides the default file"""
        monkeypatch.setenv("DATABASE_PATH", "/tmp/other.sqlite")

        assert DatabaseSettings().path == "/tmp/other.sqlite"


class TestGenerationSettings:
    """Tests for GenerationSettings"""

    def test_defaults(self):
        """Test default count and batch size"""
        settings = GenerationSettings()

        assert settings.default_count == 1000
        assert settings.batch_size == 100
        assert settings.timeout_seconds is None

    def test_batch_size_must_be_positive(self):
        """Test a zero batch size is rejected"""
        with pytest.raises(ValidationError):
            GenerationSettings(batch_size=0)


class TestSettings:
    """Tests for Settings"""

    def test_environment_normalized(self):
        """Test the environment name is lower-cased"""
        assert Settings(app_env="Production").is_production

    def test_unknown_environment_rejected(self):
        """Test an unknown environment fails validation"""
        with pytest.raises(ValidationError):
            Settings(app_env="moon")

    def test_nested_sections(self, test_settings):
        """Test subsystem sections are available"""
        assert test_settings.database.path == ":memory:"
        assert test_settings.security.cors_origins == ["*"]
        assert test_settings.monitoring.log_format == "text"
