"""Tests for plantlog.config and host path resolution.

Coverage:
- Settings defaults, TOML values and environment overrides
- Invalid TOML falls back to defaults with a warning
- get_db_path resolution order
- open_store() against configured SQLite path
"""

import logging
from pathlib import Path

import pytest

from plantlog.config import Settings, get_config_path, load_toml_config
from plantlog.core import open_store
from plantlog.host.environment import get_db_path


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        '[storage]\n'
        f'database_path = "{(tmp_path / "from-toml.db").as_posix()}"\n'
        '\n'
        '[export]\n'
        f'directory = "{(tmp_path / "exports").as_posix()}"\n'
        '\n'
        '[logging]\n'
        'level = "debug"\n'
    )
    return path


class TestSettings:
    """Settings resolution."""

    def test_defaults_without_config_file(self, tmp_path):
        settings = Settings(config_path=tmp_path / "absent.toml")

        assert settings.database_path == Path("./plantlog.db")
        assert settings.export_dir == Path.cwd()
        assert settings.log_level == "warning"

    def test_values_from_toml(self, config_file, tmp_path):
        settings = Settings(config_path=config_file)

        assert settings.database_path == tmp_path / "from-toml.db"
        assert settings.export_dir == tmp_path / "exports"
        assert settings.log_level == "debug"

    def test_environment_overrides_toml(self, config_file, tmp_path, monkeypatch):
        monkeypatch.setenv("PLANTLOG_DB", str(tmp_path / "from-env.db"))
        monkeypatch.setenv("PLANTLOG_EXPORT_DIR", str(tmp_path / "env-exports"))
        monkeypatch.setenv("PLANTLOG_LOG_LEVEL", "error")

        settings = Settings(config_path=config_file)

        assert settings.database_path == tmp_path / "from-env.db"
        assert settings.export_dir == tmp_path / "env-exports"
        assert settings.log_level == "error"

    def test_invalid_toml_warns_and_uses_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[storage\n")

        with pytest.warns(UserWarning, match="Failed to load config"):
            settings = Settings(config_path=path)

        assert settings.database_path == Path("./plantlog.db")

    def test_get_with_default(self, tmp_path):
        settings = Settings(config_path=tmp_path / "absent.toml")

        assert settings.get("log_level") == "warning"
        assert settings.get("missing", 5) == 5

    def test_config_path_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PLANTLOG_CONFIG", str(tmp_path / "custom.toml"))

        assert get_config_path() == tmp_path / "custom.toml"
        assert get_config_path(Path("/explicit.toml")) == Path("/explicit.toml")

    def test_load_toml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_toml_config(tmp_path / "absent.toml")


class TestGetDbPath:
    """Database path resolution order."""

    def test_default(self):
        assert get_db_path() == Path("./plantlog.db")

    def test_configured_path_used_without_env(self):
        assert get_db_path("/srv/plants.db") == Path("/srv/plants.db")

    def test_data_dir_beats_configured(self, monkeypatch):
        monkeypatch.setenv("PLANTLOG_DATA_DIR", "/data")

        assert get_db_path("/srv/plants.db") == Path("/data/plantlog.db")

    def test_explicit_db_beats_data_dir(self, monkeypatch):
        monkeypatch.setenv("PLANTLOG_DATA_DIR", "/data")
        monkeypatch.setenv("PLANTLOG_DB", "/custom/plants.db")

        assert get_db_path() == Path("/custom/plants.db")


class TestOpenStore:
    """open_store() wiring."""

    def test_opens_configured_database(self, config_file, tmp_path):
        settings = Settings(config_path=config_file)

        store = open_store(settings)
        plant = store.add_plant(name="Kalanchoe", species="K. tomentosa", acquisition_date="2024-01-01")

        assert (tmp_path / "from-toml.db").exists()
        assert open_store(settings).plants() == [plant]

    def test_configures_logging_level(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PLANTLOG_DB", str(tmp_path / "plantlog.db"))
        monkeypatch.setenv("PLANTLOG_LOG_LEVEL", "error")

        open_store()

        assert logging.getLogger("plantlog").level == logging.ERROR

    def test_loads_settings_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PLANTLOG_DATA_DIR", str(tmp_path / "data"))

        store = open_store()

        assert store.plants() == []
        assert (tmp_path / "data" / "plantlog.db").exists()
