"""Tests for environment-driven configuration."""

from orderhub.infrastructure.persistence.database import create_db_engine
from orderhub.infrastructure.settings import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ORDERHUB_DATABASE_URL", raising=False)
        monkeypatch.delenv("ORDERHUB_LOG_LEVEL", raising=False)
        monkeypatch.delenv("ORDERHUB_ECHO_SQL", raising=False)
        config = Settings(_env_file=None)
        assert config.database_url.startswith("sqlite:///")
        assert config.database_url.endswith("orderhub.db")
        assert config.log_level == "WARNING"
        assert config.echo_sql is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ORDERHUB_DATABASE_URL", "sqlite://")
        monkeypatch.setenv("ORDERHUB_ECHO_SQL", "true")
        monkeypatch.setenv("ORDERHUB_LOG_LEVEL", "debug")
        config = Settings(_env_file=None)
        assert config.database_url == "sqlite://"
        assert config.echo_sql is True
        assert config.log_level == "debug"

    def test_empty_value_falls_back_to_default(self, monkeypatch):
        monkeypatch.setenv("ORDERHUB_LOG_LEVEL", "")
        assert Settings(_env_file=None).log_level == "WARNING"

    def test_file_database_directory_is_created(self, tmp_path):
        target = tmp_path / "nested" / "dir" / "orders.db"
        engine = create_db_engine(f"sqlite:///{target}")
        try:
            assert target.parent.is_dir()
        finally:
            engine.dispose()

    def test_default_database_lives_under_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.delenv("ORDERHUB_DATABASE_URL", raising=False)
        monkeypatch.chdir(tmp_path)
        config = Settings(_env_file=None)
        assert config.database_url == "sqlite:///data/orderhub.db"

        engine = create_db_engine(config.database_url)
        try:
            assert (tmp_path / "data").is_dir()
        finally:
            engine.dispose()
