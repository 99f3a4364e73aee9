"""Tests for environment-driven settings and the composition root."""

import logging

from ims.infrastructure.config import Settings
from ims.infrastructure.logging_config import configure_logging


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("IMS_DATABASE_URL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.database_url == "sqlite:///data/ims.db"
        assert settings.move_history_limit == 100
        assert settings.sql_echo is False

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("IMS_MOVE_HISTORY_LIMIT", "25")
        monkeypatch.setenv("IMS_LOG_LEVEL", "debug")
        settings = Settings(_env_file=None)
        assert settings.move_history_limit == 25
        assert settings.log_level == "debug"


class TestLogging:

    def test_sqlalchemy_logger_quietened(self):
        configure_logging("DEBUG")
        assert logging.getLogger("sqlalchemy").level == logging.WARNING
