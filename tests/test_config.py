import logging

from userhub.core.config import Settings
from userhub.core.logging import configure_logging


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("BCRYPT_ROUNDS", raising=False)
    settings = Settings(_env_file=None)
    assert settings.bcrypt_rounds == 10
    assert settings.mongodb_db == "userhub"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("MONGODB_URI", "mongodb://db.internal:27017")
    monkeypatch.setenv("BCRYPT_ROUNDS", "12")
    settings = Settings(_env_file=None)
    assert settings.mongodb_uri == "mongodb://db.internal:27017"
    assert settings.bcrypt_rounds == 12


def test_configure_logging_keeps_pymongo_quiet():
    configure_logging("DEBUG")
    assert logging.getLogger("pymongo").level == logging.INFO
