"""Tests for environment-driven settings."""

from opsboard.config import Settings


def test_cors_origins_comma_separated(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.com, http://b.com,")
    s = Settings(_env_file=None)
    assert s.cors_origins == ["http://a.com", "http://b.com"]


def test_cors_origins_json_array(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", '["http://a.com", "http://b.com"]')
    assert Settings(_env_file=None).cors_origins == ["http://a.com", "http://b.com"]


def test_cors_origins_default(monkeypatch):
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    assert Settings(_env_file=None).cors_origins == [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]


def test_board_scope_and_log_level_from_env(monkeypatch):
    monkeypatch.setenv("DEFAULT_BOARD_SCOPE", "all")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = Settings(_env_file=None)
    assert s.default_board_scope == "all"
    assert s.log_level == "debug"
