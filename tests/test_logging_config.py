import pytest

from logging_config import get_log_level


@pytest.mark.parametrize(
    "environment,expected",
    [("production", "INFO"), ("staging", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("qa", "INFO")],
)
def test_level_follows_environment(monkeypatch, environment, expected):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("ENVIRONMENT", environment)
    assert get_log_level() == expected


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("LOG_LEVEL", "error")
    assert get_log_level() == "ERROR"
