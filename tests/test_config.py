"""Tests for connectfour/config.py"""

import pytest

from connectfour.config import get_config


@pytest.fixture(autouse=True)
def fresh_config():
    get_config.cache_clear()
    yield
    get_config.cache_clear()


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("HOST", "PORT", "DEBUG", "POLL_INTERVAL_MS", "FIRST_PLAYER"):
        monkeypatch.delenv(name, raising=False)
    config = get_config()
    assert (config.host, config.port) == ("127.0.0.1", 3000)
    assert config.debug is False
    assert config.poll_interval == pytest.approx(0.3)
    assert config.first_player == "random"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("DEBUG", "yes")
    monkeypatch.setenv("POLL_INTERVAL_MS", "50")
    monkeypatch.setenv("FIRST_PLAYER", "Arrival")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test,http://b.test")
    config = get_config()
    assert config.port == 8080
    assert config.debug is True
    assert config.poll_interval == pytest.approx(0.05)
    assert config.first_player == "arrival"
    assert config.allowed_origins == ["http://a.test", "http://b.test"]


def test_unknown_first_player_policy_falls_back_to_random(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FIRST_PLAYER", "coin")
    assert get_config().first_player == "random"
