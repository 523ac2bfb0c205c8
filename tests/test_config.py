from __future__ import annotations

import pytest

from jeevansetu.config import JeevanSetuConfig
from jeevansetu.exceptions import ConfigError

_ENV_KEYS = (
    "JEEVAN_DISPATCH_DELAY",
    "JEEVAN_LOCK_DELAY",
    "JEEVAN_STEP_TIMEOUT",
    "JEEVAN_POSITION_MAX_AGE",
    "JEEVAN_AUTH_DELAY",
    "JEEVAN_PROFILE_SAVE_DELAY",
    "JEEVAN_SESSION_TTL",
    "JEEVAN_BASE_URL",
    "JEEVAN_STORAGE_PATH",
    "JEEVAN_HIGH_ACCURACY",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = JeevanSetuConfig()
    assert config.dispatch_delay == 1.2
    assert config.lock_delay == 2.8
    assert config.position_max_age == 10.0
    assert config.default_accuracy_m == 10.0
    assert config.high_accuracy is True
    assert config.storage_path is None


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JEEVAN_DISPATCH_DELAY", "0.5")
    monkeypatch.setenv("JEEVAN_LOCK_DELAY", "1")
    monkeypatch.setenv("JEEVAN_BASE_URL", "https://dispatch.example/api/")
    monkeypatch.setenv("JEEVAN_HIGH_ACCURACY", "off")
    monkeypatch.setenv("JEEVAN_STORAGE_PATH", "/tmp/jeevan.json")

    config = JeevanSetuConfig.from_env()

    assert config.dispatch_delay == 0.5
    assert config.lock_delay == 1.0
    assert config.base_url == "https://dispatch.example/api"
    assert config.high_accuracy is False
    assert config.storage_path == "/tmp/jeevan.json"


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JEEVAN_LOCK_DELAY", "bogus")
    config = JeevanSetuConfig.from_env(lock_delay=5.0, high_accuracy=False)
    assert config.lock_delay == 5.0
    assert config.high_accuracy is False


def test_non_numeric_env_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JEEVAN_STEP_TIMEOUT", "soon")
    with pytest.raises(ConfigError, match="JEEVAN_STEP_TIMEOUT"):
        JeevanSetuConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"dispatch_delay": -1.0},
        {"dispatch_delay": 3.0, "lock_delay": 2.0},
        {"step_timeout": 0.0},
        {"position_max_age": 0.0},
        {"session_ttl": -5.0},
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, float]) -> None:
    with pytest.raises(ConfigError):
        JeevanSetuConfig(**kwargs)


def test_equal_delays_allowed() -> None:
    config = JeevanSetuConfig(dispatch_delay=0.0, lock_delay=0.0)
    assert config.lock_delay == config.dispatch_delay
