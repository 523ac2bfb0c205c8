"""Client configuration for jeevansetu."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from jeevansetu._constants import (
    BASE_URL,
    DEFAULT_ACCURACY_M,
    DISPATCH_DELAY_S,
    LOCK_DELAY_S,
    POSITION_MAX_AGE_S,
    STEP_TIMEOUT_S,
)
from jeevansetu.exceptions import ConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(value: str, name: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class JeevanSetuConfig:
    """Runtime configuration.

    Parameters
    ----------
    base_url : str
        Base URL of the HTTP auth/dispatch backend.
    dispatch_delay : float
        Seconds from trigger until the simulated backend reports the
        driver alerted (``dispatching``).
    lock_delay : float
        Seconds from trigger until the simulated backend reports the
        family notified (``locked``). Must not be less than
        ``dispatch_delay``.
    step_timeout : float
        Upper bound in seconds for a single dispatch backend step.
    position_max_age : float
        Maximum age in seconds of an accepted position fix.
    high_accuracy : bool
        Request high-accuracy positioning from the device.
    default_accuracy_m : float
        Accuracy shown when a fix carries none.
    auth_delay : float
        Simulated network latency of the demo auth provider.
    profile_save_delay : float
        Simulated latency of saving the profile draft.
    session_ttl : float
        Session lifetime in seconds. ``0`` disables expiry.
    storage_path : str or None
        JSON file backing the local key/value store. ``None`` keeps
        everything in memory.
    """

    base_url: str = BASE_URL
    dispatch_delay: float = DISPATCH_DELAY_S
    lock_delay: float = LOCK_DELAY_S
    step_timeout: float = STEP_TIMEOUT_S
    position_max_age: float = POSITION_MAX_AGE_S
    high_accuracy: bool = True
    default_accuracy_m: float = DEFAULT_ACCURACY_M
    auth_delay: float = 1.0
    profile_save_delay: float = 0.6
    session_ttl: float = 12 * 3600
    storage_path: str | None = None

    def __post_init__(self) -> None:
        for name in ("dispatch_delay", "lock_delay", "auth_delay", "profile_save_delay", "session_ttl"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.lock_delay < self.dispatch_delay:
            raise ConfigError(
                f"lock_delay ({self.lock_delay}) must not be less than dispatch_delay ({self.dispatch_delay})"
            )
        for name in ("step_timeout", "position_max_age", "default_accuracy_m"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be > 0, got {getattr(self, name)}")

    @classmethod
    def from_env(cls, **overrides: Any) -> JeevanSetuConfig:
        """Create configuration from ``JEEVAN_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_FLOAT_MAP = {
            "JEEVAN_DISPATCH_DELAY": "dispatch_delay",
            "JEEVAN_LOCK_DELAY": "lock_delay",
            "JEEVAN_STEP_TIMEOUT": "step_timeout",
            "JEEVAN_POSITION_MAX_AGE": "position_max_age",
            "JEEVAN_AUTH_DELAY": "auth_delay",
            "JEEVAN_PROFILE_SAVE_DELAY": "profile_save_delay",
            "JEEVAN_SESSION_TTL": "session_ttl",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(val, env_key)

        base_url = env.get("JEEVAN_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url.rstrip("/")

        storage_path = env.get("JEEVAN_STORAGE_PATH")
        if storage_path:
            config_kwargs["storage_path"] = storage_path

        if "high_accuracy" not in overrides:
            config_kwargs["high_accuracy"] = _env_bool(env.get("JEEVAN_HIGH_ACCURACY"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
