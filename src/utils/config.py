"""Environment-driven settings for Arcoíris Táctico."""

from __future__ import annotations

import os

from src.utils.constants import TURN_TIME_SECONDS


def _int_from_env(name: str, default: int | None) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def env_seed() -> int | None:
    """Seed from ARCOIRIS_SEED, or None when unset."""
    return _int_from_env("ARCOIRIS_SEED", None)


def turn_seconds() -> int:
    seconds = _int_from_env("ARCOIRIS_TURN_SECONDS", TURN_TIME_SECONDS)
    if seconds <= 0:
        raise ValueError(f"ARCOIRIS_TURN_SECONDS must be positive, got {seconds}")
    return seconds


def log_level() -> str:
    return os.environ.get("ARCOIRIS_LOG_LEVEL", "WARNING").upper()


def default_settings() -> dict:
    """Settings stored on every new game."""
    return {"turn_seconds": turn_seconds()}
