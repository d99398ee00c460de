"""Tests for environment settings and random sources."""

import secrets

import pytest

from src.utils.config import default_settings, env_seed, log_level, turn_seconds
from src.utils.crypto import coin_flip, create_rng


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ARCOIRIS_SEED", "ARCOIRIS_TURN_SECONDS", "ARCOIRIS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        assert default_settings() == {"turn_seconds": 60}
        assert env_seed() is None
        assert log_level() == "WARNING"

    def test_turn_seconds_from_env(self, monkeypatch):
        monkeypatch.setenv("ARCOIRIS_TURN_SECONDS", "45")
        assert turn_seconds() == 45

    def test_invalid_integer_raises(self, monkeypatch):
        monkeypatch.setenv("ARCOIRIS_TURN_SECONDS", "soon")
        with pytest.raises(ValueError, match="ARCOIRIS_TURN_SECONDS"):
            turn_seconds()

    def test_non_positive_raises(self, monkeypatch):
        monkeypatch.setenv("ARCOIRIS_TURN_SECONDS", "0")
        with pytest.raises(ValueError, match="positive"):
            turn_seconds()

    def test_log_level_upper(self, monkeypatch):
        monkeypatch.setenv("ARCOIRIS_LOG_LEVEL", "debug")
        assert log_level() == "DEBUG"


class TestCreateRng:
    def test_seeded_is_deterministic(self):
        assert create_rng(3).random() == create_rng(3).random()

    def test_unseeded_is_system_random(self):
        assert isinstance(create_rng(), secrets.SystemRandom)

    def test_env_seed(self, monkeypatch):
        monkeypatch.setenv("ARCOIRIS_SEED", "11")
        assert create_rng().random() == create_rng(11).random()

    def test_coin_flip(self):
        rng = create_rng(1)
        assert {coin_flip(rng) for _ in range(50)} == {0, 1}
