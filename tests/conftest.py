"""Shared test fixtures for Arcoíris Táctico."""

from __future__ import annotations

from dataclasses import replace

import pytest

from src.game.engine import GameEngine, create_initial_state
from src.game.models import Card, CenterRowCard, GameState, Player
from src.utils.constants import RED, TURN_TIME_SECONDS, WHITE
from src.utils.crypto import create_rng

ANA = Player(id="p1", name="Ana")
BETO = Player(id="p2", name="Beto")
SETTINGS = {"turn_seconds": TURN_TIME_SECONDS}


def card(card_id: int, front: str, back: str | None = None) -> Card:
    """Card with the given front; the back defaults to a different color."""
    if back is None:
        back = RED if front == WHITE else WHITE
    return Card(id=card_id, front_color=front, back_color=back)


def cards(start_id: int, *colors: str) -> tuple[Card, ...]:
    return tuple(card(start_id + i, color) for i, color in enumerate(colors))


def row(*colors: str, face_up: bool = True, start_id: int = 200) -> tuple[CenterRowCard, ...]:
    return tuple(
        CenterRowCard.place(c) if face_up else CenterRowCard.place(c).face_down()
        for c in cards(start_id, *colors)
    )


def make_state(
    hand_a=(),
    hand_b=(),
    deck=(),
    center_row=(),
    pile_a=(),
    pile_b=(),
    **overrides,
) -> GameState:
    """Small hand-built state for rule scenarios (not a full deck)."""
    state = GameState(
        players=(
            replace(ANA, hand=tuple(hand_a), discard_pile=tuple(pile_a)),
            replace(BETO, hand=tuple(hand_b), discard_pile=tuple(pile_b)),
        ),
        deck=tuple(deck),
        center_row=tuple(center_row),
        turn_seconds=SETTINGS["turn_seconds"],
    )
    return replace(state, **overrides)


@pytest.fixture
def rng():
    return create_rng(42)


@pytest.fixture
def engine():
    return GameEngine(create_rng(42))


@pytest.fixture
def fresh_game():
    return create_initial_state([ANA, BETO], create_rng(42), dict(SETTINGS))
