"""Actions accepted by the Arcoíris Táctico state machine.

Hosts either build these dataclasses directly or pass plain records such
as ``{"type": "PLAY_CARD", "payload": {"handIndex": 0, "isBlind": False}}``
through :func:`action_from_dict`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from src.game.models import GameState
from src.utils.constants import (
    ACTION_END_TURN,
    ACTION_PLAY_CARD,
    ACTION_RESTART_GAME,
    ACTION_SET_GAME_STATE,
    ACTION_START_NEXT_ROUND,
    ACTION_TICK_TIMER,
)


@dataclass(frozen=True)
class SetGameState:
    type: ClassVar[str] = ACTION_SET_GAME_STATE
    payload: GameState


@dataclass(frozen=True)
class PlayCard:
    type: ClassVar[str] = ACTION_PLAY_CARD
    hand_index: int
    is_blind: bool = False


@dataclass(frozen=True)
class EndTurn:
    type: ClassVar[str] = ACTION_END_TURN


@dataclass(frozen=True)
class StartNextRound:
    type: ClassVar[str] = ACTION_START_NEXT_ROUND


@dataclass(frozen=True)
class RestartGame:
    type: ClassVar[str] = ACTION_RESTART_GAME


@dataclass(frozen=True)
class TickTimer:
    type: ClassVar[str] = ACTION_TICK_TIMER


Action = Union[SetGameState, PlayCard, EndTurn, StartNextRound, RestartGame, TickTimer]

_NO_PAYLOAD = {
    ACTION_END_TURN: EndTurn,
    ACTION_START_NEXT_ROUND: StartNextRound,
    ACTION_RESTART_GAME: RestartGame,
    ACTION_TICK_TIMER: TickTimer,
}


def action_from_dict(d: dict) -> Action:
    """Parse a host action record.

    Raises ValueError for unknown types or malformed payloads.
    """
    action_type = d.get("type")
    if action_type in _NO_PAYLOAD:
        return _NO_PAYLOAD[action_type]()

    payload = d.get("payload")
    if action_type == ACTION_SET_GAME_STATE:
        if not isinstance(payload, dict):
            raise ValueError("SET_GAME_STATE needs a game state payload")
        try:
            return SetGameState(payload=GameState.from_dict(payload))
        except KeyError as e:
            raise ValueError(f"SET_GAME_STATE payload missing field {e}") from e

    if action_type == ACTION_PLAY_CARD:
        if not isinstance(payload, dict):
            raise ValueError("PLAY_CARD needs a payload")
        hand_index = payload.get("handIndex")
        if not isinstance(hand_index, int) or isinstance(hand_index, bool):
            raise ValueError(f"PLAY_CARD handIndex must be an integer, got {hand_index!r}")
        return PlayCard(hand_index=hand_index, is_blind=bool(payload.get("isBlind", False)))

    raise ValueError(f"Unknown action type: {action_type!r}")


def action_to_dict(action: Action) -> dict:
    """Plain record for an action (inverse of :func:`action_from_dict`)."""
    if isinstance(action, SetGameState):
        return {"type": action.type, "payload": action.payload.to_dict()}
    if isinstance(action, PlayCard):
        return {
            "type": action.type,
            "payload": {"handIndex": action.hand_index, "isBlind": action.is_blind},
        }
    return {"type": action.type}
