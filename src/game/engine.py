"""Game engine for Arcoíris Táctico: the turn/round state machine.

``reduce`` is the single authoritative transition function. It is pure:
it never mutates its input, performs no I/O and ignores invalid actions
by returning the input state unchanged. ``GameEngine`` wraps it for hosts,
holding the injected RNG and logging one structured event per accepted
transition.
"""

from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass, field, replace
from typing import Sequence

from src.game.actions import (
    Action,
    EndTurn,
    PlayCard,
    RestartGame,
    SetGameState,
    StartNextRound,
    TickTimer,
    action_from_dict,
)
from src.game.deck import create_deck, deal, draw_cards
from src.game.models import CenterRowCard, GameState, Player, other_index
from src.game.rules import check_row_state, is_rainbow_complete
from src.game.scoring import award_row, check_game_over, resolve_round
from src.utils.config import default_settings
from src.utils.constants import (
    COLOR_NAMES_ES,
    HAND_SIZE,
    MAX_PLAYS_PER_TURN,
    NUM_PLAYERS,
    PHASE_GAME_OVER,
    PHASE_PLAYING,
    REASON_BLACK_CARD,
    REASON_DUPLICATE_COLOR,
    REASON_RAINBOW_COMPLETE,
    ROW_BLACK_CARD,
    ROW_DUPLICATE_COLOR,
    TURN_PLAYING,
    TURN_ROUND_OVER,
)
from src.utils.crypto import coin_flip, create_rng

logger = logging.getLogger("arcoiris.engine")


@dataclass
class ActionResult:
    success: bool
    game: GameState
    error: str | None = None
    events: list[dict] = field(default_factory=list)


# --- Setup ---


def _identity(player: Player | dict) -> tuple[str, str]:
    if isinstance(player, Player):
        pid, name = player.id, player.name
    elif isinstance(player, dict):
        pid, name = player.get("id"), player.get("name")
    else:
        raise ValueError(f"Invalid player object: {player!r}")
    if not pid or not name:
        raise ValueError(f"Invalid player object: id and name are required, got {player!r}")
    return str(pid), str(name)


def validate_players(players: Sequence[Player | dict]) -> list[Player]:
    """Check player identities and return fresh players with empty hands.

    Raises ValueError for anything but two players with distinct,
    non-empty ids and non-empty names.
    """
    if len(players) != NUM_PLAYERS:
        raise ValueError(f"A match needs exactly {NUM_PLAYERS} players, got {len(players)}")
    identities = [_identity(p) for p in players]
    if identities[0][0] == identities[1][0]:
        raise ValueError(f"Player ids must be distinct, got {identities[0][0]!r} twice")
    return [Player(id=pid, name=name) for pid, name in identities]


def create_initial_state(
    players: Sequence[Player | dict],
    rng: random.Random | None = None,
    settings: dict | None = None,
) -> GameState:
    """Build a new match: fresh deck, three cards each, random first player."""
    fresh = validate_players(players)
    rng = rng or create_rng()
    settings = settings or default_settings()

    deck = create_deck(rng)
    hands, deck = deal(deck, len(fresh), HAND_SIZE)
    dealt = tuple(replace(p, hand=hand) for p, hand in zip(fresh, hands))

    return GameState(
        players=dealt,
        deck=deck,
        center_row=(),
        phase=PHASE_PLAYING,
        current_player_index=coin_flip(rng),
        turn_state=TURN_PLAYING,
        played_cards_this_turn=0,
        last_action_log="La partida ha comenzado.",
        turn_timer=settings["turn_seconds"],
        turn_seconds=settings["turn_seconds"],
    )


# --- Transitions ---


def rejection_reason(state: GameState, action: Action) -> str | None:
    """Why ``action`` would be ignored in ``state``, or None if it applies."""
    if isinstance(action, SetGameState):
        return None

    if isinstance(action, RestartGame):
        if len(state.players) != NUM_PLAYERS:
            return "Restart needs exactly two known players"
        if not all(p.id and p.name for p in state.players):
            return "Restart needs players with id and name"
        return None

    if state.phase != PHASE_PLAYING:
        return f"Match is not in progress (phase {state.phase})"

    round_over = state.turn_state == TURN_ROUND_OVER

    if isinstance(action, PlayCard):
        if round_over:
            return "Round is over"
        if state.played_cards_this_turn >= MAX_PLAYS_PER_TURN:
            return f"Already played {MAX_PLAYS_PER_TURN} cards this turn"
        hand = state.current_player.hand
        if not 0 <= action.hand_index < len(hand):
            return f"No card at hand index {action.hand_index}"
        return None

    if isinstance(action, EndTurn):
        return "Round is over" if round_over else None

    if isinstance(action, StartNextRound):
        return None if state.round_end_reason else "Round has not ended"

    if isinstance(action, TickTimer):
        return "Round is over" if round_over else None

    return f"Unknown action: {action!r}"


def reduce(
    state: GameState, action: Action, rng: random.Random | None = None
) -> GameState:
    """Apply one action. Invalid actions return ``state`` itself.

    ``rng`` is only consulted by RESTART_GAME. Without one, the restart
    falls back to ``create_rng()``, which reads ``ARCOIRIS_SEED`` or uses
    ``SystemRandom``; pass a seeded RNG for reproducible replays.
    """
    if rejection_reason(state, action) is not None:
        return state

    if isinstance(action, SetGameState):
        return action.payload
    if isinstance(action, PlayCard):
        return _play_card(state, action.hand_index, action.is_blind)
    if isinstance(action, EndTurn):
        return _end_turn(state)
    if isinstance(action, StartNextRound):
        return _start_next_round(state)
    if isinstance(action, RestartGame):
        return create_initial_state(state.players, rng, state.settings)
    if isinstance(action, TickTimer):
        return _tick(state)
    return state


def _play_card(state: GameState, hand_index: int, is_blind: bool) -> GameState:
    actor = state.current_player
    card = actor.hand[hand_index]
    hand = actor.hand[:hand_index] + actor.hand[hand_index + 1:]

    # Blind plays reveal the hidden face; the card is public either way
    placed = CenterRowCard.place(card.flipped() if is_blind else card)
    color = COLOR_NAMES_ES[placed.front_color]
    if is_blind:
        log = f"{actor.name} jugó una carta a ciegas, revelando un {color}."
    else:
        log = f"{actor.name} jugó un {color}."

    played = replace(
        state.with_player(state.current_player_index, replace(actor, hand=hand)),
        center_row=state.center_row + (placed,),
        played_cards_this_turn=state.played_cards_this_turn + 1,
        last_action_log=log,
    )

    row = check_row_state(played.center_row)
    if row.state == ROW_BLACK_CARD:
        return _round_over(
            played, REASON_BLACK_CARD,
            f"{actor.name} reveló una carta Negra y perdió la ronda.",
        )
    if row.state == ROW_DUPLICATE_COLOR:
        return _round_over(
            played, REASON_DUPLICATE_COLOR,
            f"{actor.name} reveló un color repetido ({COLOR_NAMES_ES[row.color]}) "
            "y perdió la ronda.",
        )
    if is_rainbow_complete(played.center_row):
        return _round_over(
            played, REASON_RAINBOW_COMPLETE, f"{actor.name} completó un ARCOÍRIS!"
        )
    return played


def _round_over(state: GameState, reason: str, log: str) -> GameState:
    return replace(
        state,
        turn_state=TURN_ROUND_OVER,
        round_end_reason=reason,
        last_action_log=log,
    )


def _end_turn(state: GameState, timed_out: bool = False) -> GameState:
    """Refill after plays, or flip the row face-down on a pass, then hand
    the turn over. Running out of cards ends the match instead of a
    partial draw."""
    index = state.current_player_index
    actor = state.current_player
    players = list(state.players)
    deck = state.deck
    center_row = state.center_row
    exhausted = False

    if state.played_cards_this_turn > 0:
        if len(deck) < state.played_cards_this_turn:
            exhausted = True
        else:
            drawn, deck = draw_cards(deck, state.played_cards_this_turn)
            players[index] = replace(actor, hand=actor.hand + drawn)
        log = f"{actor.name} terminó su turno."
    else:
        center_row = tuple(card.face_down() for card in center_row)
        log = f"{actor.name} ha pasado el turno. Las cartas de la fila se han volteado."

    if timed_out:
        log = f"{actor.name} se quedó sin tiempo. {log}"

    next_index = other_index(index)
    advanced = replace(
        state,
        players=tuple(players),
        deck=deck,
        center_row=center_row,
        current_player_index=next_index,
        turn_state=TURN_PLAYING,
        played_cards_this_turn=0,
        last_action_log=f"{log} Turno de {players[next_index].name}.",
        turn_timer=state.turn_seconds,
    )
    if exhausted:
        return check_game_over(advanced)
    return advanced


def _start_next_round(state: GameState) -> GameState:
    winner_index, next_index = resolve_round(state)
    players = list(state.players)
    players[winner_index] = award_row(players[winner_index], state)

    deck = state.deck
    missing = [max(0, HAND_SIZE - len(p.hand)) for p in players]
    exhausted = sum(missing) > len(deck)
    if not exhausted:
        for i, count in enumerate(missing):
            if count:
                drawn, deck = draw_cards(deck, count)
                players[i] = replace(players[i], hand=players[i].hand + drawn)

    winner = players[winner_index]
    redealt = replace(
        state,
        players=tuple(players),
        deck=deck,
        center_row=(),
        current_player_index=next_index,
        turn_state=TURN_PLAYING,
        played_cards_this_turn=0,
        round_end_reason=None,
        round_winner_id=winner.id,
        last_action_log=f"{winner.name} ganó la ronda. {players[next_index].name} empieza.",
        turn_timer=state.turn_seconds,
    )
    if exhausted:
        return check_game_over(redealt)
    return redealt


def _tick(state: GameState) -> GameState:
    remaining = state.turn_timer - 1
    if remaining > 0:
        return replace(state, turn_timer=remaining)
    return _end_turn(state, timed_out=True)


# --- Host wrapper ---


class GameEngine:
    """Host-facing wrapper around ``reduce``. Holds no game state."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or create_rng()

    def new_game(
        self, players: Sequence[Player | dict], settings: dict | None = None
    ) -> GameState:
        game = create_initial_state(players, self._rng, settings)
        event = {
            "event": "game_start",
            "players": [p.id for p in game.players],
            "first_player": game.current_player.id,
            "deck_remaining": len(game.deck),
        }
        logger.info(json.dumps(event))
        return game

    def dispatch(self, state: GameState, action: Action | dict) -> ActionResult:
        """Apply an action (dataclass or plain record) and report the outcome."""
        if isinstance(action, dict):
            action = action_from_dict(action)

        error = rejection_reason(state, action)
        if error:
            logger.debug(json.dumps({
                "event": "action_ignored",
                "action": action.type,
                "reason": error,
            }))
            return ActionResult(success=False, game=state, error=error)

        game = reduce(state, action, self._rng)
        events = self._events(state, game, action)
        for event in events:
            logger.info(json.dumps(event))
        return ActionResult(success=True, game=game, events=events)

    @staticmethod
    def _events(before: GameState, after: GameState, action: Action) -> list[dict]:
        events: list[dict] = []
        actor = before.current_player.id if before.players else None

        if isinstance(action, TickTimer):
            if after.current_player_index != before.current_player_index:
                events.append({"event": "turn_timeout", "player": actor})
        elif isinstance(action, PlayCard):
            events.append({
                "event": "play_card",
                "player": actor,
                "blind": action.is_blind,
                "revealed": after.center_row[-1].front_color,
                "row_size": len(after.center_row),
            })
        elif isinstance(action, EndTurn):
            events.append({
                "event": "end_turn",
                "player": actor,
                "passed": before.played_cards_this_turn == 0,
                "deck_remaining": len(after.deck),
            })
        elif isinstance(action, StartNextRound):
            events.append({
                "event": "next_round",
                "round_winner": after.round_winner_id,
                "reason": before.round_end_reason,
                "cards_won": len(before.center_row),
                "starter": after.current_player.id,
            })
        else:
            events.append({"event": action.type.lower()})

        if after.turn_state == TURN_ROUND_OVER and before.turn_state != TURN_ROUND_OVER:
            events.append({
                "event": "round_end",
                "player": actor,
                "reason": after.round_end_reason,
            })
        if after.phase == PHASE_GAME_OVER and before.phase != PHASE_GAME_OVER:
            events.append({
                "event": "game_end",
                "winner": after.game_winner_id,
                "tie": after.is_tie,
                "scores": {p.id: p.score for p in after.players},
            })
        return events
