"""Round awards and game-over logic for Arcoíris Táctico."""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from src.game.models import GameState, Player, other_index
from src.utils.constants import PHASE_GAME_OVER, REASON_RAINBOW_COMPLETE


def resolve_round(state: GameState) -> tuple[int, int]:
    """Return (winner_index, next_starter_index) for the finished round.

    Completing the rainbow wins the row and hands the next start to the
    opponent. Revealing a black card or a repeated color gives the row to
    the opponent, and the player who lost starts again.
    """
    actor = state.current_player_index
    if state.round_end_reason == REASON_RAINBOW_COMPLETE:
        return actor, other_index(actor)
    return other_index(actor), actor


def award_row(player: Player, state: GameState) -> Player:
    """Move the center row into the player's discard pile."""
    won = tuple(card.as_card() for card in state.center_row)
    return replace(player, discard_pile=player.discard_pile + won)


def decide_winner(players: Sequence[Player]) -> tuple[str | None, bool]:
    """Compare discard pile sizes. Returns (winner_id, is_tie)."""
    first, second = players[0], players[1]
    if first.score > second.score:
        return first.id, False
    if second.score > first.score:
        return second.id, False
    return None, True


def check_game_over(state: GameState) -> GameState:
    """End the match: the larger discard pile wins, equal piles tie."""
    if len(state.players) < 2:
        return state
    winner_id, is_tie = decide_winner(state.players)
    if is_tie:
        log = "¡Empate!"
    else:
        log = f"Fin de la partida. ¡{state.get_player(winner_id).name} gana!"
    return replace(
        state,
        phase=PHASE_GAME_OVER,
        game_winner_id=winner_id,
        is_tie=is_tie,
        last_action_log=log,
    )
