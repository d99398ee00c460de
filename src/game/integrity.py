"""State integrity checker for Arcoíris Táctico game state."""

from __future__ import annotations

from collections import Counter

from src.game.models import Card, GameState
from src.utils.constants import (
    COLOR_COUNTS,
    HAND_SIZE,
    MAX_PLAYS_PER_TURN,
    NUM_PLAYERS,
    PHASE_GAME_OVER,
    ROUND_END_REASONS,
    TOTAL_CARDS,
    TURN_PLAYING,
    TURN_ROUND_OVER,
)


def all_cards(game: GameState) -> list[Card]:
    """Every card in the match, wherever it currently is."""
    cards: list[Card] = []
    for player in game.players:
        cards.extend(player.hand)
        cards.extend(player.discard_pile)
    cards.extend(game.deck)
    cards.extend(row_card.as_card() for row_card in game.center_row)
    return cards


def validate_game_integrity(game: GameState) -> list[str]:
    """Validate all game state invariants. Returns list of errors (empty = OK).

    Checks:
    1. Total cards = TOTAL_CARDS (hands + discard piles + deck + center row)
    2. Card ids 0..TOTAL_CARDS-1 each appear exactly once
    3. Color units match the fixed distribution (blind plays only swap faces)
    4. Two players, hands of at most 3 cards
    5. Current player index and per-turn play counter in range
    6. ROUND_OVER exactly when a round end reason is recorded
    7. A finished game has a winner or a tie
    """
    errors: list[str] = []

    # 1. Conservation
    cards = all_cards(game)
    if len(cards) != TOTAL_CARDS:
        errors.append(f"Total cards = {len(cards)}, expected {TOTAL_CARDS}")

    # 2. Identity
    id_counts = Counter(c.id for c in cards)
    duplicated = sorted(cid for cid, n in id_counts.items() if n > 1)
    if duplicated:
        errors.append(f"Duplicated card ids: {duplicated}")
    missing = sorted(set(range(TOTAL_CARDS)) - set(id_counts))
    if missing:
        errors.append(f"Missing card ids: {missing}")

    # 3. Color units
    units = Counter()
    for c in cards:
        units[c.front_color] += 1
        units[c.back_color] += 1
    expected_units = Counter({color: 2 * n for color, n in COLOR_COUNTS.items()})
    if units != expected_units:
        errors.append(f"Color units {dict(units)} do not match the deck distribution")

    # 4. Players
    if len(game.players) != NUM_PLAYERS:
        errors.append(f"Expected {NUM_PLAYERS} players, found {len(game.players)}")
    for player in game.players:
        if len(player.hand) > HAND_SIZE:
            errors.append(f"Player {player.id} holds {len(player.hand)} cards")

    # 5. Turn bookkeeping
    if game.current_player_index not in (0, 1):
        errors.append(f"Invalid current player index: {game.current_player_index}")
    if not 0 <= game.played_cards_this_turn <= MAX_PLAYS_PER_TURN:
        errors.append(f"Invalid played card count: {game.played_cards_this_turn}")

    # 6. Round state
    if game.turn_state not in (TURN_PLAYING, TURN_ROUND_OVER):
        errors.append(f"Invalid turn state: {game.turn_state}")
    if game.round_end_reason is not None and game.round_end_reason not in ROUND_END_REASONS:
        errors.append(f"Invalid round end reason: {game.round_end_reason}")
    if (game.turn_state == TURN_ROUND_OVER) != (game.round_end_reason is not None):
        errors.append(
            f"Turn state {game.turn_state} inconsistent with "
            f"round end reason {game.round_end_reason}"
        )

    # 7. Outcome
    if game.phase == PHASE_GAME_OVER and not game.is_tie and game.game_winner_id is None:
        errors.append("Finished game has neither a winner nor a tie")

    return errors
