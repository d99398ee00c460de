"""Simulate Arcoíris Táctico matches with random AI players.

Usage: python -m cli.simulate --games 100 [--seed 42] [--verbose]
"""

from __future__ import annotations

import argparse
import logging
import random
import time
from collections import Counter

from src.game.actions import EndTurn, PlayCard, StartNextRound, TickTimer
from src.game.engine import GameEngine
from src.game.integrity import validate_game_integrity
from src.game.models import GameState
from src.game.rules import visible_colors
from src.utils.config import log_level
from src.utils.constants import (
    BLACK,
    MAX_PLAYS_PER_TURN,
    PHASE_GAME_OVER,
    TURN_ROUND_OVER,
)
from src.utils.crypto import create_rng

logger = logging.getLogger("arcoiris.simulate")


class IntegrityError(RuntimeError):
    pass


def _step(
    engine: GameEngine, game: GameState, action, stats: Counter | None = None
) -> GameState:
    result = engine.dispatch(game, action)
    if not result.success:
        raise RuntimeError(f"{action.type} rejected: {result.error}")
    errors = validate_game_integrity(result.game)
    if errors:
        raise IntegrityError(f"after {action.type}: {errors}")
    if stats is not None:
        stats.update(e["reason"] for e in result.events if e["event"] == "round_end")
    return result.game


def choose_play(game: GameState, rng: random.Random) -> PlayCard | None:
    """Pick a card that is safe on its visible face, or gamble blind.

    Returns None when the agent prefers to stop playing this turn.
    """
    hand = game.current_player.hand
    if not hand:
        return None
    shown = visible_colors(game.center_row)
    safe = [
        i for i, card in enumerate(hand)
        if card.front_color != BLACK and card.front_color not in shown
    ]
    if safe and rng.random() < 0.85:
        return PlayCard(hand_index=rng.choice(safe))
    if rng.random() < 0.3:
        return PlayCard(hand_index=rng.randrange(len(hand)), is_blind=True)
    return None


def ai_turn(
    engine: GameEngine,
    game: GameState,
    rng: random.Random,
    stats: Counter | None = None,
) -> GameState:
    """Execute one AI turn. Returns updated game state."""
    # Occasionally let the clock run out instead of acting
    if rng.random() < 0.05:
        index = game.current_player_index
        while game.current_player_index == index:
            game = _step(engine, game, TickTimer(), stats)
        return game

    for _ in range(MAX_PLAYS_PER_TURN):
        play = choose_play(game, rng)
        if play is None:
            break
        game = _step(engine, game, play, stats)
        if game.turn_state == TURN_ROUND_OVER:
            return _step(engine, game, StartNextRound(), stats)

    return _step(engine, game, EndTurn(), stats)


def simulate_game(rng: random.Random, verbose: bool = False) -> dict:
    """Simulate one complete match. Returns stats dict."""
    engine = GameEngine(rng)
    game = engine.new_game([
        {"id": "p1", "name": "Ana"},
        {"id": "p2", "name": "Beto"},
    ])

    max_turns = 2000
    turn_count = 0
    rounds: Counter = Counter()

    while game.phase != PHASE_GAME_OVER and turn_count < max_turns:
        try:
            game = ai_turn(engine, game, rng, rounds)
        except RuntimeError as e:
            return {"error": str(e), "turns": turn_count}
        turn_count += 1

        if verbose and turn_count % 50 == 0:
            print(f"  Turno {turn_count}, mazo {len(game.deck)}")

    return {
        "winner": game.game_winner_id,
        "tie": game.is_tie,
        "turns": turn_count,
        "rounds": dict(rounds),
        "scores": {p.id: p.score for p in game.players},
        "error": None if game.phase == PHASE_GAME_OVER else "Turn limit reached",
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Arcoíris Táctico simulator")
    parser.add_argument("--games", type=int, default=100)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()
    logging.basicConfig(level=log_level())

    base_seed = args.seed if args.seed is not None else int(time.time())
    print(f"Simulando {args.games} partidas (semilla base: {base_seed})")

    errors = 0
    outcomes: Counter = Counter()
    reasons: Counter = Counter()
    total_turns = 0

    for i in range(args.games):
        result = simulate_game(create_rng(base_seed + i), verbose=args.verbose)
        if result["error"]:
            errors += 1
            logger.warning("Game %d failed: %s", i + 1, result["error"])
            continue
        outcome = "empate" if result["tie"] else result["winner"]
        outcomes[outcome] += 1
        reasons.update(result["rounds"])
        total_turns += result["turns"]
        if args.verbose:
            print(
                f"  Partida {i + 1}: {outcome}, "
                f"turnos={result['turns']}, pilas={result['scores']}"
            )

        if (i + 1) % 100 == 0 and not args.verbose:
            print(f"  {i + 1}/{args.games} completadas...")

    completed = args.games - errors
    print("\nResultados:")
    print(f"  Partidas completadas: {completed}/{args.games}")
    print(f"  Errores: {errors}")
    if completed > 0:
        print(f"  Turnos medios: {total_turns / completed:.1f}")
        print(f"  Resultados: {dict(outcomes)}")
        print(f"  Fin de ronda: {dict(reasons)}")


if __name__ == "__main__":
    main()
