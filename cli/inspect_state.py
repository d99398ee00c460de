"""Inspect, validate or step a saved game state.

Usage:
  python -m cli.inspect_state --file snapshot.json
  python -m cli.inspect_state --file snapshot.json --player p2 --show hand
  python -m cli.inspect_state --file snapshot.json --show row
  python -m cli.inspect_state --file snapshot.json --validate
  python -m cli.inspect_state --file snapshot.json \\
      --apply '{"type": "PLAY_CARD", "payload": {"handIndex": 0}}' --output next.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from src.game.engine import GameEngine
from src.game.integrity import validate_game_integrity
from src.game.models import GameState
from src.game.rules import check_row_state, visible_colors
from src.utils.config import log_level
from src.utils.constants import COLOR_NAMES_ES


def load_state(file_path: str) -> GameState:
    with open(file_path, encoding="utf-8") as f:
        return GameState.from_dict(json.load(f))


def print_summary(game: GameState) -> None:
    print(f"Fase: {game.phase}")
    if game.players:
        print(f"Turno: {game.current_player.name} ({game.turn_state})")
    print(f"Cartas jugadas este turno: {game.played_cards_this_turn}")
    print(f"Tiempo restante: {game.turn_timer}s")
    print(f"Mazo: {len(game.deck)} cartas, fila: {len(game.center_row)} cartas")
    if game.round_end_reason:
        print(f"Fin de ronda: {game.round_end_reason}")
    if game.is_tie:
        print("Resultado: empate")
    elif game.game_winner_id:
        print(f"Ganador: {game.game_winner_id}")
    print(f"Último evento: {game.last_action_log}")
    for p in game.players:
        print(f"  {p.id} ({p.name}): {len(p.hand)} en mano, {p.score} ganadas")


def print_row(game: GameState) -> None:
    if not game.center_row:
        print("Fila central vacía")
        return
    for card in game.center_row:
        face = COLOR_NAMES_ES[card.front_color] if card.is_face_up else "(boca abajo)"
        print(f"  #{card.id}: {face}")
    shown = sorted(COLOR_NAMES_ES[c] for c in visible_colors(game.center_row))
    print(f"Colores visibles: {', '.join(shown) or '-'}")
    print(f"Estado de la fila: {check_row_state(game.center_row).state}")


def apply_action(game: GameState, record: str, output: str | None) -> int:
    """Dispatch one JSON action record; optionally save the new snapshot."""
    result = GameEngine().dispatch(game, json.loads(record))
    if not result.success:
        print(f"Acción ignorada: {result.error}")
        return 1
    for event in result.events:
        print(json.dumps(event, ensure_ascii=False))
    print_summary(result.game)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            json.dump(result.game.to_dict(), f, ensure_ascii=False, indent=2)
        print(f"Estado guardado en {output}")
    return 0


def inspect_state(
    file_path: str,
    player: str | None = None,
    show: str | None = None,
    validate: bool = False,
    action: str | None = None,
    output: str | None = None,
) -> int:
    """Run one inspection command. Returns the process exit code."""
    game = load_state(file_path)

    if validate:
        errors = validate_game_integrity(game)
        if errors:
            print("Errores de integridad:")
            for e in errors:
                print(f"  - {e}")
            return 1
        print("Estado válido ✓")
        return 0

    if action:
        return apply_action(game, action, output)

    if show == "hand":
        p = game.get_player(player) if player else game.current_player
        if p is None:
            print(f"Jugador {player} no encontrado")
            return 1
        print(f"Mano de {p.name} ({len(p.hand)} cartas):")
        for i, card in enumerate(p.hand):
            print(f"  {i}. {card.display()}")
        return 0

    if show == "row":
        print_row(game)
        return 0

    print_summary(game)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect Arcoíris Táctico game state")
    parser.add_argument("--file", required=True, help="Path to game state JSON")
    parser.add_argument("--player", help="Player ID for --show hand (default: current)")
    parser.add_argument("--show", choices=["hand", "row"], help="What to show")
    parser.add_argument("--validate", action="store_true", help="Validate integrity")
    parser.add_argument("--apply", dest="action", help="Action record (JSON) to dispatch")
    parser.add_argument("--output", help="Where to save the state after --apply")
    args = parser.parse_args()
    logging.basicConfig(level=log_level())
    sys.exit(
        inspect_state(
            args.file, args.player, args.show, args.validate, args.action, args.output
        )
    )


if __name__ == "__main__":
    main()
