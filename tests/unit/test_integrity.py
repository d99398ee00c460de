"""Tests for state integrity checker."""

from dataclasses import replace

from src.game.actions import PlayCard
from src.game.engine import create_initial_state, reduce
from src.game.integrity import validate_game_integrity
from src.game.models import Card
from src.utils.constants import BLACK, REASON_BLACK_CARD, TURN_ROUND_OVER
from src.utils.crypto import create_rng
from tests.conftest import ANA, BETO, SETTINGS


class TestValidateGameIntegrity:
    def test_valid_game_passes(self, fresh_game):
        assert validate_game_integrity(fresh_game) == []

    def test_every_seed_deals_a_valid_game(self):
        for seed in range(20):
            game = create_initial_state([ANA, BETO], create_rng(seed), SETTINGS)
            assert validate_game_integrity(game) == [], f"seed {seed}"

    def test_missing_card_detected(self, fresh_game):
        game = replace(fresh_game, deck=fresh_game.deck[:-1])
        errors = validate_game_integrity(game)
        assert any("Total cards" in e for e in errors)
        assert any("Missing card ids" in e for e in errors)

    def test_duplicate_card_detected(self, fresh_game):
        game = replace(fresh_game, deck=fresh_game.deck + fresh_game.deck[:1])
        errors = validate_game_integrity(game)
        assert any("Duplicated card ids" in e for e in errors)

    def test_color_units_detected(self, fresh_game):
        top = fresh_game.deck[-1]
        # Built decks never hold a card with equal faces
        recolored = Card(id=top.id, front_color=BLACK, back_color=BLACK)
        game = replace(fresh_game, deck=fresh_game.deck[:-1] + (recolored,))
        errors = validate_game_integrity(game)
        assert any("Color units" in e for e in errors)

    def test_oversized_hand_detected(self, fresh_game):
        first = fresh_game.players[0]
        bloated = replace(first, hand=first.hand + fresh_game.deck[-1:])
        game = replace(fresh_game.with_player(0, bloated), deck=fresh_game.deck[:-1])
        errors = validate_game_integrity(game)
        assert errors == ["Player p1 holds 4 cards"]

    def test_round_over_without_reason_detected(self, fresh_game):
        game = replace(fresh_game, turn_state=TURN_ROUND_OVER)
        errors = validate_game_integrity(game)
        assert any("inconsistent" in e for e in errors)

    def test_reason_without_round_over_detected(self, fresh_game):
        game = replace(fresh_game, round_end_reason=REASON_BLACK_CARD)
        assert validate_game_integrity(game) != []

    def test_after_play_still_valid(self, fresh_game):
        game = reduce(fresh_game, PlayCard(hand_index=1, is_blind=True))
        assert validate_game_integrity(game) == []
