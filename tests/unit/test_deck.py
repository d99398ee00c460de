"""Tests for deck operations."""

from collections import Counter

import pytest

from src.game.deck import (
    create_color_units,
    create_deck,
    deal,
    draw_cards,
    resolve_collisions,
    shuffle_cards,
)
from src.game.models import Card
from src.utils.constants import (
    BLACK,
    BLUE,
    COLOR_COUNTS,
    GREEN,
    RED,
    TOTAL_CARDS,
    WHITE,
)
from src.utils.crypto import create_rng


def numbered(n: int) -> tuple[Card, ...]:
    return tuple(Card(id=i, front_color=RED, back_color=BLUE) for i in range(n))


class TestColorUnits:
    def test_total_units(self):
        assert len(create_color_units()) == TOTAL_CARDS

    def test_counts_match_distribution(self):
        counts = Counter(create_color_units())
        assert counts[WHITE] == 8
        assert counts[BLACK] == 6
        assert counts == Counter(COLOR_COUNTS)


class TestCreateDeck:
    def test_total_cards(self):
        deck = create_deck(create_rng(42))
        assert len(deck) == TOTAL_CARDS

    def test_size_follows_distribution(self):
        deck = create_deck(create_rng(3))
        assert len(deck) == sum(COLOR_COUNTS.values()) == 56
        assert {c.id for c in deck} == set(range(56))
        assert TOTAL_CARDS == len(deck)

    def test_ids_are_unique(self):
        deck = create_deck(create_rng(42))
        assert sorted(c.id for c in deck) == list(range(TOTAL_CARDS))

    def test_no_card_matches_itself(self):
        for seed in range(300):
            deck = create_deck(create_rng(seed))
            assert all(c.front_color != c.back_color for c in deck), f"seed {seed}"

    def test_faces_keep_distribution(self):
        deck = create_deck(create_rng(7))
        assert Counter(c.front_color for c in deck) == Counter(COLOR_COUNTS)
        assert Counter(c.back_color for c in deck) == Counter(COLOR_COUNTS)

    def test_deterministic_with_seed(self):
        assert create_deck(create_rng(42)) == create_deck(create_rng(42))

    def test_different_seeds_different_order(self):
        assert create_deck(create_rng(42)) != create_deck(create_rng(99))

    def test_custom_counts(self):
        deck = create_deck(create_rng(1), counts={RED: 1, BLUE: 1})
        assert len(deck) == 2
        assert {(c.front_color, c.back_color) for c in deck} == {(RED, BLUE), (BLUE, RED)}

    def test_unpairable_counts_raise(self):
        with pytest.raises(ValueError, match="Cannot pair"):
            create_deck(create_rng(1), counts={RED: 2})


class TestResolveCollisions:
    def test_no_collisions_untouched(self):
        assert resolve_collisions([RED, BLUE], [BLUE, RED]) == [BLUE, RED]

    def test_swaps_forward_first(self):
        front = [RED, BLUE, GREEN]
        back = [RED, GREEN, BLUE]
        assert resolve_collisions(front, back) == [GREEN, RED, BLUE]

    def test_falls_back_to_backward_search(self):
        front = [GREEN, RED]
        back = [BLUE, RED]
        assert resolve_collisions(front, back) == [RED, BLUE]

    def test_does_not_mutate_input(self):
        back = [RED, BLUE]
        resolve_collisions([RED, BLUE], back)
        assert back == [RED, BLUE]

    def test_unpairable_raises(self):
        with pytest.raises(ValueError, match="no safe swap"):
            resolve_collisions([RED, RED], [RED, RED])


class TestShuffle:
    def test_preserves_cards(self):
        deck = numbered(20)
        shuffled = shuffle_cards(list(deck), create_rng(3))
        assert sorted(shuffled, key=lambda c: c.id) == list(deck)

    def test_returns_new_list(self):
        original = list(numbered(5))
        shuffle_cards(original, create_rng(3))
        assert original == list(numbered(5))


class TestDeal:
    def test_deals_from_top(self):
        hands, remaining = deal(numbered(10), 2, 3)
        assert [c.id for c in hands[0]] == [9, 8, 7]
        assert [c.id for c in hands[1]] == [6, 5, 4]
        assert [c.id for c in remaining] == [0, 1, 2, 3]

    def test_full_deck_deal(self):
        hands, remaining = deal(create_deck(create_rng(42)), 2)
        assert all(len(h) == 3 for h in hands)
        assert len(remaining) == TOTAL_CARDS - 6

    def test_too_small_raises(self):
        with pytest.raises(ValueError, match="need 6"):
            deal(numbered(5), 2, 3)


class TestDrawCards:
    def test_draws_from_top(self):
        drawn, remaining = draw_cards(numbered(5), 2)
        assert [c.id for c in drawn] == [4, 3]
        assert [c.id for c in remaining] == [0, 1, 2]

    def test_draw_zero(self):
        drawn, remaining = draw_cards(numbered(2), 0)
        assert drawn == ()
        assert len(remaining) == 2

    def test_not_enough_raises(self):
        with pytest.raises(ValueError, match="empty"):
            draw_cards(numbered(1), 2)
