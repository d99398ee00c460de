"""Deck operations for Arcoíris Táctico: creation, shuffle, deal, draw."""

from __future__ import annotations

import random

from src.game.models import Card
from src.utils.constants import COLOR_COUNTS, HAND_SIZE


def create_color_units(counts: dict[str, int] | None = None) -> list[str]:
    """Flat list of color units, grouped in color order."""
    counts = COLOR_COUNTS if counts is None else counts
    units: list[str] = []
    for color, count in counts.items():
        units.extend([color] * count)
    return units


def shuffle_cards(cards: list, rng: random.Random) -> list:
    """Fisher-Yates shuffle using provided RNG. Returns a new list."""
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def _find_safe_swap(front: list[str], back: list[str], i: int) -> int | None:
    """Index j whose back color can trade places with back[i] without
    leaving either card with matching faces. Forward first, then backward."""
    candidates = list(range(i + 1, len(back))) + list(range(i - 1, -1, -1))
    for j in candidates:
        if back[j] != front[i] and back[i] != front[j]:
            return j
    return None


def resolve_collisions(front: list[str], back: list[str]) -> list[str]:
    """Rearrange back colors so no index has front == back.

    A single left-to-right pass is enough: each swap fixes index i and
    never creates a collision at j.
    Raises ValueError if the distribution cannot be paired at all.
    """
    back = list(back)
    for i in range(len(front)):
        if front[i] != back[i]:
            continue
        j = _find_safe_swap(front, back, i)
        if j is None:
            raise ValueError(
                f"Cannot pair color units: no safe swap for {front[i]} at index {i}"
            )
        back[i], back[j] = back[j], back[i]
    return back


def create_deck(
    rng: random.Random, counts: dict[str, int] | None = None
) -> tuple[Card, ...]:
    """Build a shuffled deck of double-sided cards (56 with the default counts).

    Front colors follow the unit list in order, back colors are an
    independently shuffled copy. Card ids are assigned before the final
    shuffle, so deck position says nothing about construction order.
    """
    front_colors = create_color_units(counts)
    back_colors = shuffle_cards(front_colors, rng)
    back_colors = resolve_collisions(front_colors, back_colors)

    cards = [
        Card(id=i, front_color=front, back_color=back)
        for i, (front, back) in enumerate(zip(front_colors, back_colors))
    ]
    return tuple(shuffle_cards(cards, rng))


def deal(
    deck: tuple[Card, ...], num_players: int, cards_each: int = HAND_SIZE
) -> tuple[list[tuple[Card, ...]], tuple[Card, ...]]:
    """Deal hands from the top of the deck (the last element).

    Each player receives their whole hand before the next one is served.
    Returns (hands, remaining_deck).
    Raises ValueError if the deck is too small.
    """
    if len(deck) < num_players * cards_each:
        raise ValueError(
            f"Deck has {len(deck)} cards, need {num_players * cards_each} to deal"
        )
    remaining = list(deck)
    hands: list[tuple[Card, ...]] = []
    for _ in range(num_players):
        hand = [remaining.pop() for _ in range(cards_each)]
        hands.append(tuple(hand))
    return hands, tuple(remaining)


def draw_cards(
    deck: tuple[Card, ...], count: int
) -> tuple[tuple[Card, ...], tuple[Card, ...]]:
    """Draw ``count`` cards from the top of the deck.

    Returns (drawn_cards, remaining_deck).
    Raises ValueError if the deck holds fewer than ``count`` cards.
    """
    if count > len(deck):
        raise ValueError(f"Deck is empty: wanted {count}, {len(deck)} left")
    remaining = list(deck)
    drawn = [remaining.pop() for _ in range(count)]
    return tuple(drawn), tuple(remaining)
