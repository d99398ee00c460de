"""Center-row evaluation for Arcoíris Táctico.

Two predicates run after every reveal: the row scan (black card or a
repeated color ends the round) and the rainbow check.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from src.game.models import CenterRowCard
from src.utils.constants import (
    BLACK,
    RAINBOW_SIZE,
    ROW_BLACK_CARD,
    ROW_DUPLICATE_COLOR,
    ROW_VALID,
    WHITE,
)


@dataclass(frozen=True)
class RowCheck:
    state: str
    color: str | None = None

    @property
    def ends_round(self) -> bool:
        return self.state != ROW_VALID


def check_row_state(center_row: Iterable[CenterRowCard]) -> RowCheck:
    """Scan face-up cards for a black card or a repeated color.

    White never counts as a repeat. Black is checked before a color is
    tracked, so a black card is always reported as BLACK_CARD.
    """
    seen: set[str] = set()
    for card in center_row:
        if not card.is_face_up:
            continue
        color = card.front_color
        if color == BLACK:
            return RowCheck(state=ROW_BLACK_CARD, color=BLACK)
        if color == WHITE:
            continue
        if color in seen:
            return RowCheck(state=ROW_DUPLICATE_COLOR, color=color)
        seen.add(color)
    return RowCheck(state=ROW_VALID)


def visible_colors(center_row: Iterable[CenterRowCard]) -> set[str]:
    """Distinct rainbow hues currently face-up in the row."""
    return {
        card.front_color
        for card in center_row
        if card.is_face_up and card.front_color not in (WHITE, BLACK)
    }


def is_rainbow_complete(center_row: Iterable[CenterRowCard]) -> bool:
    return len(visible_colors(center_row)) >= RAINBOW_SIZE
