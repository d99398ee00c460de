"""Data models for Arcoíris Táctico game state.

All models are frozen: transitions build new snapshots with
``dataclasses.replace`` and never mutate an existing one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from src.utils.constants import (
    COLOR_NAMES_ES,
    PHASE_PLAYING,
    TURN_PLAYING,
    TURN_TIME_SECONDS,
)


def other_index(index: int) -> int:
    """Seat index of the opponent in a two-player game."""
    return 1 - index


@dataclass(frozen=True)
class Card:
    """A double-sided card. The holder sees ``front_color``."""

    id: int
    front_color: str
    back_color: str

    def flipped(self) -> Card:
        """Same card with its faces swapped."""
        return Card(id=self.id, front_color=self.back_color, back_color=self.front_color)

    def display(self) -> str:
        return f"#{self.id} {COLOR_NAMES_ES[self.front_color]}/{COLOR_NAMES_ES[self.back_color]}"

    def to_dict(self) -> dict:
        """Serialize for storage."""
        return {
            "id": self.id,
            "frontColor": self.front_color,
            "backColor": self.back_color,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Card:
        """Deserialize from storage."""
        return cls(id=d["id"], front_color=d["frontColor"], back_color=d["backColor"])


@dataclass(frozen=True)
class CenterRowCard:
    """A card in the shared row. Its public color is ``front_color``."""

    id: int
    front_color: str
    back_color: str
    is_face_up: bool = True

    @classmethod
    def place(cls, card: Card) -> CenterRowCard:
        return cls(
            id=card.id,
            front_color=card.front_color,
            back_color=card.back_color,
            is_face_up=True,
        )

    def face_down(self) -> CenterRowCard:
        return CenterRowCard(
            id=self.id,
            front_color=self.front_color,
            back_color=self.back_color,
            is_face_up=False,
        )

    def as_card(self) -> Card:
        return Card(id=self.id, front_color=self.front_color, back_color=self.back_color)

    def to_dict(self) -> dict:
        d = self.as_card().to_dict()
        d["isFaceUp"] = self.is_face_up
        return d

    @classmethod
    def from_dict(cls, d: dict) -> CenterRowCard:
        return cls(
            id=d["id"],
            front_color=d["frontColor"],
            back_color=d["backColor"],
            is_face_up=d.get("isFaceUp", True),
        )


@dataclass(frozen=True)
class Player:
    """State of a single player within a game."""

    id: str
    name: str
    hand: tuple[Card, ...] = ()
    discard_pile: tuple[Card, ...] = ()

    @property
    def score(self) -> int:
        return len(self.discard_pile)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "hand": [c.to_dict() for c in self.hand],
            "discardPile": [c.to_dict() for c in self.discard_pile],
        }

    @classmethod
    def from_dict(cls, d: dict) -> Player:
        return cls(
            id=d["id"],
            name=d["name"],
            hand=tuple(Card.from_dict(c) for c in d.get("hand", [])),
            discard_pile=tuple(Card.from_dict(c) for c in d.get("discardPile", [])),
        )


@dataclass(frozen=True)
class GameState:
    """Complete state of a match (one remote document)."""

    players: tuple[Player, ...]
    deck: tuple[Card, ...] = ()
    center_row: tuple[CenterRowCard, ...] = ()
    phase: str = PHASE_PLAYING
    current_player_index: int = 0
    turn_state: str = TURN_PLAYING
    played_cards_this_turn: int = 0
    round_end_reason: str | None = None
    round_winner_id: str | None = None
    game_winner_id: str | None = None
    is_tie: bool = False
    last_action_log: str = ""
    turn_timer: int = TURN_TIME_SECONDS
    # Seconds per turn, exposed to hosts as ``settings``
    turn_seconds: int = TURN_TIME_SECONDS

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def opponent(self) -> Player:
        return self.players[other_index(self.current_player_index)]

    @property
    def settings(self) -> dict:
        """Match settings as a new dict on every access."""
        return {"turn_seconds": self.turn_seconds}

    def get_player(self, player_id: str) -> Player | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def with_player(self, index: int, player: Player) -> GameState:
        """Copy of this state with the player at ``index`` replaced."""
        players = list(self.players)
        players[index] = player
        return replace(self, players=tuple(players))

    def card_count(self) -> int:
        """Cards across hands, piles, deck and row."""
        in_players = sum(len(p.hand) + len(p.discard_pile) for p in self.players)
        return in_players + len(self.deck) + len(self.center_row)

    def to_dict(self) -> dict:
        return {
            "phase": self.phase,
            "players": [p.to_dict() for p in self.players],
            "deck": [c.to_dict() for c in self.deck],
            "centerRow": [c.to_dict() for c in self.center_row],
            "currentPlayerIndex": self.current_player_index,
            "turnState": self.turn_state,
            "playedCardsThisTurn": self.played_cards_this_turn,
            "roundEndReason": self.round_end_reason,
            "roundWinnerId": self.round_winner_id,
            "gameWinnerId": self.game_winner_id,
            "isTie": self.is_tie,
            "lastActionLog": self.last_action_log,
            "turnTimer": self.turn_timer,
            "settings": self.settings,
        }

    @classmethod
    def from_dict(cls, d: dict) -> GameState:
        return cls(
            phase=d["phase"],
            players=tuple(Player.from_dict(p) for p in d["players"]),
            deck=tuple(Card.from_dict(c) for c in d["deck"]),
            center_row=tuple(CenterRowCard.from_dict(c) for c in d["centerRow"]),
            current_player_index=d["currentPlayerIndex"],
            turn_state=d.get("turnState", TURN_PLAYING),
            played_cards_this_turn=d.get("playedCardsThisTurn", 0),
            round_end_reason=d.get("roundEndReason"),
            round_winner_id=d.get("roundWinnerId"),
            game_winner_id=d.get("gameWinnerId"),
            is_tie=d.get("isTie", False),
            last_action_log=d.get("lastActionLog", ""),
            turn_timer=d.get("turnTimer", TURN_TIME_SECONDS),
            turn_seconds=(d.get("settings") or {}).get("turn_seconds", TURN_TIME_SECONDS),
        )
