"""Card-related data structures and helpers for FreeCell."""

from __future__ import annotations

from dataclasses import FrozenInstanceError, dataclass
from enum import Enum
from typing import Mapping


class Suit(Enum):
    # Declaration order is the deal order and the default foundation order.
    DIAMONDS = "diamonds"
    SPADES = "spades"
    HEARTS = "hearts"
    CLUBS = "clubs"

    def __str__(self) -> str:
        return self.value


class Color(Enum):
    RED = "red"
    BLACK = "black"

    def __str__(self) -> str:
        return self.value


SUIT_COLORS: dict[Suit, Color] = {
    Suit.DIAMONDS: Color.RED,
    Suit.SPADES: Color.BLACK,
    Suit.HEARTS: Color.RED,
    Suit.CLUBS: Color.BLACK,
}

# Ranks run 0 (ace) .. 12 (king).
RANK_COUNT = 13
ACE = 0
KING = RANK_COUNT - 1

RANK_NAMES: dict[int, str] = {0: "Ace", 10: "Jack", 11: "Queen", 12: "King"}


@dataclass(eq=False)
class Card:
    """A playing card.

    ``rank`` and ``suit`` never change after construction. ``selected`` is the
    only mutable field and is driven by the game's select/insert protocol.
    Equality and hashing use ``identity`` so a card can be looked up by value.
    """

    rank: int
    suit: Suit
    selected: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Unknown suit: {self.suit!r}")
        if not 0 <= self.rank < RANK_COUNT:
            raise ValueError(f"Rank must be within 0..{KING}, got {self.rank}.")

    def __setattr__(self, name: str, value: object) -> None:
        if name in ("rank", "suit") and name in self.__dict__:
            raise FrozenInstanceError(f"cannot assign to field {name!r}")
        super().__setattr__(name, value)

    @property
    def color(self) -> Color:
        return SUIT_COLORS[self.suit]

    @property
    def identity(self) -> str:
        return f"{self.rank}{self.suit.value}"

    @property
    def image(self) -> str:
        return f"/images/{self.rank + 1}{self.suit.value}.png"

    def is_same_suit(self, other: Card) -> bool:
        return self.suit is other.suit

    def is_same_color(self, other: Card) -> bool:
        return self.color is other.color

    def is_higher_in_rank(self, other: Card) -> bool:
        return self.rank > other.rank

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    def __repr__(self) -> str:
        marker = "*" if self.selected else ""
        return f"Card({card_label(self)}{marker})"


def rank_name(rank: int) -> str:
    return RANK_NAMES.get(rank, str(rank + 1))


def serialize_card(card: Card) -> dict[str, object]:
    return {
        "rank": card.rank,
        "suit": card.suit.value,
        "color": card.color.value,
        "id": card.identity,
        "img": card.image,
        "selected": card.selected,
    }


def deserialize_card(payload: Mapping[str, object]) -> Card:
    """Build a detached card value from ``{"rank": int, "suit": str}``."""
    try:
        rank = int(payload["rank"])  # type: ignore[call-overload]
        suit_name = str(payload["suit"]).lower()
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError("Card payload needs an integer 'rank' and a 'suit'.") from exc
    try:
        suit = Suit(suit_name)
    except ValueError as exc:
        raise ValueError(f"Unknown suit: {suit_name!r}") from exc
    return Card(rank, suit)


def card_label(card: Card) -> str:
    return f"{rank_name(card.rank)} of {card.suit.value.title()}"
