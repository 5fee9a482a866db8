"""Card receptacles: tableau columns, free cells and foundations.

Every receptacle holds an ordered list of cards whose last element is the
exposed top card. The concrete kinds differ only in what they accept and in
which runs may be lifted out of them; the game dispatches through
``can_accept`` and ``can_be_dragged`` without knowing the kind.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence

from .cards import ACE, RANK_COUNT, Card, Suit

DEFAULT_DRAG_CAPACITY = 5


class EmptyReceptacle(LookupError):
    """Raised when the top card of an empty receptacle is requested."""


class CardNotInReceptacle(LookupError):
    """Raised when a run is requested from a card the receptacle does not hold."""


@dataclass(eq=False)
class Receptacle(ABC):
    cards: List[Card] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.cards = list(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def is_empty(self) -> bool:
        return not self.cards

    def top(self) -> Card:
        if not self.cards:
            raise EmptyReceptacle(f"{type(self).__name__} has no cards.")
        return self.cards[-1]

    def index_of(self, card: Card) -> int:
        for index, held in enumerate(self.cards):
            if held.identity == card.identity:
                return index
        raise CardNotInReceptacle(f"{card!r} is not in this {type(self).__name__}.")

    def run_from(self, card: Card) -> List[Card]:
        """Return ``card`` and every card placed after it."""
        return self.cards[self.index_of(card):]

    def insert(self, run: Sequence[Card]) -> bool:
        """Append ``run`` if this receptacle accepts it; report whether it did."""
        if not self.can_accept(run):
            return False
        self.cards.extend(run)
        return True

    def remove(self, cards: Iterable[Card]) -> None:
        doomed = {card.identity for card in cards}
        self.cards = [card for card in self.cards if card.identity not in doomed]

    @abstractmethod
    def can_accept(self, run: Sequence[Card]) -> bool:
        """Return True if ``run`` may be placed on this receptacle."""

    @abstractmethod
    def can_be_dragged(self, card: Card, free_cells: Sequence[FreeCell] = ()) -> bool:
        """Return True if the run starting at ``card`` may be picked up."""


def is_sequenced(run: Sequence[Card]) -> bool:
    return all(upper.rank - lower.rank == 1 for upper, lower in zip(run, run[1:]))


def alternates_colors(run: Sequence[Card]) -> bool:
    return all(not upper.is_same_color(lower) for upper, lower in zip(run, run[1:]))


def occupied_free_cells(free_cells: Iterable[FreeCell]) -> int:
    return sum(cell.occupied_count() for cell in free_cells)


def drag_capacity(free_cells: Iterable[FreeCell], base: int = DEFAULT_DRAG_CAPACITY) -> int:
    """Cards that may move as one unit: ``base`` minus occupied free cells.

    Empty tableau columns do not raise the limit.
    """
    return base - occupied_free_cells(free_cells)


@dataclass(eq=False)
class TableauColumn(Receptacle):
    drag_capacity_base: int = DEFAULT_DRAG_CAPACITY

    def can_accept(self, run: Sequence[Card]) -> bool:
        if not run:
            return False
        if self.is_empty():
            return True
        top = self.top()
        head = run[0]
        if head.is_higher_in_rank(top) or head.is_same_color(top):
            return False
        return top.rank - head.rank == 1

    def can_be_dragged(self, card: Card, free_cells: Sequence[FreeCell] = ()) -> bool:
        run = self.run_from(card)
        return (
            is_sequenced(run)
            and alternates_colors(run)
            and len(run) <= drag_capacity(free_cells, self.drag_capacity_base)
        )


@dataclass(eq=False)
class FreeCell(Receptacle):
    def can_accept(self, run: Sequence[Card]) -> bool:
        return self.is_empty() and len(run) == 1

    def can_be_dragged(self, card: Card, free_cells: Sequence[FreeCell] = ()) -> bool:
        return True

    def occupied_count(self) -> int:
        return len(self.cards)


@dataclass(eq=False)
class Foundation(Receptacle):
    """Builds one suit upward from the ace.

    With ``suit`` unset the first ace placed decides the suit.
    """

    suit: Optional[Suit] = None

    def can_accept(self, run: Sequence[Card]) -> bool:
        if len(run) != 1:
            return False
        card = run[0]
        if self.suit is not None and card.suit is not self.suit:
            return False
        if self.is_empty():
            return card.rank == ACE
        top = self.top()
        return card.rank - top.rank == 1 and top.is_same_suit(card)

    def can_be_dragged(self, card: Card, free_cells: Sequence[FreeCell] = ()) -> bool:
        return True

    def is_complete(self) -> bool:
        return len(self.cards) == RANK_COUNT
