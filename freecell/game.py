"""High-level game orchestration for FreeCell."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from random import Random
from typing import Callable, List, Optional, Sequence, Tuple

from .cards import Card, Suit
from .deck import deal_columns, shuffle_deck, validate_deck
from .events import GameEvent, Listener, Observers
from .receptacles import (
    CardNotInReceptacle,
    Foundation,
    FreeCell,
    Receptacle,
    TableauColumn,
    drag_capacity,
    occupied_free_cells,
)
from .rules_schema import DEFAULT_RULES, RuleSet

logger = logging.getLogger(__name__)


class MissingSelection(RuntimeError):
    """Raised when cards are inserted without a pending selection."""


class IllegalMove(RuntimeError):
    """Raised by callers that treat a rejected insert as an error."""


@dataclass(frozen=True)
class Selection:
    run: Tuple[Card, ...]
    source: Receptacle


@dataclass
class FreeCellGame:
    """Own every receptacle of one table and move cards between them.

    Play is two-phase: ``select`` lifts a run out of a receptacle and
    ``insert`` drops it on a target. Observers are notified after every
    change, in the order they subscribed.
    """

    rules: RuleSet = field(default_factory=lambda: DEFAULT_RULES)
    rng: Optional[Random] = None

    tableau: List[TableauColumn] = field(init=False)
    free_cells: List[FreeCell] = field(init=False)
    foundations: List[Foundation] = field(init=False)
    selection: Optional[Selection] = field(init=False, default=None)
    observers: Observers = field(init=False, repr=False)
    _initial_order: List[Tuple[int, Suit]] = field(init=False, default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.observers = Observers()
        self._layout([])

    # Observers ---------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.observers.subscribe(listener)

    # Dealing -----------------------------------------------------------

    def deal(self, deck: Optional[Sequence[Card]] = None) -> None:
        """Shuffle a fresh deck (or use ``deck`` as given) and deal it out.

        Free cells and foundations are emptied and any pending selection is
        dropped.
        """
        if deck is not None:
            cards = [Card(card.rank, card.suit) for card in deck]
            validate_deck(cards)
        else:
            cards = shuffle_deck(rng=self.rng)
        self._initial_order = [(card.rank, card.suit) for card in cards]
        self._layout(cards)
        logger.debug("Dealt %d cards into %d columns", len(cards), len(self.tableau))
        self.observers.notify(GameEvent.DEALT)

    def restart(self) -> None:
        """Deal the most recent layout again."""
        if not self._initial_order:
            raise RuntimeError("Nothing has been dealt yet.")
        self._layout([Card(rank, suit) for rank, suit in self._initial_order])
        self.observers.notify(GameEvent.DEALT)

    # Moves -------------------------------------------------------------

    def select(self, card: Card, source: Receptacle) -> List[Card]:
        """Lift the run starting at ``card``; return it, or ``[]`` if it cannot move.

        Selecting the run that is already pending cancels it.
        """
        self._ensure_owned(source)
        run = source.run_from(card)

        pending = self.selection
        if pending is not None:
            self._clear_selection()
            if pending.source is source and pending.run[0].identity == run[0].identity:
                self.observers.notify(GameEvent.DESELECTED)
                return []

        if not source.can_be_dragged(card, self.free_cells):
            if pending is not None:
                self.observers.notify(GameEvent.DESELECTED)
            return []

        for selected in run:
            selected.selected = True
        self.selection = Selection(run=tuple(run), source=source)
        self.observers.notify(GameEvent.SELECTED)
        return list(run)

    def insert(
        self,
        run: Sequence[Card],
        target: Receptacle,
        source: Optional[Receptacle] = None,
    ) -> bool:
        """Move ``run`` from its source onto ``target`` if the target accepts it.

        Either way the selection ends. Returns whether the cards moved.
        """
        pending = self.selection
        if pending is None:
            raise MissingSelection("Select cards before inserting them.")
        if source is None:
            source = pending.source
        elif source is not pending.source:
            raise MissingSelection("Cards must be inserted from the receptacle they were selected from.")
        if not run:
            raise MissingSelection("No cards are selected.")
        if [card.identity for card in run] != [card.identity for card in pending.run]:
            raise MissingSelection("Only the selected run can be inserted.")
        self._ensure_owned(target)
        tail = source.cards[-len(run):]
        if [card.identity for card in tail] != [card.identity for card in run]:
            raise CardNotInReceptacle("Inserted cards must be the top run of their source.")

        moved = target is not source and target.insert(run)
        if moved:
            source.remove(run)
        for card in run:
            card.selected = False
        self._clear_selection()

        if moved:
            logger.debug("Moved %d card(s) onto %s", len(run), type(target).__name__)
            self.observers.notify(GameEvent.MOVED)
        else:
            logger.debug("Rejected %r onto %s", list(run), type(target).__name__)
            self.observers.notify(GameEvent.REJECTED)
        return moved

    def cancel(self) -> bool:
        if self.selection is None:
            return False
        self._clear_selection()
        self.observers.notify(GameEvent.DESELECTED)
        return True

    def auto_move_to_foundations(self) -> int:
        """Move exposed cards to foundations until nothing else fits."""
        had_selection = self.selection is not None
        self._clear_selection()
        if had_selection:
            self.observers.notify(GameEvent.DESELECTED)
        moved = 0
        progress = True
        while progress:
            progress = False
            for source in [*self.free_cells, *self.tableau]:
                if source.is_empty():
                    continue
                card = source.top()
                for foundation in self.foundations:
                    if foundation.insert([card]):
                        source.remove([card])
                        moved += 1
                        progress = True
                        break
        if moved:
            logger.debug("Auto-moved %d card(s) to foundations", moved)
            self.observers.notify(GameEvent.AUTO_MOVED)
        return moved

    # Queries -----------------------------------------------------------

    def is_won(self) -> bool:
        return len(self.foundations) == len(Suit) and all(f.is_complete() for f in self.foundations)

    def receptacles(self) -> List[Receptacle]:
        return [*self.tableau, *self.free_cells, *self.foundations]

    def free_cell_occupancy(self) -> int:
        return occupied_free_cells(self.free_cells)

    def drag_capacity(self) -> int:
        return drag_capacity(self.free_cells, self.rules.drag_capacity_base)

    def card_count(self) -> int:
        return sum(len(receptacle) for receptacle in self.receptacles())

    # Helpers -----------------------------------------------------------

    def _layout(self, cards: Sequence[Card]) -> None:
        self._clear_selection()
        self.tableau = [
            TableauColumn(pile, drag_capacity_base=self.rules.drag_capacity_base)
            for pile in deal_columns(cards, self.rules.tableau_columns)
        ]
        self.free_cells = [FreeCell() for _ in range(self.rules.free_cells)]
        self.foundations = [
            Foundation(suit=suit if self.rules.dedicated_foundations else None)
            for suit in self.rules.foundation_suits()
        ]

    def _clear_selection(self) -> None:
        if self.selection is not None:
            for card in self.selection.run:
                card.selected = False
        self.selection = None

    def _ensure_owned(self, receptacle: Receptacle) -> None:
        if not any(receptacle is owned for owned in self.receptacles()):
            raise ValueError("Receptacle does not belong to this game.")
