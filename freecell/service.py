"""Convenience service layer for UI consumers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import List, Mapping, Optional

from .cards import card_label, deserialize_card, serialize_card
from .game import FreeCellGame, IllegalMove
from .receptacles import Receptacle
from .rules_schema import DEFAULT_RULES, RuleSet


class PileKind(Enum):
    TABLEAU = "tableau"
    FREE_CELL = "free_cell"
    FOUNDATION = "foundation"


@dataclass
class PileView:
    kind: str
    index: int
    cards: list[dict]
    labels: list[str]
    empty: bool


@dataclass
class SelectionView:
    kind: str
    index: int
    cards: list[dict]


@dataclass
class TableView:
    tableau: list[PileView]
    free_cells: list[PileView]
    foundations: list[PileView]
    selection: Optional[SelectionView]
    won: bool
    drag_capacity: int
    free_cell_occupancy: int


class GameService:
    """Facade around FreeCellGame addressing piles by kind and index."""

    def __init__(self, game: Optional[FreeCellGame] = None, *, rules: Optional[RuleSet] = None) -> None:
        self.game = game or FreeCellGame(rules=rules or DEFAULT_RULES)

    # Lifecycle ---------------------------------------------------------

    def start_new_game(self, seed: Optional[int] = None) -> TableView:
        self.game.rng = Random(seed)
        self.game.deal()
        return self.get_table_view()

    def restart(self) -> TableView:
        self.game.restart()
        return self.get_table_view()

    # Actions -----------------------------------------------------------

    def select(self, kind: str, index: int, card_payload: Optional[Mapping[str, object]] = None) -> TableView:
        """Select from a pile; without a card payload the top card is used."""
        pile = self.pile(kind, index)
        if card_payload is not None:
            card = deserialize_card(card_payload)
        elif pile.is_empty():
            raise ValueError(f"{kind} {index} is empty.")
        else:
            card = pile.top()
        self.game.select(card, pile)
        return self.get_table_view()

    def insert(self, kind: str, index: int) -> TableView:
        target = self.pile(kind, index)
        selection = self.game.selection
        run = list(selection.run) if selection is not None else []
        if not self.game.insert(run, target):
            raise IllegalMove(f"Cards cannot be placed on {kind} {index}.")
        return self.get_table_view()

    def cancel(self) -> TableView:
        self.game.cancel()
        return self.get_table_view()

    def auto_move(self) -> TableView:
        self.game.auto_move_to_foundations()
        return self.get_table_view()

    # Views -------------------------------------------------------------

    def get_table_view(self) -> TableView:
        game = self.game
        selection_view: Optional[SelectionView] = None
        if game.selection is not None:
            kind, index = self.address(game.selection.source)
            selection_view = SelectionView(
                kind=kind.value,
                index=index,
                cards=[serialize_card(card) for card in game.selection.run],
            )
        return TableView(
            tableau=self._pile_views(PileKind.TABLEAU),
            free_cells=self._pile_views(PileKind.FREE_CELL),
            foundations=self._pile_views(PileKind.FOUNDATION),
            selection=selection_view,
            won=game.is_won(),
            drag_capacity=game.drag_capacity(),
            free_cell_occupancy=game.free_cell_occupancy(),
        )

    # Helpers -----------------------------------------------------------

    def piles(self, kind: PileKind) -> List[Receptacle]:
        if kind is PileKind.TABLEAU:
            return list(self.game.tableau)
        if kind is PileKind.FREE_CELL:
            return list(self.game.free_cells)
        return list(self.game.foundations)

    def pile(self, kind: str, index: int) -> Receptacle:
        try:
            pile_kind = PileKind(kind)
        except ValueError as exc:
            raise ValueError(f"Unknown pile kind: {kind!r}") from exc
        piles = self.piles(pile_kind)
        if not 0 <= index < len(piles):
            raise ValueError(f"{kind} index must be within 0..{len(piles) - 1}.")
        return piles[index]

    def address(self, receptacle: Receptacle) -> tuple[PileKind, int]:
        for kind in PileKind:
            for index, pile in enumerate(self.piles(kind)):
                if pile is receptacle:
                    return kind, index
        raise ValueError("Receptacle does not belong to this game.")

    def _pile_views(self, kind: PileKind) -> list[PileView]:
        return [
            PileView(
                kind=kind.value,
                index=index,
                cards=[serialize_card(card) for card in pile.cards],
                labels=[card_label(card) for card in pile.cards],
                empty=pile.is_empty(),
            )
            for index, pile in enumerate(self.piles(kind))
        ]
