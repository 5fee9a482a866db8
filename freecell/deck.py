"""Deck creation and dealing utilities for FreeCell."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence

from .cards import RANK_COUNT, Card, Suit

DECK_SIZE = len(Suit) * RANK_COUNT


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck, suit by suit, ace first."""
    return [Card(rank, suit) for suit in Suit for rank in range(RANK_COUNT)]


def validate_deck(cards: Sequence[Card]) -> None:
    if len(cards) != DECK_SIZE:
        raise ValueError(f"Deck must contain exactly {DECK_SIZE} cards.")
    if len({card.identity for card in cards}) != DECK_SIZE:
        raise ValueError("Deck must not contain duplicate cards.")


def shuffle_deck(*, rng: Optional[Random] = None) -> List[Card]:
    cards = build_deck()
    if rng is None:
        rng = Random()
    rng.shuffle(cards)
    return cards


def deal_columns(cards: Sequence[Card], columns: int) -> List[List[Card]]:
    """Deal cards round-robin into ``columns`` piles, first card to the first pile."""
    if columns < 1:
        raise ValueError("At least one column is required.")
    piles: List[List[Card]] = [[] for _ in range(columns)]
    for index, card in enumerate(cards):
        piles[index % columns].append(card)
    return piles
