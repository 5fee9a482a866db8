from dataclasses import FrozenInstanceError
from random import Random

import pytest

from freecell.cards import Card, Color, Suit, card_label, deserialize_card, serialize_card
from freecell.deck import DECK_SIZE, build_deck, deal_columns, shuffle_deck, validate_deck


def test_card_derived_attributes():
    card = Card(6, Suit.HEARTS)
    assert card.color is Color.RED
    assert card.identity == "6hearts"
    assert card.image == "/images/7hearts.png"
    assert not card.selected
    assert Card(0, Suit.CLUBS).color is Color.BLACK


def test_card_comparisons():
    seven_spades = Card(6, Suit.SPADES)
    six_diamonds = Card(5, Suit.DIAMONDS)
    six_clubs = Card(5, Suit.CLUBS)

    assert seven_spades.is_higher_in_rank(six_diamonds)
    assert not six_diamonds.is_higher_in_rank(six_clubs)
    assert not six_diamonds.is_same_color(seven_spades)
    assert six_clubs.is_same_color(seven_spades)
    assert not six_clubs.is_same_suit(seven_spades)
    assert Card(1, Suit.CLUBS).is_same_suit(six_clubs)


def test_card_equality_uses_identity_not_selection():
    card = Card(3, Suit.SPADES)
    twin = Card(3, Suit.SPADES)
    twin.selected = True
    assert card == twin
    assert hash(card) == hash(twin)
    assert card != Card(3, Suit.CLUBS)


@pytest.mark.parametrize("rank", [-1, 13])
def test_card_rejects_out_of_range_rank(rank):
    with pytest.raises(ValueError):
        Card(rank, Suit.HEARTS)


def test_serialize_and_label():
    card = Card(12, Suit.DIAMONDS)
    payload = serialize_card(card)
    assert payload["suit"] == "diamonds"
    assert payload["color"] == "red"
    assert payload["id"] == "12diamonds"
    assert card_label(card) == "King of Diamonds"
    assert card_label(Card(4, Suit.CLUBS)) == "5 of Clubs"
    assert deserialize_card({"rank": 12, "suit": "Diamonds"}) == card


@pytest.mark.parametrize("payload", [{"rank": 3}, {"rank": "x", "suit": "hearts"}, {"rank": 3, "suit": "stars"}])
def test_deserialize_rejects_bad_payload(payload):
    with pytest.raises(ValueError):
        deserialize_card(payload)


def test_build_deck_has_every_card_once():
    deck = build_deck()
    assert len(deck) == DECK_SIZE == 52
    assert len({(card.rank, card.suit) for card in deck}) == 52
    for suit in Suit:
        assert sorted(card.rank for card in deck if card.suit is suit) == list(range(13))
    assert [card.suit for card in deck[::13]] == [Suit.DIAMONDS, Suit.SPADES, Suit.HEARTS, Suit.CLUBS]
    assert [card.rank for card in deck[:13]] == list(range(13))


def test_shuffle_is_a_permutation_and_seeded():
    first = shuffle_deck(rng=Random(7))
    second = shuffle_deck(rng=Random(7))
    assert [c.identity for c in first] == [c.identity for c in second]
    assert sorted(c.identity for c in first) == sorted(c.identity for c in build_deck())
    validate_deck(first)


def test_validate_deck_rejects_short_or_duplicate_decks():
    deck = build_deck()
    with pytest.raises(ValueError):
        validate_deck(deck[:-1])
    with pytest.raises(ValueError):
        validate_deck(deck[:-1] + [deck[0]])


def test_deal_columns_round_robin():
    piles = deal_columns(build_deck(), 8)
    assert [len(pile) for pile in piles] == [7, 7, 7, 7, 6, 6, 6, 6]
    assert piles[0][0] == Card(0, Suit.DIAMONDS)
    assert piles[1][0] == Card(1, Suit.DIAMONDS)
    assert piles[0][1] == Card(8, Suit.DIAMONDS)
    with pytest.raises(ValueError):
        deal_columns(build_deck(), 0)


def test_card_rank_and_suit_are_read_only():
    card = Card(3, Suit.SPADES)
    with pytest.raises(FrozenInstanceError):
        card.rank = 4
    with pytest.raises(FrozenInstanceError):
        card.suit = Suit.HEARTS
    card.selected = True
    assert card.identity == "3spades"
    assert card.selected
