import json

import pytest
from pydantic import ValidationError

from freecell.cards import Suit
from freecell.rules_schema import DEFAULT_RULES, RuleSet, load_rules


def test_default_rules():
    assert DEFAULT_RULES.tableau_columns == 8
    assert DEFAULT_RULES.free_cells == 4
    assert DEFAULT_RULES.drag_capacity_base == 5
    assert not DEFAULT_RULES.dedicated_foundations
    assert DEFAULT_RULES.foundation_suits() == [Suit.DIAMONDS, Suit.SPADES, Suit.HEARTS, Suit.CLUBS]


def test_foundation_order_is_normalized():
    rules = RuleSet(foundation_order=["Clubs", "HEARTS", "spades", "diamonds"])
    assert rules.foundation_order == ["clubs", "hearts", "spades", "diamonds"]


@pytest.mark.parametrize(
    "payload",
    [
        {"tableau_columns": 0},
        {"free_cells": -1},
        {"drag_capacity_base": 0},
        {"foundation_order": ["clubs", "hearts", "spades"]},
        {"foundation_order": ["clubs", "clubs", "spades", "hearts"]},
        {"foundation_order": ["clubs", "stars", "spades", "hearts"]},
    ],
)
def test_invalid_rules_are_rejected(payload):
    with pytest.raises(ValidationError):
        RuleSet(**payload)


def test_load_rules_from_file(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"free_cells": 2, "dedicated_foundations": True}), encoding="utf-8")
    rules = load_rules(path)
    assert rules.free_cells == 2
    assert rules.dedicated_foundations


def test_load_rules_requires_an_object(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_rules(path)
