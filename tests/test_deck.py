from __future__ import annotations

import random
from collections import Counter

import pytest

from unoengine.engine.deck import DECK_SIZE, build_deck, deal, shuffle
from unoengine.engine.errors import ConstructionError
from unoengine.engine.types import COLORS, Card


def test_deck_has_108_cards_with_standard_composition() -> None:
    deck = build_deck()
    assert len(deck) == DECK_SIZE == 108

    counts = Counter(deck)
    for color in COLORS:
        assert counts[Card.numbered(color, 0)] == 1
        for n in range(1, 10):
            assert counts[Card.numbered(color, n)] == 2
        for kind in ("skip", "reverse", "draw_two"):
            assert counts[Card(kind=kind, color=color)] == 2
        assert sum(1 for c in deck if c.color == color) == 25
    assert counts[Card(kind="wild")] == 4
    assert counts[Card(kind="wild_draw_four")] == 4


def test_deck_construction_order_is_fixed() -> None:
    deck = build_deck()
    assert deck == build_deck()
    assert deck[0] == Card.numbered("red", 0)
    assert deck[1:10] == [Card.numbered("red", n) for n in range(1, 10)]
    assert deck[10:13] == [
        Card(kind="skip", color="red"),
        Card(kind="reverse", color="red"),
        Card(kind="draw_two", color="red"),
    ]
    assert deck[13] == Card.numbered("red", 1)
    assert deck[25] == Card.numbered("green", 0)
    assert deck[100:102] == [Card(kind="wild"), Card(kind="wild_draw_four")]
    assert all(c.color is None for c in deck[100:])


def test_shuffle_is_a_permutation() -> None:
    deck = build_deck()
    shuffle(deck, random.Random(42))
    assert Counter(deck) == Counter(build_deck())
    assert deck != build_deck()


def test_shuffle_is_reproducible_for_a_seed() -> None:
    a = build_deck()
    b = build_deck()
    shuffle(a, random.Random(7))
    shuffle(b, random.Random(7))
    assert a == b


def test_deal_gives_contiguous_blocks_in_player_order() -> None:
    deck = build_deck()
    reference = build_deck()
    seats = deal(deck, 3)

    assert [s.player_id for s in seats] == [0, 1, 2]
    assert seats[0].hand == reference[0:7]
    assert seats[1].hand == reference[7:14]
    assert seats[2].hand == reference[14:21]
    assert deck == reference[21:]


@pytest.mark.parametrize("players", [0, 1, 11])
def test_deal_rejects_player_count_out_of_range(players: int) -> None:
    with pytest.raises(ConstructionError):
        deal(build_deck(), players)


def test_construction_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        deal(build_deck(), 1)


def test_deal_accepts_bounds() -> None:
    assert len(deal(build_deck(), 2)) == 2
    deck = build_deck()
    assert len(deal(deck, 10)) == 10
    assert len(deck) == 108 - 70
