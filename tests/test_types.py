from __future__ import annotations

import pytest

from unoengine.engine.deck import build_deck
from unoengine.engine.types import Card, card_from_str, card_to_str, parse_color


def test_card_invariants() -> None:
    with pytest.raises(ValueError):
        Card(kind="number", color="red")
    with pytest.raises(ValueError):
        Card(kind="number", color="red", number=10)
    with pytest.raises(ValueError):
        Card(kind="skip")
    with pytest.raises(ValueError):
        Card(kind="wild", number=4)
    assert Card(kind="wild").color is None


def test_wild_takes_a_color_as_a_new_card() -> None:
    wild = Card(kind="wild_draw_four")
    colored = wild.with_color("blue")
    assert wild.color is None
    assert colored.color == "blue"
    assert colored.kind == "wild_draw_four"


def test_card_labels() -> None:
    assert str(Card.numbered("red", 7)) == "(Red 7)"
    assert str(Card(kind="draw_two", color="green")) == "(Green +2)"
    assert str(Card(kind="wild")) == "(WILD)"
    assert str(Card(kind="wild_draw_four", color="yellow")) == "(Yellow WILD +4)"


def test_card_tokens() -> None:
    assert card_to_str(Card.numbered("blue", 0)) == "blue_0"
    assert card_to_str(Card(kind="reverse", color="red")) == "red_reverse"
    assert card_to_str(Card(kind="wild_draw_four")) == "wild_draw_four"
    assert card_from_str("green_wild") == Card(kind="wild", color="green")
    for card in set(build_deck()):
        assert card_from_str(card_to_str(card)) == card


@pytest.mark.parametrize("token", ["purple_5", "red", "skip", "5", "red_number", "red_11"])
def test_bad_card_tokens(token: str) -> None:
    with pytest.raises(ValueError):
        card_from_str(token)


def test_parse_color() -> None:
    assert parse_color(" RED\n") == "red"
    with pytest.raises(ValueError):
        parse_color("pink")
