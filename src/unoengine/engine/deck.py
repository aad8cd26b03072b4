from __future__ import annotations

import random
from dataclasses import dataclass, field

from .errors import ConstructionError
from .types import ACTION_KINDS, COLORS, Card

DECK_SIZE = 108
HAND_SIZE = 7
MIN_PLAYERS = 2
MAX_PLAYERS = 10


@dataclass
class Seat:
    player_id: int
    hand: list[Card] = field(default_factory=list)


def build_deck() -> list[Card]:
    """Return the standard 108-card deck in construction order (unshuffled)."""
    deck: list[Card] = []
    for color in COLORS:
        deck.append(Card.numbered(color, 0))
        # Two runs of 1-9 plus one of each action card per run
        for _ in range(2):
            for n in range(1, 10):
                deck.append(Card.numbered(color, n))
            for kind in ACTION_KINDS:
                deck.append(Card(kind=kind, color=color))

    for _ in range(4):
        deck.append(Card(kind="wild"))
        deck.append(Card(kind="wild_draw_four"))
    return deck


def shuffle(deck: list[Card], rng: random.Random) -> None:
    rng.shuffle(deck)


def deal(
    deck: list[Card],
    n_players: int,
    hand_size: int = HAND_SIZE,
    *,
    min_players: int = MIN_PLAYERS,
    max_players: int = MAX_PLAYERS,
) -> list[Seat]:
    """Deal `hand_size` cards to each player from the front of `deck`.

    Each player's hand is one contiguous block, player 0 first.
    """
    if not min_players <= n_players <= max_players:
        raise ConstructionError(
            f"Player count must be between {min_players} and {max_players}, got {n_players}."
        )
    if n_players * hand_size > len(deck):
        raise ConstructionError(
            f"Cannot deal {hand_size} cards to {n_players} players from {len(deck)} cards."
        )

    seats: list[Seat] = []
    for player_id in range(n_players):
        hand = deck[:hand_size]
        del deck[:hand_size]
        seats.append(Seat(player_id=player_id, hand=hand))
    return seats
