from __future__ import annotations

from dataclasses import dataclass

from .types import Color


@dataclass(frozen=True)
class PlayCardAction:
    player: int
    hand_index: int


@dataclass(frozen=True)
class DrawCardAction:
    player: int


@dataclass(frozen=True)
class ChooseColorAction:
    player: int
    color: Color


# What a Player Agent may answer when asked for a card.
CardSelection = PlayCardAction | DrawCardAction

Action = PlayCardAction | DrawCardAction | ChooseColorAction
