"""Deterministic, headless rules engine for unoengine.

IMPORTANT: This package must never do I/O beyond logging.
"""

from .actions import ChooseColorAction, DrawCardAction, PlayCardAction
from .agent import PlayerAgent, TurnContext
from .deck import build_deck, deal, shuffle
from .errors import ConstructionError, DeckExhausted, GameError, InvalidPlay, OutOfRangeSelection
from .game import GameConfig, GameState, StepResult, new_game, open_table, step
from .rules import evaluate
from .table import Table
from .types import Card, CardKind, Color, Effect

__all__ = [
    "Card",
    "CardKind",
    "ChooseColorAction",
    "Color",
    "ConstructionError",
    "DeckExhausted",
    "DrawCardAction",
    "Effect",
    "GameConfig",
    "GameError",
    "GameState",
    "InvalidPlay",
    "OutOfRangeSelection",
    "PlayCardAction",
    "PlayerAgent",
    "StepResult",
    "Table",
    "TurnContext",
    "build_deck",
    "deal",
    "evaluate",
    "new_game",
    "open_table",
    "shuffle",
    "step",
]
