from __future__ import annotations


class GameError(RuntimeError):
    pass


class InvalidPlay(GameError):
    """The candidate card matches the discard top on nothing."""


class OutOfRangeSelection(GameError):
    """A hand index outside the player's current hand."""


class DeckExhausted(GameError):
    def __init__(self, requested: int, available: int) -> None:
        super().__init__(f"Cannot draw {requested} card(s): only {available} left.")
        self.requested = requested
        self.available = available


class ConstructionError(GameError, ValueError):
    pass
