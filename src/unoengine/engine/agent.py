from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Mapping, Protocol

from .actions import CardSelection
from .game import Event, GameState
from .types import Card, Color


@dataclass(frozen=True)
class TurnContext:
    """What a player may know when asked for a decision."""

    top: Card | None
    order: tuple[int, ...]
    hand_sizes: Mapping[int, int]
    deck_size: int
    wins: int
    last_error: str | None = None

    @property
    def active_players(self) -> int:
        return len(self.order) - self.wins


class PlayerAgent(Protocol):
    def request_card_choice(
        self, player_id: int, hand: Sequence[Card], context: TurnContext
    ) -> CardSelection: ...

    def request_color_choice(self, player_id: int, context: TurnContext) -> Color: ...

    def notify(self, player_id: int | None, event: Event) -> None: ...


def context_for(state: GameState, last_error: str | None = None) -> TurnContext:
    return TurnContext(
        top=state.top_card(),
        order=tuple(state.order()),
        hand_sizes={s.player_id: len(s.hand) for s in state.seats},
        deck_size=len(state.deck),
        wins=state.wins,
        last_error=last_error,
    )
