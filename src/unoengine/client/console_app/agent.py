from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Callable, TextIO

from unoengine.engine.actions import CardSelection, DrawCardAction, PlayCardAction
from unoengine.engine.agent import TurnContext
from unoengine.engine.game import Event
from unoengine.engine.types import COLORS, Card, Color, parse_color


def parse_selection(player_id: int, text: str) -> CardSelection:
    """Parse a typed answer: "draw" or a zero-based hand index.

    Only the last non-empty line counts, so a player may think out loud first.
    """
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    if not lines:
        raise ValueError("Empty answer.")
    last = lines[-1]
    if last.lower() == "draw":
        return DrawCardAction(player=player_id)
    try:
        index = int(last)
    except ValueError:
        raise ValueError(f"Expected 'draw' or a card index, got {last!r}.") from None
    return PlayCardAction(player=player_id, hand_index=index)


def describe_event(event: Event) -> str | None:
    t = event.get("type")
    if t == "OPENING_CARD":
        return f"[GAME] First card: {event['card']}, takes effect on player {event['player']}"
    if t == "CARD_PLAYED":
        return f"[GAME] Player {event['player']} put the card {event['card']}"
    if t == "EFFECT_APPLIED":
        if event.get("effect") == "nothing":
            return None
        return f"[GAME] Effect took on player {event['target']}: {event['text']}"
    if t == "COLOR_CHOSEN":
        return f"[GAME] Player {event['player']} chose color {event['color']}"
    if t == "CARD_DRAWN":
        cards = event.get("cards")
        if cards:
            return f"[GAME] You drew: {', '.join(str(c) for c in cards)}"  # type: ignore[union-attr]
        return f"[GAME] Player {event['player']} drew {event['count']} card(s)."
    if t == "DECK_RESHUFFLED":
        return f"[GAME] Discard pile reshuffled into the deck ({event['count']} cards)."
    if t == "TURN_STARTED":
        return f"[GAME] Next: Player {event['player']}"
    if t == "PLAYER_WON":
        return f"[GAME] Player {event['player']} is out of cards! Place {event['place']}."
    if t == "GAME_ENDED":
        return f"[GAME] Game over. Winners in order: {event['winners']}"
    if t == "REJECTED":
        return f"[GAME] INVALID PLAY! {event['error']}"
    return None


@dataclass
class ConsoleAgent:
    """A human at the terminal."""

    read: Callable[[str], str] = input
    out: TextIO | None = None
    transcript: list[str] = field(default_factory=list)

    def _say(self, text: str) -> None:
        self.transcript.append(text)
        print(text, file=self.out)

    def request_card_choice(
        self, player_id: int, hand: Sequence[Card], context: TurnContext
    ) -> CardSelection:
        self._say(f"Top of the pile: {context.top}  ({context.active_players} players left)")
        for i, card in enumerate(hand):
            self._say(f"{i} -> {card}")
        while True:
            answer = self.read(f"Player {player_id}, card index or 'draw': ")
            try:
                return parse_selection(player_id, answer)
            except ValueError as e:
                self._say(str(e))

    def request_color_choice(self, player_id: int, context: TurnContext) -> Color:
        while True:
            answer = self.read(f"Player {player_id}, pick a color ({'/'.join(COLORS)}): ")
            try:
                return parse_color(answer)
            except ValueError as e:
                self._say(str(e))

    def notify(self, player_id: int | None, event: Event) -> None:
        text = describe_event(event)
        if text is not None:
            self._say(text)
