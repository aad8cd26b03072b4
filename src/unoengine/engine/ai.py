from __future__ import annotations

import random
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from .actions import CardSelection, DrawCardAction, PlayCardAction
from .agent import TurnContext
from .game import Event
from .rules import evaluate
from .types import COLORS, Card, Color, Effect


@dataclass(frozen=True)
class AISpec:
    """Simple AI tuning parameters.

    difficulty:
      0 = easy (often draws instead of playing)
      1 = normal
      2 = hard (never passes up a legal play)
    """

    difficulty: int = 1


# Effects that land on whoever holds the turn when they resolve.
_SELF_PENALTY: dict[Effect, float] = {"draw_two": 2.0, "wild_draw_four": 4.0}


def _card_value(card: Card, effect: Effect, hand: Sequence[Card]) -> float:
    v = 0.0
    if card.kind == "number":
        assert card.number is not None
        v += card.number * 0.3
    else:
        # Shed action cards while they are still cheap to play
        v += 2.0
    v -= _SELF_PENALTY.get(effect, 0.0)
    if effect == "reverse":
        v += 0.5
    if card.color is not None:
        # Keep the color we hold most of in play
        v += 0.2 * sum(1 for c in hand if c.color == card.color)
    return v


@dataclass
class HeuristicAgent:
    """Scripted player: plays the best-scoring legal card, otherwise draws.

    Uses its own seeded rng so a game stays reproducible for a given seed.
    """

    spec: AISpec = field(default_factory=AISpec)
    rng: random.Random = field(default_factory=lambda: random.Random(0))
    inbox: list[Event] = field(default_factory=list)
    hand_colors: list[Color] = field(default_factory=list)

    def request_card_choice(
        self, player_id: int, hand: Sequence[Card], context: TurnContext
    ) -> CardSelection:
        best: tuple[float, int] | None = None
        for idx, card in enumerate(hand):
            effect, _ = evaluate(context.top, card)
            if effect == "wrong":
                continue
            score = _card_value(card, effect, hand)
            if best is None or score > best[0]:
                best = (score, idx)

        if best is None:
            return DrawCardAction(player=player_id)

        # Difficulty-based mistakes
        if self.spec.difficulty <= 0:
            if self.rng.random() < 0.35:
                return DrawCardAction(player=player_id)
        elif self.spec.difficulty == 1:
            if self.rng.random() < 0.05:
                return DrawCardAction(player=player_id)

        self.hand_colors = [
            c.color for i, c in enumerate(hand) if i != best[1] and c.color is not None
        ]
        return PlayCardAction(player=player_id, hand_index=best[1])

    def request_color_choice(self, player_id: int, context: TurnContext) -> Color:
        counts = Counter(self.hand_colors)
        if not counts:
            return self.rng.choice(COLORS)
        # ties go to the earlier color so the choice is stable
        return max(COLORS, key=lambda c: (counts[c], -COLORS.index(c)))

    def notify(self, player_id: int | None, event: Event) -> None:
        self.inbox.append(event)
