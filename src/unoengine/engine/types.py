from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

Color = Literal["red", "green", "blue", "yellow"]
CardKind = Literal["number", "skip", "reverse", "draw_two", "wild", "wild_draw_four"]
Effect = Literal["nothing", "skip", "reverse", "draw_two", "wild", "wild_draw_four", "wrong"]

COLORS: tuple[Color, ...] = ("red", "green", "blue", "yellow")
ACTION_KINDS: tuple[CardKind, ...] = ("skip", "reverse", "draw_two")
WILD_KINDS: tuple[CardKind, ...] = ("wild", "wild_draw_four")

# Every kind maps to exactly one effect; "wrong" is never produced from a kind.
KIND_EFFECT: dict[CardKind, Effect] = {
    "number": "nothing",
    "skip": "skip",
    "reverse": "reverse",
    "draw_two": "draw_two",
    "wild": "wild",
    "wild_draw_four": "wild_draw_four",
}

EFFECT_TEXT: dict[Effect, str] = {
    "nothing": "No effect",
    "skip": "Skip",
    "reverse": "Reverse turn",
    "draw_two": "Draw 2 cards",
    "wild": "WILD!",
    "wild_draw_four": "WILD, and draw 4 cards",
    "wrong": "Invalid play",
}


@dataclass(frozen=True)
class Card:
    kind: CardKind
    color: Color | None = None
    number: int | None = None

    def __post_init__(self) -> None:
        if self.kind == "number":
            if self.number is None or not 0 <= self.number <= 9:
                raise ValueError(f"Number card needs a value in 0-9, got {self.number!r}")
        elif self.number is not None:
            raise ValueError(f"{self.kind} cards carry no number")
        if self.kind not in WILD_KINDS and self.color is None:
            raise ValueError(f"{self.kind} cards must have a color")

    @staticmethod
    def numbered(color: Color, number: int) -> "Card":
        return Card(kind="number", color=color, number=number)

    @property
    def is_wild(self) -> bool:
        return self.kind in WILD_KINDS

    def with_color(self, color: Color | None) -> "Card":
        """Return a copy carrying `color` (used when a wild card is played)."""
        return replace(self, color=color)

    def label(self) -> str:
        if self.kind == "number":
            return str(self.number)
        return {
            "skip": "Skip",
            "reverse": "Reverse",
            "draw_two": "+2",
            "wild": "WILD",
            "wild_draw_four": "WILD +4",
        }[self.kind]

    def __str__(self) -> str:
        if self.color is None:
            return f"({self.label()})"
        return f"({self.color.capitalize()} {self.label()})"


def parse_color(text: str) -> Color:
    value = text.strip().lower()
    for c in COLORS:
        if c == value:
            return c
    raise ValueError(f"Unknown color: {text!r}")


def card_to_str(card: Card) -> str:
    """Compact token form: red_5, blue_skip, wild, green_wild_draw_four."""
    body = str(card.number) if card.kind == "number" else card.kind
    if card.color is None:
        return body
    return f"{card.color}_{body}"


def card_from_str(token: str) -> Card:
    color: Color | None = None
    body = token
    head, sep, rest = token.partition("_")
    if sep and head in COLORS:
        color = parse_color(head)
        body = rest
    if body.isdigit():
        if color is None:
            raise ValueError(f"Number card without color: {token!r}")
        return Card.numbered(color, int(body))
    if body not in KIND_EFFECT or body == "number":
        raise ValueError(f"Unknown card: {token!r}")
    return Card(kind=body, color=color)  # type: ignore[arg-type]
