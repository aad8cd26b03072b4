from __future__ import annotations

from .types import KIND_EFFECT, Card, Effect

# Kinds that match each other regardless of color.
_SAME_KIND_MATCHES = frozenset({"skip", "draw_two", "reverse", "wild", "wild_draw_four"})


def evaluate(top: Card | None, candidate: Card) -> tuple[Effect, Card]:
    """Decide whether `candidate` may go on `top` and what it triggers.

    Pure: nothing is committed. A "wrong" effect means the caller must give the
    card back to the player. Checks run in order:

    1. empty table: always legal, effect of the candidate's own kind
    2. equal numbers: legal, no effect, whatever the colors
    3. same color: legal, effect of the *top* card's kind
    4. same action/wild kind: legal, effect of that kind
    """
    if top is None:
        return KIND_EFFECT[candidate.kind], candidate

    if candidate.kind == "number" and top.kind == "number" and candidate.number == top.number:
        return "nothing", candidate

    if candidate.color is not None and candidate.color == top.color:
        return KIND_EFFECT[top.kind], candidate

    if candidate.kind == top.kind and candidate.kind in _SAME_KIND_MATCHES:
        return KIND_EFFECT[candidate.kind], candidate

    return "wrong", candidate


def is_playable(top: Card | None, candidate: Card) -> bool:
    return evaluate(top, candidate)[0] != "wrong"
