from __future__ import annotations


from .actions import Action, ChooseColorAction, DrawCardAction, PlayCardAction
from .deck import Seat
from .game import GameState, PendingEffect
from .types import card_to_str


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, PlayCardAction):
        return {"type": "play", "player": a.player, "hand_index": a.hand_index}
    if isinstance(a, DrawCardAction):
        return {"type": "draw", "player": a.player}
    if isinstance(a, ChooseColorAction):
        return {"type": "color", "player": a.player, "color": a.color}
    # should be unreachable
    return {"type": "unknown"}


def action_from_dict(d: dict[str, object]) -> Action:
    kind = d.get("type")
    player = d.get("player")
    if not isinstance(player, int):
        raise ValueError(f"Action needs an int player: {d!r}")
    if kind == "play":
        idx = d.get("hand_index")
        if not isinstance(idx, int):
            raise ValueError(f"Play action needs an int hand_index: {d!r}")
        return PlayCardAction(player=player, hand_index=idx)
    if kind == "draw":
        return DrawCardAction(player=player)
    if kind == "color":
        color = d.get("color")
        if not isinstance(color, str):
            raise ValueError(f"Color action needs a color: {d!r}")
        return ChooseColorAction(player=player, color=color)  # type: ignore[arg-type]
    raise ValueError(f"Unknown action type: {kind!r}")


def _seat_to_dict(s: Seat) -> dict[str, object]:
    return {"player_id": s.player_id, "hand": [card_to_str(c) for c in s.hand]}


def _pending_to_dict(p: PendingEffect | None) -> dict[str, object] | None:
    if p is None:
        return None
    return {"player": p.player, "effect": p.effect, "advance": p.advance}


def snapshot(state: GameState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current game state."""
    return {
        "seed": state.seed,
        "phase": state.phase,
        "turn": state.turn,
        "current_player": state.current_player_id(),
        "seats": [_seat_to_dict(s) for s in state.seats],
        "deck": [card_to_str(c) for c in state.deck],
        "discard": [card_to_str(c) for c in state.discard],
        "winners": list(state.winners),
        "pending": _pending_to_dict(state.pending),
        "action_log": [action_to_dict(a) for a in state.action_log],
    }
