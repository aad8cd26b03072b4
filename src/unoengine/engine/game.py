from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, Literal

from .actions import Action, ChooseColorAction, DrawCardAction, PlayCardAction
from .deck import MAX_PLAYERS, MIN_PLAYERS, Seat, build_deck, deal, shuffle
from .errors import DeckExhausted, GameError, InvalidPlay, OutOfRangeSelection
from .rules import evaluate
from .types import COLORS, EFFECT_TEXT, Card, Color, Effect, card_to_str

Event = dict[str, object]
ExhaustionPolicy = Literal["reshuffle", "strict"]
Phase = Literal["in_progress", "ended"]

# Cards an effect makes the current player draw.
_DRAW_COUNT: dict[Effect, int] = {"draw_two": 2, "wild_draw_four": 4}


@dataclass(frozen=True)
class GameConfig:
    min_players: int = MIN_PLAYERS
    max_players: int = MAX_PLAYERS
    exhaustion_policy: ExhaustionPolicy = "reshuffle"


@dataclass
class PendingEffect:
    """An accepted card whose effect waits for a color choice."""

    player: int
    effect: Effect
    advance: bool = True  # False only for the opening card


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None
    needs_color: bool = False


@dataclass
class GameState:
    config: GameConfig
    seed: int
    rng: random.Random
    deck: list[Card]
    seats: list[Seat]
    discard: list[Card] = field(default_factory=list)
    turn: int = 0  # index into `seats`, not a player id
    winners: list[int] = field(default_factory=list)
    pending: PendingEffect | None = None
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    # --- queries ---

    @property
    def wins(self) -> int:
        return len(self.winners)

    @property
    def phase(self) -> Phase:
        return "ended" if self.is_ended() else "in_progress"

    def seat_of(self, player_id: int) -> Seat:
        for seat in self.seats:
            if seat.player_id == player_id:
                return seat
        raise KeyError(f"No such player: {player_id}")

    def view(self, player_id: int) -> list[Card]:
        return self.seat_of(player_id).hand

    def top_card(self) -> Card | None:
        return self.discard[-1] if self.discard else None

    def current_player_id(self) -> int:
        return self.seats[self.turn].player_id

    def order(self) -> list[int]:
        return [s.player_id for s in self.seats]

    def should_ask_for_color(self) -> bool:
        top = self.top_card()
        return top is not None and top.is_wild and top.color is None

    def did_win(self, player_id: int) -> bool:
        return not self.seat_of(player_id).hand

    def mark_win(self, player_id: int) -> None:
        if player_id in self.winners:
            return
        self.winners.append(player_id)
        self.event_log.append({"type": "PLAYER_WON", "player": player_id, "place": self.wins})

    def is_ended(self) -> bool:
        return self.wins + 1 >= len(self.seats)

    # --- mutations ---

    def put(self, card: Card) -> None:
        self.discard.append(card)

    def play(self, player_id: int, hand_index: int) -> tuple[Effect, Card]:
        """Move a card from the player's hand onto the discard pile.

        A card that is illegal, or whose draw the deck cannot cover, goes back to
        its index before InvalidPlay or DeckExhausted is raised.
        """
        hand = self.seat_of(player_id).hand
        if hand_index < 0 or hand_index >= len(hand):
            raise OutOfRangeSelection(
                f"Hand index {hand_index} out of range (hand has {len(hand)} cards)."
            )
        card = hand.pop(hand_index)
        effect, card = evaluate(self.top_card(), card)
        if effect == "wrong":
            hand.insert(hand_index, card)
            raise InvalidPlay(f"{card} cannot be played on {self.top_card()}.")
        try:
            self.ensure_cards(_DRAW_COUNT.get(effect, 0))
        except DeckExhausted:
            hand.insert(hand_index, card)
            raise
        self.put(card)
        return effect, card

    def draw(self, player_id: int, count: int) -> list[Card]:
        cards = self._take_from_deck(count)
        self.seat_of(player_id).hand.extend(cards)
        self.event_log.append(
            {
                "type": "CARD_DRAWN",
                "player": player_id,
                "count": count,
                "cards": [card_to_str(c) for c in cards],
            }
        )
        return cards

    def next_turn(self) -> int:
        """Advance the pointer, skipping players whose hands are empty."""
        n = len(self.seats)
        for _ in range(n):
            self.turn = (self.turn + 1) % n
            if self.seats[self.turn].hand:
                return self.seats[self.turn].player_id
        raise GameError("No player has cards left.")

    def reverse(self) -> None:
        # The pointer keeps its numeric value; only the seat list flips.
        self.seats.reverse()

    def take_effect(self, effect: Effect, color: Color | None = None) -> None:
        if effect == "nothing":
            return
        if effect == "skip":
            self.next_turn()
        elif effect == "reverse":
            self.reverse()
        elif effect == "draw_two":
            self.draw(self.current_player_id(), 2)
        elif effect == "wild":
            self._assign_color(color)
        elif effect == "wild_draw_four":
            self.draw(self.current_player_id(), 4)
            self._assign_color(color)
        else:
            raise ValueError(f"Effect {effect!r} cannot be applied.")

    def _assign_color(self, color: Color | None) -> None:
        if not self.should_ask_for_color():
            # A colored top keeps the color it was given.
            return
        if color is None:
            raise ValueError("A color is required for a wild card.")
        self.discard[-1] = self.discard[-1].with_color(color)

    def ensure_cards(self, count: int) -> None:
        """Make sure `count` cards can be drawn, reshuffling if the policy allows."""
        if count > len(self.deck) and self.config.exhaustion_policy == "reshuffle":
            self._recycle_discard()
        if count > len(self.deck):
            raise DeckExhausted(requested=count, available=len(self.deck))

    def _take_from_deck(self, count: int) -> list[Card]:
        self.ensure_cards(count)
        cards = self.deck[:count]
        del self.deck[:count]
        return cards

    def _recycle_discard(self) -> None:
        if len(self.discard) < 2:
            return
        recycled = [c.with_color(None) if c.is_wild else c for c in self.discard[:-1]]
        del self.discard[:-1]
        self.deck.extend(recycled)
        shuffle(self.deck, self.rng)
        self.event_log.append({"type": "DECK_RESHUFFLED", "count": len(recycled)})


def _mark(state: GameState) -> int:
    return len(state.event_log)


def _resolve(state: GameState, color: Color | None, start: int) -> StepResult:
    pending = state.pending
    assert pending is not None
    state.pending = None

    state.take_effect(pending.effect, color)
    # After a skip this is the skipped player; draws land on the current one.
    target = state.current_player_id()
    if color is not None and pending.effect in ("wild", "wild_draw_four"):
        state.event_log.append({"type": "COLOR_CHOSEN", "player": pending.player, "color": color})
    state.event_log.append(
        {
            "type": "EFFECT_APPLIED",
            "effect": pending.effect,
            "text": EFFECT_TEXT[pending.effect],
            "target": target,
        }
    )

    if state.did_win(pending.player):
        state.mark_win(pending.player)
    if state.is_ended():
        state.event_log.append({"type": "GAME_ENDED", "winners": list(state.winners)})
    elif pending.advance:
        nxt = state.next_turn()
        state.event_log.append({"type": "TURN_STARTED", "player": nxt})
    return StepResult(ok=True, events=state.event_log[start:])


def _play_card(state: GameState, action: PlayCardAction) -> StepResult:
    start = _mark(state)
    try:
        effect, card = state.play(action.player, action.hand_index)
    except (OutOfRangeSelection, InvalidPlay) as e:
        state.event_log.append(
            {"type": "INVALID_PLAY", "player": action.player, "hand_index": action.hand_index}
        )
        return StepResult(ok=False, events=state.event_log[start:], error=str(e))

    state.event_log.append(
        {"type": "CARD_PLAYED", "player": action.player, "card": card_to_str(card), "effect": effect}
    )
    state.pending = PendingEffect(player=action.player, effect=effect)
    if state.should_ask_for_color():
        return StepResult(ok=True, events=state.event_log[start:], needs_color=True)
    return _resolve(state, None, start)


def _draw_card(state: GameState, action: DrawCardAction) -> StepResult:
    start = _mark(state)
    state.draw(action.player, 1)
    nxt = state.next_turn()
    state.event_log.append({"type": "TURN_STARTED", "player": nxt})
    return StepResult(ok=True, events=state.event_log[start:])


def _choose_color(state: GameState, action: ChooseColorAction) -> StepResult:
    if state.pending is None or not state.should_ask_for_color():
        return StepResult(ok=False, events=[], error="No color choice is pending.")
    if action.player != state.pending.player:
        return StepResult(ok=False, events=[], error="Not your color choice.")
    if action.color not in COLORS:
        return StepResult(ok=False, events=[], error=f"Unknown color: {action.color!r}")
    return _resolve(state, action.color, _mark(state))


def step(state: GameState, action: Action) -> StepResult:
    """Apply one action to the game.

    Mutates `state` in place; deterministic for a given (seed, action sequence).
    Recoverable mistakes come back as ``ok=False``; DeckExhausted propagates.
    """
    if state.is_ended():
        return StepResult(ok=False, events=[], error="Game already ended.")

    state.action_log.append(action)
    try:
        return _dispatch(state, action)
    except DeckExhausted:
        # Nothing was applied; keep the log replayable.
        state.action_log.pop()
        raise


def _dispatch(state: GameState, action: Action) -> StepResult:
    if isinstance(action, ChooseColorAction):
        return _choose_color(state, action)
    if state.pending is not None:
        return StepResult(ok=False, events=[], error="Choose a color first.")
    if action.player != state.current_player_id():
        return StepResult(ok=False, events=[], error="Not your turn.")
    if isinstance(action, PlayCardAction):
        return _play_card(state, action)
    if isinstance(action, DrawCardAction):
        return _draw_card(state, action)
    return StepResult(ok=False, events=[], error="Unknown action.")


def open_table(state: GameState) -> StepResult:
    """Turn the first deck card onto the empty table.

    Its effect lands on the current player without advancing the turn; a wild
    opener leaves a color choice pending for that player.
    """
    if state.discard:
        raise GameError("The table is already open.")
    start = _mark(state)
    (first,) = state._take_from_deck(1)
    effect, card = evaluate(None, first)
    try:
        state.ensure_cards(_DRAW_COUNT.get(effect, 0))
    except DeckExhausted:
        state.deck.insert(0, first)
        raise
    state.put(card)
    player = state.current_player_id()
    state.event_log.append(
        {"type": "OPENING_CARD", "card": card_to_str(card), "effect": effect, "player": player}
    )
    state.pending = PendingEffect(player=player, effect=effect, advance=False)
    if state.should_ask_for_color():
        return StepResult(ok=True, events=state.event_log[start:], needs_color=True)
    return _resolve(state, None, start)


def new_game(n_players: int, seed: int, config: GameConfig | None = None) -> GameState:
    cfg = config or GameConfig()
    rng = random.Random(seed)
    deck = build_deck()
    shuffle(deck, rng)
    seats = deal(
        deck,
        n_players,
        min_players=cfg.min_players,
        max_players=cfg.max_players,
    )
    state = GameState(config=cfg, seed=seed, rng=rng, deck=deck, seats=seats)
    state.event_log.append({"type": "GAME_STARTED", "players": n_players, "seed": seed})
    return state


def replay(
    n_players: int,
    seed: int,
    actions: Iterable[Action],
    config: GameConfig | None = None,
) -> GameState:
    state = new_game(n_players, seed, config)
    open_table(state)
    for a in actions:
        step(state, a)
        if state.is_ended():
            break
    return state
