from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import Protocol

from .actions import ChooseColorAction, DrawCardAction
from .agent import PlayerAgent, context_for
from .errors import GameError
from .game import Event, GameState, StepResult, open_table, step
from .types import card_to_str

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    def log(self, event_type: str, payload: dict[str, object]) -> None: ...


def _redacted(event: Event) -> Event:
    return {k: v for k, v in event.items() if k != "cards"}


class Table:
    """Runs a game by asking each player's agent for decisions in turn.

    Agents are indexed by player id. Invalid or out-of-range selections are
    reported back to the agent and it is asked again; there is no retry limit.
    """

    def __init__(
        self,
        state: GameState,
        agents: Sequence[PlayerAgent],
        telemetry: EventSink | None = None,
    ) -> None:
        if len(agents) != len(state.seats):
            raise ValueError(f"Need {len(state.seats)} agents, got {len(agents)}.")
        self.state = state
        self.agents = list(agents)
        self.telemetry = telemetry

    def _deliver(self, events: Sequence[Event]) -> None:
        for event in events:
            if self.telemetry is not None:
                self.telemetry.log(str(event["type"]), dict(event))
            owner = event.get("player") if "cards" in event else None
            for player_id, agent in enumerate(self.agents):
                if owner is None:
                    agent.notify(None, event)
                elif player_id == owner:
                    agent.notify(player_id, event)
                else:
                    agent.notify(None, _redacted(event))

    def _settle_color(self, result: StepResult) -> StepResult:
        while result.ok and result.needs_color:
            pending = self.state.pending
            assert pending is not None
            agent = self.agents[pending.player]
            logger.info("Asking player %d to pick a color", pending.player)
            color = agent.request_color_choice(pending.player, context_for(self.state))
            logger.info("Player %d chose color: %s", pending.player, color)
            result = step(self.state, ChooseColorAction(player=pending.player, color=color))
            if not result.ok:
                logger.warning("Color choice rejected: %s", result.error)
                agent.notify(pending.player, {"type": "REJECTED", "error": result.error})
                result = StepResult(ok=True, events=[], needs_color=True)
            else:
                self._deliver(result.events)
        return result

    def start(self) -> StepResult:
        result = open_table(self.state)
        top = self.state.top_card()
        logger.info("First card: %s", top)
        self._deliver(result.events)
        return self._settle_color(result)

    def play_turn(self) -> StepResult:
        """Ask the current player until they make a legal play or draw."""
        state = self.state
        if state.is_ended():
            raise GameError("Game already ended.")
        player = state.current_player_id()
        agent = self.agents[player]
        logger.info(
            "Player %d's turn, cards: %s", player, [card_to_str(c) for c in state.view(player)]
        )

        last_error: str | None = None
        while True:
            choice = agent.request_card_choice(
                player, tuple(state.view(player)), context_for(state, last_error)
            )
            if choice.player != player:
                # Agents answer for their own seat only
                choice = replace(choice, player=player)
            if isinstance(choice, DrawCardAction):
                logger.info("Player %d chose to draw a card", player)
            result = step(state, choice)
            if result.ok:
                break
            last_error = result.error
            logger.warning("Player %d: %s", player, result.error)
            self._deliver(result.events)
            agent.notify(player, {"type": "REJECTED", "error": result.error})

        self._deliver(result.events)
        return self._settle_color(result)

    def run(self, max_turns: int | None = None) -> list[int]:
        """Play the game to the end and return the finishing order.

        Raises GameError if `max_turns` turns pass without a result.
        """
        if not self.state.discard:
            self.start()
        turns = 0
        while not self.state.is_ended():
            if max_turns is not None and turns >= max_turns:
                raise GameError(f"No result after {max_turns} turns.")
            self.play_turn()
            turns += 1
        order = list(self.state.winners)
        order.extend(s.player_id for s in self.state.seats if s.player_id not in order)
        logger.info("Game over, finishing order: %s", order)
        return order
