from __future__ import annotations

import random

from unoengine.engine.ai import AISpec, HeuristicAgent
from unoengine.engine.game import GameState, new_game, replay
from unoengine.engine.serialize import action_from_dict, action_to_dict, snapshot
from unoengine.engine.table import Table


def _play(seed: int, turns: int = 30) -> GameState:
    state = new_game(3, seed=seed)
    agents = [HeuristicAgent(spec=AISpec(difficulty=1), rng=random.Random(seed + i)) for i in range(3)]
    table = Table(state, agents)
    table.start()
    for _ in range(turns):
        if state.is_ended():
            break
        table.play_turn()
    return state


def test_same_seed_same_game() -> None:
    assert snapshot(_play(424242)) == snapshot(_play(424242))


def test_engine_determinism_replay() -> None:
    state1 = _play(424242)
    snap1 = snapshot(state1)

    actions = [action_from_dict(action_to_dict(a)) for a in state1.action_log]
    state2 = replay(3, seed=424242, actions=actions)
    snap2 = snapshot(state2)

    assert snap1 == snap2
