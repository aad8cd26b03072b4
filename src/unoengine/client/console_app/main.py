"""Console entry point: seat heuristic players (and optional terminal humans) at a table.

A colorless wild can only be played on an empty table or on a wild of the same
kind, so a wild card stays in its holder's hand for good. Full-deck games often
stall before a finishing order exists; `--max-turns` stops them and the command
exits with status 1.
"""

from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import Sequence

from unoengine.engine.agent import PlayerAgent
from unoengine.engine.ai import AISpec, HeuristicAgent
from unoengine.engine.errors import ConstructionError, DeckExhausted, GameError
from unoengine.engine.game import new_game
from unoengine.engine.table import Table
from unoengine.paths import get_paths
from unoengine.services.content import ContentError, ContentService
from unoengine.services.telemetry import TelemetryService

from .agent import ConsoleAgent

logger = logging.getLogger(__name__)

EPILOG = (
    "Wild cards only match a wild of the same kind, so games with wilds in hand "
    "often never finish. --max-turns ends such a game and the exit status is 1."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unoengine", description="Play a game of UNO.", epilog=EPILOG
    )
    parser.add_argument("--players", type=int, default=3)
    parser.add_argument("--seed", type=int, default=None, help="random if omitted")
    parser.add_argument("--difficulty", type=int, choices=(0, 1, 2), default=1)
    parser.add_argument(
        "--human",
        type=int,
        action="append",
        default=[],
        metavar="SEAT",
        help="seat played from the terminal (repeatable)",
    )
    parser.add_argument("--rules", type=Path, default=None, help="rules JSON file")
    parser.add_argument("--telemetry", type=Path, default=None, help="JSONL event log")
    parser.add_argument(
        "--max-turns", type=int, default=5000, help="stop a stalled game (exit status 1)"
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def make_agents(n_players: int, humans: Sequence[int], spec: AISpec, seed: int) -> list[PlayerAgent]:
    agents: list[PlayerAgent] = []
    for seat in range(n_players):
        if seat in humans:
            agents.append(ConsoleAgent())
        else:
            agents.append(HeuristicAgent(spec=spec, rng=random.Random(seed * 31 + seat)))
    return agents


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    paths = get_paths()
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    try:
        config = content.load_rules(args.rules)
    except ContentError as e:
        logger.error("%s", e)
        return 2

    seed = args.seed if args.seed is not None else random.randrange(2**31)
    try:
        state = new_game(args.players, seed, config)
    except ConstructionError as e:
        logger.error("%s", e)
        return 2

    telemetry = TelemetryService(args.telemetry, game_id=str(seed)) if args.telemetry else None
    agents = make_agents(args.players, args.human, AISpec(difficulty=args.difficulty), seed)
    table = Table(state, agents, telemetry=telemetry)

    logger.info("Starting %d-player game, seed %d", args.players, seed)
    try:
        order = table.run(max_turns=args.max_turns)
    except DeckExhausted as e:
        logger.error("Deck exhausted: %s", e)
        return 2
    except GameError as e:
        logger.error("%s", e)
        return 1

    print(f"Seed {seed}: finishing order {order}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
