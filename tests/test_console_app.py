from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from unoengine.client.console_app.agent import ConsoleAgent, describe_event, parse_selection
from unoengine.client.console_app.main import build_parser, main
from unoengine.engine.actions import DrawCardAction, PlayCardAction
from unoengine.engine.agent import TurnContext
from unoengine.engine.types import Card, card_from_str


def _ctx() -> TurnContext:
    return TurnContext(
        top=card_from_str("red_5"), order=(0, 1), hand_sizes={0: 2, 1: 3}, deck_size=90, wins=0
    )


def _answers(*items: str):
    queue = list(items)
    return lambda prompt: queue.pop(0)


def test_parse_selection_uses_last_line() -> None:
    assert parse_selection(1, "red 5 is on top, I'll play\n  2 ") == PlayCardAction(player=1, hand_index=2)
    assert parse_selection(0, "DRAW") == DrawCardAction(player=0)
    with pytest.raises(ValueError):
        parse_selection(0, "the blue one")
    with pytest.raises(ValueError):
        parse_selection(0, "  \n ")


def test_console_agent_reprompts_until_it_understands() -> None:
    out = io.StringIO()
    agent = ConsoleAgent(read=_answers("blue", "1"), out=out)
    hand: list[Card] = [card_from_str("blue_7"), card_from_str("red_1")]
    choice = agent.request_card_choice(0, hand, _ctx())
    assert choice == PlayCardAction(player=0, hand_index=1)
    assert "1 -> (Red 1)" in out.getvalue()
    assert any("Expected 'draw'" in line for line in agent.transcript)


def test_console_agent_color_choice() -> None:
    agent = ConsoleAgent(read=_answers("purple", " Yellow "), out=io.StringIO())
    assert agent.request_color_choice(0, _ctx()) == "yellow"


def test_describe_event() -> None:
    assert describe_event({"type": "TURN_STARTED", "player": 2}) == "[GAME] Next: Player 2"
    assert describe_event({"type": "EFFECT_APPLIED", "effect": "nothing", "text": "", "target": 0}) is None
    assert describe_event({"type": "CARD_DRAWN", "player": 1, "count": 2}) == "[GAME] Player 1 drew 2 card(s)."
    assert describe_event({"type": "SOMETHING_ELSE"}) is None


def test_cli_help_explains_wild_stall() -> None:
    text = " ".join(build_parser().format_help().split())
    assert "Wild cards only match a wild of the same kind" in text
    assert "--max-turns" in text
    assert "exit status is 1" in text


def test_cli_rejects_bad_player_count() -> None:
    assert main(["--players", "1", "--seed", "1"]) == 2


def test_cli_rejects_bad_rules_file(tmp_path: Path) -> None:
    rules = tmp_path / "rules.json"
    rules.write_text(json.dumps({"exhaustion_policy": "panic"}), encoding="utf-8")
    assert main(["--rules", str(rules), "--seed", "1"]) == 2


def test_cli_turn_limit_writes_telemetry(tmp_path: Path) -> None:
    log = tmp_path / "events.jsonl"
    code = main(["--players", "2", "--seed", "3", "--max-turns", "0", "--telemetry", str(log)])
    assert code == 1
    lines = log.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[0])["type"] == "OPENING_CARD"
