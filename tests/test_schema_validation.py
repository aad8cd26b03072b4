from __future__ import annotations

import json
from pathlib import Path

import pytest

from unoengine.engine.game import GameConfig
from unoengine.paths import get_paths
from unoengine.services.content import ContentError, ContentService, parse_rules


def _content() -> ContentService:
    paths = get_paths()
    return ContentService(paths.data_dir, paths.schema_dir)


def _write(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "rules.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_content_schemas_validate() -> None:
    content = _content()
    content.validate_all()
    assert content.load_rules() == GameConfig()


def test_partial_rules_fall_back_to_defaults(tmp_path: Path) -> None:
    cfg = _content().load_rules(_write(tmp_path, {"max_players": 4, "exhaustion_policy": "strict"}))
    assert cfg == GameConfig(max_players=4, exhaustion_policy="strict")


@pytest.mark.parametrize(
    "data",
    [
        {"exhaustion_policy": "panic"},
        {"hand_size": 7},
        {"min_players": 1},
        {"max_players": 11},
        {"house_rule": True},
        [],
    ],
)
def test_schema_rejects_bad_rules(tmp_path: Path, data: object) -> None:
    with pytest.raises(ContentError) as exc:
        _content().load_rules(_write(tmp_path, data))
    assert "Schema validation failed" in str(exc.value)


def test_content_data_lives_in_the_package() -> None:
    paths = get_paths()
    assert (paths.data_dir / "rules.json").is_file()
    assert (paths.schema_dir / "rules.schema.json").is_file()


@pytest.mark.parametrize("raw", [{"min_players": 1}, {"max_players": 11}, {"max_players": 15}])
def test_parse_rules_keeps_player_counts_within_dealer_range(raw: dict[str, object]) -> None:
    with pytest.raises(ContentError):
        parse_rules(raw)


def test_min_players_above_max_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ContentError):
        _content().load_rules(_write(tmp_path, {"min_players": 6, "max_players": 4}))


def test_missing_and_malformed_files(tmp_path: Path) -> None:
    with pytest.raises(ContentError):
        _content().load_rules(tmp_path / "nope.json")
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ContentError):
        _content().load_rules(bad)
