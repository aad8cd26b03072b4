from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from unoengine.engine.deck import MAX_PLAYERS, MIN_PLAYERS
from unoengine.engine.game import GameConfig


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def _load_schema(path: Path) -> object:
    return _load_json(path)


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_int(obj: Mapping[str, object], key: str, default: int) -> int:
    v = obj.get(key, default)
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContentError(f"Expected int for {key}")
    return v


def parse_rules(raw: Mapping[str, object]) -> GameConfig:
    defaults = GameConfig()
    min_players = _require_int(raw, "min_players", defaults.min_players)
    max_players = _require_int(raw, "max_players", defaults.max_players)
    for key, value in (("min_players", min_players), ("max_players", max_players)):
        if not MIN_PLAYERS <= value <= MAX_PLAYERS:
            raise ContentError(
                f"{key} must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {value}"
            )
    if min_players > max_players:
        raise ContentError("min_players must not exceed max_players")
    policy = raw.get("exhaustion_policy", defaults.exhaustion_policy)
    return GameConfig(
        min_players=min_players,
        max_players=max_players,
        exhaustion_policy=policy,  # type: ignore[arg-type]  # schema restricts values
    )


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_rules(self, path: Path | None = None) -> GameConfig:
        rules_path = path or self._data_dir / "rules.json"
        schema = _load_schema(self._schema_dir / "rules.schema.json")
        raw = _load_json(rules_path)
        validate_json(raw, schema, context=str(rules_path))
        if not isinstance(raw, dict):
            raise ContentError("rules file must be an object")
        return parse_rules(raw)

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_rules()
