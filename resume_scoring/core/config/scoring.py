from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

SCORING_CONFIG_PATH = Path(__file__).resolve().with_name("scoring.yaml")
FACTORS = ("skills", "description", "role", "experience", "quality")


class ScoringConfigError(RuntimeError):
    pass


@lru_cache(maxsize=None)
def _read_config(path: Path) -> dict[str, Any]:
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ScoringConfigError(f"Scoring config not found at '{path}'.") from exc
    except OSError as exc:
        raise ScoringConfigError(f"Failed to read scoring config '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ScoringConfigError(f"Invalid YAML in scoring config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise ScoringConfigError(f"Scoring config '{path}' must be a mapping at the top level.")
    return parsed


def get_scoring_config() -> dict[str, Any]:
    """Scoring constants from the packaged scoring.yaml, read once per process."""
    return _read_config(SCORING_CONFIG_PATH)


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Look up a nested constant by dot path, e.g. ``"skills.match_scores.both"``."""
    if not path:
        return default

    node: Any = get_scoring_config()
    for part in path.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


def get_factor_weights() -> dict[str, float]:
    raw = get_scoring_value("weights")
    if not isinstance(raw, dict) or not raw:
        raise ScoringConfigError("Scoring config is missing the 'weights' mapping.")

    weights = {str(name): float(value) for name, value in raw.items()}
    if set(weights) != set(FACTORS):
        raise ScoringConfigError(f"Scoring weights must define exactly {list(FACTORS)}, got {sorted(weights)}.")
    if any(value < 0 for value in weights.values()):
        raise ScoringConfigError("Scoring weights must not be negative.")
    total = sum(weights.values())
    if abs(total - 1.0) > 1e-9:
        raise ScoringConfigError(f"Scoring weights must sum to 1.0, got {total:.4f}.")
    return weights
