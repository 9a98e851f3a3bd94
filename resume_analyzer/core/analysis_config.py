from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

ANALYSIS_CONFIG_PATH = Path(__file__).with_name("analysis.yaml")


@lru_cache(maxsize=1)
def get_analysis_config() -> dict[str, Any]:
    """Pipeline tuning values from the packaged analysis.yaml, read once per process."""
    try:
        parsed = yaml.safe_load(ANALYSIS_CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise RuntimeError(f"Cannot load analysis config '{ANALYSIS_CONFIG_PATH}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Analysis config '{ANALYSIS_CONFIG_PATH}' must be a mapping at the top level.")
    return parsed


def get_analysis_value(path: str, default: Any = None) -> Any:
    """Look up a dotted path such as 'generation.analysis.max_tokens'."""
    current: Any = get_analysis_config()
    for key in path.split(".") if path else ():
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current if path else default


def get_analysis_int(path: str, default: int) -> int:
    value = get_analysis_value(path, default)
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_analysis_float(path: str, default: float) -> float:
    value = get_analysis_value(path, default)
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return default
    try:
        return float(value)
    except ValueError:
        return default
