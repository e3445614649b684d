"""Application settings with YAML overrides."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoutineSettings:
    """Defaults for every windowed query and reminder rule."""

    analysis_days: int = 5
    baseline_days: int = 7
    outlier_threshold_minutes: int = 30
    highlight_outliers: bool = True
    feedback_days: int = 30
    adjustment_days: int = 7
    buffer_minutes: int = 10
    reminder_lead_minutes: int = 5
    reminder_min_confidence: float = 0.6
    retention_days: int = 90


_POSITIVE_INTS = {
    "analysis_days",
    "baseline_days",
    "outlier_threshold_minutes",
    "feedback_days",
    "adjustment_days",
    "retention_days",
}


def _coerce(name: str, value, default):
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ValueError(f"Setting '{name}' must be a boolean")
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Setting '{name}' must be an integer")
        if name in _POSITIVE_INTS and value <= 0:
            raise ValueError(f"Setting '{name}' must be positive")
        if value < 0:
            raise ValueError(f"Setting '{name}' must not be negative")
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Setting '{name}' must be a number")
    if not 0.0 <= float(value) <= 1.0:
        raise ValueError(f"Setting '{name}' must be between 0 and 1")
    return float(value)


def settings_from_mapping(payload: dict) -> RoutineSettings:
    defaults = RoutineSettings()
    known = {f.name: getattr(defaults, f.name) for f in fields(RoutineSettings)}
    unknown = sorted(set(payload) - set(known))
    if unknown:
        raise ValueError(f"Unknown settings {unknown}")
    overrides = {name: _coerce(name, value, known[name]) for name, value in payload.items()}
    return replace(defaults, **overrides)


def load_settings(path: str | Path | None = None) -> RoutineSettings:
    """Load settings from the ``routine:`` section of a YAML file."""

    if path is None:
        return RoutineSettings()

    config_path = Path(path)
    if not config_path.exists():
        logger.info("config %s not found, using defaults", config_path)
        return RoutineSettings()

    try:
        with open(config_path, encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ValueError(f"Malformed YAML in {config_path}") from exc

    if payload is None:
        return RoutineSettings()
    if not isinstance(payload, dict):
        raise ValueError("Config payload must be a mapping")

    section = payload.get("routine") or {}
    if not isinstance(section, dict):
        raise ValueError("'routine' section must be a mapping")
    return settings_from_mapping(section)
