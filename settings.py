from __future__ import annotations

import math
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from models.thresholds import DEFAULT_ALERT_TURBIDITY


_THRESHOLDS_PATH_ENV = "SEAWATCH_THRESHOLDS_PATH"
_ALERT_TURBIDITY_ENV = "SEAWATCH_ALERT_TURBIDITY"
_READINGS_PATH_ENV = "SEAWATCH_READINGS_PATH"
_SEED_SAMPLE_ENV = "SEAWATCH_SEED_SAMPLE"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    thresholds_path: Optional[str]
    alert_turbidity: float
    readings_path: Optional[str]
    seed_sample: bool
    log_level: str


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if math.isfinite(parsed) else default


def _read_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if not candidate:
        return default
    return candidate not in _FALSE_VALUES


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        thresholds_path=_read_optional_env(_THRESHOLDS_PATH_ENV, None),
        alert_turbidity=_read_float_env(_ALERT_TURBIDITY_ENV, DEFAULT_ALERT_TURBIDITY),
        readings_path=_read_optional_env(_READINGS_PATH_ENV, None),
        seed_sample=_read_bool_env(_SEED_SAMPLE_ENV, True),
        log_level=_read_log_level("INFO"),
    )
