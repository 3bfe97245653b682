"""Threshold-based status classification and alerting for readings."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from models.records import Parameter, Reading
from models.thresholds import (
    DEFAULT_ALERT_TURBIDITY,
    DEFAULT_THRESHOLDS,
    ParameterKey,
    ThresholdTable,
    resolve_parameter,
)
from services.errors import EmptyInputError
from services.thresholds import load_threshold_config
from settings import get_settings

logger = logging.getLogger(__name__)

ALERT_TITLE = "High Turbidity Warning"
ALERT_MESSAGE = (
    "Current turbidity levels are above normal. "
    "This may indicate increased sediment or algal presence."
)


class Status(str, Enum):
    """Outcome of comparing a value against its threshold band."""

    low = "low"
    normal = "normal"
    high = "high"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]


_STATUS_RANK = {Status.low: 0, Status.normal: 1, Status.high: 2}


@dataclass(frozen=True)
class Metric:
    parameter: Parameter
    value: float
    status: Status


@dataclass(frozen=True)
class AlertNotice:
    active: bool
    title: str = ALERT_TITLE
    message: str = ALERT_MESSAGE


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the view layer needs for one refresh."""

    latest: Reading
    metrics: List[Metric] = field(default_factory=list)
    alert: AlertNotice = field(default_factory=lambda: AlertNotice(active=False))


class ReadingClassifier:
    """Stateless classifier over an injected, read-only threshold table."""

    def __init__(
        self,
        thresholds: ThresholdTable = DEFAULT_THRESHOLDS,
        alert_threshold: float = DEFAULT_ALERT_TURBIDITY,
    ) -> None:
        self.thresholds = thresholds
        self.alert_threshold = alert_threshold

    def classify(self, value: float, parameter: ParameterKey) -> Status:
        resolved = resolve_parameter(parameter)
        if math.isnan(value):
            raise ValueError(f"Cannot classify NaN for parameter {resolved.value!r}.")
        band = self.thresholds[resolved]
        if value < band.low:
            status = Status.low
        elif value > band.high:
            status = Status.high
        else:
            status = Status.normal
        logger.debug(
            "Classified value",
            extra={"parameter": resolved.value, "value": value, "status": status.value},
        )
        return status

    def classify_reading(self, reading: Reading) -> Dict[Parameter, Status]:
        return {
            parameter: self.classify(reading.value_of(parameter), parameter)
            for parameter in self.thresholds
        }

    def latest_reading(self, readings: Sequence[Reading]) -> Reading:
        if not readings:
            raise EmptyInputError("At least one reading is required for classification.")
        return readings[-1]

    def should_alert(self, latest: Reading) -> bool:
        active = latest.turbidity > self.alert_threshold
        if active:
            logger.warning(ALERT_TITLE, extra={"turbidity": latest.turbidity})
        return active

    def snapshot(self, readings: Sequence[Reading]) -> DashboardSnapshot:
        latest = self.latest_reading(readings)
        statuses = self.classify_reading(latest)
        metrics = [
            Metric(parameter=parameter, value=latest.value_of(parameter), status=status)
            for parameter, status in statuses.items()
        ]
        return DashboardSnapshot(
            latest=latest,
            metrics=metrics,
            alert=AlertNotice(active=self.should_alert(latest)),
        )


@lru_cache
def build_default_classifier(thresholds_path: Optional[str] = None) -> ReadingClassifier:
    """Factory that wires the classifier from environment configuration."""
    settings = get_settings()
    path = settings.thresholds_path if thresholds_path is None else thresholds_path
    thresholds = DEFAULT_THRESHOLDS
    alert_threshold = settings.alert_turbidity
    if path:
        config = load_threshold_config(Path(path))
        thresholds = config.to_table()
        if config.alert_turbidity is not None:
            alert_threshold = config.alert_turbidity
    return ReadingClassifier(thresholds=thresholds, alert_threshold=alert_threshold)
