"""Trend series backing the dashboard charts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Tuple

from models.records import Parameter, Reading


@dataclass(frozen=True)
class ChartDefinition:
    key: str
    title: str
    parameters: Tuple[Parameter, ...]


CHARTS: Dict[str, ChartDefinition] = {
    "temperature-salinity": ChartDefinition(
        key="temperature-salinity",
        title="Temperature & Salinity Trends",
        parameters=(Parameter.temperature, Parameter.salinity),
    ),
    "oxygen-ph": ChartDefinition(
        key="oxygen-ph",
        title="Oxygen & pH Trends",
        parameters=(Parameter.oxygen, Parameter.ph),
    ),
}


@dataclass
class TrendSeries:
    """Per-timestamp values for the parameters of one chart."""

    chart: ChartDefinition
    points: List[Tuple[datetime, Dict[Parameter, float]]] = field(default_factory=list)


def build_series(chart_key: str, readings: Iterable[Reading]) -> TrendSeries:
    try:
        chart = CHARTS[chart_key]
    except KeyError as exc:
        raise KeyError(f"Chart {chart_key!r} not found.") from exc

    series = TrendSeries(chart=chart)
    for reading in readings:
        series.points.append(
            (
                reading.timestamp,
                {parameter: reading.value_of(parameter) for parameter in chart.parameters},
            )
        )
    return series
