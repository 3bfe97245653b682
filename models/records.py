"""Domain models shared across services."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict


class Parameter(str, Enum):
    """Sea-water parameters tracked for every reading."""

    temperature = "temperature"
    salinity = "salinity"
    oxygen = "oxygen"
    turbidity = "turbidity"
    ph = "pH"

    @property
    def field_name(self) -> str:
        """Attribute name on :class:`Reading` holding this parameter."""
        return self.name

    @property
    def label(self) -> str:
        return PARAMETER_LABELS[self]

    @property
    def unit(self) -> str:
        return PARAMETER_UNITS[self]


PARAMETER_LABELS: Dict[Parameter, str] = {
    Parameter.temperature: "Temperature",
    Parameter.salinity: "Salinity",
    Parameter.oxygen: "Dissolved Oxygen",
    Parameter.turbidity: "Turbidity",
    Parameter.ph: "pH Level",
}

PARAMETER_UNITS: Dict[Parameter, str] = {
    Parameter.temperature: "°C",
    Parameter.salinity: "PSU",
    Parameter.oxygen: "mg/L",
    Parameter.turbidity: "NTU",
    Parameter.ph: "",
}


@dataclass(frozen=True, slots=True)
class Reading:
    """A single timestamped observation of all five parameters."""

    timestamp: datetime
    temperature: float
    salinity: float
    oxygen: float
    turbidity: float
    ph: float

    def __post_init__(self) -> None:
        for parameter in Parameter:
            if not math.isfinite(self.value_of(parameter)):
                raise ValueError(f"Reading {parameter.value} must be a finite number.")
        if self.timestamp.tzinfo is None:
            object.__setattr__(self, "timestamp", self.timestamp.replace(tzinfo=timezone.utc))

    def value_of(self, parameter: Parameter) -> float:
        return getattr(self, parameter.field_name)
