"""Threshold bands used to classify parameter values."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Union

from models.records import Parameter
from services.errors import ConfigurationError

DEFAULT_ALERT_TURBIDITY = 2.2

ParameterKey = Union[Parameter, str]

# Identifiers match case-insensitively, like CSV headers.
_PARAMETERS_BY_NAME = {parameter.value.lower(): parameter for parameter in Parameter}


@dataclass(frozen=True, slots=True)
class ThresholdBand:
    """Inclusive ``[low, high]`` range considered normal for a parameter."""

    low: float
    high: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.low) and math.isfinite(self.high)):
            raise ConfigurationError(
                f"Threshold band bounds must be finite, got [{self.low}, {self.high}]."
            )
        if self.low > self.high:
            raise ConfigurationError(
                f"Threshold band low bound {self.low} exceeds high bound {self.high}."
            )


def resolve_parameter(parameter: ParameterKey) -> Parameter:
    """Map a parameter identifier to :class:`Parameter`, rejecting unknown names."""
    if isinstance(parameter, Parameter):
        return parameter
    resolved = _PARAMETERS_BY_NAME.get(parameter.strip().lower())
    if resolved is None:
        raise ConfigurationError(f"Unknown parameter {parameter!r}.")
    return resolved


class ThresholdTable(Mapping):
    """Read-only mapping of every :class:`Parameter` to its :class:`ThresholdBand`."""

    __slots__ = ("_bands",)

    def __init__(self, bands: Mapping[ParameterKey, ThresholdBand]) -> None:
        resolved: dict[Parameter, ThresholdBand] = {}
        for key, band in bands.items():
            parameter = resolve_parameter(key)
            if parameter in resolved:
                raise ConfigurationError(
                    f"Threshold table lists parameter {parameter.value!r} more than once."
                )
            resolved[parameter] = band
        missing = [parameter.value for parameter in Parameter if parameter not in resolved]
        if missing:
            raise ConfigurationError(
                f"Threshold table missing parameters: {', '.join(missing)}"
            )
        ordered = {parameter: resolved[parameter] for parameter in Parameter}
        self._bands = MappingProxyType(ordered)

    def __getitem__(self, key: ParameterKey) -> ThresholdBand:
        return self._bands[resolve_parameter(key)]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        try:
            return resolve_parameter(key) in self._bands
        except ConfigurationError:
            return False

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self._bands)

    def __len__(self) -> int:
        return len(self._bands)

    def __repr__(self) -> str:
        inner = ", ".join(
            f"{parameter.value}=[{band.low}, {band.high}]" for parameter, band in self._bands.items()
        )
        return f"ThresholdTable({inner})"


DEFAULT_THRESHOLDS = ThresholdTable(
    {
        Parameter.temperature: ThresholdBand(low=16.0, high=22.0),
        Parameter.salinity: ThresholdBand(low=34.0, high=36.0),
        Parameter.oxygen: ThresholdBand(low=6.0, high=8.0),
        Parameter.turbidity: ThresholdBand(low=0.0, high=3.0),
        Parameter.ph: ThresholdBand(low=7.8, high=8.4),
    }
)
