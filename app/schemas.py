"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, FiniteFloat

from models.records import Parameter, Reading
from services.classifier import DashboardSnapshot, Status


class ReadingModel(BaseModel):
    """Wire representation of a single reading."""

    timestamp: datetime
    temperature: float = Field(..., allow_inf_nan=False, description="Water temperature in °C.")
    salinity: float = Field(..., allow_inf_nan=False, description="Salinity in PSU.")
    oxygen: float = Field(..., allow_inf_nan=False, description="Dissolved oxygen in mg/L.")
    turbidity: float = Field(..., allow_inf_nan=False, description="Turbidity in NTU.")
    pH: float = Field(..., allow_inf_nan=False, description="Acidity, unitless.")

    @classmethod
    def from_reading(cls, reading: Reading) -> "ReadingModel":
        return cls(
            timestamp=reading.timestamp,
            temperature=reading.temperature,
            salinity=reading.salinity,
            oxygen=reading.oxygen,
            turbidity=reading.turbidity,
            pH=reading.ph,
        )

    def to_reading(self) -> Reading:
        return Reading(
            timestamp=self.timestamp,
            temperature=self.temperature,
            salinity=self.salinity,
            oxygen=self.oxygen,
            turbidity=self.turbidity,
            ph=self.pH,
        )


class MetricModel(BaseModel):
    parameter: Parameter
    label: str
    unit: str
    value: float
    status: Status


class AlertModel(BaseModel):
    active: bool
    title: Optional[str] = None
    message: Optional[str] = None


class StatusResponse(BaseModel):
    """Latest reading classified per parameter, plus the alert state."""

    timestamp: datetime
    metrics: List[MetricModel]
    alert: AlertModel

    @classmethod
    def from_snapshot(cls, snapshot: DashboardSnapshot) -> "StatusResponse":
        alert = snapshot.alert
        return cls(
            timestamp=snapshot.latest.timestamp,
            metrics=[
                MetricModel(
                    parameter=metric.parameter,
                    label=metric.parameter.label,
                    unit=metric.parameter.unit,
                    value=metric.value,
                    status=metric.status,
                )
                for metric in snapshot.metrics
            ],
            alert=AlertModel(
                active=alert.active,
                title=alert.title if alert.active else None,
                message=alert.message if alert.active else None,
            ),
        )


class BandModel(BaseModel):
    low: float
    high: float


class ThresholdsResponse(BaseModel):
    bands: Dict[str, BandModel]
    alert_turbidity: float


class ClassificationResponse(BaseModel):
    parameter: Parameter
    value: FiniteFloat
    status: Status


class RowErrorModel(BaseModel):
    """Details about a CSV row that failed validation or parsing."""

    row_number: int = Field(..., ge=1)
    reason: str


class UploadResponse(BaseModel):
    accepted: int = Field(..., ge=0)
    errors: List[RowErrorModel] = Field(default_factory=list)


class SeriesPoint(BaseModel):
    timestamp: datetime
    values: Dict[str, float]


class SeriesResponse(BaseModel):
    chart: str
    title: str
    parameters: List[Parameter]
    points: List[SeriesPoint] = Field(default_factory=list)
