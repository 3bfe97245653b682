"""HTTP route definitions for the service."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from pydantic import FiniteFloat

from app.schemas import (
    BandModel,
    ClassificationResponse,
    ReadingModel,
    RowErrorModel,
    SeriesPoint,
    SeriesResponse,
    StatusResponse,
    ThresholdsResponse,
    UploadResponse,
)
from datastore.reading_store import ReadingStore, build_default_store
from models.thresholds import resolve_parameter
from services.classifier import ReadingClassifier, build_default_classifier
from services.errors import ConfigurationError, EmptyInputError
from services.loader import load_readings_csv
from services.trends import build_series

logger = logging.getLogger(__name__)

router = APIRouter()


def get_classifier() -> ReadingClassifier:
    return build_default_classifier()


def get_store() -> ReadingStore:
    return build_default_store()


@router.get(
    "/readings",
    response_model=list[ReadingModel],
    summary="List stored readings in ascending timestamp order.",
)
async def list_readings(store: ReadingStore = Depends(get_store)) -> list[ReadingModel]:
    return [ReadingModel.from_reading(reading) for reading in store.scan()]


@router.post(
    "/readings",
    status_code=status.HTTP_201_CREATED,
    response_model=ReadingModel,
    summary="Record a single reading.",
)
async def add_reading(
    payload: ReadingModel,
    store: ReadingStore = Depends(get_store),
) -> ReadingModel:
    reading = payload.to_reading()
    store.add(reading)
    return ReadingModel.from_reading(reading)


@router.post(
    "/readings/upload",
    response_model=UploadResponse,
    summary="Upload a CSV file of readings.",
)
async def upload_readings(
    file: UploadFile = File(..., description="CSV file containing readings."),
    store: ReadingStore = Depends(get_store),
) -> UploadResponse:
    try:
        contents = await file.read()
    finally:
        await file.close()
    if not contents:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty.",
        )

    try:
        result = load_readings_csv(contents.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    accepted = store.extend(result.readings)
    logger.info(
        "Stored uploaded readings",
        extra={"reading_count": accepted, "error_count": len(result.errors)},
    )
    return UploadResponse(
        accepted=accepted,
        errors=[
            RowErrorModel(row_number=error.row_number, reason=error.reason)
            for error in result.errors
        ],
    )


@router.get(
    "/readings/latest",
    response_model=ReadingModel,
    summary="Fetch the most recent reading.",
)
async def latest_reading(
    store: ReadingStore = Depends(get_store),
    classifier: ReadingClassifier = Depends(get_classifier),
) -> ReadingModel:
    try:
        reading = classifier.latest_reading(store.scan())
    except EmptyInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return ReadingModel.from_reading(reading)


@router.get(
    "/status",
    response_model=StatusResponse,
    summary="Classify the latest reading and report the alert state.",
)
async def current_status(
    store: ReadingStore = Depends(get_store),
    classifier: ReadingClassifier = Depends(get_classifier),
) -> StatusResponse:
    try:
        snapshot = classifier.snapshot(store.scan())
    except EmptyInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return StatusResponse.from_snapshot(snapshot)


@router.get(
    "/series/{chart}",
    response_model=SeriesResponse,
    summary="Trend series for one of the dashboard charts.",
)
async def chart_series(
    chart: str,
    store: ReadingStore = Depends(get_store),
) -> SeriesResponse:
    try:
        series = build_series(chart, store.scan())
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Chart {chart!r} not found.",
        ) from exc
    return SeriesResponse(
        chart=series.chart.key,
        title=series.chart.title,
        parameters=list(series.chart.parameters),
        points=[
            SeriesPoint(
                timestamp=timestamp,
                values={parameter.value: value for parameter, value in values.items()},
            )
            for timestamp, values in series.points
        ],
    )


@router.get(
    "/classify",
    response_model=ClassificationResponse,
    summary="Classify a single value against its parameter's band.",
)
async def classify_value(
    parameter: str = Query(..., description="Parameter identifier, e.g. 'temperature' or 'pH'."),
    value: FiniteFloat = Query(...),
    classifier: ReadingClassifier = Depends(get_classifier),
) -> ClassificationResponse:
    try:
        resolved = resolve_parameter(parameter)
        result = classifier.classify(value, resolved)
    except ConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return ClassificationResponse(parameter=resolved, value=value, status=result)


@router.get(
    "/thresholds",
    response_model=ThresholdsResponse,
    summary="Threshold bands and alert threshold in effect.",
)
async def thresholds(
    classifier: ReadingClassifier = Depends(get_classifier),
) -> ThresholdsResponse:
    return ThresholdsResponse(
        bands={
            parameter.value: BandModel(low=band.low, high=band.high)
            for parameter, band in classifier.thresholds.items()
        },
        alert_turbidity=classifier.alert_threshold,
    )


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
