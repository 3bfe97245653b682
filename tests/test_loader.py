from __future__ import annotations

from datetime import datetime, timezone

import pytest

from models.records import Reading
from services.loader import RowError, load_readings_csv, parse_timestamp

HEADER = "timestamp,temperature,salinity,oxygen,turbidity,pH\n"


def test_load_valid_rows() -> None:
    body = (
        HEADER
        + "2024-01-01T00:00:00Z,18.2,35.1,7.2,2.1,8.1\n"
        + "2024-01-01T04:00:00+00:00,18.0,35.2,7.1,2.3,8.0\n"
    )

    result = load_readings_csv(body)

    assert result.errors == []
    assert result.readings == [
        Reading(
            timestamp=datetime(2024, 1, 1, 0, tzinfo=timezone.utc),
            temperature=18.2,
            salinity=35.1,
            oxygen=7.2,
            turbidity=2.1,
            ph=8.1,
        ),
        Reading(
            timestamp=datetime(2024, 1, 1, 4, tzinfo=timezone.utc),
            temperature=18.0,
            salinity=35.2,
            oxygen=7.1,
            turbidity=2.3,
            ph=8.0,
        ),
    ]


def test_headers_are_case_insensitive() -> None:
    body = "Timestamp, Temperature,SALINITY,Oxygen,Turbidity,ph\n2024-01-01T00:00:00,18,35,7,2,8\n"

    result = load_readings_csv(body)

    assert len(result.readings) == 1
    assert result.readings[0].ph == 8.0


def test_row_errors_are_collected_with_row_numbers() -> None:
    body = (
        HEADER
        + "2024-01-01T00:00:00Z,18.2,35.1,7.2,2.1,8.1\n"
        + ",18.2,35.1,7.2,2.1,8.1\n"
        + "yesterday,18.2,35.1,7.2,2.1,8.1\n"
        + "2024-01-01T02:00:00Z,18.2,,7.2,2.1,8.1\n"
        + "2024-01-01T03:00:00Z,18.2,35.1,7.2,murky,8.1\n"
    )

    result = load_readings_csv(body)

    assert len(result.readings) == 1
    assert result.errors == [
        RowError(row_number=3, reason="missing timestamp"),
        RowError(row_number=4, reason="invalid timestamp"),
        RowError(row_number=5, reason="missing salinity"),
        RowError(row_number=6, reason="invalid numeric turbidity"),
    ]


def test_missing_columns_raise() -> None:
    with pytest.raises(ValueError, match="turbidity, pH"):
        load_readings_csv("timestamp,temperature,salinity,oxygen\n")


def test_missing_header_raises() -> None:
    with pytest.raises(ValueError, match="header"):
        load_readings_csv("")


def test_parse_timestamp_normalizes_to_utc() -> None:
    parsed = parse_timestamp("2024-01-01T02:00:00+02:00")

    assert parsed == datetime(2024, 1, 1, 0, tzinfo=timezone.utc)
    assert parsed.tzinfo is timezone.utc


@pytest.mark.parametrize("raw", ["nan", "NaN", "inf", "-Infinity"])
def test_non_finite_values_are_row_errors(raw) -> None:
    body = HEADER + f"2024-01-01T00:00:00Z,{raw},35,7,2,8.1\n" + "2024-01-01T01:00:00Z,18,35,7,2,8.1\n"

    result = load_readings_csv(body)

    assert result.errors == [RowError(row_number=2, reason="invalid numeric temperature")]
    assert len(result.readings) == 1
