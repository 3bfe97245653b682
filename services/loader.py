"""CSV parsing for batches of readings."""

from __future__ import annotations

import csv
import io
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from models.records import Parameter, Reading

logger = logging.getLogger(__name__)

TIMESTAMP_COLUMN = "timestamp"


@dataclass(frozen=True)
class RowError:
    row_number: int
    reason: str


@dataclass
class LoadResult:
    readings: List[Reading] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)


def parse_timestamp(value: str) -> datetime:
    candidate = value.strip()
    if not candidate:
        raise ValueError("Timestamp is empty.")

    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise ValueError("Invalid timestamp format") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed.astimezone(timezone.utc)


def load_readings_csv(text: str) -> LoadResult:
    """Parse CSV text into readings, collecting per-row problems.

    Header names are matched case-insensitively. Rows are numbered as they
    appear in the file, so the first data row is row 2. A missing header or
    missing required columns raise ``ValueError``.
    """
    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames:
        raise ValueError("CSV file is missing a header row.")

    normalized = {name.lower().strip(): name for name in reader.fieldnames if name}
    required = [TIMESTAMP_COLUMN] + [parameter.value for parameter in Parameter]
    missing = [column for column in required if column.lower() not in normalized]
    if missing:
        raise ValueError(f"CSV missing required columns: {', '.join(missing)}")

    result = LoadResult()
    for row_number, row in enumerate(reader, start=2):
        timestamp_raw = (row.get(normalized[TIMESTAMP_COLUMN]) or "").strip()
        if not timestamp_raw:
            result.errors.append(RowError(row_number=row_number, reason="missing timestamp"))
            continue
        try:
            timestamp = parse_timestamp(timestamp_raw)
        except ValueError:
            result.errors.append(RowError(row_number=row_number, reason="invalid timestamp"))
            continue

        values: dict[str, float] = {}
        for parameter in Parameter:
            raw = (row.get(normalized[parameter.value.lower()]) or "").strip()
            if not raw:
                result.errors.append(
                    RowError(row_number=row_number, reason=f"missing {parameter.value}")
                )
                break
            try:
                value = float(raw)
                if not math.isfinite(value):
                    raise ValueError(raw)
            except ValueError:
                result.errors.append(
                    RowError(row_number=row_number, reason=f"invalid numeric {parameter.value}")
                )
                break
            values[parameter.field_name] = value
        else:
            result.readings.append(Reading(timestamp=timestamp, **values))

    if result.errors:
        logger.info(
            "Skipped invalid CSV rows",
            extra={"error_count": len(result.errors), "reading_count": len(result.readings)},
        )
    return result
