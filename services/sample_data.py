"""Sample series used to seed an empty reading store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from models.records import Reading


def _at(hour: int) -> datetime:
    return datetime(2024, 1, 1, hour, 0, tzinfo=timezone.utc)


SAMPLE_READINGS: List[Reading] = [
    Reading(timestamp=_at(0), temperature=18.2, salinity=35.1, oxygen=7.2, turbidity=2.1, ph=8.1),
    Reading(timestamp=_at(4), temperature=18.0, salinity=35.2, oxygen=7.1, turbidity=2.3, ph=8.0),
    Reading(timestamp=_at(8), temperature=18.5, salinity=35.0, oxygen=7.3, turbidity=2.0, ph=8.2),
    Reading(timestamp=_at(12), temperature=19.1, salinity=34.9, oxygen=7.4, turbidity=1.9, ph=8.1),
    Reading(timestamp=_at(16), temperature=19.3, salinity=34.8, oxygen=7.2, turbidity=2.2, ph=8.0),
    Reading(timestamp=_at(20), temperature=18.8, salinity=35.0, oxygen=7.1, turbidity=2.4, ph=8.1),
]
