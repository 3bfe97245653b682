from __future__ import annotations

import bisect
import json
import logging
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

from app.schemas import ReadingModel
from models.records import Reading
from services.sample_data import SAMPLE_READINGS
from settings import get_settings

logger = logging.getLogger(__name__)

_READINGS_ADAPTER = TypeAdapter(List[ReadingModel])


def _timestamp_key(reading: Reading):
    return reading.timestamp


class ReadingStore:
    """Readings kept in ascending timestamp order, optionally mirrored to JSON."""

    def __init__(self, persistence_path: Optional[Path] = None) -> None:
        self._readings: List[Reading] = []
        self.persistence_path = persistence_path
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def add(self, reading: Reading) -> None:
        self.extend([reading])

    def extend(self, readings: Iterable[Reading]) -> int:
        added = 0
        with self._lock:
            for reading in readings:
                # Equal timestamps keep arrival order.
                bisect.insort_right(self._readings, reading, key=_timestamp_key)
                added += 1
            if added:
                self._persist()
        return added

    def scan(self) -> List[Reading]:
        with self._lock:
            return list(self._readings)

    def __len__(self) -> int:
        with self._lock:
            return len(self._readings)

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = _READINGS_ADAPTER.dump_python(
            [ReadingModel.from_reading(reading) for reading in self._readings], mode="json"
        )
        self.persistence_path.write_text(json.dumps(payload, indent=2))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "[]"
            models = _READINGS_ADAPTER.validate_json(raw)
        except (OSError, ValidationError):
            logger.warning(
                "Ignoring unreadable readings file", extra={"path": str(self.persistence_path)}
            )
            models = []

        readings = sorted((model.to_reading() for model in models), key=_timestamp_key)
        self._readings.extend(readings)


@lru_cache
def build_default_store(path: Optional[str] = None) -> ReadingStore:
    settings = get_settings()
    store_path = settings.readings_path if path is None else path
    store = ReadingStore(persistence_path=Path(store_path) if store_path else None)
    if settings.seed_sample and not len(store):
        store.extend(SAMPLE_READINGS)
        logger.info("Seeded reading store with sample data", extra={"reading_count": len(store)})
    return store
