"""Loading of threshold tables supplied as configuration files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ValidationError

from models.thresholds import ThresholdBand, ThresholdTable
from services.errors import ConfigurationError

logger = logging.getLogger(__name__)


class _BandConfig(BaseModel):
    low: float
    high: float


class ThresholdConfig(BaseModel):
    """On-disk shape of a threshold file."""

    bands: Dict[str, _BandConfig]
    alert_turbidity: Optional[float] = None

    def to_table(self) -> ThresholdTable:
        return ThresholdTable(
            {
                name: ThresholdBand(low=band.low, high=band.high)
                for name, band in self.bands.items()
            }
        )


def load_threshold_config(path: Path) -> ThresholdConfig:
    """Read and validate a JSON threshold file.

    Any problem with the file (unreadable, malformed, unknown or missing
    parameters, inverted bands) is reported as :class:`ConfigurationError`.
    """
    try:
        raw = path.read_text()
    except OSError as exc:
        raise ConfigurationError(f"Unable to read threshold file {str(path)!r}: {exc}") from exc

    try:
        config = ThresholdConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid threshold file {str(path)!r}: {exc}") from exc

    # Validates parameter names and band ordering eagerly.
    config.to_table()
    logger.info("Loaded threshold table", extra={"path": str(path)})
    return config
