"""Unit tests for the reading classifier."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest

from models.records import Parameter, Reading
from models.thresholds import DEFAULT_THRESHOLDS, ThresholdBand, ThresholdTable
from services.classifier import ALERT_MESSAGE, ALERT_TITLE, ReadingClassifier, Status
from services.errors import ConfigurationError, EmptyInputError
from services.sample_data import SAMPLE_READINGS


def _reading(turbidity: float = 2.0, hour: int = 0, **overrides: float) -> Reading:
    values = {
        "temperature": 18.2,
        "salinity": 35.1,
        "oxygen": 7.2,
        "ph": 8.1,
    }
    values.update(overrides)
    return Reading(
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(hours=hour),
        turbidity=turbidity,
        **values,
    )


@pytest.fixture()
def classifier() -> ReadingClassifier:
    return ReadingClassifier()


@pytest.mark.parametrize(
    ("value", "expected"),
    [(18.2, Status.normal), (15.9, Status.low), (22.1, Status.high)],
)
def test_classify_temperature_examples(classifier, value, expected) -> None:
    assert classifier.classify(value, "temperature") is expected


@pytest.mark.parametrize("parameter", list(Parameter))
def test_band_bounds_are_inclusive(classifier, parameter) -> None:
    band = DEFAULT_THRESHOLDS[parameter]

    assert classifier.classify(band.low, parameter) is Status.normal
    assert classifier.classify(band.high, parameter) is Status.normal
    assert classifier.classify(band.low - 0.01, parameter) is Status.low
    assert classifier.classify(band.high + 0.01, parameter) is Status.high


@pytest.mark.parametrize("parameter", list(Parameter))
def test_classification_is_monotonic(classifier, parameter) -> None:
    band = DEFAULT_THRESHOLDS[parameter]
    start = band.low - 5
    values = [start + step * 0.05 for step in range(int((band.high - band.low + 10) / 0.05))]

    ranks = [classifier.classify(value, parameter).rank for value in values]

    assert ranks == sorted(ranks)
    assert ranks[0] == Status.low.rank
    assert ranks[-1] == Status.high.rank


def test_classify_accepts_string_identifiers(classifier) -> None:
    assert classifier.classify(8.5, "pH") is Status.high
    assert classifier.classify(8.5, Parameter.ph) is Status.high


def test_classify_unknown_parameter_raises_configuration_error(classifier) -> None:
    with pytest.raises(ConfigurationError):
        classifier.classify(1.0, "chlorophyll")


def test_classify_out_of_range_physical_values(classifier) -> None:
    assert classifier.classify(-40.0, Parameter.temperature) is Status.low
    assert classifier.classify(-1.0, Parameter.turbidity) is Status.low
    assert classifier.classify(1_000.0, Parameter.salinity) is Status.high


def test_substituted_threshold_table_changes_outcome() -> None:
    table = ThresholdTable(
        {
            "temperature": ThresholdBand(low=0.0, high=10.0),
            "salinity": ThresholdBand(low=34.0, high=36.0),
            "oxygen": ThresholdBand(low=6.0, high=8.0),
            "turbidity": ThresholdBand(low=0.0, high=3.0),
            "pH": ThresholdBand(low=7.8, high=8.4),
        }
    )
    classifier = ReadingClassifier(thresholds=table)

    assert classifier.classify(18.2, "temperature") is Status.high


def test_latest_reading_returns_last_element(classifier) -> None:
    readings = [_reading(hour=0), _reading(hour=4, turbidity=2.4)]

    assert classifier.latest_reading(readings) is readings[-1]


def test_latest_reading_empty_sequence_raises(classifier) -> None:
    with pytest.raises(EmptyInputError):
        classifier.latest_reading([])


@pytest.mark.parametrize(
    ("turbidity", "expected"),
    [(2.4, True), (2.0, False), (2.2, False), (2.21, True), (3.5, True)],
)
def test_should_alert_uses_turbidity_threshold(classifier, turbidity, expected) -> None:
    assert classifier.should_alert(_reading(turbidity=turbidity)) is expected


def test_should_alert_ignores_other_fields(classifier) -> None:
    reading = _reading(turbidity=1.0, temperature=40.0, salinity=10.0, oxygen=0.0, ph=4.0)

    assert classifier.should_alert(reading) is False


def test_alert_fires_below_turbidity_high_bound(classifier) -> None:
    reading = _reading(turbidity=2.5)

    assert classifier.classify(reading.turbidity, Parameter.turbidity) is Status.normal
    assert classifier.should_alert(reading) is True


def test_active_alert_is_logged(classifier, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="services.classifier"):
        classifier.should_alert(_reading(turbidity=2.4))

    assert any(record.getMessage() == ALERT_TITLE for record in caplog.records)


def test_snapshot_of_sample_series(classifier) -> None:
    snapshot = classifier.snapshot(SAMPLE_READINGS)

    assert snapshot.latest == SAMPLE_READINGS[-1]
    assert [metric.parameter for metric in snapshot.metrics] == list(Parameter)
    assert all(metric.status is Status.normal for metric in snapshot.metrics)
    assert snapshot.metrics[3].value == 2.4
    assert snapshot.alert.active is True
    assert snapshot.alert.title == ALERT_TITLE
    assert snapshot.alert.message == ALERT_MESSAGE


def test_snapshot_empty_sequence_raises(classifier) -> None:
    with pytest.raises(EmptyInputError):
        classifier.snapshot([])


def test_classify_reading_covers_all_parameters(classifier) -> None:
    statuses = classifier.classify_reading(_reading(temperature=25.0, ph=7.0))

    assert statuses == {
        Parameter.temperature: Status.high,
        Parameter.salinity: Status.normal,
        Parameter.oxygen: Status.normal,
        Parameter.turbidity: Status.normal,
        Parameter.ph: Status.low,
    }


def test_classify_rejects_nan(classifier) -> None:
    with pytest.raises(ValueError, match="NaN"):
        classifier.classify(float("nan"), "temperature")


def test_classify_identifiers_are_case_insensitive(classifier) -> None:
    assert classifier.classify(8.5, "PH") is Status.high
    assert classifier.classify(8.5, "ph") is Status.high
    assert classifier.classify(15.9, " Temperature ") is Status.low


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_reading_rejects_non_finite_values(value) -> None:
    with pytest.raises(ValueError, match="turbidity"):
        _reading(turbidity=value)
