from __future__ import annotations

import pytest

from weather_dashboard.weather.air_quality import UNKNOWN_LABEL, classify_aqi


@pytest.mark.parametrize(
    "index,label",
    [(1, "Good"), (2, "Fair"), (3, "Moderate"), (4, "Poor"), (5, "Very Poor")],
)
def test_known_bands(index, label):
    band = classify_aqi(index)

    assert band.label == label
    assert band.severity == index
    assert band.intensity_pct == index * 20
    assert band.is_known
    assert band.description


@pytest.mark.parametrize("index", [0, 6, -1, 42])
def test_out_of_range_is_unknown(index):
    band = classify_aqi(index)

    assert band.label == UNKNOWN_LABEL
    assert band.severity == 0
    assert band.intensity_pct == 0
    assert not band.is_known
    assert band.summary == UNKNOWN_LABEL


def test_summary_joins_label_and_description():
    assert classify_aqi(1).summary == "Good - Air quality is satisfactory"


def test_bands_escalate_in_color():
    colors = {classify_aqi(i).color for i in range(1, 6)}

    assert len(colors) == 5
