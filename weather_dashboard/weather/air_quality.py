"""
Air quality banding for the OpenWeatherMap 1..5 AQI scale.
"""
from typing import NamedTuple

UNKNOWN_LABEL = "Unknown air quality"
UNKNOWN_COLOR = "#6b7280"


class AirQualityBand(NamedTuple):
    aqi_index: int
    label: str
    description: str
    severity: int
    intensity_pct: int
    color: str

    @property
    def summary(self) -> str:
        """Label and advice joined for display, e.g. 'Good - Air quality is satisfactory'"""
        if not self.description:
            return self.label
        return f"{self.label} - {self.description}"

    @property
    def is_known(self) -> bool:
        return self.severity > 0


# index -> (label, description, bar color)
AQI_BANDS = {
    1: ("Good", "Air quality is satisfactory", "#22c55e"),
    2: ("Fair", "Air quality is acceptable", "#eab308"),
    3: ("Moderate", "Sensitive groups should limit outdoor exertion", "#f97316"),
    4: ("Poor", "Health alert for everyone", "#ef4444"),
    5: ("Very Poor", "Health warnings of emergency conditions", "#a855f7"),
}


def classify_aqi(aqi_index: int) -> AirQualityBand:
    """Map an AQI index to its band. Anything outside 1..5 is reported as unknown."""
    band = AQI_BANDS.get(aqi_index)
    if band is None:
        return AirQualityBand(aqi_index, UNKNOWN_LABEL, "", 0, 0, UNKNOWN_COLOR)
    label, description, color = band
    return AirQualityBand(
        aqi_index=aqi_index,
        label=label,
        description=description,
        severity=aqi_index,
        intensity_pct=min(aqi_index * 20, 100),
        color=color,
    )
