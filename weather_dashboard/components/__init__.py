from .header_component import HeaderComponent
from .weather_component import WeatherComponent
from .hourly_component import HourlyWeatherComponent
from .daily_component import DailyForecastComponent
from .air_quality_component import AirQualityComponent

# Creation order; placement comes from each component's `column`/`row` config.
COMPONENT_CLASSES = [
    HeaderComponent,
    WeatherComponent,
    AirQualityComponent,
    HourlyWeatherComponent,
    DailyForecastComponent,
]
