"""
Owns the DashboardState: turns user events into fetches on the task manager
and applies their results on the UI thread.
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from . import state as transitions
from .aggregator import daily_view, hourly_view
from .air_quality import AirQualityBand, classify_aqi
from .geolocation import IpGeolocator
from .models import Coordinates, DailyForecast, HourlyEntry, Location, UnitSystem
from .service import FETCH_FAILED_MESSAGE, FetchOutcome, WeatherLoaded, WeatherService
from .state import DashboardState

Listener = Callable[[DashboardState], None]


class DashboardController:
    def __init__(
        self,
        service: WeatherService,
        task_manager,
        geolocator: Optional[IpGeolocator] = None,
        units: UnitSystem = UnitSystem.METRIC,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.service = service
        self.task_manager = task_manager
        self.geolocator = geolocator
        self.clock = clock
        self.state = DashboardState(clock_time=clock(), unit=UnitSystem(units))
        self._listeners: List[Listener] = []
        self.logger = logging.getLogger(self.__class__.__name__)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _apply(self, new_state: DashboardState) -> None:
        if new_state is self.state:
            return
        self.state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception as e:
                self.logger.error(f"Error in state listener: {e}", exc_info=True)

    # User events --------------------------------------------------------
    def set_query(self, text: str) -> None:
        self._apply(transitions.query_changed(self.state, text))

    def submit_query(self, text: Optional[str] = None) -> None:
        if text is not None:
            self.set_query(text)
        query = self.state.query.strip()
        if not query:
            return
        self._fetch(query, adopt_place_name=False)

    def fetch_coordinates(self, coordinates: Coordinates) -> None:
        self._fetch(coordinates, adopt_place_name=True)

    def locate(self) -> None:
        """Look up this machine's position in the background and fetch weather there."""
        if self.geolocator is None:
            return
        self.task_manager.submit(
            "geolocation",
            self.geolocator.get_current_position,
            self._on_position,
        )

    def toggle_units(self) -> None:
        self.set_units(self.state.unit.toggled())

    def set_units(self, unit: UnitSystem) -> None:
        unit = UnitSystem(unit)
        if unit is self.state.unit:
            return
        self.logger.info(f"Switching units to {unit.value}")
        self._apply(transitions.unit_set(self.state, unit))
        if self.state.query.strip():
            self.submit_query()
        else:
            self.locate()

    def tick(self, now: Optional[datetime] = None) -> None:
        self._apply(transitions.tick(self.state, now or self.clock()))

    # Derived views ------------------------------------------------------
    def hourly(self) -> List[HourlyEntry]:
        return hourly_view(self.state.forecast)

    def daily(self) -> List[DailyForecast]:
        return daily_view(self.state.forecast)

    def air_quality_band(self) -> Optional[AirQualityBand]:
        sample = self.state.air_quality
        if sample is None:
            return None
        return classify_aqi(sample.aqi_index)

    # Fetching -----------------------------------------------------------
    def _fetch(self, location: Location, adopt_place_name: bool) -> None:
        self._apply(transitions.fetch_started(self.state))
        token = self.state.request_token
        units = self.state.unit
        self.logger.info(f"Fetching weather for {location!r} ({units.value}), request {token}")

        self.task_manager.submit(
            "weather",
            lambda: self.service.fetch_weather(location, units),
            lambda outcome: self._on_weather(token, outcome, adopt_place_name, units),
            lambda error: self._apply(transitions.fetch_failed(self.state, token, FETCH_FAILED_MESSAGE)),
        )
        if isinstance(location, Coordinates):
            # Coordinates are already known, so air quality goes out in the same batch.
            self._fetch_air_quality(token, location)

    def _fetch_air_quality(self, token: int, coordinates: Coordinates) -> None:
        self.task_manager.submit(
            "air_quality",
            lambda: self.service.fetch_air_quality(coordinates),
            lambda sample: self._apply(transitions.air_quality_succeeded(self.state, token, sample)),
            lambda error: self._apply(transitions.air_quality_failed(self.state, token)),
        )

    def _on_weather(self, token: int, outcome: FetchOutcome, adopt_place_name: bool, units: UnitSystem) -> None:
        if not self.state.is_current(token):
            self.logger.debug(f"Discarding stale weather result for request {token}")
            return
        if isinstance(outcome, WeatherLoaded):
            self._apply(
                transitions.fetch_succeeded(
                    self.state, token, outcome.conditions, outcome.forecast, adopt_place_name, units
                )
            )
            if not adopt_place_name:
                self._fetch_air_quality(token, outcome.conditions.coordinates)
        else:
            self._apply(transitions.fetch_failed(self.state, token, outcome.message))

    def _on_position(self, coordinates: Optional[Coordinates]) -> None:
        if coordinates is None:
            self.logger.debug("No position available, keeping current location")
            return
        self.fetch_coordinates(coordinates)
