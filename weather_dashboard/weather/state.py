"""
Dashboard state and its transitions.

DashboardState is a frozen value; every event produces a new one through one
of the functions below, and each function only touches the fields it owns.

Results of the combined current+forecast fetch carry the request token they
were issued under. Only the latest token is applied, so a slow response for
an old query or unit can no longer overwrite newer data.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from .models import AirQualitySample, CurrentConditions, ForecastSeries, UnitSystem


class Status(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


@dataclass(frozen=True)
class DashboardState:
    clock_time: datetime
    unit: UnitSystem = UnitSystem.METRIC
    query: str = ""
    status: Status = Status.IDLE
    loading: bool = False
    error_message: Optional[str] = None
    conditions: Optional[CurrentConditions] = None
    forecast: Optional[ForecastSeries] = None
    air_quality: Optional[AirQualitySample] = None
    request_token: int = 0
    air_quality_token: Optional[int] = None
    # Reading for the in-flight request, held back until its weather lands.
    pending_air_quality: Optional[AirQualitySample] = None
    # Units the loaded conditions and forecast were fetched in.
    data_unit: Optional[UnitSystem] = None

    @property
    def has_weather(self) -> bool:
        return self.conditions is not None and self.forecast is not None

    @property
    def display_unit(self) -> UnitSystem:
        """Unit to label loaded values with; differs from `unit` while a unit change refetches"""
        return self.data_unit or self.unit

    def is_current(self, token: int) -> bool:
        return token == self.request_token


def query_changed(state: DashboardState, query: str) -> DashboardState:
    return replace(state, query=query)


def fetch_started(state: DashboardState) -> DashboardState:
    """Issue a new request token. Previously loaded entities stay visible until the result lands."""
    return replace(
        state,
        request_token=state.request_token + 1,
        status=Status.LOADING,
        loading=True,
        error_message=None,
        pending_air_quality=None,
    )


def fetch_succeeded(
    state: DashboardState,
    token: int,
    conditions: CurrentConditions,
    forecast: ForecastSeries,
    adopt_place_name: bool = False,
    units: Optional[UnitSystem] = None,
) -> DashboardState:
    if not state.is_current(token):
        return state
    # Air quality from an earlier location never survives a new result,
    # but a reading fetched in the same batch (coordinates path) does.
    keep_air_quality = state.air_quality_token == token
    return replace(
        state,
        status=Status.LOADED,
        loading=False,
        error_message=None,
        conditions=conditions,
        forecast=forecast,
        data_unit=UnitSystem(units) if units else state.unit,
        air_quality=state.pending_air_quality if keep_air_quality else None,
        air_quality_token=token if keep_air_quality else None,
        pending_air_quality=None,
        query=conditions.place_name if adopt_place_name and conditions.place_name else state.query,
    )


def fetch_failed(state: DashboardState, token: int, message: str) -> DashboardState:
    if not state.is_current(token):
        return state
    return replace(
        state,
        status=Status.ERRORED,
        loading=False,
        error_message=message,
        conditions=None,
        forecast=None,
        air_quality=None,
        air_quality_token=None,
        pending_air_quality=None,
        data_unit=None,
    )


def air_quality_succeeded(
    state: DashboardState, token: int, sample: Optional[AirQualitySample]
) -> DashboardState:
    if not state.is_current(token) or state.status is Status.ERRORED:
        return state
    if state.status is Status.LOADING:
        # Weather for this token has not landed; the shown conditions are still the old place.
        return replace(state, pending_air_quality=sample, air_quality_token=token)
    return replace(state, air_quality=sample, air_quality_token=token)


def air_quality_failed(state: DashboardState, token: int) -> DashboardState:
    if not state.is_current(token):
        return state
    if state.status is Status.LOADING:
        return replace(state, pending_air_quality=None, air_quality_token=token)
    return replace(state, air_quality=None, air_quality_token=token)


def unit_set(state: DashboardState, unit: UnitSystem) -> DashboardState:
    return replace(state, unit=UnitSystem(unit))


def unit_toggled(state: DashboardState) -> DashboardState:
    return unit_set(state, state.unit.toggled())


def tick(state: DashboardState, now: datetime) -> DashboardState:
    return replace(state, clock_time=now)
