from .models import Coordinates, UnitSystem
from .service import WeatherService
from .controller import DashboardController
from .weather_backend import OpenWeatherMapBackend
from .geolocation import IpGeolocator


def create_controller(settings, task_manager) -> DashboardController:
    """Wire backend, service and geolocator from the validated `weather` config section"""
    config = settings.model_dump()
    service = WeatherService(OpenWeatherMapBackend(config))
    geolocator = IpGeolocator(config) if settings.use_geolocation else None
    return DashboardController(service, task_manager, geolocator=geolocator, units=settings.units)
