import logging
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from .models import Coordinates

DEFAULT_GEOLOCATION_URL = "http://ip-api.com/json/"

logger = logging.getLogger(__name__)


class IpGeolocator:
    """Approximate position of this machine from its public IP address.

    Expects an ip-api.com style body: {"status": "success", "lat": .., "lon": ..}.
    Every failure is reported as None; callers treat that as "stay where you are".
    """

    def __init__(self, config: Dict[str, Any], session: Optional[requests.Session] = None):
        self.url = config.get("geolocation_url") or DEFAULT_GEOLOCATION_URL
        self.timeout = float(config.get("timeout", 15))
        self.session = session or requests.Session()

    def get_current_position(self) -> Optional[Coordinates]:
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.debug(f"Geolocation lookup failed: {e}")
            return None

        if not isinstance(data, dict) or data.get("status", "success") != "success":
            logger.debug(f"Geolocation lookup rejected: {data}")
            return None

        try:
            return Coordinates(latitude=data["lat"], longitude=data["lon"])
        except (KeyError, ValidationError) as e:
            logger.debug(f"Geolocation response missing coordinates: {e}")
            return None
