import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

BUILDING_INSIGHTS_URL = "https://solar.googleapis.com/v1/buildingInsights:findClosest"


class SolarAPIClient:
    """Thin client for the Google Solar API buildingInsights endpoint."""

    def __init__(
        self,
        api_key: str,
        required_quality: str = "HIGH",
        timeout: Optional[float] = None,
        base_url: str = BUILDING_INSIGHTS_URL,
    ):
        self.api_key = api_key
        self.required_quality = required_quality
        self.timeout = timeout
        self.base_url = base_url

    def call_api(self, latitude: float, longitude: float) -> Optional[Dict[str, Any]]:
        """Return the raw buildingInsights JSON, or None if it could not be fetched."""
        params = {
            "location.latitude": latitude,
            "location.longitude": longitude,
            "requiredQuality": self.required_quality,
            "key": self.api_key,
        }
        logger.info(
            "Calling Google Solar API: %s lat=%s lon=%s quality=%s",
            self.base_url, latitude, longitude, self.required_quality,
        )
        try:
            resp = requests.get(self.base_url, params=params, timeout=self.timeout)
            # Locations outside coverage come back as 4xx
            if not resp.ok:
                logger.error("Google Solar API returned %s: %s", resp.status_code, resp.text)
                return None
            return resp.json()
        except requests.RequestException as e:
            logger.error("Error calling Google Solar API: %s", e)
            return None
        except ValueError as e:
            logger.error("Google Solar API returned a non-JSON body: %s", e)
            return None


def get_solar_insights(
    latitude: float,
    longitude: float,
    api_key: str,
    required_quality: str = "HIGH",
    timeout: Optional[float] = None,
) -> Optional[Dict[str, Any]]:
    client = SolarAPIClient(api_key, required_quality=required_quality, timeout=timeout)
    return client.call_api(latitude, longitude)
