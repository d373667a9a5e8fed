#!/usr/bin/python3

# =============================================================================
#
# Copyright 2017 by Leland Lucius
#
# Released under the GNU Affero GPL
# See: https://github.com/lllucius/climacast/blob/master/LICENSE
#
# =============================================================================

"""
Weather lookup clients.

The skill only needs a low/high temperature pair for a resolved city id.
StaticWeatherClient serves readings from a bundled JSON file; HttpWeatherClient
asks a weather service for them.
"""

import json
import logging
from collections import namedtuple
from typing import Any, Dict, Optional

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from utils.config import Config

# Configure logging
logger = logging.getLogger(__name__)

WeatherReading = namedtuple("WeatherReading", ["city_id", "low_temperature", "high_temperature"])


class WeatherLookupError(RuntimeError):
    """Raised when no reading can be produced for a city."""


def _reading(city_id: str, data: Any) -> WeatherReading:
    if not isinstance(data, dict):
        raise WeatherLookupError("Malformed weather data for city %s" % city_id)
    try:
        return WeatherReading(city_id, data["lowTemperature"], data["highTemperature"])
    except KeyError as e:
        raise WeatherLookupError("Weather data for city %s is missing %s" % (city_id, e)) from e


class WeatherClient(object):
    """
    Base class for weather lookups.
    """

    def get_weather(self, city_id: str) -> WeatherReading:
        """Return the temperature range for the given city id."""
        raise NotImplementedError("Subclass must implement get_weather()")


class StaticWeatherClient(WeatherClient):
    """
    Weather lookups from a fixed mapping of city id to readings.
    """

    def __init__(self, readings: Dict[str, Dict[str, Any]]) -> None:
        self.readings = dict(readings)

    @classmethod
    def load(cls, path: str) -> "StaticWeatherClient":
        """Load the readings from a JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("Weather file must be a JSON object: %s" % path)
        logger.info("Loaded weather for %d cities from %s", len(data), path)
        return cls(data)

    def get_weather(self, city_id: str) -> WeatherReading:
        data = self.readings.get(str(city_id))
        if data is None:
            raise WeatherLookupError("No weather for city %s" % city_id)
        return _reading(city_id, data)


class HttpWeatherClient(WeatherClient):
    """
    Weather lookups from a JSON web service.

    GET <base_url>/<city_id> must answer with an object carrying
    lowTemperature and highTemperature.
    """

    def __init__(self, base_url: str, session: Optional[httpx.Client] = None,
                 api_key: str = "") -> None:
        """
        Initialize the client.

        Args:
            base_url: Service base URL
            session: Optional httpx.Client to use for HTTP requests
            api_key: Optional key sent as the X-Api-Key header
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or httpx.Client(timeout=Config.HTTP_TIMEOUT, follow_redirects=True)
        self.api_key = api_key

    @retry(
        stop=stop_after_attempt(Config.HTTP_RETRY_TOTAL),
        retry=retry_if_exception_type(httpx.TransportError),
        wait=wait_exponential(multiplier=0.1, max=2),
        reraise=True,
    )
    def _fetch(self, city_id: str) -> httpx.Response:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-Api-Key"] = self.api_key
        return self.session.get(f"{self.base_url}/{city_id}", headers=headers)

    def get_weather(self, city_id: str) -> WeatherReading:
        r = self._fetch(city_id)
        if r.status_code != 200:
            raise WeatherLookupError("HTTPSTATUS: %s for city %s" % (r.status_code, city_id))
        try:
            data = r.json()
        except ValueError as e:
            raise WeatherLookupError("Weather service returned invalid JSON for city %s" % city_id) from e
        return _reading(city_id, data)
