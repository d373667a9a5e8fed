#!/usr/bin/python3

# =============================================================================
#
# Copyright 2017 by Leland Lucius
#
# Released under the GNU Affero GPL
# See: https://github.com/lllucius/climacast/blob/master/LICENSE
#
# =============================================================================

import logging

import httpx

from storage.recommendations import RecommendationTable
from utils.config import Config
from weather.client import HttpWeatherClient, StaticWeatherClient, WeatherClient

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

# =============================================================================
# Factory Functions for Singleton Instances
# =============================================================================

_https_client = None


def get_https_client() -> httpx.Client:
    """
    Get or create the global HTTPS client instance.

    Returns:
        httpx.Client: Configured HTTP client for API calls
    """
    global _https_client
    if _https_client is None:
        _https_client = httpx.Client(timeout=Config.HTTP_TIMEOUT, follow_redirects=True)
    return _https_client


_recommendations_instance = None


def get_recommendations() -> RecommendationTable:
    """
    Get or load the global recommendation table.

    Returns:
        RecommendationTable: Breed table read from Config.RECOMMENDATIONS_FILE
    """
    global _recommendations_instance
    if _recommendations_instance is None:
        _recommendations_instance = RecommendationTable.load(Config.RECOMMENDATIONS_FILE)
    return _recommendations_instance


_weather_client_instance = None


def get_weather_client() -> WeatherClient:
    """
    Get or create the global weather client.

    Returns:
        WeatherClient: HTTP client when WEATHER_API_URL is set, otherwise
        the static client backed by Config.WEATHER_FILE
    """
    global _weather_client_instance
    if _weather_client_instance is None:
        if Config.WEATHER_API_URL:
            logger.info("Using weather service at %s", Config.WEATHER_API_URL)
            _weather_client_instance = HttpWeatherClient(
                Config.WEATHER_API_URL, session=get_https_client(), api_key=Config.WEATHER_API_KEY
            )
        else:
            _weather_client_instance = StaticWeatherClient.load(Config.WEATHER_FILE)
    return _weather_client_instance
