"""
Weather modules for Pet Match.

This package contains the weather lookup clients used by the GetWeatherApi handler.
"""

from weather.client import (HttpWeatherClient, StaticWeatherClient, WeatherClient,
                            WeatherLookupError, WeatherReading)

__all__ = [
    'WeatherClient',
    'StaticWeatherClient',
    'HttpWeatherClient',
    'WeatherLookupError',
    'WeatherReading'
]
