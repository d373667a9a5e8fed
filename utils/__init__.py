"""
Utility modules for Pet Match.

This package contains configuration, constants and entity resolution helpers.
"""

from .config import Config
from .entity_resolver import CityMatch, SlotResolutionError, get_city_name_with_id, resolve_entity

__all__ = ['Config', 'CityMatch', 'SlotResolutionError', 'get_city_name_with_id',
           'resolve_entity']
