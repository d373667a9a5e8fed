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
Entity resolution helpers for slot values.

Alexa attaches entity resolution results to every slot of a custom slot
type. Only the first resolution authority (the skill's own slot type) is
consulted; a value counts as resolved only when that authority reports a
single successful match.
"""

import logging
from collections import namedtuple
from typing import Any, Dict, Optional

from ask_sdk_model.slu.entityresolution import StatusCode

from utils.constants import CITY_SLOT

# Configure logging
logger = logging.getLogger(__name__)

CityMatch = namedtuple("CityMatch", ["name", "id"])


class SlotResolutionError(ValueError):
    """Raised when a slot does not carry the resolution structure Alexa sends."""


def _first_match(slot: Any) -> Optional[Any]:
    """
    Return the first candidate value of the slot's first authority when that
    authority reports ER_SUCCESS_MATCH, otherwise None.
    """
    authorities = slot.resolutions.resolutions_per_authority
    if not authorities:
        return None

    authority = authorities[0]
    if authority.status is None or authority.status.code != StatusCode.ER_SUCCESS_MATCH:
        return None
    if not authority.values:
        return None

    return authority.values[0].value


def resolve_entity(slots: Optional[Dict[str, Any]], slot_name: str) -> Optional[str]:
    """
    Resolve a slot to its canonical value name.

    Args:
        slots: Mapping of slot name to slot (intent or API slots)
        slot_name: Name of the slot to resolve

    Returns:
        The canonical name of the first candidate, or None when the slot did
        not resolve to a single match

    Raises:
        SlotResolutionError: If the slot or its resolutions are missing
    """
    slot = slots.get(slot_name) if slots else None
    if slot is None:
        raise SlotResolutionError("Slot %s is missing from the request" % slot_name)
    if getattr(slot, "resolutions", None) is None:
        raise SlotResolutionError("Slot %s has no resolutions" % slot_name)

    value = _first_match(slot)
    if value is None:
        logger.debug("Slot %s did not resolve", slot_name)
        return None

    return value.name


def get_city_name_with_id(slots: Optional[Dict[str, Any]]) -> Optional[CityMatch]:
    """
    Resolve the city slot to its canonical name and id.

    A missing slot or missing resolutions count as no match.
    """
    slot = slots.get(CITY_SLOT) if slots else None
    if slot is None or getattr(slot, "resolutions", None) is None:
        return None

    value = _first_match(slot)
    if value is None:
        return None

    return CityMatch(value.name, value.id)
