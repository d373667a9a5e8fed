#!/usr/bin/python3

# =============================================================================
#
# Copyright 2017 by Leland Lucius
#
# Released under the GNU Affero GPL
# See: https://github.com/lllucius/climacast/blob/master/LICENSE
#
# =============================================================================

import json
import logging

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def _slot_text(slots):
    text = ""
    for name in sorted(slots):
        slot = slots[name] or {}
        value = slot.get("value")
        status = None
        authorities = (slot.get("resolutions") or {}).get("resolutionsPerAuthority") or []
        if authorities:
            status = (authorities[0].get("status") or {}).get("code")
        text += "  %-15s %s (%s)\n" % (name + ":", str(value), str(status))
    return text


def notify(event, sub, msg=None, log=None):
    """
    Log a report of an unusual event.

    Args:
        event: Serialized request envelope
        sub: Subject line
        msg: Optional message, usually a traceback
        log: Logger to write to (default: this module's logger)
    """
    log = log or logger
    text = ""
    request = event.get("request") if event else None
    if request:
        text += "REQUEST:\n\n"
        text += "  " + str(request.get("type"))
        slots = None
        if "intent" in request:
            intent = request["intent"] or {}
            text += " - " + str(intent.get("name"))
            slots = intent.get("slots")
        elif "apiRequest" in request:
            api_request = request["apiRequest"] or {}
            text += " - " + str(api_request.get("name"))
            slots = api_request.get("slots")
        text += "\n\n"

        if slots:
            text += "SLOTS:\n\n"
            text += _slot_text(slots)
            text += "\n"

    text += "EVENT:\n\n"
    text += json.dumps(event, indent=4, default=str)
    text += "\n\n"

    if msg:
        text += "MESSAGE:\n\n"
        text += "  " + msg
        text += "\n\n"

    log.error(f"NOTIFY:\n\n  {sub}\n\n{text}")
