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
Breed recommendation table for Pet Match.

The table is a static JSON object keyed by "<energy>-<size>-<temperament>".
It is loaded once per container and never modified afterwards.
"""

import json
import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

# Configure logging
logger = logging.getLogger(__name__)


def make_key(energy: str, size: str, temperament: str) -> str:
    """Build the composite table key from resolved slot values."""
    return f"{energy}-{size}-{temperament}"


class RecommendationTable(object):
    """
    Read-only lookup of breed records by energy, size and temperament.
    """

    def __init__(self, records: Mapping[str, Dict[str, Any]]) -> None:
        """
        Initialize the table.

        Args:
            records: Mapping of composite key to breed record
        """
        self._records = MappingProxyType(
            {key: MappingProxyType(dict(record)) for key, record in records.items()}
        )

    @classmethod
    def load(cls, path: str) -> "RecommendationTable":
        """
        Load the table from a JSON file.

        Args:
            path: Path of the JSON file

        Returns:
            RecommendationTable built from the file

        Raises:
            ValueError: If the file is not an object of breed records
        """
        with open(path, "r") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError("Recommendation table must be a JSON object: %s" % path)
        for key, record in data.items():
            if not isinstance(record, dict) or "breed" not in record:
                raise ValueError("Recommendation %s has no breed" % key)

        logger.info("Loaded %d recommendations from %s", len(data), path)
        return cls(data)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: str) -> bool:
        return key in self._records

    def get(self, key: str) -> Optional[Mapping[str, Any]]:
        """Return the record stored under key, or None."""
        return self._records.get(key)

    def lookup(self, energy: str, size: str, temperament: str) -> Optional[Mapping[str, Any]]:
        """
        Return the breed record for the given attributes, or None when the
        combination is not in the table.
        """
        key = make_key(energy, size, temperament)
        record = self._records.get(key)
        logger.info("Response from recommendation table for %s: %s", key,
                    dict(record) if record is not None else None)
        return record
