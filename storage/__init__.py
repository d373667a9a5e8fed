"""
Storage modules for Pet Match.

This package contains the read-only breed recommendation table.
"""

from .recommendations import RecommendationTable, make_key

__all__ = [
    "RecommendationTable",
    "make_key",
]
