"""Utility functions for bitte_fleet."""

from bitte_fleet.utils.index_parser import AllocIndexError, parse_alloc_index

__all__ = [
    # Index parsing
    "AllocIndexError",
    "parse_alloc_index",
]
