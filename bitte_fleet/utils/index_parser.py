"""Allocation index parsing.

Nomad reports an allocation's position in its task group either as a plain
integer (``Index``) or embedded in the allocation name (``Name``), e.g.
``"mycluster-job.web[2]"``. Both forms are normalized to the integer.
"""

from typing import Any

from bitte_fleet.constants.patterns import ALLOC_INDEX_PATTERN


class AllocIndexError(ValueError):
    """Raised when an allocation index cannot be decoded."""


def parse_alloc_index(value: Any) -> int:
    """Parse an allocation index to a non-negative integer.

    Handles both encodings:
    - Integer: ``2`` -> 2
    - Bracketed suffix: ``"job.group[2]"`` -> 2

    Args:
        value: Integer index or allocation name string.

    Returns:
        The index as int.

    Raises:
        AllocIndexError: If no trailing bracketed numeral can be extracted.
    """
    if isinstance(value, bool):
        raise AllocIndexError(f"Invalid allocation index: {value!r}")

    if isinstance(value, int):
        if value < 0:
            raise AllocIndexError(f"Negative allocation index: {value}")
        return value

    if not isinstance(value, str):
        raise AllocIndexError(f"Unsupported allocation index type: {type(value).__name__}")

    match = ALLOC_INDEX_PATTERN.search(value)
    if match is None:
        raise AllocIndexError(f"No bracketed index in allocation name: {value!r}")

    try:
        return int(match.group(1))
    except ValueError as exc:
        raise AllocIndexError(f"Unparseable allocation index in {value!r}") from exc


__all__ = [
    "AllocIndexError",
    "parse_alloc_index",
]
