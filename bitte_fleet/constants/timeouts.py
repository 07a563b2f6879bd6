"""Timeout constants.

All timeout values for HTTP requests and source fetches.
"""

from typing import Final

# ============================================================================
# HTTP timeouts (float, in seconds)
# ============================================================================

HTTP_REQUEST_TIMEOUT: Final = 30.0

# ============================================================================
# Source fetch deadlines (float, in seconds)
# ============================================================================

# Upper bound for a single source fetch during snapshot build
SOURCE_FETCH_TIMEOUT: Final = 60.0

__all__ = [
    "HTTP_REQUEST_TIMEOUT",
    "SOURCE_FETCH_TIMEOUT",
]
