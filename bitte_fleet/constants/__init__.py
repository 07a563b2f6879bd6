"""Constants module for bitte_fleet.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Environment variable names, workspace names, tags
- timeouts.py: Timeout values (seconds)
- defaults.py: Default values for settings
- patterns.py: Regex patterns
"""

from bitte_fleet.constants.defaults import (
    CACHE_PATH_DEFAULT,
    SNAPSHOT_TTL_SECONDS_DEFAULT,
    TERRAFORM_HOST_DEFAULT,
)
from bitte_fleet.constants.enums import FetchSources, FetchState, MatchMode, Provider
from bitte_fleet.constants.timeouts import HTTP_REQUEST_TIMEOUT, SOURCE_FETCH_TIMEOUT
from bitte_fleet.constants.values import WORKSPACE_CLIENTS, WORKSPACE_CORE

__all__ = [
    "CACHE_PATH_DEFAULT",
    "HTTP_REQUEST_TIMEOUT",
    "SNAPSHOT_TTL_SECONDS_DEFAULT",
    "SOURCE_FETCH_TIMEOUT",
    "TERRAFORM_HOST_DEFAULT",
    "WORKSPACE_CLIENTS",
    "WORKSPACE_CORE",
    "FetchSources",
    "FetchState",
    "MatchMode",
    "Provider",
]
