"""Regex patterns for data parsing."""

import re

# Trailing numeral inside the closing bracket of an allocation name, e.g. "web.api[2]"
ALLOC_INDEX_PATTERN = re.compile(r"([0-9]+)\]\Z")

# Group name segment of an autoscaling group ARN
ASG_NAME_PATTERN = re.compile(r"autoScalingGroupName/(?P<name>[^/:]+)$")

__all__ = [
    "ALLOC_INDEX_PATTERN",
    "ASG_NAME_PATTERN",
]
