"""Errors raised by the cluster controller, fetchers and resolvers."""

from __future__ import annotations


class SourceFetchError(Exception):
    """A source (Nomad, terraform, cloud inventory) could not be fetched."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class NotFoundError(LookupError):
    """No record matched a needle."""


class NodeNotFoundError(NotFoundError):
    """No node in a snapshot matched a needle."""

    def __init__(self, needle: str) -> None:
        super().__init__(f"{needle} does not match any nodes")
        self.needle = needle


class InstanceNotFoundError(NotFoundError):
    """No declared or autoscaling group instance matched a needle."""

    def __init__(self, needle: str) -> None:
        super().__init__(f"{needle} does not match any instances")
        self.needle = needle


__all__ = [
    "InstanceNotFoundError",
    "NodeNotFoundError",
    "NotFoundError",
    "SourceFetchError",
]
