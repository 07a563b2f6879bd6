"""Instance resolver - finds declared instances and autoscaling group members.

Works from terraform state and live autoscaling group membership only; no
Nomad correlation is involved.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from bitte_fleet.constants.enums import MatchMode
from bitte_fleet.controllers.cluster.errors import InstanceNotFoundError
from bitte_fleet.controllers.cluster.fetchers.ec2_fetcher import Ec2Fetcher
from bitte_fleet.models.core.declared_state import DeclaredAsg, DeclaredStateValue
from bitte_fleet.models.core.node_info import Instance

logger = logging.getLogger(__name__)

_LIVE_FIELDS = (
    "InstanceId",
    "PublicDnsName",
    "PublicIpAddress",
    "PrivateDnsName",
    "PrivateIpAddress",
)


def _raise_first_error(results: list[Any]) -> None:
    for result in results:
        if isinstance(result, BaseException):
            raise result


class InstanceResolver:
    """Resolves needles against declared instances, then autoscaling group members.

    With ``MatchMode.CONTAINS`` a live member matches when the needle is a
    substring of its id, public DNS, public IP, private DNS and private IP
    concatenated in that order. That can match across field boundaries;
    ``MatchMode.EXACT`` compares each field separately instead.
    """

    def __init__(
        self,
        state_loader: Callable[[], Awaitable[DeclaredStateValue]],
        ec2_fetcher: Ec2Fetcher,
        match_mode: MatchMode = MatchMode.CONTAINS,
    ) -> None:
        """Initialize the resolver.

        Args:
            state_loader: Coroutine function returning the declared state
            ec2_fetcher: Fetcher used for autoscaling group lookups
            match_mode: Matching rule for live autoscaling group members
        """
        self._state_loader = state_loader
        self._ec2_fetcher = ec2_fetcher
        self._match_mode = match_mode

    def _live_matches(self, instance: dict[str, Any], needles: set[str]) -> bool:
        values = [instance.get(field) or "" for field in _LIVE_FIELDS]
        if self._match_mode is MatchMode.EXACT:
            return bool(needles & {value for value in values if value})
        haystack = "".join(values)
        return any(needle in haystack for needle in needles)

    @staticmethod
    def _declared_matches(state: DeclaredStateValue, needles: set[str]) -> list[Instance]:
        return [
            Instance(
                public_ip=declared.public_ip,
                name=declared.name,
                uid=declared.uid,
                flake_attr=declared.flake_attr,
                s3_cache=state.s3_cache,
            )
            for declared in state.instances.values()
            if needles & {declared.private_ip, declared.public_ip, declared.name}
        ]

    async def _asg_matches(
        self, asg: DeclaredAsg, needles: set[str], s3_cache: str
    ) -> list[Instance]:
        member_ids = await self._ec2_fetcher.describe_auto_scaling_group(asg.arn, asg.region)
        described = await asyncio.gather(
            *(
                self._ec2_fetcher.describe_instance(instance_id, asg.region)
                for instance_id in member_ids
            ),
            return_exceptions=True,
        )
        _raise_first_error(described)

        results: list[Instance] = []
        for instances in described:
            for instance in instances:
                public_ip = instance.get("PublicIpAddress")
                if not public_ip or not self._live_matches(instance, needles):
                    continue
                results.append(
                    Instance(
                        public_ip=public_ip,
                        name=instance.get("InstanceId", ""),
                        uid=asg.uid,
                        flake_attr=asg.flake_attr,
                        s3_cache=s3_cache,
                    )
                )
        return results

    async def find_instances(self, needles: Iterable[str]) -> list[Instance]:
        """Return every declared instance and group member matching any needle.

        Declared instances come first, followed by group members; no other
        ordering is guaranteed.
        """
        needle_set = {needle for needle in needles if needle}
        if not needle_set:
            return []

        state = await self._state_loader()
        results = self._declared_matches(state, needle_set)

        per_asg = await asyncio.gather(
            *(
                self._asg_matches(asg, needle_set, state.s3_cache)
                for asg in state.asgs.values()
            ),
            return_exceptions=True,
        )
        _raise_first_error(per_asg)
        for matches in per_asg:
            results.extend(matches)

        logger.debug("Needles %s matched %d instances", sorted(needle_set), len(results))
        return results

    async def find_instance(self, needle: str) -> Instance:
        """Return the first instance matching ``needle``.

        Raises:
            InstanceNotFoundError: If nothing matches.
        """
        instances = await self.find_instances([needle])
        if not instances:
            raise InstanceNotFoundError(needle)
        return instances[0]
