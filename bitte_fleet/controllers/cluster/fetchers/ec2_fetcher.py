"""EC2 fetcher - live cloud inventory (instances and autoscaling groups)."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from bitte_fleet.constants.patterns import ASG_NAME_PATTERN
from bitte_fleet.constants.values import CLUSTER_TAG, RUNNING_STATE
from bitte_fleet.controllers.cluster.errors import SourceFetchError

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str, str], Any]


def _boto3_client(service: str, region: str) -> Any:
    return boto3.client(service, region_name=region)


class Ec2Fetcher:
    """Fetches EC2 instances and autoscaling group members per region.

    boto3 is blocking, so every call runs in a worker thread. Regional
    clients are created once and reused.
    """

    def __init__(self, client_factory: ClientFactory | None = None) -> None:
        """Initialize with an optional client factory.

        Args:
            client_factory: Callable ``(service, region) -> client``;
                defaults to ``boto3.client``
        """
        self._client_factory = client_factory or _boto3_client
        self._clients: dict[str, Any] = {}
        self._clients_lock = threading.Lock()

    def _client(self, service: str, region: str) -> Any:
        """Get or create a client for a specific service and region."""
        cache_key = f"{service}:{region}"
        with self._clients_lock:
            if cache_key not in self._clients:
                self._clients[cache_key] = self._client_factory(service, region)
            return self._clients[cache_key]

    @staticmethod
    def _source(region: str) -> str:
        return f"ec2:{region}"

    def _describe_running_instances_sync(
        self, region: str, cluster: str
    ) -> list[dict[str, Any]]:
        ec2 = self._client("ec2", region)
        filters = [
            {"Name": f"tag:{CLUSTER_TAG}", "Values": [cluster]},
            {"Name": "instance-state-name", "Values": [RUNNING_STATE]},
        ]
        instances: list[dict[str, Any]] = []
        request: dict[str, Any] = {"Filters": filters}
        while True:
            response = ec2.describe_instances(**request)
            for reservation in response.get("Reservations", []):
                instances.extend(reservation.get("Instances", []))
            next_token = response.get("NextToken")
            if not next_token:
                return instances
            request["NextToken"] = next_token

    async def describe_running_instances(
        self, region: str, cluster: str
    ) -> list[dict[str, Any]]:
        """List running instances tagged with the cluster name in ``region``.

        Raises:
            SourceFetchError: If the region query fails.
        """
        try:
            instances = await asyncio.to_thread(
                self._describe_running_instances_sync, region, cluster
            )
        except (BotoCoreError, ClientError) as exc:
            raise SourceFetchError(self._source(region), str(exc)) from exc
        logger.debug("Found %d running instances in %s", len(instances), region)
        return instances

    @staticmethod
    def asg_name_from_arn(arn: str) -> str:
        """Extract the group name from an autoscaling group ARN.

        A bare group name is returned unchanged.
        """
        match = ASG_NAME_PATTERN.search(arn)
        return match.group("name") if match else arn

    def _describe_auto_scaling_group_sync(self, name: str, region: str) -> dict[str, Any]:
        autoscaling = self._client("autoscaling", region)
        return autoscaling.describe_auto_scaling_groups(AutoScalingGroupNames=[name])

    async def describe_auto_scaling_group(self, arn: str, region: str) -> list[str]:
        """Return the instance ids of an autoscaling group's members."""
        name = self.asg_name_from_arn(arn)
        try:
            response = await asyncio.to_thread(
                self._describe_auto_scaling_group_sync, name, region
            )
        except (BotoCoreError, ClientError) as exc:
            raise SourceFetchError(f"asg:{name}", str(exc)) from exc

        return [
            member["InstanceId"]
            for group in response.get("AutoScalingGroups", [])
            for member in group.get("Instances", [])
            if member.get("InstanceId")
        ]

    def _describe_instance_sync(self, instance_id: str, region: str) -> dict[str, Any]:
        ec2 = self._client("ec2", region)
        return ec2.describe_instances(InstanceIds=[instance_id])

    async def describe_instance(
        self, instance_id: str, region: str
    ) -> list[dict[str, Any]]:
        """Describe a single instance by id."""
        try:
            response = await asyncio.to_thread(
                self._describe_instance_sync, instance_id, region
            )
        except (BotoCoreError, ClientError) as exc:
            raise SourceFetchError(self._source(region), str(exc)) from exc

        return [
            instance
            for reservation in response.get("Reservations", [])
            for instance in reservation.get("Instances", [])
        ]
