"""Nomad evaluation and deployment read models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NomadDeploymentStatus(str, Enum):
    """Deployment status values from the Nomad API."""

    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"
    SUCCESSFUL = "successful"
    CANCELLED = "cancelled"


class NomadDeploymentTaskGroup(BaseModel):
    """Per task group progress of a deployment."""

    model_config = ConfigDict(populate_by_name=True)

    auto_promote: bool = Field(default=False, alias="AutoPromote")
    auto_revert: bool = Field(default=False, alias="AutoRevert")
    desired_canaries: int = Field(default=0, alias="DesiredCanaries")
    desired_total: int = Field(default=0, alias="DesiredTotal")
    healthy_allocs: int = Field(default=0, alias="HealthyAllocs")
    placed_allocs: int = Field(default=0, alias="PlacedAllocs")
    placed_canaries: list[str] | None = Field(default=None, alias="PlacedCanaries")
    progress_deadline: int = Field(default=0, alias="ProgressDeadline")
    promoted: bool = Field(default=False, alias="Promoted")
    require_progress_by: str | None = Field(default=None, alias="RequireProgressBy")
    unhealthy_allocs: int = Field(default=0, alias="UnhealthyAllocs")


class NomadDeployment(BaseModel):
    """A Nomad deployment as returned by ``/v1/deployment/<id>``."""

    model_config = ConfigDict(populate_by_name=True)

    status: NomadDeploymentStatus = Field(alias="Status")
    status_description: str | None = Field(default=None, alias="StatusDescription")
    task_groups: dict[str, NomadDeploymentTaskGroup] = Field(
        default_factory=dict, alias="TaskGroups"
    )

    def is_done(self) -> bool:
        """True once the deployment reached a terminal status."""
        return self.status is not NomadDeploymentStatus.RUNNING


class NomadEvaluation(BaseModel):
    """A Nomad evaluation as returned by ``/v1/evaluation/<id>``."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="ID")
    job_id: str = Field(alias="JobID")
    namespace: str | None = Field(default=None, alias="Namespace")
    status: str = Field(alias="Status")
    status_description: str | None = Field(default=None, alias="StatusDescription")
    triggered_by: str | None = Field(default=None, alias="TriggeredBy")
    evaluation_type: str | None = Field(default=None, alias="Type")
    deployment_id: str | None = Field(default=None, alias="DeploymentID")
    node_id: str | None = Field(default=None, alias="NodeID")
    next_eval: str | None = Field(default=None, alias="NextEval")
    blocked_eval: str | None = Field(default=None, alias="BlockedEval")
    failed_tg_allocs: dict[str, Any] | None = Field(default=None, alias="FailedTGAllocs")
