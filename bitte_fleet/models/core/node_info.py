"""Node, orchestrator client and allocation models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, IPvAnyAddress, field_validator

from bitte_fleet.utils.index_parser import parse_alloc_index


class Allocation(BaseModel):
    """A Nomad allocation as returned by ``/v1/allocations``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias="ID")
    job_id: str = Field(alias="JobID")
    namespace: str = Field(alias="Namespace")
    task_group: str = Field(alias="TaskGroup")
    status: str = Field(alias="ClientStatus")
    # Nomad sends the allocation name ("job.group[2]"); the cache stores the int.
    index: int = Field(validation_alias=AliasChoices("index", "Index", "Name"))
    node_id: str = Field(alias="NodeID")

    @field_validator("index", mode="before")
    @classmethod
    def _normalize_index(cls, value: Any) -> int:
        return parse_alloc_index(value)


class NomadClient(BaseModel):
    """A Nomad client node with the allocations placed on it."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias="ID")
    address: IPvAnyAddress | None = Field(default=None, alias="Address")
    allocs: list[Allocation] | None = None

    @field_validator("address", mode="before")
    @classmethod
    def _empty_address_is_none(cls, value: Any) -> Any:
        if value == "":
            return None
        return value


class Node(BaseModel):
    """A cluster machine correlated across cloud inventory, Nomad and terraform."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    priv_ip: IPvAnyAddress
    pub_ip: IPvAnyAddress
    nixos: str = ""
    nomad_client: NomadClient | None = None


class Instance(BaseModel):
    """A declared instance or autoscaling group member, without Nomad data."""

    model_config = ConfigDict(frozen=True)

    public_ip: str
    name: str
    uid: str
    flake_attr: str
    s3_cache: str
