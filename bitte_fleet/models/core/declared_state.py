"""Declared infrastructure state models (terraform ``cluster`` output)."""

from pydantic import BaseModel, ConfigDict, Field


class DeclaredAsg(BaseModel):
    """An autoscaling group declared in terraform state."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    arn: str
    count: int = 0
    flake_attr: str = Field(default="", alias="flake-attr")
    instance_type: str = Field(default="", alias="instance-type")
    region: str
    uid: str = ""


class DeclaredInstance(BaseModel):
    """A standalone instance declared in terraform state."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    flake_attr: str = Field(default="", alias="flake-attr")
    instance_type: str = Field(default="", alias="instance-type")
    name: str
    private_ip: str = Field(alias="private-ip")
    public_ip: str = Field(default="", alias="public-ip")
    tags: dict[str, str] = Field(default_factory=dict)
    uid: str = ""


class DeclaredStateValue(BaseModel):
    """Value of the ``cluster`` output of a terraform workspace."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    asgs: dict[str, DeclaredAsg] = Field(default_factory=dict)
    instances: dict[str, DeclaredInstance] = Field(default_factory=dict)
    s3_cache: str = Field(alias="s3-cache")
    s3_bucket: str | None = Field(default=None, alias="s3-bucket")
    flake: str | None = None
    kms: str | None = None
    name: str | None = None
    region: str | None = None

    def instance_name_for(self, private_ip: str) -> str | None:
        """Return the name of the declared instance with ``private_ip``, if any."""
        for instance in self.instances.values():
            if instance.private_ip == private_ip:
                return instance.name
        return None
