"""Source fetchers for the cluster controller."""

from bitte_fleet.controllers.cluster.fetchers.ec2_fetcher import Ec2Fetcher
from bitte_fleet.controllers.cluster.fetchers.nomad_fetcher import NomadFetcher
from bitte_fleet.controllers.cluster.fetchers.terraform_fetcher import TerraformFetcher
from bitte_fleet.controllers.cluster.fetchers.vault_fetcher import VaultFetcher

__all__ = ["Ec2Fetcher", "NomadFetcher", "TerraformFetcher", "VaultFetcher"]
