"""Tests for cluster settings."""

from __future__ import annotations

import pytest

from bitte_fleet.constants.enums import Provider
from bitte_fleet.models.state.cluster_settings import (
    ClusterSettings,
    ConfigError,
    parse_provider,
)


def _env(**overrides: str) -> dict[str, str]:
    env = {
        "BITTE_CLUSTER": "testnet",
        "BITTE_DOMAIN": "testnet.example.com",
        "BITTE_PROVIDER": "AWS",
        "AWS_ASG_REGIONS": "eu-central-1:us-east-2",
        "AWS_DEFAULT_REGION": "eu-central-1",
        "TERRAFORM_ORGANIZATION": "example-org",
    }
    env.update(overrides)
    return env


class TestClusterSettingsFromEnv:
    """Tests for ClusterSettings.from_env."""

    def test_reads_environment(self) -> None:
        """All values are taken from the environment mapping."""
        settings = ClusterSettings.from_env(_env(NOMAD_TOKEN="nomad-secret"))

        assert settings.cluster == "testnet"
        assert settings.domain == "testnet.example.com"
        assert settings.provider is Provider.AWS
        assert settings.terraform_organization == "example-org"
        assert settings.nomad_token == "nomad-secret"
        assert settings.nomad_url == "https://nomad.testnet.example.com"

    @pytest.mark.parametrize(
        "missing",
        ["BITTE_CLUSTER", "BITTE_DOMAIN", "BITTE_PROVIDER", "AWS_ASG_REGIONS", "AWS_DEFAULT_REGION"],
    )
    def test_missing_required_variable(self, missing: str) -> None:
        """A missing required variable raises ConfigError naming it."""
        env = _env()
        del env[missing]

        with pytest.raises(ConfigError, match=missing):
            ClusterSettings.from_env(env)

    def test_unknown_provider(self) -> None:
        """Unsupported providers are configuration errors."""
        with pytest.raises(ConfigError, match="Unsupported provider"):
            ClusterSettings.from_env(_env(BITTE_PROVIDER="GCP"))

    def test_regions_are_deduplicated_in_order(self) -> None:
        """Default region already in the ASG list is not repeated."""
        settings = ClusterSettings.from_env(_env())
        assert settings.regions == ["eu-central-1", "us-east-2"]

    def test_default_region_appended(self) -> None:
        """Default region not in the ASG list is queried too."""
        settings = ClusterSettings.from_env(
            _env(AWS_ASG_REGIONS="us-east-2", AWS_DEFAULT_REGION="eu-west-1")
        )
        assert settings.regions == ["us-east-2", "eu-west-1"]

    def test_optional_values_absent(self) -> None:
        """Optional variables default to None."""
        env = _env()
        del env["TERRAFORM_ORGANIZATION"]
        settings = ClusterSettings.from_env(env)

        assert settings.nomad_token is None
        assert settings.terraform_organization is None
        with pytest.raises(ConfigError, match="TERRAFORM_ORGANIZATION"):
            settings.require_terraform_organization()


class TestParseProvider:
    """Tests for parse_provider function."""

    @pytest.mark.parametrize("value", ["AWS", "aws", " Aws "])
    def test_case_insensitive(self, value: str) -> None:
        """Provider names are matched case-insensitively."""
        assert parse_provider(value) is Provider.AWS
