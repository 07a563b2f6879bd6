"""Tests for credential file readers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from bitte_fleet.models.state.cluster_settings import ConfigError, ConfigLoadError
from bitte_fleet.utils.credentials import load_terraform_token, load_vault_token


class TestLoadTerraformToken:
    """Tests for load_terraform_token function."""

    def test_reads_token_for_host(self, tmp_path: Path) -> None:
        """Token of the requested host is returned."""
        path = tmp_path / "credentials.tfrc.json"
        path.write_text(
            json.dumps({"credentials": {"app.terraform.io": {"token": "tf-secret"}}})
        )

        assert load_terraform_token(path) == "tf-secret"

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file is a configuration error."""
        with pytest.raises(ConfigLoadError, match="terraform login"):
            load_terraform_token(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Unparseable JSON is a configuration error."""
        path = tmp_path / "credentials.tfrc.json"
        path.write_text("{not json")

        with pytest.raises(ConfigLoadError, match="Couldn't parse"):
            load_terraform_token(path)

    def test_missing_host(self, tmp_path: Path) -> None:
        """A file without the host entry is a configuration error."""
        path = tmp_path / "credentials.tfrc.json"
        path.write_text(json.dumps({"credentials": {"other.host": {"token": "x"}}}))

        with pytest.raises(ConfigError):
            load_terraform_token(path, host="app.terraform.io")


class TestLoadVaultToken:
    """Tests for load_vault_token function."""

    def test_reads_and_strips(self, tmp_path: Path) -> None:
        """Token file contents are stripped."""
        path = tmp_path / ".vault-token"
        path.write_text("s.abcdef\n")

        assert load_vault_token(path) == "s.abcdef"

    def test_missing_file_returns_none(self, tmp_path: Path) -> None:
        """A missing token file is not an error."""
        assert load_vault_token(tmp_path / ".vault-token") is None
