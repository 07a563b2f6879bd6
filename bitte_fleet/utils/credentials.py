"""Local credential file readers for the declared-state backend and Vault."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from bitte_fleet.constants.defaults import (
    TERRAFORM_CREDENTIALS_PATH_DEFAULT,
    TERRAFORM_HOST_DEFAULT,
    VAULT_TOKEN_PATH_DEFAULT,
)
from bitte_fleet.models.state.cluster_settings import ConfigLoadError

logger = logging.getLogger(__name__)


def load_terraform_token(
    path: str | Path = TERRAFORM_CREDENTIALS_PATH_DEFAULT,
    host: str = TERRAFORM_HOST_DEFAULT,
) -> str:
    """Read the API token for ``host`` from a terraform credentials file.

    The file is the one written by ``terraform login``::

        {"credentials": {"app.terraform.io": {"token": "..."}}}

    Raises:
        ConfigLoadError: If the file is missing, unparseable, or has no
            token for ``host``.
    """
    credentials_path = Path(path).expanduser()
    try:
        raw = credentials_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(
            f"Couldn't read {credentials_path}; run `terraform login`"
        ) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigLoadError(f"Couldn't parse {credentials_path}") from exc

    try:
        token = data["credentials"][host]["token"]
    except (KeyError, TypeError) as exc:
        raise ConfigLoadError(
            f"No credentials for {host} in {credentials_path}; run `terraform login`"
        ) from exc

    if not isinstance(token, str) or not token:
        raise ConfigLoadError(f"Empty token for {host} in {credentials_path}")
    return token


def load_vault_token(path: str | Path = VAULT_TOKEN_PATH_DEFAULT) -> str | None:
    """Read the Vault token left by ``vault login``, or None if absent."""
    token_path = Path(path).expanduser()
    try:
        token = token_path.read_text(encoding="utf-8").strip()
    except OSError:
        logger.debug("No vault token file at %s", token_path)
        return None
    return token or None


__all__ = [
    "load_terraform_token",
    "load_vault_token",
]
