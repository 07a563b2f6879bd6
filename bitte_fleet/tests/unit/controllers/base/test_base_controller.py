"""Tests for base controller module."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from bitte_fleet.constants.enums import FetchState
from bitte_fleet.controllers.base.base_controller import (
    BaseController,
    FetchStatus,
    SourceResult,
)
from bitte_fleet.controllers.cluster.errors import SourceFetchError


class _Controller(BaseController):
    async def fetch_all(self) -> dict[str, Any]:
        return {}


async def _value(value: Any) -> Any:
    return value


async def _fail(message: str) -> Any:
    raise RuntimeError(message)


async def _hang() -> Any:
    await asyncio.sleep(10)


class TestSourceResult:
    """Tests for SourceResult dataclass."""

    def test_source_result_defaults(self) -> None:
        """Test SourceResult default values."""
        result = SourceResult(success=True)
        assert result.data is None
        assert result.error is None
        assert result.duration_ms == 0.0


class TestFetchStatus:
    """Tests for FetchStatus dataclass."""

    def test_to_dict(self) -> None:
        """Test serialization of a fresh status."""
        status = FetchStatus(source_name="nomad_nodes")
        assert status.to_dict() == {
            "source_name": "nomad_nodes",
            "state": "loading",
            "error_message": None,
            "last_updated": None,
        }


class TestBaseController:
    """Tests for BaseController abstract class."""

    def test_base_controller_is_abstract(self) -> None:
        """BaseController cannot be instantiated directly."""
        with pytest.raises(TypeError):
            BaseController(source_timeout=1.0)

    @pytest.mark.asyncio
    async def test_gather_collects_successes_and_failures(self) -> None:
        """Every source is awaited; failures are collected, not raised."""
        controller = _Controller(source_timeout=1.0)

        results = await controller._gather_sources(
            {"ok": _value([1, 2]), "bad": _fail("boom")}
        )

        assert results["ok"].success is True
        assert results["ok"].data == [1, 2]
        assert results["bad"].success is False
        assert str(results["bad"].error) == "boom"
        assert controller.get_fetch_state("ok").state == FetchState.SUCCESS
        assert controller.get_fetch_state("ok").last_updated is not None
        assert controller.get_fetch_state("bad").state == FetchState.ERROR
        assert controller.get_error_sources() == ["bad"]

    @pytest.mark.asyncio
    async def test_timeout_becomes_source_error(self) -> None:
        """A source exceeding the deadline fails with SourceFetchError."""
        controller = _Controller(source_timeout=0.05)

        results = await controller._gather_sources({"slow": _hang(), "ok": _value(1)})

        error = results["slow"].error
        assert isinstance(error, SourceFetchError)
        assert error.source == "slow"
        assert "timed out" in error.message
        assert results["ok"].success is True

    def test_get_all_fetch_states_is_a_copy(self) -> None:
        """Mutating the returned mapping does not affect the controller."""
        controller = _Controller(source_timeout=1.0)
        controller._update_fetch_state("x", FetchState.ERROR, "failed")

        states = controller.get_all_fetch_states()
        states.clear()

        assert controller.get_fetch_state("x").error_message == "failed"
