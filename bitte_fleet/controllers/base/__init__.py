"""Base controller classes."""

from bitte_fleet.controllers.base.base_controller import (
    BaseController,
    FetchStatus,
    SourceResult,
)

__all__ = ["BaseController", "FetchStatus", "SourceResult"]
