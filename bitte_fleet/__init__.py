"""Node discovery and fleet state for Bitte cluster operations."""

__version__ = "0.1.0"
