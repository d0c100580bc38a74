"""Companion stats tracker client for a locally running game client."""

from gstats.api import GameAPI

__all__ = ["GameAPI"]
__version__ = "0.1.0"
