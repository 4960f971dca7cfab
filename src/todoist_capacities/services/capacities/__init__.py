"""Capacities integration service package."""

from .client import CapacitiesClient, CapacitiesClientProtocol

__all__ = [
    "CapacitiesClient",
    "CapacitiesClientProtocol",
]
