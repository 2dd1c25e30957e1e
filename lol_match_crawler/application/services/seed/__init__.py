"""Seed discovery."""
from .seed_discovery_service import SeedDiscoveryService

__all__ = ["SeedDiscoveryService"]
