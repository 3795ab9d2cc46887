"""Refill backend: community amenity reports and restaurant scores."""

__version__ = "0.1.0"
