"""Gharsamma storefront pricing API."""

__version__ = "0.1.0"
