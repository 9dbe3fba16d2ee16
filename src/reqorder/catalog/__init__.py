"""Package catalog access for availability checks."""

from .client import CatalogClient, parse_catalog
from .oracle import AvailabilityOracle, CatalogOracle, CatalogSource, StaticOracle

__all__ = [
    "AvailabilityOracle",
    "CatalogClient",
    "CatalogOracle",
    "CatalogSource",
    "StaticOracle",
    "parse_catalog",
]
