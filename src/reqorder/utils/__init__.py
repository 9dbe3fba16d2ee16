"""Utility functions and exceptions."""

from .exceptions import (
    CatalogError,
    ConfigurationError,
    CycleDetectedError,
    InvalidDeclarationError,
    ReqOrderError,
    ResolutionError,
    UnresolvedDependencyError,
)

__all__ = [
    "ReqOrderError",
    "InvalidDeclarationError",
    "ResolutionError",
    "CycleDetectedError",
    "UnresolvedDependencyError",
    "CatalogError",
    "ConfigurationError",
]
