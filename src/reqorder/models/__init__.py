"""Data models for reqorder."""

from .manifest import Manifest, UnitDeclaration, load_manifest
from .target import Action, Target

__all__ = [
    # Targets
    "Action",
    "Target",
    # Manifest
    "Manifest",
    "UnitDeclaration",
    "load_manifest",
]
