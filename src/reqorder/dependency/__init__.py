"""Dependency resolution for target ordering."""

from .cycles import CycleDetector, format_cycle
from .dot import to_dot
from .expander import TargetExpander
from .resolver import Resolution, Resolver
from .store import TargetStore

__all__ = [
    "CycleDetector",
    "Resolution",
    "Resolver",
    "TargetExpander",
    "TargetStore",
    "format_cycle",
    "to_dot",
]
