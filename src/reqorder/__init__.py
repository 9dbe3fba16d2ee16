"""reqorder - dependency-ordered activation of configuration units."""

from .config import ReqOrderConfig
from .constants import VERSION
from .dependency.resolver import Resolution
from .session import ResolutionSession
from .utils.exceptions import (
    CycleDetectedError,
    InvalidDeclarationError,
    ResolutionError,
    UnresolvedDependencyError,
)

__version__ = VERSION
__all__ = [
    "CycleDetectedError",
    "InvalidDeclarationError",
    "ReqOrderConfig",
    "Resolution",
    "ResolutionError",
    "ResolutionSession",
    "UnresolvedDependencyError",
]
