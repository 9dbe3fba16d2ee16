"""Custom exceptions for reqorder.

Exception Hierarchy:
-------------------
ReqOrderError (base)
├── InvalidDeclarationError     # Malformed declare() call, raised immediately
├── ResolutionError (base for resolution failures)
│   ├── CycleDetectedError      # Stall explained by a dependency cycle
│   └── UnresolvedDependencyError  # Stall with no literal cycle to report
├── CatalogError                # Remote package catalog could not be fetched
└── ConfigurationError          # Invalid config or manifest file

Usage Guidelines:
----------------
1. Catch ResolutionError to handle any failed run; the store has already
   been cleared, so declarations must be submitted again.

2. Exceptions raised by an action's body are NOT wrapped. They reach the
   caller of run() unmodified and actions already activated stay applied.

3. Let httpx errors bubble up inside the catalog client so tenacity can
   retry them; only the final failure becomes a CatalogError.
"""


class ReqOrderError(Exception):
    """Base exception for all reqorder errors."""

    pass


class InvalidDeclarationError(ReqOrderError):
    """Raised when a unit declaration is structurally malformed."""

    def __init__(self, message: str, name: str | None = None) -> None:
        """
        Initialize InvalidDeclarationError.

        Args:
            message: Error message.
            name: Name of the unit being declared, if it was readable.
        """
        super().__init__(message)
        self.name = name


class ResolutionError(ReqOrderError):
    """Base exception for runs that cannot produce an activation order."""

    pass


class CycleDetectedError(ResolutionError):
    """
    Raised when resolution stalls because targets depend on each other.

    Example cycles:
    1. a requires b, b requires c, c requires a  -> "a -> b -> c -> a"
    2. a requires itself                         -> "a -> a"
    """

    def __init__(self, cycle: list[str]) -> None:
        """
        Initialize CycleDetectedError.

        Args:
            cycle: Target names along the cycle, first name repeated at the end.
        """
        self.cycle = list(cycle)
        self.path = " -> ".join(self.cycle)
        super().__init__(f"Dependency cycle detected: {self.path}")


class UnresolvedDependencyError(ResolutionError):
    """Raised when resolution stalls but no literal cycle can be extracted."""

    def __init__(self, identifier: str, dependency: str | None = None) -> None:
        """
        Initialize UnresolvedDependencyError.

        Args:
            identifier: Target that could not be resolved.
            dependency: Dependency that blocked it, when known.
        """
        if dependency:
            message = f"Cannot resolve {identifier}: dependency {dependency} is unavailable"
        else:
            message = f"Cannot resolve {identifier}: its dependencies never became ready"
        super().__init__(message)
        self.identifier = identifier
        self.dependency = dependency


class CatalogError(ReqOrderError):
    """Raised when the remote package catalog cannot be fetched or parsed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """
        Initialize CatalogError.

        Args:
            message: Error message.
            status_code: Optional HTTP status code.
        """
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(ReqOrderError):
    """Raised when a configuration or manifest file is invalid."""

    pass
