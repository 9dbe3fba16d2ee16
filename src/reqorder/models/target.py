"""Target and action models."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Action:
    """
    Name-tagged unit of work activated once per successful run.

    Resolver and Evaluator treat an action as an inert value; only the
    Evaluator calls it, and only after resolution succeeded.

    Attributes:
        name: Identifier of the target this action activates
        body: Zero-argument callable, or None for a no-op (placeholders)
        ensure: Whether the target must be made present before activation
    """

    name: str
    body: Callable[[], Any] | None = None
    ensure: bool = False

    def __call__(self) -> Any:
        """Invoke the action body."""
        if self.body is None:
            return None
        return self.body()


@dataclass(frozen=True)
class Target:
    """
    Node of the dependency graph for one resolution run.

    Attributes:
        name: Unique identifier within the run
        dependencies: Names that must be activated first, in declaration order
        payload: Action to activate once every dependency is activated
        synthesized: True for placeholders created for undeclared names
    """

    name: str
    dependencies: tuple[str, ...]
    payload: Action
    synthesized: bool = False

    @property
    def first_dependency(self) -> str | None:
        """First declared dependency, or None for a terminal target."""
        return self.dependencies[0] if self.dependencies else None

    def is_ready(self, resolved: set[str] | dict[str, Any]) -> bool:
        """
        Check whether every dependency has already been resolved.

        Args:
            resolved: Names whose payloads are already in the resolved list

        Returns:
            True if this target can be appended to the resolved list now
        """
        return all(dependency in resolved for dependency in self.dependencies)
