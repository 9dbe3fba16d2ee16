"""Target store - declared targets awaiting one resolution run."""

from collections.abc import Sequence

import structlog

from ..models.target import Action, Target

logger = structlog.get_logger(__name__)


class TargetStore:
    """
    Append-only collection of declared targets.

    Dependencies are not validated here: unknown names are legal and are
    synthesized later by the resolver.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._targets: dict[str, Target] = {}

    def declare(self, name: str, dependencies: Sequence[str], payload: Action) -> Target:
        """
        Add a target to the store.

        An identical re-declaration is a no-op. A re-declaration with
        different content replaces the earlier one but keeps its position.

        Args:
            name: Target identifier
            dependencies: Names that must be activated first
            payload: Action to activate

        Returns:
            The stored Target
        """
        target = Target(name=name, dependencies=tuple(dependencies), payload=payload)

        existing = self._targets.get(name)
        if existing == target:
            logger.debug("Identical target already declared", target=name)
            return existing
        if existing is not None:
            logger.warning(
                "Target re-declared, replacing earlier declaration",
                target=name,
                previous_dependencies=list(existing.dependencies),
                dependencies=list(target.dependencies),
            )

        self._targets[name] = target
        return target

    def snapshot(self) -> list[Target]:
        """Return the declared targets in declaration order."""
        return list(self._targets.values())

    def clear(self) -> None:
        """Remove every declared target."""
        self._targets.clear()

    def names(self) -> list[str]:
        """Return declared names in declaration order."""
        return list(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def __contains__(self, name: object) -> bool:
        return name in self._targets
