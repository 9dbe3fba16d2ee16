"""Target expander - placeholders for referenced but undeclared names."""

from collections.abc import Iterable

import structlog

from ..catalog.oracle import AvailabilityOracle
from ..models.target import Action, Target
from ..utils.exceptions import CatalogError

logger = structlog.get_logger(__name__)


class TargetExpander:
    """
    Synthesizes zero-dependency placeholder targets.

    A placeholder's payload has no body; its ensure flag comes from the
    availability oracle, so activating it only makes sure the named unit is
    present. Each name is synthesized at most once per run.
    """

    def __init__(self, oracle: AvailabilityOracle | None = None) -> None:
        """
        Initialize expander.

        Args:
            oracle: Availability lookup; without one no placeholder is ensured
        """
        self.oracle = oracle
        self._synthesized: dict[str, Target] = {}

    @property
    def synthesized(self) -> list[str]:
        """Names synthesized in the current run, in creation order."""
        return list(self._synthesized)

    def reset(self) -> None:
        """Forget synthesized names before a new run."""
        self._synthesized.clear()

    def _is_available(self, name: str) -> bool:
        if self.oracle is None:
            return False
        return bool(self.oracle.is_available(name))

    def expand(self, missing_names: Iterable[str]) -> list[Target]:
        """
        Create one placeholder per missing name.

        Names already synthesized in this run, and duplicates within the
        request, produce no new target. A name whose availability cannot be
        determined because the catalog fails produces no target either; the
        resolver then reports it as an unresolved dependency.

        Args:
            missing_names: Dependency names with no target in the graph

        Returns:
            Newly synthesized targets, in request order
        """
        created: list[Target] = []

        for name in missing_names:
            if name in self._synthesized:
                continue

            try:
                ensure = self._is_available(name)
            except CatalogError as e:
                logger.warning(
                    "Catalog lookup failed, no placeholder created", target=name, error=str(e)
                )
                continue

            target = Target(
                name=name,
                dependencies=(),
                payload=Action(name=name, body=None, ensure=ensure),
                synthesized=True,
            )
            self._synthesized[name] = target
            created.append(target)

            logger.debug("Synthesized placeholder target", target=name, ensure=ensure)

        return created
