"""Cycle detection for stalled resolution runs."""

from collections.abc import Mapping, Sequence
from typing import NoReturn

import structlog

from ..models.target import Target
from ..utils.exceptions import CycleDetectedError, UnresolvedDependencyError

logger = structlog.get_logger(__name__)


def format_cycle(cycle: Sequence[str]) -> str:
    """
    Render a cycle as an arrow chain.

    Example:
        format_cycle(["a", "b", "c", "a"]) -> "a -> b -> c -> a"
    """
    return " -> ".join(cycle)


class CycleDetector:
    """
    Explains why a resolution run stalled.

    The search is deterministic and not exhaustive: it reports *a* cycle,
    not every cycle.

    Algorithm:
    - For each dependency of the seed, in declaration order, walk forward
      following only the FIRST dependency of every target reached
    - The path is kept as a list plus a name -> position index
    - Reaching a name already on the path closes a cycle: the path slice
      from that name onward, with the name appended again
    - Reaching a terminal target (no dependencies, or not in the graph)
      abandons the walk and the seed's next dependency is tried

    Example:
    a requires b, b requires c, c requires a; seed a
    1. path [a], next b
    2. path [a, b], next c
    3. path [a, b, c], next a (on path at 0) -> [a, b, c, a]
    """

    def find_cycle(self, seed: Target, graph: Mapping[str, Target]) -> list[str] | None:
        """
        Search for a cycle reachable from a seed target.

        Args:
            seed: Target to start from
            graph: All targets of the run by name

        Returns:
            Cycle names with the first repeated at the end, or None
        """
        for start in seed.dependencies:
            path = [seed.name]
            positions = {seed.name: 0}
            current: str | None = start

            while current is not None:
                if current in positions:
                    return path[positions[current] :] + [current]

                target = graph.get(current)
                if target is None or not target.dependencies:
                    break

                positions[current] = len(path)
                path.append(current)
                current = target.first_dependency

        return None

    def diagnose(self, skipped: Sequence[Target], graph: Mapping[str, Target]) -> NoReturn:
        """
        Raise the error describing a stall.

        Args:
            skipped: Targets left unresolved, in skip order (never empty)
            graph: All targets of the run by name

        Raises:
            CycleDetectedError: If any skipped target reaches a cycle
            UnresolvedDependencyError: If no cycle can be extracted
        """
        for seed in skipped:
            cycle = self.find_cycle(seed, graph)
            if cycle is not None:
                logger.warning("Dependency cycle detected", cycle=format_cycle(cycle))
                raise CycleDetectedError(cycle)

        first = skipped[0]
        missing = next((name for name in first.dependencies if name not in graph), None)
        logger.warning(
            "Resolution stalled without a cycle",
            target=first.name,
            missing_dependency=missing,
        )
        raise UnresolvedDependencyError(first.name, missing)
