"""Resolver - worklist algorithm producing the activation order.

Purpose:
-------
Turns declared targets into a linear order of actions in which every
target comes after all of its dependencies.

Algorithm:
---------
The resolver sweeps a work queue in passes. For each target taken from the
queue:

1. Ready (no dependencies, or every dependency already resolved):
   its payload is appended to the resolved list.
2. Some dependency names have no target at all:
   the expander synthesizes placeholders, which are appended to the queue
   followed by the target itself. Structural progress was made.
3. Otherwise (dependencies exist but are not resolved yet):
   the target is skipped for this pass.

When the queue is empty the skipped targets become the next queue. A single
pass can skip a target purely because of processing order, so one pass
without progress is tolerated. Two consecutive passes without progress (no
target resolved, no placeholder synthesized) prove the remaining targets can
never be ordered; the cycle detector then explains why and the run fails
without returning a partial order.

Example Workflow:
----------------
Declared: b requires a (a undeclared), c requires b

Pass 1: b -> a missing, synthesize a, queue [c, a, b]
        c -> b exists but unresolved, skip
        a -> ready
        b -> ready
Pass 2: c -> ready
Result: [a, b, c]
"""

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from ..constants import STALL_THRESHOLD
from ..models.target import Action, Target
from .cycles import CycleDetector
from .expander import TargetExpander

logger = structlog.get_logger(__name__)


@dataclass
class Resolution:
    """
    Outcome of a successful resolution run.

    Attributes:
        order: Actions in activation order
        synthesized: Names of placeholder targets created during the run
        passes: Number of passes over the work queue
    """

    order: list[Action]
    synthesized: list[str] = field(default_factory=list)
    passes: int = 0

    @property
    def names(self) -> list[str]:
        """Target names in activation order."""
        return [action.name for action in self.order]

    def __len__(self) -> int:
        return len(self.order)


class Resolver:
    """
    Orders targets so each is activated after its dependencies.

    One Resolver may be reused for several runs; all run state (graph,
    queue, skip list, resolved list) is local to resolve().
    """

    def __init__(
        self,
        expander: TargetExpander | None = None,
        detector: CycleDetector | None = None,
    ) -> None:
        """
        Initialize resolver.

        Args:
            expander: Placeholder factory for undeclared dependency names
            detector: Stall explainer
        """
        self.expander = expander or TargetExpander()
        self.detector = detector or CycleDetector()

    def resolve(self, targets: Sequence[Target]) -> Resolution:
        """
        Compute the activation order for a set of targets.

        Args:
            targets: Declared targets in declaration order

        Returns:
            Resolution with the ordered actions

        Raises:
            CycleDetectedError: If the stall is explained by a cycle
            UnresolvedDependencyError: If the stall has no literal cycle
        """
        self.expander.reset()

        graph: dict[str, Target] = {target.name: target for target in targets}
        pending: deque[Target] = deque(graph.values())
        skipped: list[Target] = []
        resolved: list[Action] = []
        resolved_names: set[str] = set()

        passes = 0
        idle_passes = 0

        logger.info("Resolving targets", targets=len(graph))

        while True:
            passes += 1
            resolved_before = len(resolved)
            expanded = 0

            while pending:
                target = pending.popleft()

                if target.name in resolved_names:
                    continue

                if target.is_ready(resolved_names):
                    resolved.append(target.payload)
                    resolved_names.add(target.name)
                    continue

                missing = list(dict.fromkeys(n for n in target.dependencies if n not in graph))
                if not missing:
                    skipped.append(target)
                    continue

                placeholders = self.expander.expand(missing)
                for placeholder in placeholders:
                    graph[placeholder.name] = placeholder
                    pending.append(placeholder)
                expanded += len(placeholders)

                if all(name in graph for name in missing):
                    pending.append(target)
                else:
                    logger.warning(
                        "Expander produced no target for dependency",
                        target=target.name,
                        missing=[name for name in missing if name not in graph],
                    )
                    skipped.append(target)

            made_progress = expanded > 0 or len(resolved) > resolved_before

            logger.debug(
                "Resolution pass complete",
                pass_number=passes,
                resolved=len(resolved) - resolved_before,
                expanded=expanded,
                skipped=len(skipped),
            )

            if not skipped:
                break

            idle_passes = 0 if made_progress else idle_passes + 1
            if idle_passes >= STALL_THRESHOLD:
                logger.warning(
                    "Resolution stalled",
                    passes=passes,
                    unresolved=[target.name for target in skipped],
                )
                self.detector.diagnose(skipped, graph)

            pending = deque(skipped)
            skipped = []

        logger.info(
            "Resolution complete",
            targets=len(resolved),
            synthesized=len(self.expander.synthesized),
            passes=passes,
        )

        return Resolution(order=resolved, synthesized=self.expander.synthesized, passes=passes)
