"""Evaluator - activate resolved actions in order.

Execution Strategy:
- Strictly sequential and synchronous, in resolved order
- Not transactional: an action that raises stops the run, the exception
  reaches the caller unmodified and earlier actions stay applied
"""

from collections.abc import Callable, Sequence

import structlog

from ..models.target import Action

logger = structlog.get_logger(__name__)


class Evaluator:
    """Runs the ordered action list produced by the resolver."""

    def __init__(self, ensure_hook: Callable[[str], None] | None = None) -> None:
        """
        Initialize evaluator.

        Args:
            ensure_hook: Called with the target name before any action whose
                ensure flag is set, to make the target present
        """
        self.ensure_hook = ensure_hook

    def run(self, resolved: Sequence[Action], verbose: bool = False) -> list[str]:
        """
        Invoke every action in order.

        Args:
            resolved: Actions in activation order
            verbose: Log each target name before invoking its action

        Returns:
            Names of the activated targets, in order
        """
        activated: list[str] = []

        for action in resolved:
            if verbose:
                logger.info("Activating target", target=action.name)

            if action.ensure and self.ensure_hook is not None:
                logger.debug("Ensuring target is present", target=action.name)
                self.ensure_hook(action.name)

            action()
            activated.append(action.name)

        logger.debug("Evaluation complete", activated=len(activated))
        return activated
