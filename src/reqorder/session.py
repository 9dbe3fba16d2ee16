"""Resolution session - the declare/run surface.

A session owns one TargetStore and wires the resolver and evaluator around
it. Sessions are independent: there is no process-wide declaration state.

Usage:
    session = ResolutionSession(verbose=True)
    session.declare("magit", ["dash", "with-editor"], configure_magit)
    session.declare("dash", payload=configure_dash)
    session.run()
"""

import uuid
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import structlog

from .catalog.oracle import AvailabilityOracle, CatalogOracle
from .config import ReqOrderConfig
from .dependency.expander import TargetExpander
from .dependency.resolver import Resolution, Resolver
from .dependency.store import TargetStore
from .execution.evaluator import Evaluator
from .models.target import Action, Target
from .observability.logger import LogContext
from .utils.exceptions import InvalidDeclarationError

logger = structlog.get_logger(__name__)


def _normalize_dependencies(name: str, dependencies: Any) -> tuple[str, ...]:
    """
    Validate the structure of a dependency list.

    - None -> ()
    - "dash" -> ("dash",)
    - ["dash", "s"] -> ("dash", "s")

    Raises:
        InvalidDeclarationError: If an entry is missing, empty or not a name
    """
    if dependencies is None:
        return ()

    if isinstance(dependencies, str):
        dependencies = [dependencies]
    elif isinstance(dependencies, bytes | Mapping) or not isinstance(dependencies, Iterable):
        raise InvalidDeclarationError(
            f"Dependencies of {name} must be a name or a sequence of names, "
            f"got {type(dependencies).__name__}",
            name=name,
        )

    normalized: list[str] = []
    for position, dependency in enumerate(dependencies):
        if dependency is None or (isinstance(dependency, str) and not dependency.strip()):
            raise InvalidDeclarationError(
                f"Dependency marker at position {position} of {name} has no following name",
                name=name,
            )
        if not isinstance(dependency, str):
            raise InvalidDeclarationError(
                f"Dependency at position {position} of {name} must be a name, "
                f"got {type(dependency).__name__}",
                name=name,
            )
        normalized.append(dependency)

    return tuple(normalized)


class ResolutionSession:
    """
    Collects declarations and runs them in dependency order.

    Lifecycle:
    1. declare() any number of units, in any order
    2. run() snapshots and clears the store, resolves, then activates
    3. The session is empty again and can accept a fresh set of declarations
    """

    def __init__(
        self,
        oracle: AvailabilityOracle | None = None,
        verbose: bool = False,
        ensure_hook: Callable[[str], None] | None = None,
    ) -> None:
        """
        Initialize session.

        Args:
            oracle: Availability lookup deciding the ensure directive
            verbose: Default for run(verbose=None)
            ensure_hook: Called with a target name before ensured actions
        """
        self.oracle = oracle
        self.verbose = verbose
        self.store = TargetStore()
        self.resolver = Resolver(expander=TargetExpander(oracle))
        self.evaluator = Evaluator(ensure_hook=ensure_hook)

    @classmethod
    def from_config(
        cls,
        config: ReqOrderConfig,
        offline: bool = False,
        ensure_hook: Callable[[str], None] | None = None,
    ) -> "ResolutionSession":
        """
        Build a session from configuration.

        Args:
            config: Complete configuration
            offline: Never contact the remote catalog
            ensure_hook: Called with a target name before ensured actions

        Returns:
            ResolutionSession instance
        """
        oracle = None
        if config.catalog.enabled:
            oracle = CatalogOracle.from_config(config.catalog, offline=offline)
        return cls(oracle=oracle, verbose=config.evaluation.verbose, ensure_hook=ensure_hook)

    def declare(
        self,
        name: str,
        dependencies: str | Iterable[str] | None = None,
        payload: Callable[[], Any] | None = None,
        *,
        ensure: bool | None = None,
    ) -> Target:
        """
        Register one unit.

        Args:
            name: Unit identifier
            dependencies: Name or names that must be activated first; unknown
                names are legal and become placeholders at resolution time
            payload: Zero-argument callable run on activation, an Action whose
                body and ensure flag are reused, or None
            ensure: Ensure-present directive; None takes it from an Action
                payload, otherwise asks the oracle

        Returns:
            The stored Target

        Raises:
            InvalidDeclarationError: If the declaration is malformed
            CatalogError: If the oracle has to fetch the catalog and cannot
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidDeclarationError(f"Unit name must be a non-empty string, got {name!r}")

        normalized = _normalize_dependencies(name, dependencies)

        if isinstance(payload, Action):
            body = payload.body
            if ensure is None:
                ensure = payload.ensure
        elif payload is None or callable(payload):
            body = payload
        else:
            raise InvalidDeclarationError(
                f"Payload of {name} must be callable, got {type(payload).__name__}",
                name=name,
            )

        if ensure is None:
            ensure = bool(self.oracle.is_available(name)) if self.oracle is not None else False

        action = Action(name=name, body=body, ensure=ensure)
        return self.store.declare(name, normalized, action)

    def resolve(self) -> Resolution:
        """
        Resolve the declared units without activating them.

        The store is cleared before resolution starts, whatever the outcome.

        Returns:
            Resolution with the activation order

        Raises:
            ResolutionError: If no valid order exists
        """
        targets = self.store.snapshot()
        self.store.clear()
        return self.resolver.resolve(targets)

    def run(self, verbose: bool | None = None) -> Resolution:
        """
        Resolve the declared units and activate them in order.

        Args:
            verbose: Log each target before activation; None uses the
                session default

        Returns:
            Resolution that was activated

        Raises:
            ResolutionError: If no valid order exists; no action is invoked
        """
        if verbose is None:
            verbose = self.verbose

        with LogContext(run_id=uuid.uuid4().hex[:8]):
            resolution = self.resolve()
            self.evaluator.run(resolution.order, verbose=verbose)

        return resolution
