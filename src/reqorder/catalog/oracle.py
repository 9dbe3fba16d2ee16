"""Availability oracle - decides whether a target gets the ensure directive.

Design Decisions:
- JSON disk cache instead of pickle: the catalog is plain data, and a cache
  file must never be able to execute code
- One-time refresh: an empty local cache triggers exactly one remote fetch
  per oracle, even when many placeholders are synthesized in one run
- In-memory memo: repeated queries for the same name never touch disk
"""

from pathlib import Path
from typing import Protocol

import diskcache
import structlog

from ..config import CatalogConfig
from ..constants import CATALOG_CACHE_KEY, DEFAULT_CATALOG_TTL
from .client import CatalogClient

logger = structlog.get_logger(__name__)


class AvailabilityOracle(Protocol):
    """Anything that can answer whether a name is available."""

    def is_available(self, name: str) -> bool: ...


class CatalogSource(Protocol):
    """Anything that can list the names in the remote catalog."""

    def fetch_packages(self) -> set[str]: ...


class StaticOracle:
    """Oracle over a fixed set of names."""

    def __init__(self, names: set[str] | list[str] | None = None) -> None:
        self.names = set(names or ())

    def is_available(self, name: str) -> bool:
        return name in self.names


class CatalogOracle:
    """
    Oracle backed by a locally cached copy of the remote catalog.

    The local copy lives in a diskcache directory and expires after
    ttl_seconds. When it is empty the oracle refreshes it once from the
    source; a second miss in the same oracle does not refetch.
    """

    def __init__(
        self,
        cache_dir: Path,
        source: CatalogSource | None = None,
        ttl_seconds: int = DEFAULT_CATALOG_TTL,
    ) -> None:
        """
        Initialize oracle.

        Args:
            cache_dir: Directory for the persistent catalog cache
            source: Remote catalog; None means offline (cache only)
            ttl_seconds: Expiry of the cached catalog copy
        """
        self.source = source
        self.ttl_seconds = ttl_seconds
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.cache: diskcache.Cache = diskcache.Cache(
            str(self.cache_dir),
            disk=diskcache.JSONDisk,
        )

        self._names: set[str] | None = None
        self._memo: dict[str, bool] = {}
        self._refreshed = False

    @classmethod
    def from_config(cls, config: CatalogConfig, offline: bool = False) -> "CatalogOracle":
        """
        Build an oracle from catalog configuration.

        Args:
            config: Catalog configuration
            offline: Never contact the remote catalog

        Returns:
            CatalogOracle instance
        """
        source = None
        if config.enabled and config.url and not offline:
            source = CatalogClient(config)
        return cls(Path(config.cache_dir), source=source, ttl_seconds=config.ttl_seconds)

    def refresh(self) -> set[str]:
        """
        Fetch the remote catalog and store it in the local cache.

        Returns:
            Names now known to the oracle

        Raises:
            CatalogError: If the source fails
        """
        self._memo.clear()

        if self.source is None:
            logger.warning("No package catalog source configured, treating catalog as empty")
            self._refreshed = True
            self._names = set()
            return self._names

        # A failed fetch leaves the oracle unrefreshed so the next query retries
        names = self.source.fetch_packages()
        self._refreshed = True
        self.cache.set(CATALOG_CACHE_KEY, sorted(names), expire=self.ttl_seconds)
        self._names = set(names)
        logger.info("Package catalog refreshed", packages=len(names))
        return self._names

    def _known_names(self) -> set[str]:
        if self._names is not None:
            return self._names

        cached = self.cache.get(CATALOG_CACHE_KEY)
        if cached:
            logger.debug("Loaded package catalog from cache", packages=len(cached))
            self._names = set(cached)
            return self._names

        if not self._refreshed:
            return self.refresh()

        self._names = set()
        return self._names

    def is_available(self, name: str) -> bool:
        """
        Check whether a name is listed in the catalog.

        Args:
            name: Target name

        Returns:
            True if the catalog lists the name

        Raises:
            CatalogError: If the catalog has to be fetched and the fetch fails
        """
        if name not in self._memo:
            self._memo[name] = name in self._known_names()
        return self._memo[name]

    def close(self) -> None:
        """Close the cache and the remote source."""
        self.cache.close()
        close = getattr(self.source, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "CatalogOracle":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
