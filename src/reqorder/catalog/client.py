"""Remote package catalog client.

Fetches the list of names that can be ensured present. The catalog is a
JSON document in one of three shapes:

- ["dash", "magit", ...]
- {"dash": {...}, "magit": {...}}
- {"packages": <either of the above>}

Network errors and timeouts are retried with exponential backoff; HTTP
error statuses and malformed bodies are not.
"""

from typing import Any

import httpx
import structlog
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import CatalogConfig
from ..utils.exceptions import CatalogError

logger = structlog.get_logger(__name__)


def parse_catalog(data: Any) -> set[str]:
    """
    Extract package names from a decoded catalog document.

    Args:
        data: Decoded JSON body

    Returns:
        Set of available names

    Raises:
        CatalogError: If the document has none of the supported shapes
    """
    if isinstance(data, dict) and "packages" in data:
        data = data["packages"]

    if isinstance(data, dict):
        return {str(name) for name in data}

    if isinstance(data, list):
        names = set()
        for entry in data:
            if isinstance(entry, str):
                names.add(entry)
            elif isinstance(entry, dict) and isinstance(entry.get("name"), str):
                names.add(entry["name"])
            else:
                raise CatalogError(f"Unsupported catalog entry: {entry!r}")
        return names

    raise CatalogError(
        f"Unsupported catalog document: expected list or object, got {type(data).__name__}"
    )


class CatalogClient:
    """
    Synchronous HTTP client for the remote package catalog.

    The client is created lazily on first fetch and should be closed with
    close() or by using the instance as a context manager.
    """

    def __init__(self, config: CatalogConfig) -> None:
        """
        Initialize catalog client.

        Args:
            config: Catalog configuration; config.url must be set
        """
        if not config.url:
            raise CatalogError("Catalog URL is not configured")

        self.config = config
        self.url = config.url
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.config.timeout, follow_redirects=True)
        return self._client

    @retry(
        retry=retry_if_exception_type((httpx.NetworkError, httpx.TimeoutException)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def _get(self) -> httpx.Response:
        logger.debug("Requesting package catalog", url=self.url)
        return self._get_client().get(self.url)

    def fetch_packages(self) -> set[str]:
        """
        Download the catalog and return the available names.

        Returns:
            Set of names listed in the catalog

        Raises:
            CatalogError: If the catalog cannot be fetched or decoded
        """
        try:
            response = self._get()
        except (httpx.NetworkError, httpx.TimeoutException) as e:
            raise CatalogError(f"Failed to reach package catalog at {self.url}: {e}") from e

        if response.status_code >= 400:
            raise CatalogError(
                f"Package catalog request failed with HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogError(f"Package catalog at {self.url} is not valid JSON") from e

        names = parse_catalog(data)
        logger.info("Fetched package catalog", url=self.url, packages=len(names))
        return names

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "CatalogClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
