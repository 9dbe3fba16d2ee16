"""Named constants for reqorder."""

VERSION: str = "0.1.0"

# -----------------------------------------------------------------------------
# Resolution
# -----------------------------------------------------------------------------

# Consecutive passes without progress (nothing resolved, nothing synthesized)
# after which a run is declared stalled
STALL_THRESHOLD: int = 2

# -----------------------------------------------------------------------------
# Package Catalog
# -----------------------------------------------------------------------------

DEFAULT_CACHE_DIR: str = ".reqorder_cache"

# Local catalog copy expires after one day
DEFAULT_CATALOG_TTL: int = 86400

# diskcache key holding the sorted list of catalog names
CATALOG_CACHE_KEY: str = "catalog:packages"
