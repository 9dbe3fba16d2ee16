"""Configuration management for reqorder."""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .constants import DEFAULT_CACHE_DIR, DEFAULT_CATALOG_TTL
from .utils.exceptions import ConfigurationError


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "console"  # "console" or "json"
    file: Path | None = None


@dataclass
class CatalogConfig:
    """
    Remote package catalog configuration.

    The catalog answers "is this name available to be ensured present?" for
    placeholder and declared targets.
    """

    url: str | None = None  # None disables remote refresh
    cache_dir: str = DEFAULT_CACHE_DIR
    ttl_seconds: int = DEFAULT_CATALOG_TTL
    timeout: int = 30
    enabled: bool = True


@dataclass
class EvaluationConfig:
    """Evaluation configuration."""

    verbose: bool = False  # Log each target name before activating it


@dataclass
class ReqOrderConfig:
    """
    Complete configuration for reqorder.

    This combines all configuration sections.
    """

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> "ReqOrderConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML config file

        Returns:
            ReqOrderConfig instance

        Raises:
            ConfigurationError: If the file is not valid YAML or has unknown keys
        """
        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file {config_path}: {e}"
            ) from e

        if data is None:
            return cls.default()

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Invalid configuration file structure in {config_path}: "
                f"expected dictionary, got {type(data).__name__}"
            )

        try:
            logging_data = dict(data.get("logging") or {})
            # Convert file path string to Path if present
            if logging_data.get("file"):
                logging_data["file"] = Path(logging_data["file"])
            logging = LoggingConfig(**logging_data)

            catalog = CatalogConfig(**(data.get("catalog") or {}))
            evaluation = EvaluationConfig(**(data.get("evaluation") or {}))
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {e}") from e

        return cls(logging=logging, catalog=catalog, evaluation=evaluation)

    @classmethod
    def default(cls) -> "ReqOrderConfig":
        """Get default configuration."""
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        data = asdict(self)
        if self.logging.file is not None:
            data["logging"]["file"] = str(self.logging.file)
        return data

    def to_file(self, config_path: Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            config_path: Path to save config file
        """
        data = self.to_dict()
        data["logging"] = {k: v for k, v in data["logging"].items() if v is not None}

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_env(cls) -> "ReqOrderConfig":
        """
        Create configuration from environment variables.

        Environment variables:
            REQORDER_CATALOG_URL: Remote catalog URL (default: none, offline)
            REQORDER_CACHE_DIR: Local catalog cache directory
            REQORDER_VERBOSE: Log each activated target (default: false)
            LOG_LEVEL: Logging level (default: INFO)
            LOG_FORMAT: "console" or "json" (default: console)

        Returns:
            ReqOrderConfig instance
        """
        import os

        verbose_str = os.environ.get("REQORDER_VERBOSE", "false").lower()

        return cls(
            logging=LoggingConfig(
                level=os.environ.get("LOG_LEVEL", "INFO"),
                format=os.environ.get("LOG_FORMAT", "console"),
            ),
            catalog=CatalogConfig(
                url=os.environ.get("REQORDER_CATALOG_URL") or None,
                cache_dir=os.environ.get("REQORDER_CACHE_DIR", DEFAULT_CACHE_DIR),
            ),
            evaluation=EvaluationConfig(verbose=verbose_str in ("true", "1", "yes", "on")),
        )
