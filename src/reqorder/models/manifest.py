"""Manifest models for the command-line interface.

A manifest is a YAML data file listing units to resolve:

    units:
      - name: magit
        requires: [dash, with-editor]
      - name: dash
        ensure: true

Units carry no behaviour; every unit declared from a manifest gets a no-op
payload, so the CLI can show the activation order without running anything.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import yaml
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from ..utils.exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..session import ResolutionSession


def strip_whitespace(v: Any) -> Any:
    """Strip surrounding whitespace from string values."""
    if isinstance(v, str):
        return v.strip()
    return v


def normalize_requires(v: Any) -> Any:
    """
    Accept a single name where a list of names is expected.

    - "dash" -> ["dash"]
    - None -> []
    """
    if v is None:
        return []
    if isinstance(v, str):
        return [v]
    return v


Identifier = Annotated[str, BeforeValidator(strip_whitespace), Field(min_length=1)]


class UnitDeclaration(BaseModel):
    """One unit entry of a manifest."""

    model_config = ConfigDict(extra="forbid")

    name: Annotated[Identifier, Field(description="Unit identifier")]
    requires: Annotated[
        list[Identifier],
        BeforeValidator(normalize_requires),
        Field(default_factory=list, description="Units that must activate first"),
    ]
    ensure: Annotated[
        bool | None,
        Field(default=None, description="Force the ensure-present directive on or off"),
    ]


class Manifest(BaseModel):
    """Complete manifest file."""

    model_config = ConfigDict(extra="forbid")

    units: list[UnitDeclaration] = Field(default_factory=list)

    def declare_into(self, session: "ResolutionSession") -> None:
        """
        Declare every unit into a session with a no-op payload.

        Args:
            session: Session receiving the declarations
        """
        for unit in self.units:
            session.declare(unit.name, unit.requires, None, ensure=unit.ensure)


def load_manifest(manifest_path: Path) -> Manifest:
    """
    Load and validate a manifest file.

    Args:
        manifest_path: Path to the YAML manifest

    Returns:
        Validated Manifest

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    try:
        with open(manifest_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in manifest {manifest_path}: {e}") from e

    if data is None:
        return Manifest()

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid manifest structure in {manifest_path}: "
            f"expected dictionary, got {type(data).__name__}"
        )

    try:
        return Manifest.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid manifest {manifest_path}: {e}") from e
