"""Pytest configuration and shared fixtures.

Fixtures are organized by category:
- Target fixtures: factories for targets and recorded actions
- Session fixtures: sessions with and without an availability oracle
- File fixtures: manifests and configuration files in temp directories
"""

from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

from reqorder.catalog.oracle import StaticOracle
from reqorder.models.target import Action, Target
from reqorder.session import ResolutionSession

# =============================================================================
# Target Fixtures
# =============================================================================


@pytest.fixture
def make_target() -> Callable[..., Target]:
    """Factory for targets with a no-op payload.

    Example:
        def test_something(make_target):
            b = make_target("b", "a")
    """

    def _make_target(name: str, *dependencies: str, ensure: bool = False) -> Target:
        return Target(
            name=name,
            dependencies=tuple(dependencies),
            payload=Action(name=name, body=None, ensure=ensure),
        )

    return _make_target


@pytest.fixture
def activation_log() -> list[str]:
    """Shared list actions append their names to when invoked."""
    return []


@pytest.fixture
def recorder(activation_log: list[str]) -> Callable[[str], Callable[[], None]]:
    """Factory for action bodies that record their invocation.

    Example:
        session.declare("a", payload=recorder("a"))
        session.run()
        assert activation_log == ["a"]
    """
    bodies: dict[str, Callable[[], None]] = {}

    def _recorder(name: str) -> Callable[[], None]:
        # Same body object per name, so identical re-declarations compare equal
        if name not in bodies:

            def body() -> None:
                activation_log.append(name)

            bodies[name] = body
        return bodies[name]

    return _recorder


# =============================================================================
# Session Fixtures
# =============================================================================


@pytest.fixture
def session() -> ResolutionSession:
    """Session without an availability oracle."""
    return ResolutionSession()


@pytest.fixture
def catalog_names() -> set[str]:
    """Names the static oracle reports as available."""
    return {"dash", "magit", "with-editor"}


@pytest.fixture
def oracle_session(catalog_names: set[str]) -> ResolutionSession:
    """Session backed by a static availability oracle."""
    return ResolutionSession(oracle=StaticOracle(catalog_names))


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, object], Path]:
    """Write a YAML document into the temp directory and return its path."""

    def _write_yaml(filename: str, data: object) -> Path:
        path = tmp_path / filename
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write_yaml


@pytest.fixture
def offline_config(write_yaml: Callable[[str, object], Path], tmp_path: Path) -> Path:
    """Configuration file with the remote catalog disabled."""
    return write_yaml(
        "reqorder.yaml",
        {
            "logging": {"level": "WARNING"},
            "catalog": {"enabled": False, "cache_dir": str(tmp_path / "cache")},
        },
    )
