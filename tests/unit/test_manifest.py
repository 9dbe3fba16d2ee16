"""Unit tests for manifest models."""

import pytest
from pydantic import ValidationError

from reqorder.models.manifest import Manifest, UnitDeclaration, load_manifest
from reqorder.utils.exceptions import ConfigurationError


class TestUnitDeclaration:
    """Test UnitDeclaration model."""

    def test_minimal_unit(self):
        """Test defaults for a unit with only a name."""
        unit = UnitDeclaration(name="dash")

        assert unit.requires == []
        assert unit.ensure is None

    def test_whitespace_stripped(self):
        """Test that names are stripped."""
        unit = UnitDeclaration(name="  magit ", requires=[" dash", "with-editor  "])

        assert unit.name == "magit"
        assert unit.requires == ["dash", "with-editor"]

    def test_single_requirement_string(self):
        """Test that a bare string becomes a one-element list."""
        assert UnitDeclaration(name="magit", requires="dash").requires == ["dash"]

    def test_null_requires(self):
        """Test that null requires means none."""
        assert UnitDeclaration(name="magit", requires=None).requires == []

    def test_empty_requirement_rejected(self):
        """Test that an empty requirement name fails validation."""
        with pytest.raises(ValidationError):
            UnitDeclaration(name="magit", requires=["dash", "  "])

    def test_unknown_field_rejected(self):
        """Test that typos in field names are reported."""
        with pytest.raises(ValidationError):
            UnitDeclaration(name="magit", require=["dash"])


class TestManifest:
    """Test Manifest model and loading."""

    def test_declare_into(self, session):
        """Test that every unit is declared with its requirements."""
        manifest = Manifest(
            units=[
                UnitDeclaration(name="magit", requires=["dash"]),
                UnitDeclaration(name="dash", ensure=True),
            ]
        )

        manifest.declare_into(session)

        snapshot = session.store.snapshot()
        assert [target.name for target in snapshot] == ["magit", "dash"]
        assert snapshot[0].dependencies == ("dash",)
        assert snapshot[1].payload.ensure is True
        assert snapshot[0].payload.body is None

    def test_load_manifest(self, write_yaml):
        """Test loading a manifest file."""
        path = write_yaml(
            "units.yaml",
            {"units": [{"name": "magit", "requires": ["dash"]}, {"name": "dash"}]},
        )

        manifest = load_manifest(path)

        assert [unit.name for unit in manifest.units] == ["magit", "dash"]

    def test_load_empty_manifest(self, tmp_path):
        """Test that an empty file has no units."""
        path = tmp_path / "units.yaml"
        path.write_text("")

        assert load_manifest(path).units == []

    def test_load_invalid_yaml(self, tmp_path):
        """Test that malformed YAML raises ConfigurationError."""
        path = tmp_path / "units.yaml"
        path.write_text("units: [\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_manifest(path)

    def test_load_not_a_mapping(self, write_yaml):
        """Test that a bare list is rejected."""
        path = write_yaml("units.yaml", [{"name": "dash"}])

        with pytest.raises(ConfigurationError, match="expected dictionary"):
            load_manifest(path)

    def test_load_schema_error(self, write_yaml):
        """Test that a unit without a name is rejected."""
        path = write_yaml("units.yaml", {"units": [{"requires": ["dash"]}]})

        with pytest.raises(ConfigurationError, match="Invalid manifest"):
            load_manifest(path)
