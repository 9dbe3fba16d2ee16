"""Unit tests for the target store."""

from reqorder.dependency.store import TargetStore
from reqorder.models.target import Action


def noop() -> None:
    pass


class TestTargetStore:
    """Test TargetStore class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.store = TargetStore()

    def test_starts_empty(self):
        """Test a new store has no targets."""
        assert len(self.store) == 0
        assert self.store.snapshot() == []

    def test_declare_returns_target(self):
        """Test that declare builds a target from its arguments."""
        action = Action("b", noop)

        target = self.store.declare("b", ["a"], action)

        assert target.name == "b"
        assert target.dependencies == ("a",)
        assert target.payload is action
        assert target.synthesized is False

    def test_unknown_dependencies_are_legal(self):
        """Test that no dependency validation happens at declare time."""
        self.store.declare("b", ["never-declared"], Action("b"))

        assert "b" in self.store
        assert "never-declared" not in self.store

    def test_snapshot_keeps_declaration_order(self):
        """Test snapshot order matches declaration order."""
        for name in ["c", "a", "b"]:
            self.store.declare(name, [], Action(name))

        assert [target.name for target in self.store.snapshot()] == ["c", "a", "b"]
        assert self.store.names() == ["c", "a", "b"]

    def test_identical_redeclaration_is_noop(self):
        """Test that declaring the same content twice stores one target."""
        first = self.store.declare("a", ["x"], Action("a", noop))
        second = self.store.declare("a", ["x"], Action("a", noop))

        assert len(self.store) == 1
        assert second is first

    def test_changed_redeclaration_replaces(self):
        """Test that the last differing declaration wins and keeps its position."""
        self.store.declare("a", ["x"], Action("a"))
        self.store.declare("b", [], Action("b"))
        self.store.declare("a", ["y"], Action("a"))

        snapshot = self.store.snapshot()
        assert [target.name for target in snapshot] == ["a", "b"]
        assert snapshot[0].dependencies == ("y",)

    def test_snapshot_is_a_copy(self):
        """Test that mutating a snapshot does not affect the store."""
        self.store.declare("a", [], Action("a"))

        snapshot = self.store.snapshot()
        snapshot.clear()

        assert len(self.store) == 1

    def test_clear(self):
        """Test that clear empties the store."""
        self.store.declare("a", [], Action("a"))

        self.store.clear()

        assert len(self.store) == 0
        assert self.store.snapshot() == []
