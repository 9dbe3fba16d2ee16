"""Unit tests for the cycle detector."""

import pytest

from reqorder.dependency.cycles import CycleDetector, format_cycle
from reqorder.utils.exceptions import CycleDetectedError, UnresolvedDependencyError


def build_graph(*targets):
    return {target.name: target for target in targets}


class TestFormatCycle:
    """Test cycle rendering."""

    def test_three_cycle(self):
        """Test arrow chain rendering."""
        assert format_cycle(["a", "b", "c", "a"]) == "a -> b -> c -> a"

    def test_self_cycle(self):
        """Test self-dependency rendering."""
        assert format_cycle(["a", "a"]) == "a -> a"


class TestFindCycle:
    """Test the first-dependency depth-first walk."""

    @pytest.fixture
    def detector(self):
        """Create a cycle detector."""
        return CycleDetector()

    def test_three_cycle_from_each_seed(self, detector, make_target):
        """Test that the reported cycle starts at the seed."""
        graph = build_graph(make_target("a", "b"), make_target("b", "c"), make_target("c", "a"))

        assert detector.find_cycle(graph["a"], graph) == ["a", "b", "c", "a"]
        assert detector.find_cycle(graph["b"], graph) == ["b", "c", "a", "b"]

    def test_self_dependency(self, detector, make_target):
        """Test a target that requires itself."""
        graph = build_graph(make_target("a", "a"))

        assert detector.find_cycle(graph["a"], graph) == ["a", "a"]

    def test_cycle_not_through_seed(self, detector, make_target):
        """Test that a cycle downstream of the seed is sliced from its repeated node."""
        graph = build_graph(
            make_target("d", "a"),
            make_target("a", "b"),
            make_target("b", "a"),
        )

        assert detector.find_cycle(graph["d"], graph) == ["a", "b", "a"]

    def test_terminal_first_dependency_falls_back_to_second(self, detector, make_target):
        """Test backtracking to the seed's next dependency after a terminal walk."""
        graph = build_graph(
            make_target("a", "leaf", "b"),
            make_target("leaf"),
            make_target("b", "a"),
        )

        assert detector.find_cycle(graph["a"], graph) == ["a", "b", "a"]

    def test_only_first_dependency_followed_past_seed(self, detector, make_target):
        """Test that the walk is deterministic and not exhaustive."""
        # b's cycle runs through its second dependency, which the walk never takes
        graph = build_graph(
            make_target("a", "b"),
            make_target("b", "leaf", "a"),
            make_target("leaf"),
        )

        assert detector.find_cycle(graph["a"], graph) is None
        assert detector.find_cycle(graph["b"], graph) == ["b", "a", "b"]

    def test_missing_target_ends_walk(self, detector, make_target):
        """Test that a name absent from the graph is terminal."""
        graph = build_graph(make_target("a", "ghost"))

        assert detector.find_cycle(graph["a"], graph) is None

    def test_seed_without_dependencies(self, detector, make_target):
        """Test that a terminal seed has no cycle."""
        graph = build_graph(make_target("a"))

        assert detector.find_cycle(graph["a"], graph) is None


class TestDiagnose:
    """Test stall diagnostics."""

    @pytest.fixture
    def detector(self):
        """Create a cycle detector."""
        return CycleDetector()

    def test_raises_cycle_from_first_seed_with_one(self, detector, make_target):
        """Test that seeds are tried in skip order."""
        graph = build_graph(
            make_target("a", "b"),
            make_target("b", "leaf", "a"),
            make_target("leaf"),
        )

        with pytest.raises(CycleDetectedError) as exc_info:
            detector.diagnose([graph["a"], graph["b"]], graph)

        assert exc_info.value.path == "b -> a -> b"
        assert "b -> a -> b" in str(exc_info.value)

    def test_falls_back_to_unresolved_dependency(self, detector, make_target):
        """Test the generic diagnostic when no cycle can be extracted."""
        graph = build_graph(make_target("a", "ghost"), make_target("b", "a"))

        with pytest.raises(UnresolvedDependencyError) as exc_info:
            detector.diagnose([graph["a"], graph["b"]], graph)

        assert exc_info.value.identifier == "a"
        assert exc_info.value.dependency == "ghost"
        assert "ghost" in str(exc_info.value)

    def test_unresolved_without_missing_name(self, detector, make_target):
        """Test the fallback when every dependency exists but no cycle is found."""
        graph = build_graph(make_target("a", "b"), make_target("b"))

        with pytest.raises(UnresolvedDependencyError) as exc_info:
            detector.diagnose([graph["a"]], graph)

        assert exc_info.value.identifier == "a"
        assert exc_info.value.dependency is None
