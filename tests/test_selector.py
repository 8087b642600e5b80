#tests\test_selector.py

"""Test placement selector."""

from scaling_controller.core.models import Node
from scaling_controller.placement.selector import is_preferred, memory_threshold, select_node


def _node(name, usage, available, node_type="X", hosted=0, total=16384):
    return Node(
        name=name,
        node_type=node_type,
        total_memory=total,
        available_memory=available,
        usage=usage,
        hosted_instances=hosted,
    )


class TestHelpers:
    """Test threshold and preference helpers."""

    def test_memory_threshold_divides_by_hosted_plus_one(self):
        assert memory_threshold(_node("a", 0, 950)) == 950
        assert memory_threshold(_node("a", 0, 950, hosted=19)) == 47

    def test_is_preferred_requires_mismatch_on_current(self):
        node = _node("a", 0, 0, node_type="Y")
        assert is_preferred(node, _node("b", 0, 0, node_type="X"), "Y")
        assert not is_preferred(node, _node("b", 0, 0, node_type="Y"), "Y")
        assert not is_preferred(node, _node("b", 0, 0, node_type="X"), "X")


class TestSelectNode:
    """Test node selection tie-breaking."""

    def test_less_used_node_with_more_memory_wins(self):
        """Test RAM dominance: B is less used and has more memory."""
        a = _node("a", usage=50, available=2000)
        b = _node("b", usage=40, available=3000)

        assert select_node([a, b], 1000, "whatever") == b

    def test_preferred_type_accepts_small_memory_regression(self):
        """Test B replaces A when 50MB lost is within B's threshold."""
        a = _node("a", usage=50, available=1000, node_type="X")
        b = _node("b", usage=49, available=950, node_type="Y")

        assert select_node([a, b], 500, "Y") == b

    def test_preferred_type_rejected_beyond_memory_threshold(self):
        """Test A stays when B's threshold (950 // 20 = 47) is below 50."""
        a = _node("a", usage=50, available=1000, node_type="X")
        b = _node("b", usage=49, available=950, node_type="Y", hosted=19)

        assert select_node([a, b], 500, "Y") == a

    def test_no_memory_regression_without_preference(self):
        """Test a less used node with less memory does not win on usage alone."""
        a = _node("a", usage=50, available=1000, node_type="X")
        b = _node("b", usage=10, available=900, node_type="X")

        assert select_node([a, b], 500, "Y") == a

    def test_preferred_type_accepts_usage_regression_within_tolerance(self):
        """Test a preferred node up to 200 more used still wins."""
        a = _node("a", usage=10, available=1000, node_type="X")
        b = _node("b", usage=150, available=1000, node_type="Y")

        assert select_node([a, b], 500, "Y") == b

    def test_preferred_type_rejected_beyond_usage_tolerance(self):
        a = _node("a", usage=10, available=1000, node_type="X")
        b = _node("b", usage=300, available=1000, node_type="Y")

        assert select_node([a, b], 500, "Y") == a
        assert select_node([a, b], 500, "Y", usage_tolerance=400) == b

    def test_equal_nodes_keep_first(self):
        """Test ties keep the earlier node."""
        a = _node("a", usage=10, available=1000)
        b = _node("b", usage=10, available=1000)

        assert select_node([a, b], 500, "X") == a

    def test_nodes_before_first_fit_are_skipped(self):
        """Test the first node with enough memory becomes the candidate."""
        small = _node("small", usage=0, available=100)
        big = _node("big", usage=90, available=4000)

        assert select_node([small, big], 1000, "X") == big

    def test_no_node_has_enough_memory(self):
        """Test None when every node is below the required memory."""
        nodes = [_node("a", 0, 100), _node("b", 0, 200)]

        assert select_node(nodes, 1000, "X") is None

    def test_empty_node_list(self):
        assert select_node([], 0, "X") is None

    def test_memory_floor_enforced_by_default(self):
        """Test a preferred node below the floor cannot replace the candidate."""
        a = _node("a", usage=50, available=1200, node_type="X")
        b = _node("b", usage=40, available=900, node_type="Y")

        assert select_node([a, b], 1000, "Y") == a

    def test_relative_thresholds_only_without_floor(self):
        """Test parity mode lets a preferred node below the floor win."""
        a = _node("a", usage=50, available=1200, node_type="X")
        b = _node("b", usage=40, available=900, node_type="Y")

        assert select_node([a, b], 1000, "Y", enforce_memory_floor=False) == b

    def test_deterministic(self):
        """Test the same snapshot always yields the same node."""
        nodes = [_node("a", 30, 2000, "X"), _node("b", 20, 1800, "Y"), _node("c", 25, 2500, "X")]

        picks = {select_node(nodes, 1000, "Y").name for _ in range(5)}
        assert len(picks) == 1
