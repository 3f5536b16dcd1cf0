"""
Tests for the breach path finder.
"""

import pytest

from breachsim.services.simulation import (
    AssetStatus,
    BreachPathfinder,
    BreachSearchConfig,
    PathResult,
    Sophistication,
    find_breach_paths,
    identify_choke_points,
)
from breachsim.tests.factories import make_adversary, make_asset


def _assert_well_formed(paths: list[PathResult], top_k: int = 3) -> None:
    assert len(paths) <= top_k
    for result in paths:
        assert len(result.path) == len(set(result.path))
        assert 0 <= result.probability <= 1
    probabilities = [p.probability for p in paths]
    assert probabilities == sorted(probabilities, reverse=True)


class TestBreachPathfinder:
    """Tests for ranked breach path search."""

    def test_advanced_adversary_paths(self, topology):
        """Test both routes to the database are found and ranked."""
        paths = find_breach_paths("ws-1", "db", topology, make_adversary())

        assert [p.path for p in paths] == [
            ("ws-1", "fw", "db"),
            ("ws-1", "ws-2", "fw", "db"),
        ]
        assert paths[0].probability == pytest.approx(0.72)
        assert paths[1].probability == pytest.approx(0.648)
        _assert_well_formed(paths)

    def test_novice_branch_pruned_at_threshold(self, topology):
        """Test a branch landing exactly on the threshold is pruned."""
        adversary = make_adversary(Sophistication.NOVICE)
        paths = find_breach_paths("ws-1", "db", topology, adversary)

        assert len(paths) == 1
        assert paths[0].path == ("ws-1", "fw", "db")
        assert paths[0].probability == pytest.approx(0.2)

    def test_entry_equals_target(self, topology):
        """Test entry == target yields the trivial path with certainty."""
        paths = find_breach_paths("srv", "srv", topology, make_adversary())
        assert paths == [PathResult(path=("srv",), probability=1.0)]

    def test_unreachable_target_returns_empty(self):
        """Test an unreachable target is an empty result, not an error."""
        assets = [make_asset("ws", "Workstation"), make_asset("db", "Database")]
        assert find_breach_paths("ws", "db", assets, make_adversary()) == []

    def test_unknown_entry_returns_empty(self, topology):
        """Test an entry outside the topology finds nothing."""
        assert find_breach_paths("ghost", "db", topology, make_adversary()) == []

    def test_target_not_expanded(self, topology):
        """Test paths stop at the target instead of passing through it."""
        paths = find_breach_paths("ws-1", "fw", topology, make_adversary())
        for result in paths:
            assert result.path[-1] == "fw"
            assert result.path.count("fw") == 1

    def test_dense_graph_terminates_with_cap(self):
        """Test a fully connected 50-node graph stays bounded."""
        assets = [make_asset(f"ws-{i}", "Workstation") for i in range(50)]
        adversary = make_adversary(Sophistication.EXPERT)

        paths = find_breach_paths("ws-0", "ws-49", assets, adversary)

        _assert_well_formed(paths)
        assert paths[0] == PathResult(path=("ws-0", "ws-49"), probability=0.9)

    def test_iteration_cap_is_configurable(self, topology):
        """Test a single iteration only dequeues the entry."""
        config = BreachSearchConfig(max_iterations=1)
        paths = find_breach_paths("ws-1", "db", topology, make_adversary(), config)
        assert paths == []

    def test_top_k_is_configurable(self, topology):
        """Test top_k limits the number of returned paths."""
        config = BreachSearchConfig(top_k=1)
        paths = BreachPathfinder(topology, make_adversary(), config).find_breach_paths(
            "ws-1", "db"
        )
        assert len(paths) == 1
        assert paths[0].path == ("ws-1", "fw", "db")

    def test_prune_threshold_is_configurable(self, topology):
        """Test a higher threshold prunes every route."""
        config = BreachSearchConfig(prune_threshold=0.75)
        assert find_breach_paths("ws-1", "db", topology, make_adversary(), config) == []

    def test_online_nodes_lower_probability(self):
        """Test an online hop is harder than an offline one."""
        offline = [make_asset("a", "Server"), make_asset("b", "Server")]
        online = [
            make_asset("a", "Server"),
            make_asset("b", "Server", status=AssetStatus.ONLINE),
        ]
        adversary = make_adversary()
        p_offline = find_breach_paths("a", "b", offline, adversary)[0].probability
        p_online = find_breach_paths("a", "b", online, adversary)[0].probability
        assert p_online < p_offline

    def test_search_is_deterministic(self, topology):
        """Test repeated searches return identical results."""
        adversary = make_adversary()
        first = find_breach_paths("ws-1", "db", topology, adversary)
        second = find_breach_paths("ws-1", "db", topology, adversary)
        assert first == second


class TestChokePoints:
    """Tests for choke point counting."""

    def test_counts_shared_assets(self):
        paths = [
            PathResult(("a", "fw", "db"), 0.7),
            PathResult(("a", "b", "fw", "db"), 0.6),
        ]
        counts = identify_choke_points(paths)
        assert counts == {"a": 2, "fw": 2, "db": 2, "b": 1}
        assert list(counts)[-1] == "b"

    def test_empty_paths(self):
        assert identify_choke_points([]) == {}


class TestBreachSearchConfig:
    """Tests for search configuration."""

    def test_defaults(self):
        config = BreachSearchConfig()
        assert config.prune_threshold == 0.1
        assert config.max_iterations == 5000
        assert config.top_k == 3

    def test_from_settings(self):
        from breachsim.config import Settings

        settings = Settings(breach_prune_threshold=0.2, breach_max_iterations=10, breach_top_k=5)
        config = BreachSearchConfig.from_settings(settings)
        assert config == BreachSearchConfig(0.2, 10, 5)
