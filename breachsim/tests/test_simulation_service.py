"""
Tests for the breach simulation orchestrator.
"""

import pytest

from breachsim.services.simulation import (
    BreachSearchConfig,
    InvalidInputError,
    Sophistication,
)
from breachsim.services.simulation_service import BreachSimulator, get_breach_simulator
from breachsim.tests.factories import make_adversary, make_asset


class TestBreachSimulator:
    """Tests for BreachSimulator.run."""

    @pytest.fixture
    def simulator(self):
        return BreachSimulator()

    def test_run_synthesizes_record(self, simulator, topology):
        result = simulator.run(make_adversary(), topology, target_id="db", entry_id="ws-1")

        assert result.simulation_id.startswith("SIM-")
        assert result.actor == "APT-1"
        assert result.entry == "ws-1"
        assert result.target == "db"
        assert len(result.paths) == 2
        assert result.success_probability == pytest.approx(0.72)
        assert result.choke_points == {"ws-1": 2, "fw": 2, "db": 2, "ws-2": 1}

    def test_default_entry_is_first_workstation(self, simulator, topology):
        """Test the entry defaults to the first workstation in inventory order."""
        reordered = [topology[3], topology[1], topology[0], topology[2], topology[4]]
        result = simulator.run(make_adversary(), reordered, target_id="db")
        assert result.entry == "ws-2"

    def test_default_entry_falls_back_to_first_asset(self, simulator):
        assets = [make_asset("srv", "Server"), make_asset("db", "Server")]
        result = simulator.run(make_adversary(), assets, target_id="db")
        assert result.entry == "srv"

    def test_no_paths_gives_zero_probability(self, simulator):
        """Test an unreachable target is a successful run with no paths."""
        assets = [make_asset("ws", "Workstation"), make_asset("db", "Database")]
        result = simulator.run(make_adversary(), assets, target_id="db")
        assert result.paths == []
        assert result.success_probability == 0.0
        assert result.choke_points == {}

    def test_missing_adversary_rejected(self, simulator, topology):
        with pytest.raises(InvalidInputError, match="Invalid actor or assets"):
            simulator.run(None, topology, target_id="db")

    def test_empty_inventory_rejected(self, simulator):
        with pytest.raises(InvalidInputError, match="Invalid actor or assets"):
            simulator.run(make_adversary(), [], target_id="db")

    def test_unknown_target_rejected(self, simulator, topology):
        with pytest.raises(InvalidInputError, match="Unknown target"):
            simulator.run(make_adversary(), topology, target_id="nowhere")

    def test_unknown_entry_rejected(self, simulator, topology):
        with pytest.raises(InvalidInputError, match="Unknown entry"):
            simulator.run(make_adversary(), topology, target_id="db", entry_id="nowhere")

    def test_search_config_applied(self, topology):
        simulator = BreachSimulator(BreachSearchConfig(top_k=1))
        result = simulator.run(make_adversary(), topology, target_id="db", entry_id="ws-1")
        assert len(result.paths) == 1

    def test_simulation_ids_unique(self, simulator, topology):
        adversary = make_adversary(Sophistication.NOVICE)
        first = simulator.run(adversary, topology, target_id="db")
        second = simulator.run(adversary, topology, target_id="db")
        assert first.simulation_id != second.simulation_id
        assert first.paths == second.paths

    def test_to_dict(self, simulator, topology):
        data = simulator.run(make_adversary(), topology, target_id="db", entry_id="ws-1").to_dict()
        assert set(data) == {
            "id", "actor", "entry", "target", "paths", "success_probability", "choke_points",
        }
        assert data["paths"][0]["path"] == ["ws-1", "fw", "db"]

    def test_dependency_uses_settings(self):
        simulator = get_breach_simulator()
        assert simulator.search_config == BreachSearchConfig()
