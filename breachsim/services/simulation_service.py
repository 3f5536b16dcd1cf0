"""Breach simulation orchestrator."""

import logging
from uuid import uuid4

from breachsim.config import get_settings
from breachsim.services.simulation.errors import InvalidInputError
from breachsim.services.simulation.models import (
    Adversary,
    Asset,
    BreachSimulationResult,
)
from breachsim.services.simulation.pathfinder import (
    BreachPathfinder,
    BreachSearchConfig,
    identify_choke_points,
)

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_TYPE = "workstation"


class BreachSimulator:
    """Runs breach simulations over a resolved adversary and inventory.

    Orchestrates one simulation request:
    1. Reject missing or unusable inputs
    2. Pick an entry point if none was given
    3. Search ranked breach paths
    4. Synthesize the simulation record
    """

    def __init__(self, search_config: BreachSearchConfig | None = None):
        """Initialize simulator.

        Args:
            search_config: Breach search limits (defaults to BreachSearchConfig())
        """
        self.search_config = search_config or BreachSearchConfig()

    def run(
        self,
        adversary: Adversary | None,
        assets: list[Asset],
        target_id: str,
        entry_id: str | None = None,
    ) -> BreachSimulationResult:
        """Run a breach simulation.

        Args:
            adversary: Resolved threat actor
            assets: Full current asset inventory
            target_id: Asset the adversary wants to reach
            entry_id: Starting asset; defaults to the first workstation,
                else the first asset

        Returns:
            BreachSimulationResult with up to top_k ranked paths

        Raises:
            InvalidInputError: If the adversary is missing, the inventory is
                empty, or the entry/target is not in the inventory
        """
        if adversary is None or not assets:
            raise InvalidInputError("Invalid actor or assets configuration")

        asset_ids = {a.asset_id for a in assets}
        if target_id not in asset_ids:
            raise InvalidInputError(f"Unknown target asset: {target_id}")

        if entry_id is None:
            entry_id = self._default_entry(assets)
        elif entry_id not in asset_ids:
            raise InvalidInputError(f"Unknown entry asset: {entry_id}")

        pathfinder = BreachPathfinder(assets, adversary, self.search_config)
        paths = pathfinder.find_breach_paths(entry_id, target_id)

        result = BreachSimulationResult(
            simulation_id=f"SIM-{uuid4().hex[:12].upper()}",
            actor=adversary.name,
            entry=entry_id,
            target=target_id,
            paths=paths,
            success_probability=paths[0].probability if paths else 0.0,
            choke_points=identify_choke_points(paths),
        )

        logger.info(
            f"Simulation {result.simulation_id}: {adversary.name} {entry_id} -> "
            f"{target_id}, {len(paths)} paths, top probability "
            f"{result.success_probability:.3f}"
        )
        return result

    @staticmethod
    def _default_entry(assets: list[Asset]) -> str:
        """Pick the first workstation, else the first asset."""
        for asset in assets:
            if asset.type.casefold() == DEFAULT_ENTRY_TYPE:
                return asset.asset_id
        return assets[0].asset_id


def get_breach_simulator() -> BreachSimulator:
    """Dependency returning a simulator configured from settings."""
    return BreachSimulator(BreachSearchConfig.from_settings(get_settings()))
