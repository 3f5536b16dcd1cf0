"""Breach simulation core.

Deterministic scoring over caller-supplied assets and adversaries: topology
construction, breach path search, evasion scoring and exfiltration physics.
"""

from breachsim.services.simulation.errors import InvalidInputError, SimulationError
from breachsim.services.simulation.evasion import calculate_evasion
from breachsim.services.simulation.exfiltration import calculate_exfil_physics
from breachsim.services.simulation.models import (
    Adversary,
    Asset,
    AssetStatus,
    BreachSimulationResult,
    EvasionResult,
    ExfilConfig,
    ExfiltrationResult,
    PathResult,
    Sophistication,
)
from breachsim.services.simulation.pathfinder import (
    BreachPathfinder,
    BreachSearchConfig,
    find_breach_paths,
    identify_choke_points,
)
from breachsim.services.simulation.probability import compromise_probability

__all__ = [
    "Adversary",
    "Asset",
    "AssetStatus",
    "BreachPathfinder",
    "BreachSearchConfig",
    "BreachSimulationResult",
    "EvasionResult",
    "ExfilConfig",
    "ExfiltrationResult",
    "InvalidInputError",
    "PathResult",
    "SimulationError",
    "Sophistication",
    "calculate_evasion",
    "calculate_exfil_physics",
    "compromise_probability",
    "find_breach_paths",
    "identify_choke_points",
]
