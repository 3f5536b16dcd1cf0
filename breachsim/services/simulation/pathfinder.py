"""Probability-weighted breach path search."""

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

from breachsim.services.simulation.graph_builder import TopologyGraphBuilder
from breachsim.services.simulation.models import Adversary, Asset, PathResult
from breachsim.services.simulation.probability import compromise_probability

if TYPE_CHECKING:
    from breachsim.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BreachSearchConfig:
    """Tuning knobs for the breach path search.

    Attributes:
        prune_threshold: Branches whose cumulative probability would not
            exceed this value are dropped.
        max_iterations: Hard cap on dequeue operations.
        top_k: Number of ranked paths returned.
    """

    prune_threshold: float = 0.1
    max_iterations: int = 5000
    top_k: int = 3

    @classmethod
    def from_settings(cls, settings: "Settings") -> "BreachSearchConfig":
        return cls(
            prune_threshold=settings.breach_prune_threshold,
            max_iterations=settings.breach_max_iterations,
            top_k=settings.breach_top_k,
        )


class BreachPathfinder:
    """Finds ranked breach paths through the asset topology."""

    def __init__(
        self,
        assets: list[Asset],
        adversary: Adversary,
        config: BreachSearchConfig | None = None,
    ):
        """Initialize pathfinder.

        Args:
            assets: Full asset inventory
            adversary: Threat actor attempting the breach
            config: Search limits (defaults to BreachSearchConfig())
        """
        self.assets = {a.asset_id: a for a in assets}
        self.adversary = adversary
        self.config = config or BreachSearchConfig()
        self.adjacency = TopologyGraphBuilder(assets).build()

    def find_breach_paths(self, entry_id: str, target_id: str) -> list[PathResult]:
        """Find the most probable breach paths from entry to target.

        Breadth-first search carrying each branch's path and cumulative
        probability. A branch ends when it reaches the target; neighbours
        are only enqueued while the cumulative probability stays above the
        prune threshold.

        Args:
            entry_id: Starting asset ID
            target_id: Goal asset ID

        Returns:
            Up to top_k PathResults sorted by probability (descending).
            Empty if the target is unreachable.
        """
        queue: deque[tuple[str, tuple[str, ...], float]] = deque()
        queue.append((entry_id, (entry_id,), 1.0))
        candidates: list[PathResult] = []
        iterations = 0

        while queue and iterations < self.config.max_iterations:
            iterations += 1
            current_id, path, probability = queue.popleft()

            if current_id == target_id:
                candidates.append(PathResult(path=path, probability=probability))
                continue

            for neighbor_id in self.adjacency.get(current_id, []):
                if neighbor_id in path:
                    continue

                neighbor = self.assets.get(neighbor_id)
                if not neighbor:
                    continue

                new_probability = probability * compromise_probability(
                    neighbor, self.adversary
                )
                if new_probability > self.config.prune_threshold:
                    queue.append((neighbor_id, path + (neighbor_id,), new_probability))

        if queue:
            logger.info(
                f"Breach search hit the iteration cap ({self.config.max_iterations}) "
                f"with {len(queue)} branches pending"
            )

        candidates.sort(key=lambda p: p.probability, reverse=True)
        result = candidates[: self.config.top_k]

        logger.info(
            f"Breach search {entry_id} -> {target_id}: {len(candidates)} candidates "
            f"in {iterations} iterations, returning {len(result)}"
        )
        return result


def find_breach_paths(
    entry_id: str,
    target_id: str,
    assets: list[Asset],
    adversary: Adversary,
    config: BreachSearchConfig | None = None,
) -> list[PathResult]:
    """Convenience wrapper around BreachPathfinder."""
    return BreachPathfinder(assets, adversary, config).find_breach_paths(
        entry_id, target_id
    )


def identify_choke_points(paths: list[PathResult]) -> dict[str, int]:
    """Count how many paths each asset appears on.

    Args:
        paths: Ranked breach paths

    Returns:
        Dict of asset_id -> path count, most shared first
    """
    counts: dict[str, int] = {}
    for result in paths:
        for asset_id in result.path:
            counts[asset_id] = counts.get(asset_id, 0) + 1
    return dict(sorted(counts.items(), key=lambda kv: kv[1], reverse=True))
