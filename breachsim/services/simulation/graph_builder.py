"""Build the topology graph from the asset inventory."""

import logging

from breachsim.services.simulation.models import Asset

logger = logging.getLogger(__name__)

# Firewalls bridge every asset type
BRIDGE_TYPE = "firewall"


class TopologyGraphBuilder:
    """Builds an adjacency list from a flat asset inventory.

    Two assets are connected when they share a type, or when either of them
    is a firewall. The graph is rebuilt for every search because the
    inventory may change between requests.
    """

    def __init__(self, assets: list[Asset]):
        """Initialize with the asset inventory.

        Args:
            assets: Full list of assets in the topology
        """
        self.assets = assets

    def build(self) -> dict[str, list[str]]:
        """Build the adjacency list.

        Returns:
            Dict of asset_id -> list of reachable asset_ids
        """
        adjacency: dict[str, list[str]] = {a.asset_id: [] for a in self.assets}
        edge_count = 0

        for source in self.assets:
            for target in self.assets:
                if source.asset_id == target.asset_id:
                    continue
                if self._connected(source, target):
                    adjacency[source.asset_id].append(target.asset_id)
                    edge_count += 1

        logger.debug(
            f"Built topology graph with {len(adjacency)} nodes and {edge_count} edges"
        )
        return adjacency

    @staticmethod
    def _connected(source: Asset, target: Asset) -> bool:
        """Check the connection rule for an ordered pair of assets."""
        source_type = source.type.casefold()
        target_type = target.type.casefold()
        return (
            source_type == target_type
            or source_type == BRIDGE_TYPE
            or target_type == BRIDGE_TYPE
        )


def build_adjacency(assets: list[Asset]) -> dict[str, list[str]]:
    """Convenience wrapper around TopologyGraphBuilder."""
    return TopologyGraphBuilder(assets).build()
