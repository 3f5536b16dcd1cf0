"""Asset inventory and adversary lookups.

Resolves database rows into the frozen value types consumed by the
simulation core, so no live ORM record is ever handed to it.
"""

import logging

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from breachsim.database import get_db
from breachsim.models.database import Asset as AssetRecord
from breachsim.models.database import ThreatActor
from breachsim.services.simulation.models import (
    Adversary,
    Asset,
    AssetStatus,
    Sophistication,
)

logger = logging.getLogger(__name__)


def asset_from_record(record: AssetRecord) -> Asset:
    """Convert an asset row into a core Asset value."""
    return Asset(
        asset_id=record.asset_id,
        name=record.name,
        type=record.type,
        status=AssetStatus.parse(record.status),
        criticality=record.criticality or "medium",
        security_controls=frozenset(record.security_controls or []),
        data_volume_gb=record.data_volume_gb,
    )


def adversary_from_record(record: ThreatActor) -> Adversary:
    """Convert a threat actor row into a core Adversary value."""
    return Adversary(
        actor_id=record.actor_id,
        name=record.name,
        sophistication=Sophistication.parse(record.sophistication),
        evasion_techniques=frozenset(record.evasion_techniques or []),
    )


class InventoryService:
    """Read access to assets and threat actors."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_adversary(self, actor_id: str) -> Adversary | None:
        """Get an adversary by ID, or None if unknown."""
        result = await self.db.execute(
            select(ThreatActor).where(ThreatActor.actor_id == actor_id)
        )
        record = result.scalar_one_or_none()
        return adversary_from_record(record) if record else None

    async def get_asset(self, asset_id: str) -> Asset | None:
        """Get an asset by ID, or None if unknown."""
        result = await self.db.execute(
            select(AssetRecord).where(AssetRecord.asset_id == asset_id)
        )
        record = result.scalar_one_or_none()
        return asset_from_record(record) if record else None

    async def list_assets(self) -> list[Asset]:
        """Get the full current inventory, ordered by asset ID."""
        result = await self.db.execute(
            select(AssetRecord).order_by(AssetRecord.asset_id)
        )
        assets = [asset_from_record(r) for r in result.scalars().all()]
        logger.debug(f"Loaded {len(assets)} assets from inventory")
        return assets


def get_inventory_service(db: AsyncSession = Depends(get_db)) -> InventoryService:
    """Dependency providing an InventoryService bound to the request session."""
    return InventoryService(db)
