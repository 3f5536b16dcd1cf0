"""History of breach simulation runs."""

import logging
from typing import Any

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from breachsim.database import get_db
from breachsim.models.database import SimulationRun
from breachsim.services.simulation.models import BreachSimulationResult

logger = logging.getLogger(__name__)


class SimulationAuditService:
    """Records completed simulations and lists past runs."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record_run(self, result: BreachSimulationResult, username: str) -> SimulationRun:
        """Store a simulation result under its run ID.

        Args:
            result: Completed simulation record
            username: User who requested the simulation

        Returns:
            The persisted SimulationRun row
        """
        run = SimulationRun(
            run_id=result.simulation_id,
            username=username,
            actor_name=result.actor,
            entry_asset_id=result.entry,
            target_asset_id=result.target,
            paths=[p.to_dict() for p in result.paths],
            choke_points=result.choke_points,
            success_probability=result.success_probability,
        )
        self.db.add(run)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Recorded simulation {result.simulation_id} for {username}")
        return run

    async def list_runs(self, page: int = 1, page_size: int = 20) -> dict[str, Any]:
        """List stored runs, newest first.

        Returns:
            Paginated dict with items, total, page, page_size and pages
        """
        query = select(SimulationRun)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.db.execute(count_query)).scalar() or 0

        query = query.order_by(SimulationRun.created_at.desc(), SimulationRun.run_id)
        query = query.offset((page - 1) * page_size).limit(page_size)
        result = await self.db.execute(query)

        return {
            "items": list(result.scalars().all()),
            "total": total,
            "page": page,
            "page_size": page_size,
            "pages": (total + page_size - 1) // page_size,
        }


def get_audit_service(db: AsyncSession = Depends(get_db)) -> SimulationAuditService:
    """Dependency providing a SimulationAuditService bound to the request session."""
    return SimulationAuditService(db)
