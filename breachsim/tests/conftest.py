"""Shared fixtures for Breachsim tests."""

import pytest
from fastapi.testclient import TestClient

from breachsim.database import get_db
from breachsim.main import app
from breachsim.models.database import SimulationRun
from breachsim.services.inventory_service import get_inventory_service
from breachsim.services.simulation import (
    Adversary,
    Asset,
    AssetStatus,
    Sophistication,
)
from breachsim.services.simulation_audit import get_audit_service
from breachsim.tests.factories import make_adversary, make_asset


class FakeInventory:
    """In-memory stand-in for InventoryService."""

    def __init__(self, assets: list[Asset], adversaries: list[Adversary]):
        self.assets = {a.asset_id: a for a in assets}
        self.adversaries = {a.actor_id: a for a in adversaries}

    async def get_adversary(self, actor_id: str) -> Adversary | None:
        return self.adversaries.get(actor_id)

    async def get_asset(self, asset_id: str) -> Asset | None:
        return self.assets.get(asset_id)

    async def list_assets(self) -> list[Asset]:
        return list(self.assets.values())


class FakeAudit:
    """In-memory stand-in for SimulationAuditService."""

    def __init__(self):
        self.runs: list[SimulationRun] = []

    async def record_run(self, result, username: str) -> SimulationRun:
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
        self.runs.append(run)
        return run

    async def list_runs(self, page: int = 1, page_size: int = 20) -> dict:
        start = (page - 1) * page_size
        total = len(self.runs)
        return {
            "items": self.runs[start:start + page_size],
            "total": total,
            "page": page,
            "page_size": page_size,
            "pages": (total + page_size - 1) // page_size,
        }


class FakeSession:
    """Minimal AsyncSession stand-in for the health check."""

    async def execute(self, *args, **kwargs):
        return None


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def topology() -> list[Asset]:
    """Small segmented network bridged by one firewall.

    ws-1 (online) and ws-2 share a segment; fw bridges to srv and db.
    """
    return [
        make_asset("ws-1", "Workstation", status=AssetStatus.ONLINE,
                   security_controls=frozenset({"AV"}), data_volume_gb=0.5),
        make_asset("ws-2", "Workstation"),
        make_asset("fw", "Firewall", status=AssetStatus.ONLINE),
        make_asset("srv", "Server", security_controls=frozenset({"EDR", "AV"}),
                   data_volume_gb=120),
        make_asset("db", "Database", security_controls=frozenset({"EDR"}),
                   data_volume_gb=50),
    ]


@pytest.fixture
def inventory(topology) -> FakeInventory:
    return FakeInventory(
        topology,
        [
            make_adversary(Sophistication.ADVANCED, ("Rootkit", "Packers"), "apt-1"),
            make_adversary(Sophistication.NOVICE, (), "script-kid"),
        ],
    )


@pytest.fixture
def audit() -> FakeAudit:
    return FakeAudit()


@pytest.fixture
def client(inventory, audit):
    """Test client with inventory, audit and database dependencies faked."""

    async def fake_db():
        yield FakeSession()

    app.dependency_overrides[get_db] = fake_db
    app.dependency_overrides[get_inventory_service] = lambda: inventory
    app.dependency_overrides[get_audit_service] = lambda: audit

    yield TestClient(app)

    app.dependency_overrides.clear()
