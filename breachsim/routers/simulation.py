"""Breach simulation router."""

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from breachsim.models.schemas import (
    BreachSimulationRequest,
    BreachSimulationResponse,
    EvasionRequest,
    EvasionResponse,
    ExfiltrationRequest,
    ExfiltrationResponse,
    PaginatedResponse,
    SimulationRunResponse,
)
from breachsim.services.inventory_service import (
    InventoryService,
    get_inventory_service,
)
from breachsim.services.simulation import (
    ExfilConfig,
    InvalidInputError,
    calculate_evasion,
    calculate_exfil_physics,
)
from breachsim.services.simulation_audit import (
    SimulationAuditService,
    get_audit_service,
)
from breachsim.services.simulation_service import BreachSimulator, get_breach_simulator

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/run", response_model=BreachSimulationResponse)
async def run_breach_simulation(
    request: BreachSimulationRequest,
    x_username: str = Header("anonymous"),
    inventory: InventoryService = Depends(get_inventory_service),
    audit: SimulationAuditService = Depends(get_audit_service),
    simulator: BreachSimulator = Depends(get_breach_simulator),
):
    """Search ranked breach paths for an adversary against a target asset."""
    adversary = await inventory.get_adversary(request.actor_id)
    assets = await inventory.list_assets()

    try:
        result = simulator.run(
            adversary,
            assets,
            target_id=request.target_node_id,
            entry_id=request.entry_node_id,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        await audit.record_run(result, x_username)
    except Exception as e:
        logger.error(f"Failed to record simulation {result.simulation_id}: {e}")

    return result.to_dict()


@router.get("/runs", response_model=PaginatedResponse)
async def list_simulation_runs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    audit: SimulationAuditService = Depends(get_audit_service),
):
    """List past simulation runs with pagination."""
    runs = await audit.list_runs(page=page, page_size=page_size)
    runs["items"] = [
        SimulationRunResponse.model_validate(r).model_dump(mode="json")
        for r in runs["items"]
    ]
    return runs


@router.post("/evasion", response_model=EvasionResponse)
async def calculate_node_evasion(
    request: EvasionRequest,
    inventory: InventoryService = Depends(get_inventory_service),
):
    """Score an adversary's ability to evade a node's security controls."""
    adversary = await inventory.get_adversary(request.actor_id)
    asset = await inventory.get_asset(request.node_id)

    if not adversary or not asset:
        raise HTTPException(status_code=404, detail="Resource not found")

    return calculate_evasion(adversary, asset).to_dict()


@router.post("/exfiltration", response_model=ExfiltrationResponse)
async def calculate_exfiltration(
    request: ExfiltrationRequest,
    inventory: InventoryService = Depends(get_inventory_service),
):
    """Estimate time and detectability of exfiltrating a node's data."""
    asset = await inventory.get_asset(request.node_id)
    if not asset:
        raise HTTPException(status_code=404, detail="Node not found")

    config = ExfilConfig(**request.config.model_dump())
    try:
        result = calculate_exfil_physics(asset, config)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return result.to_dict()
