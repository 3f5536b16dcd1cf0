"""Campaign builder router."""

from fastapi import APIRouter, Depends

from breachsim.data.ttp_library import KillChainStage
from breachsim.models.schemas import (
    CampaignChainRequest,
    CampaignMetricsResponse,
    ChainValidationResponse,
    TTPDefinitionResponse,
)
from breachsim.services.campaign_engine import (
    CampaignChainEngine,
    CampaignStep,
    get_campaign_engine,
)

router = APIRouter()


@router.get("/ttp-library", response_model=list[TTPDefinitionResponse])
async def get_ttp_library(
    stage: KillChainStage | None = None,
    engine: CampaignChainEngine = Depends(get_campaign_engine),
):
    """Get the TTP catalogue, optionally limited to one kill chain stage."""
    return [ttp.to_dict() for ttp in engine.get_library(stage)]


@router.post("/validate-chain", response_model=ChainValidationResponse)
async def validate_campaign_chain(
    request: CampaignChainRequest,
    engine: CampaignChainEngine = Depends(get_campaign_engine),
):
    """Check a campaign chain against stage and prerequisite rules."""
    return engine.validate_chain(request.steps).to_dict()


@router.post("/metrics", response_model=CampaignMetricsResponse)
async def calculate_campaign_metrics(
    request: CampaignChainRequest,
    engine: CampaignChainEngine = Depends(get_campaign_engine),
):
    """Compute cost, noise and success for a campaign chain."""
    return engine.calculate_metrics(request.steps).to_dict()


@router.post("/optimize", response_model=list[CampaignStep])
async def optimize_campaign_chain(
    request: CampaignChainRequest,
    engine: CampaignChainEngine = Depends(get_campaign_engine),
):
    """Reorder a campaign chain into kill chain order.

    The result is not re-validated; callers should validate it again.
    """
    return engine.optimize_chain(request.steps)
