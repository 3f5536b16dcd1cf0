"""Pydantic schemas for API request/response validation."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from breachsim.services.campaign_engine import CampaignStep


# ============================================================================
# Breach Simulation Schemas
# ============================================================================


class BreachSimulationRequest(BaseModel):
    """Schema for running a breach simulation."""

    actor_id: str
    target_node_id: str
    entry_node_id: str | None = None


class PathResultResponse(BaseModel):
    """Schema for one ranked breach path."""

    path: list[str]
    probability: float = Field(..., ge=0, le=1)


class BreachSimulationResponse(BaseModel):
    """Schema for a synthesized simulation record."""

    id: str
    actor: str
    entry: str
    target: str
    paths: list[PathResultResponse] = []
    success_probability: float = Field(..., ge=0, le=1)
    choke_points: dict[str, int] = {}


class SimulationRunResponse(BaseModel):
    """Schema for a stored simulation run."""

    model_config = ConfigDict(from_attributes=True)

    run_id: str
    username: str
    actor_name: str
    entry_asset_id: str
    target_asset_id: str
    paths: list[dict[str, Any]] = []
    choke_points: dict[str, int] = {}
    success_probability: float
    created_at: datetime | None = None


# ============================================================================
# Evasion Schemas
# ============================================================================


class EvasionRequest(BaseModel):
    """Schema for scoring evasion against a node."""

    actor_id: str
    node_id: str


class ControlScoreResponse(BaseModel):
    """Schema for an evasion breakdown entry."""

    control: str
    score: float


class EvasionResponse(BaseModel):
    """Schema for evasion result."""

    score: float = Field(..., ge=0.05, le=0.95)
    breakdown: list[ControlScoreResponse] = []


# ============================================================================
# Exfiltration Schemas
# ============================================================================


class ExfilConfigSchema(BaseModel):
    """Schema for exfiltration transport configuration."""

    protocol: str = Field("HTTPS", pattern="^(DNS|HTTPS|FTP|ICMP|SMB)$")
    encryption: str = Field("AES", pattern="^(NONE|AES|XOR)$")
    chunk_size: int = Field(1024, gt=0, description="Bytes per packet")
    jitter: float = Field(0.0, ge=0, le=1)
    bandwidth_limit: float = Field(100.0, gt=0, description="Mbps")


class ExfiltrationRequest(BaseModel):
    """Schema for an exfiltration estimate."""

    node_id: str
    config: ExfilConfigSchema = ExfilConfigSchema()


class ExfiltrationResponse(BaseModel):
    """Schema for exfiltration physics result."""

    total_size_mb: float
    total_size_gb: float
    overhead_pct: int
    duration_seconds: float
    duration: str
    throughput_mbps: float
    detection_score: int = Field(..., ge=0, le=100)
    packets: int


# ============================================================================
# Campaign Schemas
# ============================================================================


class CampaignChainRequest(BaseModel):
    """Schema for campaign chain operations."""

    steps: list[CampaignStep] = []


class TTPDefinitionResponse(BaseModel):
    """Schema for a TTP library entry."""

    id: str
    name: str
    stage: str
    noise: float
    cost: int
    base_success: float
    mitre_id: str
    description: str
    requires: list[str] = []
    synergy: list[str] = []


class ChainValidationResponse(BaseModel):
    """Schema for chain validation result."""

    valid: bool
    error: str | None = None
    invalid_indices: list[int] = []


class CampaignMetricsResponse(BaseModel):
    """Schema for campaign metrics."""

    cost: int
    noise: int = Field(..., ge=0, le=100)
    success: int = Field(..., ge=0, le=100)
    ioc_count: int
    iocs: list[str] = []


# ============================================================================
# Pagination
# ============================================================================


class PaginatedResponse(BaseModel):
    """Generic paginated response."""

    items: list[Any]
    total: int
    page: int
    page_size: int
    pages: int
