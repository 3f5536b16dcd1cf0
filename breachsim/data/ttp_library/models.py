"""Pydantic models for TTP library definitions."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class KillChainStage(str, Enum):
    """Kill chain stages in canonical order."""
    RECON = "Recon"
    ACCESS = "Access"
    EXECUTION = "Execution"
    PERSISTENCE = "Persistence"
    C2 = "C2"
    EXFIL = "Exfil"

    @classmethod
    def ordered(cls) -> list["KillChainStage"]:
        return list(cls)

    @property
    def rank(self) -> int:
        return KillChainStage.ordered().index(self)


# Stages a campaign may open with
ENTRY_STAGES = frozenset({KillChainStage.RECON, KillChainStage.ACCESS})


class TTPDefinition(BaseModel):
    """A catalogued tactic, technique or procedure.

    Instances are immutable once loaded.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique identifier, e.g. t5")
    name: str = Field(..., description="Display name, e.g. 'Execution: PowerShell'")
    stage: KillChainStage = Field(..., description="Kill chain stage")
    noise: float = Field(..., ge=0, le=100, description="Detectability contribution")
    cost: int = Field(..., ge=0, description="Resource cost units")
    base_success: float = Field(..., ge=0, le=1, description="Nominal success probability")
    mitre_id: str = Field(..., description="MITRE ATT&CK technique ID")
    description: str = Field("", description="Short description")
    requires: tuple[str, ...] = Field(
        default=(),
        description="TTP ids of which at least one must have executed earlier",
    )
    synergy: tuple[str, ...] = Field(
        default=(),
        description="TTP ids whose earlier presence boosts success",
    )

    @property
    def ioc_label(self) -> str:
        return f"{self.mitre_id}: {self.stage.value}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "stage": self.stage.value,
            "noise": self.noise,
            "cost": self.cost,
            "base_success": self.base_success,
            "mitre_id": self.mitre_id,
            "description": self.description,
            "requires": list(self.requires),
            "synergy": list(self.synergy),
        }


class TTPLibraryFile(BaseModel):
    """Schema for a YAML file containing TTP definitions."""

    techniques: list[TTPDefinition] = Field(..., description="List of TTP definitions")
