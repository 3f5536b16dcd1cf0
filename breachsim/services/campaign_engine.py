"""Campaign chain validation, scoring and ordering over the TTP library."""

import logging
import math
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from breachsim.data.ttp_library import (
    ENTRY_STAGES,
    KillChainStage,
    TTPDefinition,
    TTPRegistry,
    get_ttp_registry,
)

logger = logging.getLogger(__name__)

SYNERGY_BOOST = 0.15
SYNERGY_CAP = 0.99
NOISE_DECAY = 0.9
NOISE_PRESSURE_THRESHOLD = 50
NOISE_PRESSURE_PENALTY = 0.8

ENTRY_STAGE_ERROR = "Must start with Recon or Access"
PREREQUISITE_ERROR = "Prerequisites missing or illogical flow."


class CampaignStep(BaseModel):
    """One user-authored step of a campaign."""

    model_config = ConfigDict(frozen=True)

    uuid: str = Field(default_factory=lambda: uuid4().hex)
    ttp_id: str = Field(..., description="TTP id or display name")
    config: dict[str, Any] | None = None


@dataclass
class ChainValidation:
    """Outcome of validating a campaign chain."""

    valid: bool
    invalid_indices: list[int] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "valid": self.valid,
            "error": self.error,
            "invalid_indices": self.invalid_indices,
        }


@dataclass
class CampaignMetrics:
    """Aggregate cost, noise and success of a campaign chain."""

    cost: int
    noise: int      # 0 - 100
    success: int    # percent
    ioc_count: int
    iocs: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "cost": self.cost,
            "noise": self.noise,
            "success": self.success,
            "ioc_count": self.ioc_count,
            "iocs": self.iocs,
        }


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class CampaignChainEngine:
    """Validates and scores ordered TTP chains.

    The engine holds no per-call state; every method is a pure function of
    the registry and the steps passed in.
    """

    def __init__(self, registry: TTPRegistry):
        """Initialize engine.

        Args:
            registry: TTP catalogue the steps refer to
        """
        self.registry = registry

    def get_library(self, stage: KillChainStage | None = None) -> tuple[TTPDefinition, ...]:
        """Get the catalogue as an immutable snapshot, optionally for one stage."""
        if stage is not None:
            return tuple(self.registry.by_stage(stage))
        return self.registry.list_all()

    def resolve(self, step: CampaignStep) -> TTPDefinition | None:
        """Resolve a step's TTP reference by id or display name."""
        return self.registry.get(step.ttp_id)

    def validate_chain(self, steps: list[CampaignStep]) -> ChainValidation:
        """Check a chain against entry-stage and prerequisite rules.

        The first step must be a Recon or Access technique. Every later step
        that declares ``requires`` needs at least one of those TTPs among the
        earlier steps. Steps whose reference cannot be resolved are skipped.

        Args:
            steps: Ordered campaign steps

        Returns:
            ChainValidation; never raises for a logically invalid chain
        """
        if not steps:
            return ChainValidation(valid=True)

        definitions = [self.resolve(s) for s in steps]

        first = definitions[0]
        if first is None or first.stage not in ENTRY_STAGES:
            return ChainValidation(
                valid=False,
                invalid_indices=[0],
                error=ENTRY_STAGE_ERROR,
            )

        # Ids, names and raw references of everything executed so far
        executed: set[str] = {first.id, first.name, steps[0].ttp_id}
        invalid_indices: list[int] = []

        for index in range(1, len(steps)):
            current = definitions[index]
            if current is None:
                logger.debug(f"Skipping unresolved TTP {steps[index].ttp_id!r}")
                continue

            if current.requires and not any(r in executed for r in current.requires):
                invalid_indices.append(index)

            executed.update((current.id, current.name, steps[index].ttp_id))

        return ChainValidation(
            valid=not invalid_indices,
            invalid_indices=invalid_indices,
            error=PREREQUISITE_ERROR if invalid_indices else None,
        )

    def calculate_metrics(self, steps: list[CampaignStep]) -> CampaignMetrics:
        """Compute aggregate cost, noise and success for a chain.

        Cost is summed. Noise is not summed: the running value decays by 10%
        per step but never drops below the current step's own noise. Success
        is the product of per-step success, where a step gains +0.15 (capped
        at 0.99) if any of its synergy TTPs already ran, and loses 20% if the
        noise accumulated before it exceeds 50.

        Args:
            steps: Ordered campaign steps

        Returns:
            CampaignMetrics with success as a rounded percentage
        """
        cost = 0
        noise = 0.0
        probability = 1.0
        iocs: list[str] = []
        executed: set[str] = set()

        for step in steps:
            ttp = self.resolve(step)
            if ttp is None:
                continue

            cost += ttp.cost

            step_success = ttp.base_success
            if ttp.synergy and any(s in executed for s in ttp.synergy):
                step_success = min(SYNERGY_CAP, step_success + SYNERGY_BOOST)
            if noise > NOISE_PRESSURE_THRESHOLD:
                step_success *= NOISE_PRESSURE_PENALTY

            probability *= step_success
            noise = max(noise * NOISE_DECAY, ttp.noise)
            iocs.append(ttp.ioc_label)
            executed.add(ttp.id)

        return CampaignMetrics(
            cost=cost,
            noise=_round_half_up(noise),
            success=_round_half_up(probability * 100),
            ioc_count=len(iocs),
            iocs=iocs,
        )

    def optimize_chain(self, steps: list[CampaignStep]) -> list[CampaignStep]:
        """Reorder steps into kill chain order.

        Stable sort by stage; unresolvable steps go last. Steps are neither
        added nor removed, and prerequisites are not re-validated.

        Args:
            steps: Campaign steps in authored order

        Returns:
            New list in canonical stage order
        """
        unknown_rank = len(KillChainStage.ordered())

        def stage_rank(step: CampaignStep) -> int:
            ttp = self.resolve(step)
            return ttp.stage.rank if ttp else unknown_rank

        return sorted(steps, key=stage_rank)


def get_campaign_engine() -> CampaignChainEngine:
    """Dependency returning an engine over the default TTP registry."""
    return CampaignChainEngine(get_ttp_registry())
