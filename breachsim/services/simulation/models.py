"""Data models for breach simulation."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class Sophistication(str, Enum):
    """Adversary capability tiers, ordered from least to most capable."""
    NOVICE = "Novice"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"
    STRATEGIC = "Strategic"     # Nation-state tier, ranked with EXPERT

    @property
    def rank(self) -> int:
        return _SOPHISTICATION_RANK[self]

    @property
    def is_advanced(self) -> bool:
        """True for ADVANCED and every tier above it."""
        return self.rank >= _SOPHISTICATION_RANK[Sophistication.ADVANCED]

    @classmethod
    def parse(cls, value: "str | Sophistication | None") -> "Sophistication":
        """Parse a tier name case-insensitively.

        Unknown or missing tiers are treated as NOVICE.
        """
        if isinstance(value, Sophistication):
            return value
        if value:
            for tier in cls:
                if tier.value.lower() == value.strip().lower():
                    return tier
        logger.warning(f"Unknown sophistication tier {value!r}, treating as Novice")
        return cls.NOVICE


_SOPHISTICATION_RANK = {
    Sophistication.NOVICE: 0,
    Sophistication.INTERMEDIATE: 1,
    Sophistication.ADVANCED: 2,
    Sophistication.EXPERT: 3,
    Sophistication.STRATEGIC: 3,
}


class AssetStatus(str, Enum):
    """Operational status of an asset."""
    ONLINE = "online"
    OFFLINE = "offline"
    DEGRADED = "degraded"
    ISOLATED = "isolated"

    @classmethod
    def parse(cls, value: "str | AssetStatus | None") -> "AssetStatus":
        """Parse a status case-insensitively, defaulting to OFFLINE."""
        if isinstance(value, AssetStatus):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.OFFLINE


def _casefold_all(values: frozenset[str]) -> frozenset[str]:
    return frozenset(v.casefold() for v in values)


@dataclass(frozen=True)
class Asset:
    """A topology node. Read-only input to the simulation core."""

    asset_id: str
    name: str
    type: str
    status: AssetStatus = AssetStatus.OFFLINE
    criticality: str = "medium"
    security_controls: frozenset[str] = frozenset()
    data_volume_gb: float | None = None

    def has_control(self, control: str) -> bool:
        """Check whether a security control is installed (case-insensitive)."""
        return control.casefold() in _casefold_all(self.security_controls)


@dataclass(frozen=True)
class Adversary:
    """A threat actor profile. Read-only input to the simulation core."""

    actor_id: str
    name: str
    sophistication: Sophistication = Sophistication.NOVICE
    evasion_techniques: frozenset[str] = frozenset()

    def has_technique(self, *techniques: str) -> bool:
        """Check whether the adversary knows any of the given techniques."""
        known = _casefold_all(self.evasion_techniques)
        return any(t.casefold() in known for t in techniques)


@dataclass(frozen=True)
class PathResult:
    """A ranked breach path from entry to target."""

    path: tuple[str, ...]
    probability: float  # 0.0 - 1.0, compound over every hop

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": list(self.path),
            "probability": self.probability,
        }


@dataclass(frozen=True)
class ControlScore:
    """Evasion sub-score for one control category (0-100)."""

    control: str
    score: float

    def to_dict(self) -> dict[str, Any]:
        return {"control": self.control, "score": self.score}


@dataclass
class EvasionResult:
    """Evasion probability against a node plus its presentation breakdown."""

    score: float  # 0.05 - 0.95
    breakdown: list[ControlScore] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "score": self.score,
            "breakdown": [b.to_dict() for b in self.breakdown],
        }


@dataclass(frozen=True)
class ExfilConfig:
    """Transport configuration for an exfiltration estimate."""

    protocol: str = "HTTPS"
    encryption: str = "AES"
    chunk_size: int = 1024      # bytes per packet
    jitter: float = 0.0         # 0.0 - 1.0
    bandwidth_limit: float = 100.0  # Mbps


@dataclass
class ExfiltrationResult:
    """Time, throughput and detectability of moving a node's data off-site."""

    total_size_mb: float
    total_size_gb: float
    overhead_pct: int
    duration_seconds: float
    duration: str
    throughput_mbps: float
    detection_score: int  # 0 - 100
    packets: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_size_mb": self.total_size_mb,
            "total_size_gb": self.total_size_gb,
            "overhead_pct": self.overhead_pct,
            "duration_seconds": self.duration_seconds,
            "duration": self.duration,
            "throughput_mbps": self.throughput_mbps,
            "detection_score": self.detection_score,
            "packets": self.packets,
        }


@dataclass
class BreachSimulationResult:
    """Synthesized record of one breach simulation run."""

    simulation_id: str
    actor: str
    entry: str
    target: str
    paths: list[PathResult]
    success_probability: float

    # Asset id -> number of ranked paths crossing it
    choke_points: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.simulation_id,
            "actor": self.actor,
            "entry": self.entry,
            "target": self.target,
            "paths": [p.to_dict() for p in self.paths],
            "success_probability": self.success_probability,
            "choke_points": self.choke_points,
        }
