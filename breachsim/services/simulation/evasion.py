"""Evasion scoring against a node's installed security controls."""

import logging

from breachsim.services.simulation.models import (
    Adversary,
    Asset,
    ControlScore,
    EvasionResult,
)

logger = logging.getLogger(__name__)

BASE_EVASION = 0.1
MIN_EVASION = 0.05
MAX_EVASION = 0.95

# Techniques that defeat each control
EDR_BYPASS_TECHNIQUES = ("Anti-VM", "Rootkit")
AV_BYPASS_TECHNIQUES = ("Packers", "Fileless Malware")

# Presentation weights per control category
BREAKDOWN_WEIGHTS = (
    ("EDR / Endpoint", 0.9),
    ("Network / IDS", 0.7),
)


def calculate_evasion(adversary: Adversary, asset: Asset) -> EvasionResult:
    """Score an adversary's ability to evade a node's defenses.

    Args:
        adversary: Threat actor with its evasion techniques
        asset: Node with its installed security controls

    Returns:
        EvasionResult with the clamped score and a per-category breakdown
    """
    score = BASE_EVASION

    if asset.has_control("EDR"):
        if adversary.has_technique(*EDR_BYPASS_TECHNIQUES):
            score += 0.3
        else:
            score -= 0.2
    else:
        # Undefended endpoint
        score += 0.4

    if asset.has_control("AV"):
        if adversary.has_technique(*AV_BYPASS_TECHNIQUES):
            score += 0.4
        else:
            score -= 0.1

    score = min(MAX_EVASION, max(MIN_EVASION, score))

    logger.debug(
        f"Evasion of {adversary.name} against {asset.asset_id}: {score:.2f}"
    )

    return EvasionResult(
        score=score,
        breakdown=[
            ControlScore(control=control, score=score * weight * 100)
            for control, weight in BREAKDOWN_WEIGHTS
        ],
    )
