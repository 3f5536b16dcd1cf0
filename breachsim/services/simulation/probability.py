"""Per-node compromise probability model."""

from breachsim.services.simulation.models import Adversary, Asset, AssetStatus

BASE_DEFENSE_SCORE = 50
ONLINE_DEFENSE_BONUS = 10
ADVANCED_ATTACK_SCORE = 90
BASE_ATTACK_SCORE = 50

# No hop is ever certain or impossible
MIN_PROBABILITY = 0.1
MAX_PROBABILITY = 0.99


def compromise_probability(asset: Asset, adversary: Adversary) -> float:
    """Probability that an adversary defeats a single node's defenses.

    Args:
        asset: Node being attacked
        adversary: Attacking threat actor

    Returns:
        Probability in [0.1, 0.99]
    """
    defense_score = BASE_DEFENSE_SCORE
    if asset.status == AssetStatus.ONLINE:
        defense_score += ONLINE_DEFENSE_BONUS

    if adversary.sophistication.is_advanced:
        attack_score = ADVANCED_ATTACK_SCORE
    else:
        attack_score = BASE_ATTACK_SCORE

    raw = (attack_score - defense_score + 50) / 100
    return max(MIN_PROBABILITY, min(MAX_PROBABILITY, raw))
