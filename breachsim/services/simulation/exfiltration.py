"""Physical model of exfiltrating a node's data over a transport protocol."""

import logging
import math

from breachsim.services.simulation.errors import InvalidInputError
from breachsim.services.simulation.models import (
    Asset,
    ExfilConfig,
    ExfiltrationResult,
)

logger = logging.getLogger(__name__)

# Protocol constants
#   overhead: framing/encoding bytes added per payload byte
#   base_speed: fraction of the bandwidth limit the protocol can use
#   detection_rate: baseline chance the channel gets flagged
PROTOCOL_PROFILES = {
    "DNS": {"overhead": 0.65, "base_speed": 0.05, "detection_rate": 0.1},
    "HTTPS": {"overhead": 0.10, "base_speed": 0.90, "detection_rate": 0.3},
    "FTP": {"overhead": 0.02, "base_speed": 1.00, "detection_rate": 0.9},
}
DEFAULT_PROTOCOL = "HTTPS"

# Volume assumed for assets without a recorded data volume
DEFAULT_DATA_VOLUME_GB = 50

JITTER_PENALTY = 0.4
CLEARTEXT_DETECTION_BONUS = 40

BYTES_PER_MB = 1024 * 1024


def _format_duration(seconds: float) -> str:
    """Render a duration like ``2d 03h 14m`` or ``1h 05m 09s``."""
    total = int(round(seconds))
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    if days:
        return f"{days}d {hours:02d}h {minutes:02d}m"
    if hours:
        return f"{hours}h {minutes:02d}m {secs:02d}s"
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def get_protocol_profile(protocol: str) -> dict[str, float]:
    """Get constants for a protocol, falling back to HTTPS."""
    profile = PROTOCOL_PROFILES.get((protocol or "").upper())
    if profile is None:
        logger.debug(f"No profile for protocol {protocol!r}, using {DEFAULT_PROTOCOL}")
        return PROTOCOL_PROFILES[DEFAULT_PROTOCOL]
    return profile


def calculate_exfil_physics(asset: Asset, config: ExfilConfig) -> ExfiltrationResult:
    """Compute duration, throughput and detectability of an exfiltration.

    Args:
        asset: Node holding the data
        config: Transport configuration

    Returns:
        ExfiltrationResult

    Raises:
        InvalidInputError: If bandwidth or chunk size is not positive, or
            jitter falls outside [0, 1]
    """
    if config.bandwidth_limit <= 0:
        raise InvalidInputError("bandwidth_limit must be positive")
    if config.chunk_size <= 0:
        raise InvalidInputError("chunk_size must be positive")
    if not 0 <= config.jitter <= 1:
        raise InvalidInputError("jitter must be between 0 and 1")

    profile = get_protocol_profile(config.protocol)

    volume_gb = asset.data_volume_gb
    if volume_gb is None:
        volume_gb = DEFAULT_DATA_VOLUME_GB

    raw_mb = volume_gb * 1024
    overhead_multiplier = 1 + profile["overhead"]
    total_mb = raw_mb * overhead_multiplier

    effective_mbps = (
        config.bandwidth_limit
        * profile["base_speed"]
        * (1 - config.jitter * JITTER_PENALTY)
    )

    total_bits = total_mb * 8 * BYTES_PER_MB
    speed_bps = effective_mbps * BYTES_PER_MB
    seconds = total_bits / speed_bps

    detection = profile["detection_rate"] * 100
    if (config.encryption or "").upper() == "NONE":
        detection += CLEARTEXT_DETECTION_BONUS

    total_bytes = total_mb * BYTES_PER_MB
    packets = math.ceil(total_bytes / config.chunk_size)

    logger.debug(
        f"Exfil of {volume_gb} GB from {asset.asset_id} over {config.protocol}: "
        f"{seconds:.0f}s at {effective_mbps:.2f} Mbps"
    )

    return ExfiltrationResult(
        total_size_mb=round(total_mb, 2),
        total_size_gb=round(total_mb / 1024, 2),
        overhead_pct=_round_half_up((overhead_multiplier - 1) * 100),
        duration_seconds=seconds,
        duration=_format_duration(seconds),
        throughput_mbps=round(effective_mbps, 2),
        detection_score=min(100, _round_half_up(detection)),
        packets=packets,
    )
