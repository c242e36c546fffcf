"""Quality Classifier - Maps a measured latency to a quality tier."""

from typing import Optional

from linkwatch.core.constants import (EXCELLENT_LATENCY_MS, FAIR_LATENCY_MS,
                                      GOOD_LATENCY_MS)
from linkwatch.core.types import QualityTier


def classify(is_online: bool, latency_ms: Optional[int]) -> QualityTier:
    """
    Classify connection quality.

    Args:
        is_online: Current reachability estimate
        latency_ms: Round-trip time of the last successful probe, if any

    Returns:
        OFFLINE when not online, UNKNOWN when online without a measurement,
        otherwise the latency bucket.
    """
    if not is_online:
        return QualityTier.OFFLINE
    if latency_ms is None:
        return QualityTier.UNKNOWN
    if latency_ms < EXCELLENT_LATENCY_MS:
        return QualityTier.EXCELLENT
    if latency_ms < GOOD_LATENCY_MS:
        return QualityTier.GOOD
    if latency_ms < FAIR_LATENCY_MS:
        return QualityTier.FAIR
    return QualityTier.POOR
