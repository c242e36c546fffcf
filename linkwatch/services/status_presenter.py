"""Status Presenter - Pure derivations of UI-facing text, colors and icons."""

from linkwatch.core.i18n import t
from linkwatch.core.types import ConnectivityState, QualityTier

_COLORS = {
    QualityTier.EXCELLENT: "success",
    QualityTier.GOOD: "success",
    QualityTier.FAIR: "warning",
    QualityTier.POOR: "warning",
    QualityTier.OFFLINE: "danger",
    QualityTier.UNKNOWN: "secondary",
}

_ICONS = {
    QualityTier.EXCELLENT: "wifi",
    QualityTier.GOOD: "wifi",
    QualityTier.FAIR: "wifi",
    QualityTier.POOR: "wifi",
    QualityTier.OFFLINE: "wifi-off",
    QualityTier.UNKNOWN: "question-circle",
}

_BARS = {
    QualityTier.EXCELLENT: 4,
    QualityTier.GOOD: 3,
    QualityTier.FAIR: 2,
    QualityTier.POOR: 1,
    QualityTier.OFFLINE: 0,
    QualityTier.UNKNOWN: 0,
}

_QUALITY_DEFAULTS = {
    QualityTier.EXCELLENT: "Excellent Connection",
    QualityTier.GOOD: "Good Connection",
    QualityTier.FAIR: "Fair Connection",
    QualityTier.POOR: "Poor Connection",
    QualityTier.OFFLINE: "No Connection",
    QualityTier.UNKNOWN: "Connection Status Unknown",
}


def is_connection_good(tier: QualityTier) -> bool:
    return tier in (QualityTier.EXCELLENT, QualityTier.GOOD)


def is_connection_poor(tier: QualityTier) -> bool:
    return tier in (QualityTier.FAIR, QualityTier.POOR)


def status_text(state: ConnectivityState) -> str:
    """'Online (120ms)', 'Online' or 'Offline'."""
    if not state.is_online:
        return t("status.offline", default="Offline")
    if state.latency_ms is not None:
        return t("status.online_latency", default="Online ({latency}ms)", latency=state.latency_ms)
    return t("status.online", default="Online")


def quality_text(tier: QualityTier) -> str:
    return t(f"quality.{tier.value}", default=_QUALITY_DEFAULTS[tier])


def status_color(tier: QualityTier) -> str:
    """Badge color token: success, warning, danger or secondary."""
    return _COLORS.get(tier, "secondary")


def connection_icon(tier: QualityTier) -> str:
    return _ICONS.get(tier, "question-circle")


def connection_bars(tier: QualityTier) -> int:
    """Signal-strength bars, 0 to 4."""
    return _BARS.get(tier, 0)
