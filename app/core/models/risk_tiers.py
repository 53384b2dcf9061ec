"""
Hayfever risk tiers and the outdoor activity rules derived from them.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class RiskTier(str, Enum):
    """The five normalised hayfever risk categories."""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "veryHigh"
    EXTREME = "extreme"


@dataclass(frozen=True)
class ActivityRule:
    """Safe and avoid time windows for outdoor activity at a given risk tier."""
    safe_windows: Tuple[str, ...]
    avoid_times: Tuple[str, ...]
    window_open_guidance: str

    @property
    def has_safe_window(self) -> bool:
        return len(self.safe_windows) > 0


ACTIVITY_RULES = {
    RiskTier.LOW: ActivityRule(
        safe_windows=("06:00-09:00", "18:00-06:00"),
        avoid_times=("10:00-17:00",),
        window_open_guidance="after 18:00",
    ),
    RiskTier.MODERATE: ActivityRule(
        safe_windows=("06:00-08:00", "20:00-06:00"),
        avoid_times=("08:00-20:00",),
        window_open_guidance="after 20:00",
    ),
    RiskTier.HIGH: ActivityRule(
        safe_windows=("22:00-06:00",),
        avoid_times=("06:00-22:00",),
        window_open_guidance="after 22:00",
    ),
    RiskTier.VERY_HIGH: ActivityRule(
        safe_windows=("23:00-05:00",),
        avoid_times=("05:00-23:00",),
        window_open_guidance="after 23:00",
    ),
    RiskTier.EXTREME: ActivityRule(
        safe_windows=(),
        avoid_times=("all day",),
        window_open_guidance="never",
    ),
}

# Lookup keys are the raw risk level lower-cased with spaces and hyphens removed
_TIER_KEYS = {
    "low": RiskTier.LOW,
    "moderate": RiskTier.MODERATE,
    "high": RiskTier.HIGH,
    "veryhigh": RiskTier.VERY_HIGH,
    "extreme": RiskTier.EXTREME,
}

# Labels treated as high risk when choosing a demo narrative
HIGH_RISK_LABELS = frozenset({"high", "very high", "extreme"})

RISK_COLORS = {
    "low": "#22c55e",       # Green
    "moderate": "#eab308",  # Yellow
    "high": "#f59e0b",      # Amber
    "very high": "#ef4444", # Red
    "extreme": "#dc2626",   # Dark red
}
DEFAULT_RISK_COLOR = "hsl(0, 0%, 50%)"


def normalize_risk_tier(risk_level: str) -> RiskTier:
    """
    Map a free-text risk level onto one of the five tiers.

    Unrecognised labels fall back to MODERATE.

    Args:
        risk_level (str): Raw risk level such as "Very High" or "very-high"

    Returns:
        RiskTier: The matching tier
    """
    key = (risk_level or "").lower().replace(" ", "").replace("-", "")
    return _TIER_KEYS.get(key, RiskTier.MODERATE)


def get_activity_rule(risk_level: str) -> ActivityRule:
    """Get the activity rule for a raw risk level."""
    return ACTIVITY_RULES[normalize_risk_tier(risk_level)]


def is_high_risk(risk_level: str) -> bool:
    """Whether the demo responder should use its high-risk narratives."""
    return (risk_level or "").lower() in HIGH_RISK_LABELS


def get_risk_color(risk_level: str) -> str:
    """Get the display colour for a risk level."""
    return RISK_COLORS.get((risk_level or "").lower(), DEFAULT_RISK_COLOR)
