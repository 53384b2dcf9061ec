from .risk_tiers import RiskTier, ActivityRule, normalize_risk_tier, get_activity_rule, is_high_risk
from .scenario_catalog import ScenarioCatalog, scenario_catalog

__all__ = [
    "RiskTier",
    "ActivityRule",
    "normalize_risk_tier",
    "get_activity_rule",
    "is_high_risk",
    "ScenarioCatalog",
    "scenario_catalog"
]
