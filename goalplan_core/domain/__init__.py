from goalplan_core.domain.models import (  # noqa: F401
    ACHIEVABLE,
    NOT_ACHIEVABLE,
    Category,
    CurvePoint,
    Goal,
    HorizonGuidance,
    Insight,
    Recommendation,
    RiskLabel,
    Scenario,
)

__all__ = [
    "ACHIEVABLE",
    "NOT_ACHIEVABLE",
    "Category",
    "CurvePoint",
    "Goal",
    "HorizonGuidance",
    "Insight",
    "Recommendation",
    "RiskLabel",
    "Scenario",
]
