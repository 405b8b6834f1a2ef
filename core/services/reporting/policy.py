from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringPolicy:
    """Thresholds and weights behind task scoring and activity insights.

    The values mirror the categories the reporting UI colour-codes; they are
    product policy, so every number the engine compares against lives here.
    """

    # performance score = weighted mean of the three sub-scores
    cost_weight: float = 0.30
    engagement_weight: float = 0.40
    quality_weight: float = 0.30

    # completion quality points
    report_points: int = 40
    evidence_points: int = 30
    narrative_points: int = 30

    # task status buckets (performance score)
    excellent_score: int = 85
    good_score: int = 70
    average_score: int = 50

    # task risk
    high_risk_score: int = 50
    medium_risk_score: int = 75
    high_risk_cost_variance: int = 25
    medium_risk_cost_variance: int = 10

    # overall activity status (completion and participation rates)
    overall_excellent_rate: int = 90
    overall_good_rate: int = 70
    overall_average_rate: int = 50

    # insight triggers
    high_completion_rate: int = 90
    high_participation_rate: int = 90
    low_participation_rate: int = 50
    engagement_recommendation_rate: int = 75
    completion_recommendation_rate: int = 80
    cost_overrun_recommendation: int = 10


DEFAULT_POLICY = ScoringPolicy()


__all__ = ["ScoringPolicy", "DEFAULT_POLICY"]
