from __future__ import annotations

from typing import List, Optional

from core.models import ActivitySnapshot, PerformanceStatus, Report, RiskLevel, Task
from core.services.reporting.helpers import (
    as_text_list,
    clamp_percent,
    coerce_number,
    has_text,
    percent,
    round_half_up,
    signed_percent,
)
from core.services.reporting.models import TaskPerformance
from core.services.reporting.policy import DEFAULT_POLICY, ScoringPolicy
from core.services.reporting.variance import reports_by_task


def report_has_evidence(report: Optional[Report]) -> bool:
    if report is None:
        return False
    return bool(as_text_list(report.evidence_urls))


def report_has_narrative(report: Optional[Report]) -> bool:
    if report is None:
        return False
    return any(
        has_text(value)
        for value in (report.comment, report.challenges_faced, report.suggestions)
    )


def cost_efficiency(cost_variance_percentage: int) -> int:
    # overruns and underruns both point at a planning miss
    return clamp_percent(100 - abs(cost_variance_percentage))


def participant_engagement(expected, actual) -> int:
    if expected > 0:
        return clamp_percent(percent(actual, expected))
    return 100 if actual > 0 else 0


def completion_quality(report: Optional[Report], policy: ScoringPolicy = DEFAULT_POLICY) -> int:
    if report is None:
        return 0
    points = policy.report_points
    if report_has_evidence(report):
        points += policy.evidence_points
    if report_has_narrative(report):
        points += policy.narrative_points
    return clamp_percent(points)


def classify_status(score: int, policy: ScoringPolicy = DEFAULT_POLICY) -> PerformanceStatus:
    if score >= policy.excellent_score:
        return PerformanceStatus.EXCELLENT
    if score >= policy.good_score:
        return PerformanceStatus.GOOD
    if score >= policy.average_score:
        return PerformanceStatus.AVERAGE
    return PerformanceStatus.NEEDS_IMPROVEMENT


def classify_risk(
    score: int,
    cost_variance_percentage: int,
    policy: ScoringPolicy = DEFAULT_POLICY,
    *,
    use_score: bool = True,
) -> RiskLevel:
    """
    High when the score is poor or the cost drifted far from the estimate,
    medium on smaller misses. ``use_score=False`` classifies on cost drift only.
    """
    drift = abs(cost_variance_percentage)
    if (use_score and score < policy.high_risk_score) or drift > policy.high_risk_cost_variance:
        return RiskLevel.HIGH
    if (use_score and score < policy.medium_risk_score) or drift > policy.medium_risk_cost_variance:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def score_task(
    task: Task,
    report: Optional[Report],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> TaskPerformance:
    """Performance of one task, with or without its completion report.

    A task without a report is scored on its recorded figures (anything not yet
    recorded counts as 0) and gets no documentation credit. Its risk follows the
    cost drift only, since its outcome is not reported yet.
    """
    estimated = coerce_number(task.estimated_cost)
    actual = coerce_number(task.actual_cost)
    variance_pct = signed_percent(actual - estimated, estimated)

    efficiency = cost_efficiency(variance_pct)
    engagement = participant_engagement(
        coerce_number(task.expected_participants),
        coerce_number(task.actual_participants),
    )
    quality = completion_quality(report, policy)
    score = clamp_percent(
        round_half_up(
            policy.cost_weight * efficiency
            + policy.engagement_weight * engagement
            + policy.quality_weight * quality
        )
    )

    return TaskPerformance(
        task_id=task.id,
        task_title=task.title or "",
        has_report=report is not None,
        has_evidence=report_has_evidence(report),
        has_narrative=report_has_narrative(report),
        performance_score=score,
        cost_efficiency=efficiency,
        participant_engagement=engagement,
        completion_quality=quality,
        cost_variance_percentage=variance_pct,
        risk_level=classify_risk(score, variance_pct, policy, use_score=report is not None),
        status=classify_status(score, policy),
    )


def score_tasks(snapshot: ActivitySnapshot, policy: ScoringPolicy = DEFAULT_POLICY) -> List[TaskPerformance]:
    reports = reports_by_task(snapshot)
    return [score_task(task, reports.get(task.id), policy) for task in snapshot.tasks]


__all__ = [
    "report_has_evidence",
    "report_has_narrative",
    "cost_efficiency",
    "participant_engagement",
    "completion_quality",
    "classify_status",
    "classify_risk",
    "score_task",
    "score_tasks",
]
