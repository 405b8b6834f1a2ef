from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from core.models import InsightCategory, OverallStatus, PerformanceStatus
from core.services.reporting.helpers import format_amount
from core.services.reporting.models import (
    ActivitySummary,
    FinancialAnalysis,
    Insights,
    ParticipantAnalysis,
    TaskPerformance,
)
from core.services.reporting.policy import DEFAULT_POLICY, ScoringPolicy


def overall_status(
    summary: ActivitySummary,
    participants: ParticipantAnalysis,
    performances: Sequence[TaskPerformance],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> OverallStatus:
    """
    Checked from the top bucket down, so whenever completion and participation
    disagree the activity lands in the lower bucket.
    """
    if summary.total_tasks == 0:
        return OverallStatus.POOR

    completion = summary.completion_rate
    participation = participants.participation_rate
    struggling = any(p.status == PerformanceStatus.NEEDS_IMPROVEMENT for p in performances)

    if (
        completion >= policy.overall_excellent_rate
        and participation >= policy.overall_excellent_rate
        and not struggling
    ):
        return OverallStatus.EXCELLENT
    if completion >= policy.overall_good_rate and participation >= policy.overall_good_rate:
        return OverallStatus.GOOD
    if completion >= policy.overall_average_rate or participation >= policy.overall_average_rate:
        return OverallStatus.AVERAGE
    return OverallStatus.POOR


# ---- key points (one per category at most) ----

def _financial_point(financial: FinancialAnalysis) -> Optional[str]:
    estimated = financial.total_estimated_cost
    actual = financial.total_actual_cost
    variance = financial.cost_variance
    rows = financial.cost_breakdown

    if estimated == 0 and actual > 0:
        return (
            f"No cost was estimated but {format_amount(actual)} was spent "
            f"(overrun of {format_amount(actual)})"
        )
    if variance > 0:
        return (
            f"Actual cost exceeded the estimate by {format_amount(variance)} "
            f"({financial.cost_variance_percentage}%)"
        )
    if rows and all(row.variance <= 0 for row in rows):
        return "All tasks stayed within budget"
    if variance < 0:
        return (
            f"Activity came in {format_amount(-variance)} under budget "
            f"({abs(financial.cost_variance_percentage)}%)"
        )
    if rows:
        return "Actual cost matched the estimate"
    return None


def _participation_point(
    participants: ParticipantAnalysis, policy: ScoringPolicy
) -> Optional[str]:
    expected = participants.total_expected_participants
    actual = participants.total_actual_participants
    rate = participants.participation_rate

    if expected == 0:
        if actual > 0:
            return f"{format_amount(actual)} participants attended without an expected count"
        return None
    if actual > expected:
        return f"Attendance exceeded expectations by {format_amount(actual - expected)} participants"
    if rate >= policy.high_participation_rate:
        return f"Participation rate reached {rate}%"
    if rate < policy.low_participation_rate:
        return (
            f"Only {format_amount(actual)} of {format_amount(expected)} "
            "expected participants attended"
        )
    return None


def _completion_point(summary: ActivitySummary, policy: ScoringPolicy) -> str:
    total = summary.total_tasks
    completed = summary.completed_tasks
    rate = summary.completion_rate

    if total == 0:
        return "No tasks have been planned for this activity"
    if completed == total:
        return f"All {total} tasks have completion reports"
    if rate >= policy.high_completion_rate:
        return f"Completion rate reached {rate}%"
    if completed == 0:
        return "No completion reports have been submitted yet"
    return f"{completed} of {total} tasks have been reported"


def _documentation_point(performances: Sequence[TaskPerformance]) -> Optional[str]:
    reported = [p for p in performances if p.has_report]
    if not reported:
        return None
    with_evidence = sum(1 for p in reported if p.has_evidence)
    if with_evidence == len(reported):
        return "Every submitted report includes evidence"
    if with_evidence == 0:
        return "None of the submitted reports include evidence"
    return f"{with_evidence} of {len(reported)} submitted reports include evidence"


# ---- recommendations (negative signals only) ----

def _financial_recommendation(
    financial: FinancialAnalysis, policy: ScoringPolicy
) -> Optional[str]:
    if financial.total_estimated_cost == 0 and financial.total_actual_cost > 0:
        return (
            "Record cost estimates before work starts; "
            f"{format_amount(financial.total_actual_cost)} was spent without one"
        )
    if financial.cost_variance_percentage > policy.cost_overrun_recommendation:
        return (
            "Review cost management practices: spending ran "
            f"{financial.cost_variance_percentage}% over the estimate"
        )
    overruns = [
        row.task_title or row.task_id
        for row in financial.cost_breakdown
        if row.variance_percentage > policy.high_risk_cost_variance
    ]
    if overruns:
        return (
            f"Investigate cost overruns above {policy.high_risk_cost_variance}% on: "
            + ", ".join(overruns)
        )
    return None


def _participation_recommendation(
    participants: ParticipantAnalysis, policy: ScoringPolicy
) -> Optional[str]:
    if participants.total_expected_participants <= 0:
        return None
    rate = participants.participation_rate
    if rate < policy.engagement_recommendation_rate:
        return (
            "Improve participant engagement: only "
            f"{rate}% of expected participants attended"
        )
    return None


def _completion_recommendation(summary: ActivitySummary, policy: ScoringPolicy) -> Optional[str]:
    if summary.pending_tasks > 0 and summary.completion_rate < policy.completion_recommendation_rate:
        return (
            f"Follow up on {summary.pending_tasks} task(s) still waiting "
            "for a completion report"
        )
    return None


def _documentation_recommendation(performances: Sequence[TaskPerformance]) -> Optional[str]:
    reported = [p for p in performances if p.has_report]
    missing_evidence = sum(1 for p in reported if not p.has_evidence)
    if missing_evidence:
        return f"Attach evidence to {missing_evidence} report(s) submitted without it"
    missing_narrative = sum(1 for p in reported if not p.has_narrative)
    if missing_narrative:
        return (
            "Add comments, challenges or suggestions to "
            f"{missing_narrative} report(s) with no narrative"
        )
    return None


def build_insights(
    summary: ActivitySummary,
    financial: FinancialAnalysis,
    participants: ParticipantAnalysis,
    performances: Sequence[TaskPerformance],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Insights:
    """Overall status plus the key points and recommendations whose triggers fire.

    Categories are emitted in a fixed order (financial, participation,
    completion, documentation). Recommendations stay empty when nothing
    negative was detected.
    """
    points: Dict[InsightCategory, Optional[str]] = {
        InsightCategory.FINANCIAL: _financial_point(financial),
        InsightCategory.PARTICIPATION: _participation_point(participants, policy),
        InsightCategory.COMPLETION: _completion_point(summary, policy),
        InsightCategory.DOCUMENTATION: _documentation_point(performances),
    }
    advice: Dict[InsightCategory, Optional[str]] = {
        InsightCategory.FINANCIAL: _financial_recommendation(financial, policy),
        InsightCategory.PARTICIPATION: _participation_recommendation(participants, policy),
        InsightCategory.COMPLETION: _completion_recommendation(summary, policy),
        InsightCategory.DOCUMENTATION: _documentation_recommendation(performances),
    }
    key_points: List[str] = [points[c] for c in InsightCategory if points.get(c)]
    recommendations: List[str] = [advice[c] for c in InsightCategory if advice.get(c)]
    return Insights(
        overall_status=overall_status(summary, participants, performances, policy),
        key_points=key_points,
        recommendations=recommendations,
    )


__all__ = ["overall_status", "build_insights"]
