from __future__ import annotations

from typing import Dict, List

from core.models import ActivitySnapshot, Report
from core.services.reporting.aggregation import canonical_reports
from core.services.reporting.helpers import (
    as_text_list,
    clamp_percent,
    coerce_number,
    percent,
    ratio,
    signed_percent,
)
from core.services.reporting.models import (
    ActivityGroup,
    ActivitySummary,
    CostBreakdownRow,
    FinancialAnalysis,
    GroupMetrics,
    ParticipantAnalysis,
    ParticipantDistributionRow,
)


def reports_by_task(snapshot: ActivitySnapshot) -> Dict[str, Report]:
    """Canonical report for every task of the snapshot that has one."""
    return canonical_reports(snapshot.reports, task_ids=[task.id for task in snapshot.tasks])


def activity_summary(snapshot: ActivitySnapshot) -> ActivitySummary:
    completed_ids = reports_by_task(snapshot)
    total = len(snapshot.tasks)
    completed = sum(1 for task in snapshot.tasks if task.id in completed_ids)
    return ActivitySummary(
        total_tasks=total,
        completed_tasks=completed,
        pending_tasks=total - completed,
        completion_rate=clamp_percent(percent(completed, total)),
        total_cost=coerce_number(sum((coerce_number(t.actual_cost) for t in snapshot.tasks), 0)),
        total_participants=coerce_number(
            sum((coerce_number(t.actual_participants) for t in snapshot.tasks), 0)
        ),
    )


def financial_analysis(snapshot: ActivitySnapshot) -> FinancialAnalysis:
    """
    Estimated vs actual cost over every live task of the activity.
    A positive variance means the activity ran over budget.
    """
    breakdown: List[CostBreakdownRow] = []
    total_estimated = 0
    total_actual = 0
    expected_impact = 0
    actual_impact = 0
    total_participants = 0

    for task in snapshot.tasks:
        estimated = coerce_number(task.estimated_cost)
        actual = coerce_number(task.actual_cost)
        total_estimated += estimated
        total_actual += actual
        expected_impact += coerce_number(task.expected_financial_impact)
        actual_impact += coerce_number(task.actual_financial_impact)
        total_participants += coerce_number(task.actual_participants)
        breakdown.append(
            CostBreakdownRow(
                task_id=task.id,
                task_title=task.title or "",
                estimated_cost=estimated,
                actual_cost=actual,
                variance=coerce_number(actual - estimated),
                variance_percentage=signed_percent(actual - estimated, estimated),
            )
        )

    # overflowed totals count as 0
    total_estimated = coerce_number(total_estimated)
    total_actual = coerce_number(total_actual)
    expected_impact = coerce_number(expected_impact)
    actual_impact = coerce_number(actual_impact)
    total_participants = coerce_number(total_participants)
    cost_variance = coerce_number(total_actual - total_estimated)
    impact_variance = coerce_number(actual_impact - expected_impact)
    return FinancialAnalysis(
        total_estimated_cost=total_estimated,
        total_actual_cost=total_actual,
        cost_variance=cost_variance,
        cost_variance_percentage=signed_percent(cost_variance, total_estimated),
        budget_utilization=percent(total_actual, total_estimated),
        cost_per_participant=ratio(total_actual, total_participants),
        cost_per_task=ratio(total_actual, len(snapshot.tasks)),
        total_expected_financial_impact=expected_impact,
        total_actual_financial_impact=actual_impact,
        financial_impact_variance=impact_variance,
        financial_impact_variance_percentage=signed_percent(impact_variance, expected_impact),
        cost_breakdown=breakdown,
    )


def participant_analysis(snapshot: ActivitySnapshot) -> ParticipantAnalysis:
    reports = reports_by_task(snapshot)
    distribution: List[ParticipantDistributionRow] = []
    total_expected = 0
    total_actual = 0

    for task in snapshot.tasks:
        expected = coerce_number(task.expected_participants)
        actual = coerce_number(task.actual_participants)
        total_expected += expected
        total_actual += actual
        report = reports.get(task.id)
        names = [getattr(p, "name", None) for p in (report.attendees or [])] if report is not None else []
        distribution.append(
            ParticipantDistributionRow(
                task_id=task.id,
                task_title=task.title or "",
                expected=expected,
                actual=actual,
                variance=coerce_number(actual - expected),
                participants=as_text_list(names),
            )
        )

    total_expected = coerce_number(total_expected)
    total_actual = coerce_number(total_actual)
    return ParticipantAnalysis(
        total_expected_participants=total_expected,
        total_actual_participants=total_actual,
        participation_rate=clamp_percent(percent(total_actual, total_expected)),
        participant_variance=coerce_number(total_actual - total_expected),
        average_participants_per_task=ratio(total_actual, len(snapshot.tasks)),
        participant_distribution=distribution,
    )


def group_metrics(group: ActivityGroup) -> GroupMetrics:
    cost_variance = coerce_number(group.total_actual_cost - group.total_estimated_cost)
    return GroupMetrics(
        completion_rate=clamp_percent(percent(group.completed_tasks, group.total_tasks)),
        cost_variance=cost_variance,
        cost_variance_percentage=signed_percent(cost_variance, group.total_estimated_cost),
        participation_rate=clamp_percent(
            percent(group.total_actual_participants, group.total_expected_participants)
        ),
        financial_impact_variance=coerce_number(
            group.total_actual_financial_impact - group.total_expected_financial_impact
        ),
    )


__all__ = [
    "reports_by_task",
    "activity_summary",
    "financial_analysis",
    "participant_analysis",
    "group_metrics",
]
