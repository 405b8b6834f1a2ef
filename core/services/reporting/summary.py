from __future__ import annotations

from typing import Iterable

from core.services.reporting.helpers import (
    as_text_list,
    clamp_percent,
    coerce_number,
    has_text,
    percent,
    ratio,
    round_half_up,
    signed_percent,
)
from core.services.reporting.models import ActivityGroup, ReportsSummary


def summarize_groups(groups: Iterable[ActivityGroup]) -> ReportsSummary:
    """List-level statistics over already aggregated (and filtered) groups.

    Cost, impact and participant figures roll up the group totals, so every
    counted report contributes its task once. Attendance is averaged per counted
    report, to one decimal place. Budget efficiency is estimate over spend; with
    nothing spent or nothing estimated it is 100.
    """
    total_reports = 0
    estimated_cost = 0
    actual_cost = 0
    expected_impact = 0
    actual_impact = 0
    expected_participants = 0
    actual_participants = 0
    with_evidence = 0
    with_challenges = 0
    with_suggestions = 0
    activities = set()
    teams = set()

    for group in groups:
        activities.add(group.activity.id)
        estimated_cost += coerce_number(group.total_estimated_cost)
        actual_cost += coerce_number(group.total_actual_cost)
        expected_impact += coerce_number(group.total_expected_financial_impact)
        actual_impact += coerce_number(group.total_actual_financial_impact)
        expected_participants += coerce_number(group.total_expected_participants)
        actual_participants += coerce_number(group.total_actual_participants)
        for record in group.records:
            report = record.report
            total_reports += 1
            if record.task.team_id:
                teams.add(str(record.task.team_id))
            if as_text_list(report.evidence_urls):
                with_evidence += 1
            if has_text(report.challenges_faced):
                with_challenges += 1
            if has_text(report.suggestions):
                with_suggestions += 1

    estimated_cost = coerce_number(estimated_cost)
    actual_cost = coerce_number(actual_cost)
    expected_impact = coerce_number(expected_impact)
    actual_impact = coerce_number(actual_impact)
    expected_participants = coerce_number(expected_participants)
    actual_participants = coerce_number(actual_participants)
    cost_variance = coerce_number(actual_cost - estimated_cost)
    impact_variance = coerce_number(actual_impact - expected_impact)

    average = 0.0
    if total_reports:
        average = round_half_up(actual_participants / total_reports * 10) / 10

    efficiency = 100
    if estimated_cost and actual_cost:
        efficiency = percent(estimated_cost, actual_cost)

    return ReportsSummary(
        total_reports=total_reports,
        total_activities=len(activities),
        total_teams=len(teams),
        total_cost=actual_cost,
        total_participants=actual_participants,
        average_attendance=average,
        reports_with_evidence=with_evidence,
        reports_with_challenges=with_challenges,
        reports_with_suggestions=with_suggestions,
        evidence_percentage=clamp_percent(percent(with_evidence, total_reports)),
        challenges_percentage=clamp_percent(percent(with_challenges, total_reports)),
        suggestions_percentage=clamp_percent(percent(with_suggestions, total_reports)),
        total_estimated_cost=estimated_cost,
        cost_variance=cost_variance,
        cost_variance_percentage=signed_percent(cost_variance, estimated_cost),
        total_expected_financial_impact=expected_impact,
        total_actual_financial_impact=actual_impact,
        financial_impact_variance=impact_variance,
        financial_impact_variance_percentage=signed_percent(impact_variance, expected_impact),
        average_cost_per_activity=ratio(actual_cost, len(activities)),
        average_cost_per_task=ratio(actual_cost, total_reports),
        budget_efficiency=efficiency,
        total_expected_participants=expected_participants,
        participation_rate=clamp_percent(percent(actual_participants, expected_participants)),
        average_participants_per_activity=ratio(actual_participants, len(activities)),
        average_participants_per_task=ratio(actual_participants, total_reports),
    )


__all__ = ["summarize_groups"]
