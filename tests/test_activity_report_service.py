from __future__ import annotations

from datetime import date, datetime

import pytest

from core.exceptions import NotFoundError, ValidationError
from core.models import Activity, ActivitySnapshot, OverallStatus, PerformanceStatus, RiskLevel
from core.reporting.api import activity_report_payload, dumps_payload
from core.services.reporting import ReportFilterCriteria, ReportingService
from infra.operational_support import bind_trace_id, current_trace_id


def test_cleanup_day_activity_report(services, cleanup_day):
    reporting = services["reporting_service"]

    report = reporting.get_activity_report(cleanup_day["activity"].id)

    assert report.activity.title == "Cleanup Day"
    assert report.activity.village_name == "Kagugu"
    assert report.summary.total_tasks == 2
    assert report.summary.completion_rate == 50
    assert report.financial_analysis.total_estimated_cost == 1500
    assert report.financial_analysis.total_actual_cost == 1600
    assert report.financial_analysis.cost_variance == 100
    assert report.participant_analysis.participation_rate == 93

    rows = {row.task.title: row for row in report.task_overview}
    task_a = rows["Task A"]
    task_b = rows["Task B"]
    assert task_a.report is not None
    assert task_a.report.id == cleanup_day["report_a"].id
    assert [p.name for p in task_a.report.attendees] == ["Alice", "Bob"]
    assert task_a.performance.status in (PerformanceStatus.EXCELLENT, PerformanceStatus.GOOD)
    assert task_b.report is None
    assert task_b.performance.risk_level in (RiskLevel.LOW, RiskLevel.MEDIUM)
    assert task_a.task.team_name == "Isibo A"

    assert report.insights.overall_status == OverallStatus.AVERAGE


def test_missing_activity_raises_not_found(services):
    with pytest.raises(NotFoundError) as exc:
        services["reporting_service"].get_activity_report("does-not-exist")
    assert exc.value.code == "ACTIVITY_NOT_FOUND"


def test_blank_activity_id_is_rejected(services):
    with pytest.raises(ValidationError):
        services["reporting_service"].get_activity_report("  ")


def test_zero_task_activity_report(services, seed):
    activity = seed.activity("Planning meeting", date(2026, 5, 2))

    report = services["reporting_service"].get_activity_report(activity.id)

    assert report.summary.completion_rate == 0
    assert report.participant_analysis.participation_rate == 0
    assert report.task_overview == []
    assert report.insights.overall_status == OverallStatus.POOR


def test_zero_estimate_activity_surfaces_overrun(services, seed):
    activity = seed.activity("Emergency repair", date(2026, 2, 10))
    task = seed.task(activity, "Hire truck", estimated_cost=0, actual_cost=300)
    seed.report(task, comment="Truck hired for the day")

    report = services["reporting_service"].get_activity_report(activity.id)

    assert report.financial_analysis.cost_variance_percentage == 0
    assert report.task_overview[0].performance.cost_variance_percentage == 0
    assert any("300" in point for point in report.insights.key_points)
    assert any("300" in item for item in report.insights.recommendations)


def test_removed_tasks_and_their_reports_are_ignored(services, seed, cleanup_day):
    seed.remove_task(cleanup_day["task_b"])
    report = services["reporting_service"].get_activity_report(cleanup_day["activity"].id)

    assert [row.task.title for row in report.task_overview] == ["Task A"]
    assert report.summary.completion_rate == 100
    assert report.activity.task_count == 1


def test_duplicate_reports_count_once(services, seed, cleanup_day):
    later = seed.report(cleanup_day["task_a"], comment="Second submission",
                        created_at=datetime(2026, 3, 9, 8, 0))

    report = services["reporting_service"].get_activity_report(cleanup_day["activity"].id)

    assert report.summary.completed_tasks == 1
    row = next(r for r in report.task_overview if r.task.title == "Task A")
    assert row.report.id != later.id


def test_activity_report_is_idempotent(services, cleanup_day):
    reporting = services["reporting_service"]
    first = reporting.get_activity_report(cleanup_day["activity"].id)
    second = reporting.get_activity_report(cleanup_day["activity"].id)

    assert first == second
    assert dumps_payload(activity_report_payload(first)) == dumps_payload(activity_report_payload(second))


def test_parallel_build_matches_sequential(services, seed, cleanup_day):
    source = services["report_source"]
    for idx in range(5):
        activity = seed.activity(f"Weekly cleanup {idx}", date(2026, 1, idx + 1))
        for n in range(idx + 1):
            task = seed.task(activity, f"Task {n}", estimated_cost=100 * (n + 1), actual_cost=90 * (n + 2),
                             expected_participants=10, actual_participants=n * 3)
            if n % 2 == 0:
                seed.report(task, comment="ok", evidence_urls=["https://e/x"] if n else [])

    sequential = ReportingService(source, max_workers=1)
    snapshots = [
        sequential.load_snapshot(group.activity.id)
        for group in sequential.list_report_groups()
    ]
    parallel = ReportingService(source, max_workers=4, parallel_min_batch=2)

    expected = sequential.build_activity_reports(snapshots)
    assert parallel.build_activity_reports(snapshots) == expected
    assert [r.activity.id for r in expected] == [s.activity.id for s in snapshots]


def test_list_report_groups_and_summary(services, seed, cleanup_day):
    other = seed.activity("Tree planting", date(2026, 4, 4))
    other_team = seed.team("Isibo B")
    task = seed.task(other, "Seedlings", team_id=other_team.id, actual_cost=250, actual_participants=40)
    seed.report(task, challenges_faced="Dry soil", suggestions="Water first")

    reporting = services["reporting_service"]
    groups = reporting.list_report_groups()
    assert [g.activity.title for g in groups] == ["Tree planting", "Cleanup Day"]
    assert groups[1].total_tasks == 2
    assert groups[1].completed_tasks == 1

    summary = reporting.get_reports_summary()
    assert summary.total_reports == 2
    assert summary.total_activities == 2
    assert summary.total_teams == 2
    assert summary.total_cost == 1450
    assert summary.total_participants == 100
    assert summary.average_attendance == 50.0
    assert summary.reports_with_evidence == 1
    assert summary.evidence_percentage == 50
    assert summary.challenges_percentage == 50
    assert summary.suggestions_percentage == 50

    filtered = reporting.get_reports_summary(ReportFilterCriteria(team_id=cleanup_day["team"].id))
    assert filtered.total_reports == 1
    assert filtered.total_activities == 1


def test_report_source_returns_orphans_and_pages(services, seed, cleanup_day):
    source = services["report_source"]
    task_a, task_b = cleanup_day["task_a"], cleanup_day["task_b"]
    seed.report(task_b, comment="Late submission", created_at=datetime(2026, 3, 8, 9, 0))
    seed.remove_task(task_b)

    records = source.list_reports()
    assert [r.report.task_id for r in records] == [task_a.id, task_b.id]
    assert records[0].activity.task_count == 1
    assert [p.name for p in records[0].report.attendees] == ["Alice", "Bob"]
    assert records[1].task is None
    assert records[1].activity is None

    assert [r.report.comment for r in source.list_reports(page=2, size=1)] == ["Late submission"]
    assert len(source.list_reports(activity_id=cleanup_day["activity"].id)) == 1

    groups = services["reporting_service"].list_report_groups()
    assert len(groups) == 1
    assert [r.report.id for r in groups[0].records] == [cleanup_day["report_a"].id]


def test_cleanup_day_with_field_figures(services, seed):
    activity = seed.activity("Cleanup Day", date(2026, 3, 7))
    task_a = seed.task(activity, "Task A", estimated_cost=1000, actual_cost=1200,
                       expected_participants=10, actual_participants=12)
    seed.task(activity, "Task B", estimated_cost=500, actual_cost=400,
              expected_participants=5, actual_participants=2)
    seed.report(task_a, comment="Drains cleared", evidence_urls=["https://e/a.jpg"])

    report = services["reporting_service"].get_activity_report(activity.id)

    assert report.financial_analysis.total_estimated_cost == 1500
    assert report.financial_analysis.total_actual_cost == 1600
    assert report.financial_analysis.cost_variance == 100
    assert report.summary.completion_rate == 50
    assert report.participant_analysis.participation_rate == 93
    assert report.participant_analysis.participant_variance == -1

    row_a, row_b = report.task_overview
    assert row_a.performance.performance_score == 94
    assert row_a.performance.status == PerformanceStatus.EXCELLENT
    assert row_a.performance.risk_level == RiskLevel.MEDIUM
    assert row_b.report is None
    assert row_b.performance.performance_score == 40
    assert row_b.performance.risk_level == RiskLevel.MEDIUM
    assert report.insights.overall_status == OverallStatus.AVERAGE


def test_reports_summary_rolls_up_cost_and_participation(services, seed, cleanup_day):
    other = seed.activity("Tree planting", date(2026, 4, 4))
    task = seed.task(other, "Seedlings", estimated_cost=200, actual_cost=250,
                     expected_participants=50, actual_participants=40,
                     expected_financial_impact=1000, actual_financial_impact=800)
    seed.report(task, comment="Planted")

    summary = services["reporting_service"].get_reports_summary()

    assert summary.total_estimated_cost == 1200
    assert summary.total_cost == 1450
    assert summary.cost_variance == 250
    assert summary.cost_variance_percentage == 21
    assert summary.total_expected_financial_impact == 1000
    assert summary.total_actual_financial_impact == 800
    assert summary.financial_impact_variance == -200
    assert summary.financial_impact_variance_percentage == -20
    assert summary.average_cost_per_activity == 725
    assert summary.average_cost_per_task == 725
    assert summary.budget_efficiency == 83
    assert summary.total_expected_participants == 110
    assert summary.total_participants == 100
    assert summary.participation_rate == 91
    assert summary.average_participants_per_activity == 50
    assert summary.average_participants_per_task == 50


def test_empty_reports_summary_guards_every_ratio(services):
    summary = services["reporting_service"].get_reports_summary()

    assert summary.total_reports == 0
    assert summary.cost_variance_percentage == 0
    assert summary.financial_impact_variance_percentage == 0
    assert summary.average_cost_per_activity == 0
    assert summary.average_cost_per_task == 0
    assert summary.budget_efficiency == 100
    assert summary.participation_rate == 0
    assert summary.average_participants_per_task == 0


class _TraceRecordingService(ReportingService):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.seen = []

    def build_activity_report(self, snapshot):
        self.seen.append(current_trace_id())
        return super().build_activity_report(snapshot)


def test_parallel_build_keeps_bound_trace_id(services):
    service = _TraceRecordingService(services["report_source"], max_workers=3, parallel_min_batch=2)
    snapshots = [
        ActivitySnapshot(activity=Activity(id=f"a-{idx}", title=f"Activity {idx}"))
        for idx in range(4)
    ]

    with bind_trace_id("trace-batch-7"):
        reports = service.build_activity_reports(snapshots)

    assert [r.activity.id for r in reports] == ["a-0", "a-1", "a-2", "a-3"]
    assert service.seen == ["trace-batch-7"] * 4
