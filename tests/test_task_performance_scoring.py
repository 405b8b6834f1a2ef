from __future__ import annotations

import random

import pytest

from core.models import PerformanceStatus, Report, RiskLevel, Task
from core.services.reporting.performance import (
    classify_risk,
    classify_status,
    completion_quality,
    participant_engagement,
    score_task,
)
from core.services.reporting.policy import ScoringPolicy


def _task(**figures) -> Task:
    return Task(id="t-1", activity_id="a-1", title="Clear drains", **figures)


def test_reported_task_with_overrun_scores_excellent_with_medium_risk():
    task = _task(estimated_cost=1000, actual_cost=1200, expected_participants=60, actual_participants=60)
    report = Report(id="r", task_id="t-1", comment="Done", evidence_urls=["https://x/1.jpg"])

    perf = score_task(task, report)

    assert perf.cost_variance_percentage == 20
    assert perf.cost_efficiency == 80
    assert perf.participant_engagement == 100
    assert perf.completion_quality == 100
    assert perf.performance_score == 94
    assert perf.status == PerformanceStatus.EXCELLENT
    assert perf.risk_level == RiskLevel.MEDIUM
    assert perf.has_report and perf.has_evidence and perf.has_narrative


def test_pending_task_risk_follows_cost_drift_only():
    task = _task(estimated_cost=500, actual_cost=400, expected_participants=15, actual_participants=10)

    perf = score_task(task, None)

    assert not perf.has_report
    assert perf.completion_quality == 0
    assert perf.participant_engagement == 67
    assert perf.performance_score == 51
    assert perf.status == PerformanceStatus.AVERAGE
    assert perf.risk_level == RiskLevel.MEDIUM


def test_pending_task_without_figures_is_low_risk_but_needs_improvement():
    perf = score_task(_task(), None)
    assert perf.cost_efficiency == 100
    assert perf.participant_engagement == 0
    assert perf.performance_score == 30
    assert perf.status == PerformanceStatus.NEEDS_IMPROVEMENT
    assert perf.risk_level == RiskLevel.LOW


def test_zero_estimate_never_divides():
    perf = score_task(_task(estimated_cost=0, actual_cost=300), Report(id="r", task_id="t-1"))
    assert perf.cost_variance_percentage == 0
    assert perf.cost_efficiency == 100


def test_engagement_rules_for_missing_expectations():
    assert participant_engagement(0, 5) == 100
    assert participant_engagement(0, 0) == 0
    assert participant_engagement(10, 25) == 100
    assert participant_engagement(10, -4) == 0


def test_completion_quality_points():
    assert completion_quality(None) == 0
    assert completion_quality(Report(id="r", task_id="t")) == 40
    assert completion_quality(Report(id="r", task_id="t", evidence_urls=["  "])) == 40
    assert completion_quality(Report(id="r", task_id="t", evidence_urls=["https://e"])) == 70
    assert completion_quality(Report(id="r", task_id="t", suggestions="More gloves")) == 70
    assert (
        completion_quality(
            Report(id="r", task_id="t", challenges_faced="Rain", evidence_urls=["https://e"])
        )
        == 100
    )


@pytest.mark.parametrize(
    "score, expected",
    [
        (100, PerformanceStatus.EXCELLENT),
        (85, PerformanceStatus.EXCELLENT),
        (84, PerformanceStatus.GOOD),
        (70, PerformanceStatus.GOOD),
        (69, PerformanceStatus.AVERAGE),
        (50, PerformanceStatus.AVERAGE),
        (49, PerformanceStatus.NEEDS_IMPROVEMENT),
    ],
)
def test_status_bucket_boundaries(score, expected):
    assert classify_status(score) == expected


@pytest.mark.parametrize(
    "score, drift, expected",
    [
        (90, 0, RiskLevel.LOW),
        (90, 10, RiskLevel.LOW),
        (90, 11, RiskLevel.MEDIUM),
        (90, -26, RiskLevel.HIGH),
        (74, 0, RiskLevel.MEDIUM),
        (49, 0, RiskLevel.HIGH),
        (75, 25, RiskLevel.MEDIUM),
    ],
)
def test_risk_boundaries(score, drift, expected):
    assert classify_risk(score, drift) == expected


def test_policy_thresholds_are_injectable():
    strict = ScoringPolicy(excellent_score=95)
    task = _task(estimated_cost=1000, actual_cost=1200, expected_participants=60, actual_participants=60)
    report = Report(id="r", task_id="t-1", comment="Done", evidence_urls=["https://x/1.jpg"])
    assert score_task(task, report, strict).status == PerformanceStatus.GOOD


def test_sub_scores_stay_in_bounds_for_random_figures():
    rng = random.Random(42)
    values = [0, 1, 50, 1000, -20, "x", None, float("inf"), 3.7]
    for _ in range(200):
        task = _task(
            estimated_cost=rng.choice(values),
            actual_cost=rng.choice(values),
            expected_participants=rng.choice(values),
            actual_participants=rng.choice(values),
        )
        report = rng.choice([None, Report(id="r", task_id="t-1", comment="ok")])
        perf = score_task(task, report)
        for value in (
            perf.cost_efficiency,
            perf.participant_engagement,
            perf.completion_quality,
            perf.performance_score,
        ):
            assert 0 <= value <= 100


def test_huge_finite_figures_score_without_overflow():
    task = _task(estimated_cost=1, actual_cost=1e308, expected_participants=1e-300, actual_participants=1e308)
    report = Report(id="r", task_id="t-1", comment="Done")

    perf = score_task(task, report)

    assert perf.cost_variance_percentage == 0
    for value in (
        perf.cost_efficiency,
        perf.participant_engagement,
        perf.completion_quality,
        perf.performance_score,
    ):
        assert 0 <= value <= 100
