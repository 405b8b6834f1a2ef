from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from core.models import (
    Activity,
    OverallStatus,
    PerformanceStatus,
    Report,
    ReportRecord,
    RiskLevel,
    Task,
)
from core.services.reporting.helpers import Number


@dataclass(frozen=True)
class ActivityGroup:
    activity: Activity
    records: List[ReportRecord]
    total_tasks: int
    completed_tasks: int
    total_estimated_cost: Number
    total_actual_cost: Number
    total_expected_participants: Number
    total_actual_participants: Number
    total_expected_financial_impact: Number
    total_actual_financial_impact: Number


@dataclass(frozen=True)
class GroupMetrics:
    completion_rate: int
    cost_variance: Number
    cost_variance_percentage: int
    participation_rate: int
    financial_impact_variance: Number


@dataclass(frozen=True)
class ActivitySummary:
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    completion_rate: int
    total_cost: Number
    total_participants: Number


@dataclass(frozen=True)
class CostBreakdownRow:
    task_id: str
    task_title: str
    estimated_cost: Number
    actual_cost: Number
    variance: Number
    variance_percentage: int


@dataclass(frozen=True)
class FinancialAnalysis:
    total_estimated_cost: Number
    total_actual_cost: Number
    cost_variance: Number
    cost_variance_percentage: int
    budget_utilization: int
    cost_per_participant: int
    cost_per_task: int
    total_expected_financial_impact: Number
    total_actual_financial_impact: Number
    financial_impact_variance: Number
    financial_impact_variance_percentage: int
    cost_breakdown: List[CostBreakdownRow]


@dataclass(frozen=True)
class ParticipantDistributionRow:
    task_id: str
    task_title: str
    expected: Number
    actual: Number
    variance: Number
    participants: List[str]


@dataclass(frozen=True)
class ParticipantAnalysis:
    total_expected_participants: Number
    total_actual_participants: Number
    participation_rate: int
    participant_variance: Number
    average_participants_per_task: int
    participant_distribution: List[ParticipantDistributionRow]


@dataclass(frozen=True)
class TaskPerformance:
    task_id: str
    task_title: str
    has_report: bool
    has_evidence: bool
    has_narrative: bool
    performance_score: int
    cost_efficiency: int
    participant_engagement: int
    completion_quality: int
    cost_variance_percentage: int
    risk_level: RiskLevel
    status: PerformanceStatus


@dataclass(frozen=True)
class Insights:
    overall_status: OverallStatus
    key_points: List[str]
    recommendations: List[str]


@dataclass(frozen=True)
class TaskOverviewRow:
    task: Task
    report: Optional[Report]
    performance: TaskPerformance


@dataclass(frozen=True)
class ActivityReport:
    activity: Activity
    summary: ActivitySummary
    financial_analysis: FinancialAnalysis
    participant_analysis: ParticipantAnalysis
    task_overview: List[TaskOverviewRow]
    insights: Insights


@dataclass(frozen=True)
class ReportsSummary:
    total_reports: int
    total_activities: int
    total_teams: int
    total_cost: Number
    total_participants: Number
    average_attendance: float
    reports_with_evidence: int
    reports_with_challenges: int
    reports_with_suggestions: int
    evidence_percentage: int
    challenges_percentage: int
    suggestions_percentage: int
    # cross-activity financial rollup
    total_estimated_cost: Number
    cost_variance: Number
    cost_variance_percentage: int
    total_expected_financial_impact: Number
    total_actual_financial_impact: Number
    financial_impact_variance: Number
    financial_impact_variance_percentage: int
    average_cost_per_activity: int
    average_cost_per_task: int
    budget_efficiency: int
    # cross-activity participation rollup
    total_expected_participants: Number
    participation_rate: int
    average_participants_per_activity: int
    average_participants_per_task: int


__all__ = [
    "ActivityGroup",
    "GroupMetrics",
    "ActivitySummary",
    "CostBreakdownRow",
    "FinancialAnalysis",
    "ParticipantDistributionRow",
    "ParticipantAnalysis",
    "TaskPerformance",
    "Insights",
    "TaskOverviewRow",
    "ActivityReport",
    "ReportsSummary",
]
