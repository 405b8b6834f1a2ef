from .service import ReportingService
from .aggregation import aggregate, canonical_reports, sorted_groups
from .filtering import ReportFilterCriteria, filter_groups, matches
from .insights import build_insights
from .performance import score_task, score_tasks
from .policy import DEFAULT_POLICY, ScoringPolicy
from .summary import summarize_groups
from .variance import activity_summary, financial_analysis, participant_analysis
from .models import (
    ActivityGroup,
    ActivityReport,
    ActivitySummary,
    CostBreakdownRow,
    FinancialAnalysis,
    GroupMetrics,
    Insights,
    ParticipantAnalysis,
    ParticipantDistributionRow,
    ReportsSummary,
    TaskOverviewRow,
    TaskPerformance,
)

__all__ = [
    "ReportingService",
    "aggregate",
    "canonical_reports",
    "sorted_groups",
    "ReportFilterCriteria",
    "filter_groups",
    "matches",
    "build_insights",
    "score_task",
    "score_tasks",
    "ScoringPolicy",
    "DEFAULT_POLICY",
    "summarize_groups",
    "activity_summary",
    "financial_analysis",
    "participant_analysis",
    "ActivityGroup",
    "ActivityReport",
    "ActivitySummary",
    "CostBreakdownRow",
    "FinancialAnalysis",
    "GroupMetrics",
    "Insights",
    "ParticipantAnalysis",
    "ParticipantDistributionRow",
    "ReportsSummary",
    "TaskOverviewRow",
    "TaskPerformance",
]
