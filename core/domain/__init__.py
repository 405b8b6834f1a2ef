from core.domain.activity import Activity, ActivitySnapshot
from core.domain.enums import (
    ActivityStatus,
    InsightCategory,
    OverallStatus,
    PerformanceStatus,
    RiskLevel,
    TaskStatus,
)
from core.domain.identifiers import generate_id
from core.domain.report import Participant, Report, ReportRecord
from core.domain.task import Task
from core.domain.team import Team

__all__ = [
    "generate_id",
    "TaskStatus",
    "ActivityStatus",
    "RiskLevel",
    "PerformanceStatus",
    "OverallStatus",
    "InsightCategory",
    "Activity",
    "ActivitySnapshot",
    "Task",
    "Team",
    "Participant",
    "Report",
    "ReportRecord",
]
