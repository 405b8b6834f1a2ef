from __future__ import annotations

from core.domain import (
    Activity,
    ActivitySnapshot,
    ActivityStatus,
    InsightCategory,
    OverallStatus,
    Participant,
    PerformanceStatus,
    Report,
    ReportRecord,
    RiskLevel,
    Task,
    TaskStatus,
    Team,
    generate_id,
)

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
