from __future__ import annotations

from enum import Enum


class TaskStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    ONGOING = "ongoing"
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    POSTPONED = "postponed"
    RESCHEDULED = "rescheduled"
    INACTIVE = "inactive"


class ActivityStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    ONGOING = "ongoing"
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    POSTPONED = "postponed"
    RESCHEDULED = "rescheduled"
    INACTIVE = "inactive"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PerformanceStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    NEEDS_IMPROVEMENT = "needs_improvement"


class OverallStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"


class InsightCategory(str, Enum):
    FINANCIAL = "financial"
    PARTICIPATION = "participation"
    COMPLETION = "completion"
    DOCUMENTATION = "documentation"


__all__ = [
    "TaskStatus",
    "ActivityStatus",
    "RiskLevel",
    "PerformanceStatus",
    "OverallStatus",
    "InsightCategory",
]
