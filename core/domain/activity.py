from __future__ import annotations

from dataclasses import dataclass, field
import datetime as dt
from typing import List, Optional

from core.domain.enums import ActivityStatus
from core.domain.identifiers import generate_id
from core.domain.report import Report
from core.domain.task import Task


@dataclass
class Activity:
    id: str
    title: str
    description: str = ""
    date: dt.date | dt.datetime | str | None = None
    status: ActivityStatus | str = ActivityStatus.PENDING
    village_id: Optional[str] = None
    village_name: Optional[str] = None
    task_count: int = 0  # live tasks, filled by the report source for list views

    @staticmethod
    def create(title: str, description: str = "", **extra) -> "Activity":
        return Activity(
            id=generate_id(),
            title=title,
            description=description,
            **extra,
        )


@dataclass
class ActivitySnapshot:
    """Everything the per-activity pipeline needs, read once from the store."""

    activity: Activity
    tasks: List[Task] = field(default_factory=list)
    reports: List[Report] = field(default_factory=list)


__all__ = ["Activity", "ActivitySnapshot"]
