from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from core.domain.identifiers import generate_id
from core.domain.task import Task

if TYPE_CHECKING:
    from core.domain.activity import Activity


@dataclass
class Participant:
    id: str
    name: str
    email: Optional[str] = None


@dataclass
class Report:
    id: str
    task_id: str
    activity_id: Optional[str] = None
    comment: Optional[str] = None
    materials_used: List[str] = field(default_factory=list)
    challenges_faced: Optional[str] = None
    suggestions: Optional[str] = None
    evidence_urls: List[str] = field(default_factory=list)
    attendees: List[Participant] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @staticmethod
    def create(task_id: str, activity_id: str | None = None, **extra) -> "Report":
        return Report(
            id=generate_id(),
            task_id=task_id,
            activity_id=activity_id,
            **extra,
        )


@dataclass
class ReportRecord:
    """A report joined with its task and activity, as listed by the store.

    Either side of the join may be missing when the task or activity was
    removed after the report was filed.
    """

    report: Report
    task: Optional[Task] = None
    activity: Optional["Activity"] = None


__all__ = ["Participant", "Report", "ReportRecord"]
