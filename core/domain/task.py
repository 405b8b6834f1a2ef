from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.domain.enums import TaskStatus
from core.domain.identifiers import generate_id


@dataclass
class Task:
    id: str
    activity_id: str
    title: str
    description: str = ""
    team_id: str | None = None
    team_name: str | None = None
    status: TaskStatus | str = TaskStatus.PENDING

    # Raw store values; the reporting engine coerces them (bad values count as 0).
    estimated_cost: Any = 0
    actual_cost: Any = 0
    expected_participants: Any = 0
    actual_participants: Any = 0
    expected_financial_impact: Any = 0
    actual_financial_impact: Any = 0

    @staticmethod
    def create(activity_id: str, title: str, description: str = "", **extra) -> "Task":
        return Task(
            id=generate_id(),
            activity_id=activity_id,
            title=title,
            description=description,
            **extra,
        )


__all__ = ["Task"]
