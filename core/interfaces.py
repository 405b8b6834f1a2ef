from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.models import Activity, ReportRecord, Task


class ReportSource(ABC):
    """Read-only access to activities, tasks and reports.

    Implementations return records already scoped to what the caller may see;
    the reporting engine performs no access control of its own.
    """

    @abstractmethod
    def get_activity(self, activity_id: str) -> Optional[Activity]: ...

    @abstractmethod
    def list_tasks_by_activity(self, activity_id: str) -> List[Task]: ...

    @abstractmethod
    def list_reports(
        self,
        *,
        activity_id: str | None = None,
        team_id: str | None = None,
        page: int | None = None,
        size: int | None = None,
    ) -> List[ReportRecord]: ...


__all__ = ["ReportSource"]
