from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from core.interfaces import ReportSource
from core.models import Activity, Participant, ReportRecord, Task
from infra.db.models import (
    ActivityORM,
    ParticipantORM,
    ReportAttendanceORM,
    ReportORM,
    TaskORM,
    TeamORM,
    VillageORM,
)
from infra.db.report.mapper import (
    activity_from_orm,
    participant_from_orm,
    report_from_orm,
    task_from_orm,
)


class SqlAlchemyReportSource(ReportSource):
    """Reads activities, live tasks and reports for the reporting engine."""

    def __init__(self, session: Session):
        self.session = session

    def _live_task_counts(self, activity_ids: Iterable[str]) -> Dict[str, int]:
        ids = sorted(set(activity_ids))
        if not ids:
            return {}
        stmt = (
            select(TaskORM.activity_id, func.count(TaskORM.id))
            .where(TaskORM.activity_id.in_(ids), TaskORM.deleted_at.is_(None))
            .group_by(TaskORM.activity_id)
        )
        return {activity_id: int(count) for activity_id, count in self.session.execute(stmt).all()}

    def _attendees(self, report_ids: Iterable[str]) -> Dict[str, List[Participant]]:
        ids = sorted(set(report_ids))
        if not ids:
            return {}
        stmt = (
            select(ReportAttendanceORM.report_id, ParticipantORM)
            .join(ParticipantORM, ParticipantORM.id == ReportAttendanceORM.participant_id)
            .where(ReportAttendanceORM.report_id.in_(ids))
            .order_by(ReportAttendanceORM.report_id, ParticipantORM.name, ParticipantORM.id)
        )
        out: Dict[str, List[Participant]] = {}
        for report_id, participant in self.session.execute(stmt).all():
            out.setdefault(report_id, []).append(participant_from_orm(participant))
        return out

    def get_activity(self, activity_id: str) -> Optional[Activity]:
        stmt = (
            select(ActivityORM, VillageORM.name)
            .outerjoin(VillageORM, VillageORM.id == ActivityORM.village_id)
            .where(ActivityORM.id == activity_id)
        )
        row = self.session.execute(stmt).first()
        if row is None:
            return None
        obj, village_name = row
        counts = self._live_task_counts([obj.id])
        return activity_from_orm(obj, village_name=village_name, task_count=counts.get(obj.id, 0))

    def list_tasks_by_activity(self, activity_id: str) -> List[Task]:
        stmt = (
            select(TaskORM, TeamORM.name)
            .outerjoin(TeamORM, TeamORM.id == TaskORM.team_id)
            .where(TaskORM.activity_id == activity_id, TaskORM.deleted_at.is_(None))
            .order_by(TaskORM.title, TaskORM.id)
        )
        return [task_from_orm(obj, team_name=team_name) for obj, team_name in self.session.execute(stmt).all()]

    def list_reports(
        self,
        *,
        activity_id: str | None = None,
        team_id: str | None = None,
        page: int | None = None,
        size: int | None = None,
    ) -> List[ReportRecord]:
        """
        Reports joined with their live task and the task's activity.
        Reports whose task was removed come back with ``task=None``.
        """
        stmt = (
            select(ReportORM, TaskORM, TeamORM.name, ActivityORM, VillageORM.name)
            .outerjoin(TaskORM, and_(TaskORM.id == ReportORM.task_id, TaskORM.deleted_at.is_(None)))
            .outerjoin(TeamORM, TeamORM.id == TaskORM.team_id)
            .outerjoin(ActivityORM, ActivityORM.id == TaskORM.activity_id)
            .outerjoin(VillageORM, VillageORM.id == ActivityORM.village_id)
            .order_by(ReportORM.created_at, ReportORM.id)
        )
        if activity_id:
            stmt = stmt.where(TaskORM.activity_id == activity_id)
        if team_id:
            stmt = stmt.where(TaskORM.team_id == team_id)
        if size is not None and size > 0:
            page_number = max(1, page or 1)
            stmt = stmt.offset((page_number - 1) * size).limit(size)

        rows = self.session.execute(stmt).all()
        attendees = self._attendees(row[0].id for row in rows)
        counts = self._live_task_counts(row[3].id for row in rows if row[3] is not None)

        records: List[ReportRecord] = []
        for report_obj, task_obj, team_name, activity_obj, village_name in rows:
            records.append(
                ReportRecord(
                    report=report_from_orm(report_obj, attendees=attendees.get(report_obj.id)),
                    task=task_from_orm(task_obj, team_name=team_name) if task_obj is not None else None,
                    activity=(
                        activity_from_orm(
                            activity_obj,
                            village_name=village_name,
                            task_count=counts.get(activity_obj.id, 0),
                        )
                        if activity_obj is not None
                        else None
                    ),
                )
            )
        return records


__all__ = ["SqlAlchemyReportSource"]
