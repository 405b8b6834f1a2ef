from __future__ import annotations

import json
from typing import Any, Iterable, List

from core.models import Activity, Participant, Report, Task, Team
from infra.db.models import ActivityORM, ParticipantORM, ReportORM, TaskORM, TeamORM


def _to_json_list(values: Iterable[Any] | None) -> str:
    return json.dumps([str(v) for v in (values or [])], ensure_ascii=False)


def _from_json_list(raw: str | None) -> List[str]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return []
    return [str(item) for item in value] if isinstance(value, list) else []


def activity_to_orm(activity: Activity) -> ActivityORM:
    return ActivityORM(
        id=activity.id,
        title=activity.title,
        description=activity.description,
        date=activity.date,
        status=activity.status,
        village_id=activity.village_id,
    )


def activity_from_orm(obj: ActivityORM, *, village_name: str | None = None, task_count: int = 0) -> Activity:
    return Activity(
        id=obj.id,
        title=obj.title,
        description=obj.description or "",
        date=obj.date,
        status=obj.status,
        village_id=obj.village_id,
        village_name=village_name,
        task_count=task_count,
    )


def team_to_orm(team: Team, village_id: str | None = None) -> TeamORM:
    return TeamORM(id=team.id, name=team.name, village_id=village_id)


def task_to_orm(task: Task) -> TaskORM:
    return TaskORM(
        id=task.id,
        activity_id=task.activity_id,
        team_id=task.team_id,
        title=task.title,
        description=task.description,
        status=task.status,
        estimated_cost=task.estimated_cost,
        actual_cost=task.actual_cost,
        expected_participants=task.expected_participants,
        actual_participants=task.actual_participants,
        expected_financial_impact=task.expected_financial_impact,
        actual_financial_impact=task.actual_financial_impact,
    )


def task_from_orm(obj: TaskORM, *, team_name: str | None = None) -> Task:
    return Task(
        id=obj.id,
        activity_id=obj.activity_id,
        title=obj.title,
        description=obj.description or "",
        team_id=obj.team_id,
        team_name=team_name,
        status=obj.status,
        estimated_cost=obj.estimated_cost,
        actual_cost=obj.actual_cost,
        expected_participants=obj.expected_participants,
        actual_participants=obj.actual_participants,
        expected_financial_impact=obj.expected_financial_impact,
        actual_financial_impact=obj.actual_financial_impact,
    )


def participant_to_orm(participant: Participant) -> ParticipantORM:
    return ParticipantORM(id=participant.id, name=participant.name, email=participant.email)


def participant_from_orm(obj: ParticipantORM) -> Participant:
    return Participant(id=obj.id, name=obj.name, email=obj.email)


def report_to_orm(report: Report) -> ReportORM:
    return ReportORM(
        id=report.id,
        task_id=report.task_id,
        activity_id=report.activity_id,
        comment=report.comment,
        materials_used=_to_json_list(report.materials_used),
        evidence_urls=_to_json_list(report.evidence_urls),
        challenges_faced=report.challenges_faced,
        suggestions=report.suggestions,
        created_at=report.created_at,
    )


def report_from_orm(obj: ReportORM, *, attendees: List[Participant] | None = None) -> Report:
    return Report(
        id=obj.id,
        task_id=obj.task_id,
        activity_id=obj.activity_id,
        comment=obj.comment,
        materials_used=_from_json_list(obj.materials_used),
        challenges_faced=obj.challenges_faced,
        suggestions=obj.suggestions,
        evidence_urls=_from_json_list(obj.evidence_urls),
        attendees=list(attendees or []),
        created_at=obj.created_at,
    )


__all__ = [
    "activity_to_orm",
    "activity_from_orm",
    "team_to_orm",
    "task_to_orm",
    "task_from_orm",
    "participant_to_orm",
    "participant_from_orm",
    "report_to_orm",
    "report_from_orm",
]
