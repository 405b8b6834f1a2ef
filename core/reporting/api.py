"""JSON-ready payloads built from reporting read-models."""

import json
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List

from core.models import Activity, Report, Task
from core.services.reporting import ReportingService
from core.services.reporting.helpers import as_text_list, coerce_number
from core.services.reporting.models import (
    ActivityGroup,
    ActivityReport,
    ReportsSummary,
)
from core.services.reporting.variance import group_metrics


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return coerce_number(value)
    if isinstance(value, float):
        return coerce_number(value)
    if is_dataclass(value) and not isinstance(value, type):
        return {_camel(f.name): _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    return value


def _activity_payload(activity: Activity) -> Dict[str, Any]:
    return {
        "id": activity.id,
        "title": activity.title,
        "description": activity.description or "",
        "date": _plain(activity.date),
        "status": _plain(activity.status),
        "village": (
            {"id": activity.village_id, "name": activity.village_name}
            if activity.village_id
            else None
        ),
        "taskCount": int(coerce_number(activity.task_count)),
    }


def _task_payload(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description or "",
        "status": _plain(task.status),
        "team": {"id": task.team_id, "name": task.team_name} if task.team_id else None,
        "estimatedCost": coerce_number(task.estimated_cost),
        "actualCost": coerce_number(task.actual_cost),
        "expectedParticipants": coerce_number(task.expected_participants),
        "actualParticipants": coerce_number(task.actual_participants),
        "expectedFinancialImpact": coerce_number(task.expected_financial_impact),
        "actualFinancialImpact": coerce_number(task.actual_financial_impact),
    }


def _report_payload(report: Report | None) -> Dict[str, Any] | None:
    if report is None:
        return None
    return {
        "id": report.id,
        "taskId": report.task_id,
        "comment": report.comment,
        "materialsUsed": as_text_list(report.materials_used),
        "challengesFaced": report.challenges_faced,
        "suggestions": report.suggestions,
        "evidenceUrls": as_text_list(report.evidence_urls),
        "attendees": [
            {"id": person.id, "name": person.name, "email": person.email}
            for person in (report.attendees or [])
        ],
        "createdAt": _plain(report.created_at),
    }


def activity_report_payload(report: ActivityReport) -> Dict[str, Any]:
    return {
        "activity": _activity_payload(report.activity),
        "summary": _plain(report.summary),
        "financialAnalysis": _plain(report.financial_analysis),
        "participantAnalysis": _plain(report.participant_analysis),
        "taskOverview": [
            {
                "task": _task_payload(row.task),
                "report": _report_payload(row.report),
                "performance": _plain(row.performance),
            }
            for row in report.task_overview
        ],
        "insights": _plain(report.insights),
    }


def report_groups_payload(groups: Iterable[ActivityGroup]) -> List[Dict[str, Any]]:
    payload: List[Dict[str, Any]] = []
    for group in groups:
        payload.append(
            {
                "activity": _activity_payload(group.activity),
                "reports": [
                    {
                        **_report_payload(record.report),
                        "task": _task_payload(record.task),
                    }
                    for record in group.records
                ],
                "totalTasks": group.total_tasks,
                "completedTasks": group.completed_tasks,
                "totalEstimatedCost": group.total_estimated_cost,
                "totalActualCost": group.total_actual_cost,
                "totalExpectedParticipants": group.total_expected_participants,
                "totalActualParticipants": group.total_actual_participants,
                "totalExpectedFinancialImpact": group.total_expected_financial_impact,
                "totalActualFinancialImpact": group.total_actual_financial_impact,
                "metrics": _plain(group_metrics(group)),
            }
        )
    return payload


def reports_summary_payload(summary: ReportsSummary) -> Dict[str, Any]:
    return _plain(summary)


def dumps_payload(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False)


def export_activity_report_json(
    reporting_service: ReportingService,
    activity_id: str,
    output_path: str | Path,
) -> Path:
    report = reporting_service.get_activity_report(activity_id)
    output_path = _ensure_parent(Path(output_path))
    output_path.write_text(dumps_payload(activity_report_payload(report)) + "\n", encoding="utf-8")
    return output_path
