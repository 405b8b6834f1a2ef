from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from core.models import Activity, Report, ReportRecord, Task
from core.services.reporting.helpers import coerce_number, sort_timestamp
from core.services.reporting.models import ActivityGroup

logger = logging.getLogger(__name__)


def canonical_key(report: Report) -> Tuple[bool, float, str]:
    """Earliest report wins; undated reports lose to dated ones, then by id."""
    stamp = sort_timestamp(report.created_at)
    return (stamp is None, stamp or 0.0, str(report.id))


def canonical_reports(reports: Iterable[Report], task_ids: Iterable[str] | None = None) -> Dict[str, Report]:
    """Pick the one report counted per task.

    When ``task_ids`` is given, reports pointing at any other task are ignored.
    """
    allowed = set(task_ids) if task_ids is not None else None
    chosen: Dict[str, Report] = {}
    for report in reports:
        task_id = report.task_id
        if not task_id or (allowed is not None and task_id not in allowed):
            continue
        current = chosen.get(task_id)
        if current is None or canonical_key(report) < canonical_key(current):
            chosen[task_id] = report
    return chosen


def activity_sort_key(activity: Activity) -> Tuple[bool, float, str]:
    # most recent first, undated last
    stamp = sort_timestamp(activity.date)
    return (stamp is None, -(stamp or 0.0), str(activity.id))


def aggregate(records: Iterable[ReportRecord]) -> Dict[str, ActivityGroup]:
    """Group report records by activity and total their task figures.

    Records whose task or activity is gone are dropped. The returned mapping is
    ordered by activity date, most recent first.
    """
    by_task: Dict[str, ReportRecord] = {}
    dropped = 0
    for record in records:
        task = record.task
        activity = record.activity
        if task is None or activity is None or not activity.id:
            dropped += 1
            logger.debug("Dropping orphaned report %s", getattr(record.report, "id", None))
            continue
        current = by_task.get(task.id)
        if current is None or canonical_key(record.report) < canonical_key(current.report):
            by_task[task.id] = record

    buckets: Dict[str, List[ReportRecord]] = {}
    activities: Dict[str, Activity] = {}
    for record in sorted(by_task.values(), key=lambda item: canonical_key(item.report)):
        activity = record.activity
        buckets.setdefault(activity.id, []).append(record)
        activities.setdefault(activity.id, activity)

    groups = sorted_groups(
        _build_group(activities[activity_id], bucket)
        for activity_id, bucket in buckets.items()
    )

    if dropped:
        logger.debug("Aggregated %d groups, dropped %d orphaned reports", len(groups), dropped)
    return {group.activity.id: group for group in groups}


def sorted_groups(groups: Iterable[ActivityGroup] | Dict[str, ActivityGroup]) -> List[ActivityGroup]:
    """Groups in list order: most recent activity first, undated last."""
    items = groups.values() if isinstance(groups, dict) else groups
    return sorted(items, key=lambda group: activity_sort_key(group.activity))


def _build_group(activity: Activity, records: List[ReportRecord]) -> ActivityGroup:
    tasks: List[Task] = [record.task for record in records]
    completed = len(records)
    declared = int(coerce_number(activity.task_count))

    return ActivityGroup(
        activity=activity,
        records=records,
        total_tasks=max(declared, completed),
        completed_tasks=completed,
        total_estimated_cost=_total(tasks, "estimated_cost"),
        total_actual_cost=_total(tasks, "actual_cost"),
        total_expected_participants=_total(tasks, "expected_participants"),
        total_actual_participants=_total(tasks, "actual_participants"),
        total_expected_financial_impact=_total(tasks, "expected_financial_impact"),
        total_actual_financial_impact=_total(tasks, "actual_financial_impact"),
    )


def _total(tasks: Iterable[Task], field: str):
    return coerce_number(sum((coerce_number(getattr(task, field, None)) for task in tasks), 0))


__all__ = [
    "canonical_key",
    "canonical_reports",
    "activity_sort_key",
    "aggregate",
    "sorted_groups",
]
