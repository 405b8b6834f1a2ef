from __future__ import annotations

import contextvars
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List

from core.exceptions import NotFoundError, ValidationError
from core.interfaces import ReportSource
from core.models import ActivitySnapshot
from core.services.reporting.insights import build_insights
from core.services.reporting.models import ActivityReport, TaskOverviewRow
from core.services.reporting.performance import score_tasks
from core.services.reporting.policy import ScoringPolicy
from core.services.reporting.variance import (
    activity_summary,
    financial_analysis,
    participant_analysis,
    reports_by_task,
)

logger = logging.getLogger(__name__)


class ReportingActivityMixin:
    _report_source: ReportSource
    _policy: ScoringPolicy
    _max_workers: int
    _parallel_min_batch: int

    def load_snapshot(self, activity_id: str) -> ActivitySnapshot:
        activity_id = str(activity_id or "").strip()
        if not activity_id:
            raise ValidationError("Activity id is required.", code="ACTIVITY_ID_REQUIRED")

        activity = self._report_source.get_activity(activity_id)
        if activity is None:
            raise NotFoundError("Activity not found.", code="ACTIVITY_NOT_FOUND")

        tasks = list(self._report_source.list_tasks_by_activity(activity_id))
        records = self._report_source.list_reports(activity_id=activity_id)
        return ActivitySnapshot(
            activity=activity,
            tasks=tasks,
            reports=[record.report for record in records],
        )

    def get_activity_report(self, activity_id: str) -> ActivityReport:
        """
        Full read-model for one activity, recomputed from the current store state.
        """
        snapshot = self.load_snapshot(activity_id)
        report = self.build_activity_report(snapshot)
        logger.info(
            "Built activity report %s: %d tasks, %d completed, status %s",
            snapshot.activity.id,
            report.summary.total_tasks,
            report.summary.completed_tasks,
            report.insights.overall_status.value,
        )
        return report

    def build_activity_report(self, snapshot: ActivitySnapshot) -> ActivityReport:
        summary = activity_summary(snapshot)
        financial = financial_analysis(snapshot)
        participants = participant_analysis(snapshot)
        performances = score_tasks(snapshot, self._policy)
        reports = reports_by_task(snapshot)

        overview = [
            TaskOverviewRow(task=task, report=reports.get(task.id), performance=performance)
            for task, performance in zip(snapshot.tasks, performances)
        ]
        logger.debug(
            "Scored %d tasks for activity %s (%d reports in snapshot)",
            len(performances),
            snapshot.activity.id,
            len(snapshot.reports),
        )
        return ActivityReport(
            activity=snapshot.activity,
            summary=summary,
            financial_analysis=financial,
            participant_analysis=participants,
            task_overview=overview,
            insights=build_insights(summary, financial, participants, performances, self._policy),
        )

    def build_activity_reports(self, snapshots: Iterable[ActivitySnapshot]) -> List[ActivityReport]:
        """Build many read-models; results keep the order of ``snapshots``.

        Batches of at least ``parallel_min_batch`` snapshots are spread over a
        thread pool. Each snapshot is independent, so the output is the same as
        building them one by one.
        """
        items = list(snapshots)
        if self._max_workers <= 1 or len(items) < max(self._parallel_min_batch, 2):
            return [self.build_activity_report(snapshot) for snapshot in items]

        workers = min(self._max_workers, len(items))
        logger.debug("Building %d activity reports on %d workers", len(items), workers)
        # jobs run in a copy of the caller's context, trace id included
        with ThreadPoolExecutor(max_workers=workers) as pool:
            jobs = [
                pool.submit(contextvars.copy_context().run, self.build_activity_report, snapshot)
                for snapshot in items
            ]
            return [job.result() for job in jobs]


__all__ = ["ReportingActivityMixin"]
