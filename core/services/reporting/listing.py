from __future__ import annotations

import logging
from typing import List, Optional

from core.interfaces import ReportSource
from core.services.reporting.aggregation import aggregate, sorted_groups
from core.services.reporting.filtering import ReportFilterCriteria, filter_groups
from core.services.reporting.models import ActivityGroup, ReportsSummary
from core.services.reporting.summary import summarize_groups

logger = logging.getLogger(__name__)


class ReportingListingMixin:
    _report_source: ReportSource

    def list_report_groups(
        self, criteria: Optional[ReportFilterCriteria] = None
    ) -> List[ActivityGroup]:
        """Reports grouped per activity, most recent activity first, then filtered."""
        criteria = criteria or ReportFilterCriteria()
        records = list(
            self._report_source.list_reports(
                activity_id=criteria.activity_id,
                team_id=criteria.team_id,
            )
        )
        groups = filter_groups(sorted_groups(aggregate(records)), criteria)
        logger.info("Listed %d report groups from %d records", len(groups), len(records))
        return groups

    def get_reports_summary(
        self, criteria: Optional[ReportFilterCriteria] = None
    ) -> ReportsSummary:
        summary = summarize_groups(self.list_report_groups(criteria))
        logger.info(
            "Reports summary: %d reports across %d activities",
            summary.total_reports,
            summary.total_activities,
        )
        return summary


__all__ = ["ReportingListingMixin"]
