from __future__ import annotations

from core.interfaces import ReportSource
from core.services.reporting.policy import DEFAULT_POLICY, ScoringPolicy

from .activity_report import ReportingActivityMixin
from .listing import ReportingListingMixin


class ReportingService(
    ReportingActivityMixin,
    ReportingListingMixin,
):
    def __init__(
        self,
        report_source: ReportSource,
        *,
        policy: ScoringPolicy = DEFAULT_POLICY,
        max_workers: int = 4,
        parallel_min_batch: int = 8,
    ):
        self._report_source: ReportSource = report_source
        self._policy: ScoringPolicy = policy
        self._max_workers: int = max(1, int(max_workers))
        self._parallel_min_batch: int = max(1, int(parallel_min_batch))

    @property
    def policy(self) -> ScoringPolicy:
        return self._policy
