from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from core.services.reporting import DEFAULT_POLICY, ReportingService, ScoringPolicy
from infra.config import AnalyticsSettings, load_settings
from infra.db.report import SqlAlchemyReportSource


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    report_source: SqlAlchemyReportSource
    reporting_service: ReportingService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "report_source": self.report_source,
            "reporting_service": self.reporting_service,
        }


def build_service_graph(
    session: Session,
    settings: AnalyticsSettings | None = None,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> ServiceGraph:
    settings = settings or load_settings()
    report_source = SqlAlchemyReportSource(session)
    reporting_service = ReportingService(
        report_source,
        policy=policy,
        max_workers=settings.max_workers,
        parallel_min_batch=settings.parallel_min_batch,
    )
    return ServiceGraph(
        session=session,
        report_source=report_source,
        reporting_service=reporting_service,
    )


def build_services(session: Session, settings: AnalyticsSettings | None = None) -> dict[str, Any]:
    return build_service_graph(session, settings).as_dict()


__all__ = ["ServiceGraph", "build_service_graph", "build_services"]
