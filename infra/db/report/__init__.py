from infra.db.report.mapper import (
    activity_from_orm,
    activity_to_orm,
    participant_from_orm,
    participant_to_orm,
    report_from_orm,
    report_to_orm,
    task_from_orm,
    task_to_orm,
    team_to_orm,
)
from infra.db.report.repository import SqlAlchemyReportSource

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
    "SqlAlchemyReportSource",
]
