# infra/db/models.py
from __future__ import annotations
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    String,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Enum as SAEnum,
    Index,
    Integer,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base
from core.models import (
    ActivityStatus,
    TaskStatus,
)


class VillageORM(Base):
    __tablename__ = "villages"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)


class TeamORM(Base):
    __tablename__ = "teams"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    village_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("villages.id", ondelete="SET NULL"), nullable=True
    )


class ActivityORM(Base):
    __tablename__ = "activities"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    status: Mapped[ActivityStatus] = mapped_column(
        SAEnum(ActivityStatus), default=ActivityStatus.PENDING, nullable=False
    )
    village_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("villages.id", ondelete="SET NULL"), nullable=True
    )
Index("idx_activities_date", ActivityORM.date)


class TaskORM(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    activity_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("activities.id", ondelete="CASCADE"),
        nullable=False,
    )
    team_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    status: Mapped[TaskStatus] = mapped_column(
        SAEnum(TaskStatus), default=TaskStatus.PENDING, nullable=False
    )

    estimated_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True, default=0.0)
    actual_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True, default=0.0)
    expected_participants: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=0)
    actual_participants: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=0)
    expected_financial_impact: Mapped[Optional[float]] = mapped_column(Float, nullable=True, default=0.0)
    actual_financial_impact: Mapped[Optional[float]] = mapped_column(Float, nullable=True, default=0.0)

    # soft removal; removed tasks stay for report history but are hidden
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
Index("idx_tasks_activity_id", TaskORM.activity_id)
Index("idx_tasks_team_id", TaskORM.team_id)


class ReportORM(Base):
    __tablename__ = "reports"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    task_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True
    )
    activity_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("activities.id", ondelete="SET NULL"), nullable=True
    )
    comment: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    # JSON-encoded lists of strings
    materials_used: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    evidence_urls: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    challenges_faced: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    suggestions: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
Index("idx_reports_task_id", ReportORM.task_id)


class ParticipantORM(Base):
    __tablename__ = "participants"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String, nullable=True)


class ReportAttendanceORM(Base):
    __tablename__ = "report_attendance"

    report_id: Mapped[str] = mapped_column(
        String, ForeignKey("reports.id", ondelete="CASCADE"), primary_key=True
    )
    participant_id: Mapped[str] = mapped_column(
        String, ForeignKey("participants.id", ondelete="CASCADE"), primary_key=True
    )
