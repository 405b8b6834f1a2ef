# tests/conftest.py
import logging
from datetime import date, datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.models import Activity, Participant, Report, Task, TaskStatus, Team
from infra.config import AnalyticsSettings
from infra.db.base import Base
from infra.db.models import ReportAttendanceORM, TaskORM, VillageORM
from infra.db.report import (
    activity_to_orm,
    participant_to_orm,
    report_to_orm,
    task_to_orm,
    team_to_orm,
)
from infra.services import build_services


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


class StoreSeeder:
    """Writes domain objects through the ORM mappers."""

    def __init__(self, session):
        self.session = session

    def village(self, village_id: str = "v-1", name: str = "Kagugu") -> str:
        self.session.add(VillageORM(id=village_id, name=name))
        self.session.flush()
        return village_id

    def team(self, name: str, village_id: str | None = None) -> Team:
        team = Team.create(name)
        self.session.add(team_to_orm(team, village_id=village_id))
        self.session.flush()
        return team

    def activity(self, title: str, when: date | None = None, **extra) -> Activity:
        activity = Activity.create(title, date=when, **extra)
        self.session.add(activity_to_orm(activity))
        self.session.flush()
        return activity

    def task(self, activity: Activity, title: str, **extra) -> Task:
        task = Task.create(activity.id, title, **extra)
        self.session.add(task_to_orm(task))
        self.session.flush()
        return task

    def report(self, task: Task, *, attendees=(), **extra) -> Report:
        extra.setdefault("created_at", datetime(2026, 3, 7, 12, 0))
        report = Report.create(task.id, task.activity_id, **extra)
        self.session.add(report_to_orm(report))
        self.session.flush()
        for person in attendees:
            self.session.add(ReportAttendanceORM(report_id=report.id, participant_id=person.id))
        self.session.flush()
        return report

    def participant(self, name: str, email: str | None = None) -> Participant:
        person = Participant(id=f"p-{name.lower()}", name=name, email=email)
        self.session.add(participant_to_orm(person))
        self.session.flush()
        return person

    def remove_task(self, task: Task) -> None:
        self.session.get(TaskORM, task.id).deleted_at = datetime(2026, 3, 8, 9, 0)
        self.session.flush()


@pytest.fixture
def seed(session):
    return StoreSeeder(session)


@pytest.fixture
def services(session):
    return build_services(session, AnalyticsSettings(db_url="sqlite://", max_workers=1))


@pytest.fixture
def cleanup_day(seed):
    """Two tasks, one reported: the reference activity used across tests."""
    village = seed.village()
    team = seed.team("Isibo A", village_id=village)
    activity = seed.activity("Cleanup Day", date(2026, 3, 7), village_id=village)
    task_a = seed.task(
        activity,
        "Task A",
        description="Clear drainage channels",
        team_id=team.id,
        status=TaskStatus.COMPLETED,
        estimated_cost=1000,
        actual_cost=1200,
        expected_participants=60,
        actual_participants=60,
    )
    task_b = seed.task(
        activity,
        "Task B",
        description="Plant trees along the road",
        team_id=team.id,
        estimated_cost=500,
        actual_cost=400,
        expected_participants=15,
        actual_participants=10,
    )
    alice = seed.participant("Alice")
    bob = seed.participant("Bob")
    report_a = seed.report(
        task_a,
        comment="Channels cleared before the rains.",
        evidence_urls=["https://files.example.org/a1.jpg"],
        attendees=[alice, bob],
    )
    return {
        "activity": activity,
        "team": team,
        "task_a": task_a,
        "task_b": task_b,
        "report_a": report_a,
    }


@pytest.fixture
def seeder_factory():
    return StoreSeeder


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield root
    finally:
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)
