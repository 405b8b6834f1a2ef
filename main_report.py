# main_report.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from core.exceptions import DomainError
from core.reporting.api import (
    activity_report_payload,
    dumps_payload,
    report_groups_payload,
    reports_summary_payload,
)
from core.services.reporting import ReportFilterCriteria
from infra.config import load_settings
from infra.db.base import Base, build_engine, build_session_factory
from infra.logging_config import setup_logging
from infra.operational_support import bind_trace_id
from infra.services import build_service_graph
from infra.version import get_app_version

logger = logging.getLogger(__name__)

_FILTER_OPTIONS = (
    "activity_id",
    "query",
    "date_from",
    "date_to",
    "has_evidence",
    "min_cost",
    "max_cost",
    "min_participants",
    "max_participants",
    "team_id",
)


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--activity-id")
    parser.add_argument("--query", "-q")
    parser.add_argument("--date-from")
    parser.add_argument("--date-to")
    parser.add_argument("--has-evidence", help="yes, no or all")
    parser.add_argument("--min-cost")
    parser.add_argument("--max-cost")
    parser.add_argument("--min-participants")
    parser.add_argument("--max-participants")
    parser.add_argument("--team-id")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Activity report analytics")
    parser.add_argument("--db-url", help="SQLAlchemy database URL (defaults to the per-user SQLite file)")
    parser.add_argument("--trace-id")
    parser.add_argument("--out", help="write JSON to this file instead of stdout")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_app_version()}")
    sub = parser.add_subparsers(dest="command", required=True)

    activity_parser = sub.add_parser("activity", help="full report for one activity")
    activity_parser.add_argument("activity_id")

    groups_parser = sub.add_parser("groups", help="reports grouped per activity")
    _add_filter_arguments(groups_parser)

    summary_parser = sub.add_parser("summary", help="summary statistics over filtered reports")
    _add_filter_arguments(summary_parser)
    return parser


def _criteria_from_args(args: argparse.Namespace) -> ReportFilterCriteria:
    params = {name: getattr(args, name, None) for name in _FILTER_OPTIONS}
    return ReportFilterCriteria.from_params(params)


def _emit(text: str, out: str | None) -> None:
    if out:
        path = Path(out)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %s", path)
    else:
        sys.stdout.write(text + "\n")


def run(args: argparse.Namespace) -> Any:
    settings = load_settings()
    engine = build_engine(args.db_url or settings.db_url)
    Base.metadata.create_all(bind=engine)
    session = build_session_factory(engine)()
    try:
        reporting = build_service_graph(session, settings).reporting_service
        if args.command == "activity":
            return activity_report_payload(reporting.get_activity_report(args.activity_id))
        if args.command == "groups":
            return report_groups_payload(reporting.list_report_groups(_criteria_from_args(args)))
        return reports_summary_payload(reporting.get_reports_summary(_criteria_from_args(args)))
    finally:
        session.close()
        engine.dispose()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(load_settings())
    with bind_trace_id(args.trace_id) as trace_id:
        try:
            payload = run(args)
        except DomainError as exc:
            logger.error("%s failed (%s): %s", args.command, exc.code, exc)
            sys.stderr.write(f"{exc} [trace={trace_id}]\n")
            return 2
        _emit(dumps_payload(payload), args.out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
