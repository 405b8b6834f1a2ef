from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional

from core.services.reporting.helpers import (
    Number,
    as_text_list,
    coerce_date,
    coerce_number,
)
from core.services.reporting.models import ActivityGroup

logger = logging.getLogger(__name__)

# request values meaning "no constraint"
_ANY_TOKENS = {"", "all", "any", "all_activities", "all_isibos", "all_teams", "none", "null"}
_YES_TOKENS = {"yes", "true", "1", "with", "with_evidence"}
_NO_TOKENS = {"no", "false", "0", "without", "without_evidence"}


@dataclass(frozen=True)
class ReportFilterCriteria:
    activity_id: Optional[str] = None
    query: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    has_evidence: Optional[bool] = None
    min_cost: Optional[Number] = None
    max_cost: Optional[Number] = None
    min_participants: Optional[Number] = None
    max_participants: Optional[Number] = None
    team_id: Optional[str] = None

    def __post_init__(self) -> None:
        # datetimes and ISO strings compare as calendar dates
        object.__setattr__(self, "date_from", coerce_date(self.date_from))
        object.__setattr__(self, "date_to", coerce_date(self.date_to))

    @property
    def is_empty(self) -> bool:
        return self == ReportFilterCriteria()

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]]) -> "ReportFilterCriteria":
        """Build criteria from loose request parameters.

        Accepts camelCase or snake_case keys. Values that cannot be parsed are
        logged and treated as no constraint.
        """
        params = dict(params or {})

        def pick(*names: str) -> Any:
            for name in names:
                if name in params and params[name] is not None:
                    return params[name]
            return None

        return cls(
            activity_id=_parse_id(pick("activity_id", "activityId", "activity")),
            query=_parse_query(pick("query", "q", "searchQuery", "search")),
            date_from=_parse_date("date_from", pick("date_from", "dateFrom", "from")),
            date_to=_parse_date("date_to", pick("date_to", "dateTo", "to")),
            has_evidence=_parse_flag("has_evidence", pick("has_evidence", "hasEvidence")),
            min_cost=_parse_number("min_cost", pick("min_cost", "minCost")),
            max_cost=_parse_number("max_cost", pick("max_cost", "maxCost")),
            min_participants=_parse_number(
                "min_participants", pick("min_participants", "minParticipants")
            ),
            max_participants=_parse_number(
                "max_participants", pick("max_participants", "maxParticipants")
            ),
            team_id=_parse_id(pick("team_id", "teamId", "isibo_id", "isiboId")),
        )


def _is_any(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() in _ANY_TOKENS


def _parse_id(value: Any) -> Optional[str]:
    if value is None or _is_any(value):
        return None
    text = str(value).strip()
    return text or None


def _parse_query(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_date(name: str, value: Any) -> Optional[date]:
    if value is None or _is_any(value):
        return None
    parsed = coerce_date(value)
    if parsed is None:
        logger.warning("Ignoring invalid %s filter value: %r", name, value)
    return parsed


def _parse_flag(name: str, value: Any) -> Optional[bool]:
    if value is None or _is_any(value):
        return None
    if isinstance(value, bool):
        return value
    token = str(value).strip().lower()
    if token in _YES_TOKENS:
        return True
    if token in _NO_TOKENS:
        return False
    logger.warning("Ignoring invalid %s filter value: %r", name, value)
    return None


def _parse_number(name: str, value: Any) -> Optional[Number]:
    if value is None or _is_any(value):
        return None
    if isinstance(value, bool):
        logger.warning("Ignoring invalid %s filter value: %r", name, value)
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            logger.warning("Ignoring invalid %s filter value: %r", name, value)
            return None
        return coerce_number(value)
    text = str(value).strip()
    try:
        parsed = float(text)
    except ValueError:
        logger.warning("Ignoring invalid %s filter value: %r", name, value)
        return None
    if not math.isfinite(parsed):
        logger.warning("Ignoring invalid %s filter value: %r", name, value)
        return None
    return coerce_number(parsed)


def _in_range(value: Number, low: Optional[Number], high: Optional[Number]) -> bool:
    if low is None and high is None:
        return True
    lower = low if low is not None else 0
    upper = high if high is not None else math.inf
    return lower <= value <= upper


def _group_text(group: ActivityGroup) -> str:
    activity = group.activity
    parts = [activity.title or "", activity.description or ""]
    for record in group.records:
        task = record.task
        if task is not None:
            parts.append(task.title or "")
            parts.append(task.description or "")
    return " ".join(parts).lower()


def _has_evidence(group: ActivityGroup) -> bool:
    return any(as_text_list(record.report.evidence_urls) for record in group.records)


def matches(group: ActivityGroup, criteria: ReportFilterCriteria) -> bool:
    """True when ``group`` satisfies every criterion that is set."""
    activity = group.activity

    if criteria.activity_id and str(activity.id) != criteria.activity_id:
        return False

    if criteria.team_id:
        teams = {
            str(record.task.team_id)
            for record in group.records
            if record.task is not None and record.task.team_id
        }
        if criteria.team_id not in teams:
            return False

    if criteria.query and criteria.query.lower() not in _group_text(group):
        return False

    if criteria.date_from is not None or criteria.date_to is not None:
        when = coerce_date(activity.date)
        if when is None:
            return False
        if criteria.date_from is not None and when < criteria.date_from:
            return False
        if criteria.date_to is not None and when > criteria.date_to:
            return False

    if criteria.has_evidence is not None and _has_evidence(group) != criteria.has_evidence:
        return False

    if not _in_range(group.total_actual_cost, criteria.min_cost, criteria.max_cost):
        return False

    if not _in_range(
        group.total_actual_participants, criteria.min_participants, criteria.max_participants
    ):
        return False

    return True


def filter_groups(
    groups: Iterable[ActivityGroup], criteria: Optional[ReportFilterCriteria] = None
) -> List[ActivityGroup]:
    items = list(groups)
    if criteria is None or criteria.is_empty:
        return items
    kept = [group for group in items if matches(group, criteria)]
    logger.debug("Filter kept %d of %d report groups", len(kept), len(items))
    return kept


__all__ = ["ReportFilterCriteria", "matches", "filter_groups"]
