"""Dashboard metrics computed from an application list.

Progress is read from the milestone dates rather than from events, so a
record counts as having reached a stage whenever it holds a usable date for
that stage or any later one.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from jobtracker.schemas.application import JobApplication
from jobtracker.services.status_engine import parse_milestone_date
from jobtracker.services.statuses import get_default_statuses, get_status_by_id


FUNNEL: tuple[tuple[str, str], ...] = (
    ("applied", "applied_date"),
    ("phone_screen", "phone_screen_date"),
    ("round_1", "round1_date"),
    ("round_2", "round2_date"),
    ("accepted", "accepted_date"),
)

RESPONSE_FIELDS = ("phone_screen_date", "round1_date", "round2_date", "accepted_date", "declined_date")


def _has_date(application: JobApplication, attribute: str) -> bool:
    return parse_milestone_date(getattr(application, attribute)) is not None


def _month_start(moment: datetime) -> datetime:
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _previous_month_start(month_start: datetime) -> datetime:
    if month_start.month == 1:
        return month_start.replace(year=month_start.year - 1, month=12)
    return month_start.replace(month=month_start.month - 1)


def application_moment(application: JobApplication) -> datetime:
    """When an application was sent: its applied date, else its creation time."""
    return parse_milestone_date(application.applied_date) or application.created_at


def monthly_overview(applications: list[JobApplication], now: datetime) -> dict[str, Any]:
    this_month_start = _month_start(now)
    last_month_start = _previous_month_start(this_month_start)

    this_month = last_month = 0
    for application in applications:
        moment = application_moment(application)
        if this_month_start <= moment <= now:
            this_month += 1
        elif last_month_start <= moment < this_month_start:
            last_month += 1

    trend = (this_month - last_month) / last_month * 100 if last_month else 0.0
    return {
        "applications_this_month": this_month,
        "applications_last_month": last_month,
        "trend_vs_previous_month": round(trend, 1),
        "daily_average": round(this_month / now.day, 1),
    }


def conversion_rates(applications: list[JobApplication]) -> list[dict[str, Any]]:
    reached = Counter()
    for application in applications:
        dated = [_has_date(application, attribute) for _, attribute in FUNNEL]
        for index, (status_id, _) in enumerate(FUNNEL):
            if any(dated[index:]):
                reached[status_id] += 1

    rates = []
    for (from_id, _), (to_id, _) in zip(FUNNEL, FUNNEL[1:]):
        total = reached[from_id]
        converted = reached[to_id]
        rates.append(
            {
                "from_status_id": from_id,
                "from_status_name": get_status_by_id(from_id).name,
                "to_status_id": to_id,
                "to_status_name": get_status_by_id(to_id).name,
                "total": total,
                "converted": converted,
                "conversion_rate": round(converted / total, 3) if total else 0.0,
            }
        )
    return rates


def pipeline_health(applications: list[JobApplication], now: datetime) -> dict[str, Any]:
    counts = Counter(application.current_status.id for application in applications)
    by_status = [
        {"status_id": status.id, "status_name": status.name, "count": counts.get(status.id, 0)}
        for status in get_default_statuses()
    ]
    latest = max((application.created_at for application in applications), default=None)
    days_since = max(0, (now - latest).days) if latest is not None else 0
    return {"by_status": by_status, "days_since_last_application": days_since}


def top_job_board(applications: Iterable[JobApplication]) -> dict[str, Any]:
    totals: Counter = Counter()
    responses: Counter = Counter()
    for application in applications:
        board = application.job_board.name
        totals[board] += 1
        if any(_has_date(application, attribute) for attribute in RESPONSE_FIELDS):
            responses[board] += 1

    if not totals:
        return {"name": "No data", "response_rate": 0.0}

    # Highest rate first, then most applications, then name for a stable pick.
    name = min(totals, key=lambda board: (-responses[board] / totals[board], -totals[board], board))
    return {"name": name, "response_rate": round(responses[name] / totals[name], 3)}


def dashboard_metrics(applications: Iterable[JobApplication], now: datetime) -> dict[str, Any]:
    applications = list(applications)
    return {
        "total_applications": len(applications),
        "monthly_overview": monthly_overview(applications, now),
        "conversion_rates": conversion_rates(applications),
        "pipeline_health": pipeline_health(applications, now),
        "performance_insights": {"top_job_board": top_job_board(applications)},
    }
