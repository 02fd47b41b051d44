"""
Cross-client rollups of follow-ups: company summary cards, the calendar feed
and the per-company client listing.

Nutritionists are always scoped to follow-ups assigned to their own display
name; admins see everything and may narrow by nutritionist.
"""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from wellness import crud
from wellness.core.errors import InvalidInput, NotFound
from wellness.models.followup import Followup, FollowupStatus
from wellness.models.user import Role
from wellness.schemas.auth import Principal
from wellness.schemas.company import CompanyOut
from wellness.schemas.client import ClientOut
from wellness.schemas.followup import CalendarEvent
from wellness.schemas.summary import CompanyCard, SummaryResponse, SummaryTotals
from wellness.services.followup_lifecycle import FollowupLifecycle
from wellness.utils.numbers import round_half_up
from wellness.utils.timezone import end_of_day, parse_datetime, parse_day, start_of_day, utcnow

logger = logging.getLogger(__name__)

OVERDUE = "overdue"
ALL = "all"
STATUS_FILTERS = (ALL, OVERDUE) + FollowupStatus.ALL


def scoped_nutritionist(principal: Principal, requested: Optional[str] = None) -> Optional[str]:
    """Nutritionists are pinned to themselves whatever they ask for."""
    if principal.role == Role.NUTRITIONIST:
        return principal.name
    requested = (requested or "").strip()
    return requested or None


def parse_window(start: Optional[str], end: Optional[str]) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Inclusive window from query values. A bare ``end`` day extends to 23:59:59.999."""
    try:
        lower = parse_datetime(start) if start else None
        if end and len(end.strip()) == 10:
            upper = end_of_day(parse_day(end))
        else:
            upper = parse_datetime(end) if end else None
    except ValueError:
        raise InvalidInput("Invalid date", "Use YYYY-MM-DD or an ISO-8601 timestamp")
    return lower, upper


def parse_status_filter(status: Optional[str]) -> str:
    wanted = (status or ALL).strip().lower() or ALL
    if wanted not in STATUS_FILTERS:
        raise InvalidInput("Invalid status filter", f"Expected one of: {', '.join(STATUS_FILTERS)}")
    return wanted


def earliest_sort_key(followup: Followup):
    # undated rows first, then by effective time, then insertion order
    sched = followup.effective_scheduled_at
    return (sched is not None, sched or datetime.min, followup.id)


def earliest_per_client(followups: List[Followup]) -> List[Followup]:
    """The representative follow-up of every (company, client) pair."""
    earliest: Dict[Tuple[int, int], Followup] = {}
    for followup in sorted(followups, key=earliest_sort_key):
        earliest.setdefault((followup.company_id, followup.client_id), followup)
    return list(earliest.values())


def completion_pct(done: int, pending: int) -> int:
    denominator = done + pending
    if denominator <= 0:
        return 0
    return int(round_half_up(done / denominator * 100))


class RollupService:
    def __init__(self, db: Session, overdue_after_hours: Optional[int] = None):
        self.db = db
        self.lifecycle = FollowupLifecycle(db, overdue_after_hours)
        self.overdue_after_hours = self.lifecycle.overdue_after_hours

    def _matches_status(self, followup: Followup, wanted: str, now: datetime) -> bool:
        if wanted == ALL:
            return True
        if wanted == OVERDUE:
            return followup.is_overdue(now, self.overdue_after_hours)
        return (followup.status or FollowupStatus.PENDING) == wanted

    # ------------------------------------------------------------------ summary

    def summary(
        self,
        principal: Principal,
        *,
        status: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
        nutritionist: Optional[str] = None,
    ) -> SummaryResponse:
        wanted = parse_status_filter(status)
        lower, upper = parse_window(start, end)
        now = utcnow()
        assigned = scoped_nutritionist(principal, nutritionist)

        rows = earliest_per_client(
            crud.followup.list_filtered(self.db, assigned_nutritionist=assigned)
        )

        # the window applies to each client's earliest follow-up, not to all of them
        if lower is not None or upper is not None:
            rows = [
                f for f in rows
                if f.effective_scheduled_at is not None
                and (lower is None or f.effective_scheduled_at >= lower)
                and (upper is None or f.effective_scheduled_at <= upper)
            ]
        rows = [f for f in rows if self._matches_status(f, wanted, now)]

        by_company: Dict[int, Dict[str, int]] = defaultdict(
            lambda: {FollowupStatus.DONE: 0, FollowupStatus.PENDING: 0, FollowupStatus.REACHED_OUT: 0, OVERDUE: 0}
        )
        clients_seen: Dict[int, set] = defaultdict(set)
        for followup in rows:
            counts = by_company[followup.company_id]
            state = followup.status or FollowupStatus.PENDING
            if state == FollowupStatus.DONE:
                counts[FollowupStatus.DONE] += 1
            elif state == FollowupStatus.REACHED_OUT:
                counts[FollowupStatus.REACHED_OUT] += 1
            else:
                counts[FollowupStatus.PENDING] += 1
            if followup.is_overdue(now, self.overdue_after_hours):
                counts[OVERDUE] += 1
            clients_seen[followup.company_id].add(followup.client_id)

        is_admin = principal.role == Role.ADMIN
        if is_admin:
            total_clients = crud.client.count_by_company(self.db)
        else:
            total_clients = {cid: len(ids) for cid, ids in clients_seen.items()}

        cards = []
        for company in crud.company.list(self.db):
            if not is_admin and company.company_id not in by_company:
                continue
            counts = by_company.get(company.company_id) or {
                FollowupStatus.DONE: 0, FollowupStatus.PENDING: 0, FollowupStatus.REACHED_OUT: 0, OVERDUE: 0
            }
            cards.append(
                CompanyCard(
                    company_id=company.company_id,
                    name=company.name,
                    total_clients=total_clients.get(company.company_id, 0),
                    done=counts[FollowupStatus.DONE],
                    pending=counts[FollowupStatus.PENDING],
                    reached_out=counts[FollowupStatus.REACHED_OUT],
                    overdue=counts[OVERDUE],
                    completion_pct=completion_pct(counts[FollowupStatus.DONE], counts[FollowupStatus.PENDING]),
                )
            )
        cards.sort(key=lambda c: c.name.lower())

        # totals are derived from the cards so the footer always agrees with them
        done = sum(c.done for c in cards)
        pending = sum(c.pending for c in cards)
        totals = SummaryTotals(
            total_clients=sum(c.total_clients for c in cards),
            done=done,
            pending=pending,
            reached_out=sum(c.reached_out for c in cards),
            overdue=sum(c.overdue for c in cards),
            completion_pct=completion_pct(done, pending),
        )
        return SummaryResponse(companies=cards, totals=totals)

    # ----------------------------------------------------------------- calendar

    def calendar(
        self,
        principal: Principal,
        *,
        start: Optional[str],
        end: Optional[str],
        nutritionist: Optional[str] = None,
    ) -> List[CalendarEvent]:
        if not start or not end:
            raise InvalidInput("start and end are required (YYYY-MM-DD)")
        try:
            lower = start_of_day(parse_day(start))
            upper = end_of_day(parse_day(end))
        except ValueError:
            raise InvalidInput("start and end are required (YYYY-MM-DD)", "Dates must be YYYY-MM-DD")

        now = utcnow()
        followups = crud.followup.list_filtered(
            self.db,
            assigned_nutritionist=scoped_nutritionist(principal, nutritionist),
            start=lower,
            end=upper,
        )
        followups.sort(key=lambda f: (f.effective_scheduled_at, f.id))

        client_names = {
            (c.company_id, c.client_id): c.name
            for c in crud.client.get_many_by_pairs(self.db, {(f.company_id, f.client_id) for f in followups})
        }
        company_names = crud.company.names_by_id(self.db, (f.company_id for f in followups))

        return [
            CalendarEvent(
                id=f.id,
                date=f.effective_scheduled_at.strftime("%Y-%m-%d"),
                scheduled_at=f.effective_scheduled_at,
                status=f.status or FollowupStatus.PENDING,
                overdue=f.is_overdue(now, self.overdue_after_hours),
                client_id=f.client_id,
                client_name=client_names.get((f.company_id, f.client_id)) or "",
                company_id=f.company_id,
                company_name=company_names.get(f.company_id) or "",
                assigned_nutritionist=f.assigned_nutritionist,
            )
            for f in followups
        ]

    # ---------------------------------------------------------- company listing

    def company_clients(
        self,
        principal: Principal,
        company_id: int,
        *,
        status: Optional[str] = None,
        q: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> dict:
        """Every master client of a company with its (filtered) follow-ups attached."""
        company = crud.company.get(self.db, company_id)
        if company is None:
            raise NotFound("Company not found")

        wanted = parse_status_filter(status)
        lower, upper = parse_window(start, end)
        now = utcnow()

        followups = crud.followup.list_filtered(
            self.db,
            company_id=company_id,
            assigned_nutritionist=scoped_nutritionist(principal),
            status=wanted if wanted in FollowupStatus.ALL else None,
            start=lower,
            end=upper,
        )
        by_client: Dict[int, List[Followup]] = defaultdict(list)
        for followup in sorted(followups, key=earliest_sort_key):
            if self._matches_status(followup, wanted, now):
                by_client[followup.client_id].append(followup)

        clients = []
        for client in crud.client.list_for_company(self.db, company_id=company_id, q=q):
            item = ClientOut.model_validate(client).model_dump(mode="json")
            item["followups"] = [self.lifecycle.present(f, now) for f in by_client.get(client.client_id, [])]
            clients.append(item)

        return {"company": CompanyOut.model_validate(company), "clients": clients}
