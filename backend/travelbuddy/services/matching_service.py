"""
Matching service: rank public travel plans for a traveller.

Candidates are filtered in SQL, then every candidate is scored in memory
and the whole list is ordered before it is paginated, so a page always
reflects the rank over the full candidate pool.

Score = 6 * shared host interests
        + 3 if the query country is part of the plan's country
        + 5 if the query city is part of the plan's city
        + overlapping days with the query window, capped at 7

Scoring lives in pure functions over plan objects so it can later be moved
into a storage-side computed sort without changing its contract. The full
filtered set is held in memory; that is the first thing to revisit if
result sets grow large.
"""
import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session, Query, joinedload
from travelbuddy.core.config import settings
from travelbuddy.models.travel_plan import TravelPlan, TravelType, PlanVisibility
from travelbuddy.schemas.match import MatchQuery

logger = logging.getLogger(__name__)

INTEREST_WEIGHT = 6
COUNTRY_BONUS = 3
CITY_BONUS = 5
MAX_OVERLAP_DAYS = 7


class ScoredPlan:
    """A candidate plan together with its match score and the parts behind it."""
    def __init__(self, plan: TravelPlan, match_score: int, interest_match: int, overlap_days: int):
        self.plan = plan
        self.match_score = match_score
        self.interest_match = interest_match
        self.overlap_days = overlap_days

    @property
    def match_meta(self) -> Dict[str, int]:
        return {"interest_match": self.interest_match, "overlap_days": self.overlap_days}


def clamp_pagination(page: Optional[int], limit: Optional[int]) -> Tuple[int, int]:
    """Page is at least 1; limit falls back to the default and stays within [1, max]."""
    page = max(1, page or 1)
    limit = min(settings.MATCH_MAX_LIMIT, max(1, limit or settings.MATCH_DEFAULT_LIMIT))
    return page, limit


def normalize_csv(value: Optional[str]) -> List[str]:
    """Split "Beach, Food,," into ["Beach", "Food"]."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def intersection_count(host_interests: Iterable[str], wanted: Iterable[str]) -> int:
    """Count interests shared by both lists, ignoring case."""
    host = {str(item).lower() for item in host_interests or []}
    return len(host & {str(item).lower() for item in wanted or []})


def calc_overlap_days(a_start: date, a_end: date, b_start: date, b_end: date) -> int:
    """Whole days between the later start and the earlier end; never negative."""
    start = max(a_start, b_start)
    end = min(a_end, b_end)
    return max((end - start).days, 0)


def destination_bonus(plan: TravelPlan, country: Optional[str], city: Optional[str]) -> int:
    bonus = 0
    if country and country.lower() in (plan.country or "").lower():
        bonus += COUNTRY_BONUS
    if city and city.lower() in (plan.city or "").lower():
        bonus += CITY_BONUS
    return bonus


def score_candidate(plan: TravelPlan, query: MatchQuery) -> ScoredPlan:
    """Score a single plan against the query."""
    host_interests = plan.host.travel_interests if plan.host is not None else []
    interest_match = intersection_count(host_interests, query.interests) if query.interests else 0

    overlap_days = 0
    if query.date_from and query.date_to:
        overlap_days = calc_overlap_days(plan.start_date, plan.end_date, query.date_from, query.date_to)

    score = (
        interest_match * INTEREST_WEIGHT
        + destination_bonus(plan, query.country, query.city)
        + min(overlap_days, MAX_OVERLAP_DAYS)
    )
    return ScoredPlan(plan, score, interest_match, overlap_days)


def rank_candidates(plans: Iterable[TravelPlan], query: MatchQuery) -> List[ScoredPlan]:
    """
    Score every plan and order by score, newest first on ties.

    Plan id is the last tie-breaker so equal inputs always give the same order.
    """
    scored = [score_candidate(plan, query) for plan in plans]
    scored.sort(
        key=lambda s: (s.match_score, s.plan.created_at or datetime.min, s.plan.id or 0),
        reverse=True
    )
    return scored


def paginate(items: List[Any], page: int, limit: int) -> List[Any]:
    skip = (page - 1) * limit
    return items[skip:skip + limit]


def apply_plan_filters(
    query: Query,
    country: Optional[str] = None,
    city: Optional[str] = None,
    travel_type: Optional[TravelType] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None
) -> Query:
    """Restrict a TravelPlan query to live public plans matching the filters."""
    query = query.filter(
        TravelPlan.is_deleted.is_(False),
        TravelPlan.visibility == PlanVisibility.PUBLIC
    )
    if country:
        query = query.filter(func.lower(TravelPlan.country).contains(country.lower(), autoescape=True))
    if city:
        query = query.filter(func.lower(TravelPlan.city).contains(city.lower(), autoescape=True))
    if travel_type:
        query = query.filter(TravelPlan.travel_type == travel_type)
    if date_from and date_to:
        # overlap: start <= to AND end >= from
        query = query.filter(TravelPlan.start_date <= date_to, TravelPlan.end_date >= date_from)
    return query


def match_travel_plans(query: MatchQuery, db: Session) -> Dict[str, Any]:
    """Return one page of ranked plans plus paging metadata."""
    page, limit = clamp_pagination(query.page, query.limit)

    candidates = apply_plan_filters(
        db.query(TravelPlan).options(joinedload(TravelPlan.host)),
        country=query.country,
        city=query.city,
        travel_type=query.travel_type,
        date_from=query.date_from,
        date_to=query.date_to
    )
    if query.exclude_self and query.requester_id is not None:
        candidates = candidates.filter(TravelPlan.host_id != query.requester_id)

    plans = candidates.order_by(TravelPlan.created_at.desc()).all()
    ranked = rank_candidates(plans, query)

    logger.debug(f"Matched {len(ranked)} candidate plans for requester {query.requester_id}")
    return {
        "meta": {"page": page, "limit": limit, "total": len(ranked)},
        "data": paginate(ranked, page, limit),
    }
