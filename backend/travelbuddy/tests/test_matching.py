"""
Tests for plan matching: scoring, ordering, pagination and filtering.
"""
from datetime import date, datetime, timedelta
from travelbuddy.models.user import User
from travelbuddy.models.travel_plan import TravelPlan, TravelType, PlanVisibility
from travelbuddy.schemas.match import MatchQuery
from travelbuddy.services.matching_service import (
    calc_overlap_days, clamp_pagination, intersection_count, match_travel_plans,
    normalize_csv, paginate, rank_candidates, score_candidate
)


def at(day: int) -> datetime:
    return datetime(2026, 1, 1) + timedelta(days=day)


def candidate(plan_id, interests=(), created=0, country="Japan", city="Kyoto",
              start=date(2026, 3, 1), end=date(2026, 3, 10)):
    """Unsaved plan with its host attached, enough for the pure scoring functions."""
    return TravelPlan(
        id=plan_id,
        country=country,
        city=city,
        start_date=start,
        end_date=end,
        travel_type=TravelType.FRIENDS,
        created_at=at(created),
        host=User(full_name="Host", email=f"host{plan_id}@example.com", travel_interests=list(interests))
    )


def test_overlap_days_uses_whole_days():
    assert calc_overlap_days(date(2026, 3, 1), date(2026, 3, 10), date(2026, 3, 5), date(2026, 3, 15)) == 5


def test_overlap_days_is_never_negative():
    assert calc_overlap_days(date(2026, 3, 1), date(2026, 3, 4), date(2026, 3, 5), date(2026, 3, 15)) == 0


def test_interest_intersection_ignores_case():
    assert intersection_count(["Beach", "FOOD", "hiking"], ["food", "beach", "museums"]) == 2
    assert intersection_count([], ["food"]) == 0


def test_normalize_csv():
    assert normalize_csv(" Beach, Food,, ") == ["Beach", "Food"]
    assert normalize_csv(None) == []


def test_match_query_parses_interest_csv():
    assert MatchQuery(interests="Beach, Food").interests == ["Beach", "Food"]


def test_score_combines_interests_destination_and_overlap():
    plan = candidate(1, interests=["Food", "Art", "Surfing"], country="Japan", city="Kyoto")
    query = MatchQuery(
        country="jap",
        city="KYO",
        interests=["food", "art"],
        date_from=date(2026, 3, 5),
        date_to=date(2026, 3, 15)
    )

    scored = score_candidate(plan, query)

    assert scored.interest_match == 2
    assert scored.overlap_days == 5
    assert scored.match_score == 2 * 6 + 3 + 5 + 5
    assert scored.match_meta == {"interest_match": 2, "overlap_days": 5}


def test_overlap_bonus_is_capped_and_needs_both_bounds():
    plan = candidate(1, start=date(2026, 3, 1), end=date(2026, 3, 31))
    full_window = MatchQuery(date_from=date(2026, 3, 1), date_to=date(2026, 3, 31))
    open_window = MatchQuery(date_from=date(2026, 3, 1))

    assert score_candidate(plan, full_window).match_score == 7
    assert score_candidate(plan, full_window).overlap_days == 30
    assert score_candidate(plan, open_window).match_score == 0


def test_equal_scores_rank_newest_first():
    older = candidate(1, interests=["food"], created=1)
    newer = candidate(2, interests=["food"], created=2)

    ranked = rank_candidates([older, newer], MatchQuery(interests=["food"]))

    assert [s.plan.id for s in ranked] == [2, 1]
    assert ranked[0].match_score == ranked[1].match_score == 6


def test_higher_score_wins_regardless_of_age():
    query = MatchQuery(interests=["Food", "Art"], date_from=date(2026, 3, 1), date_to=date(2026, 3, 31))
    twelve = candidate(1, interests=["food", "art"], created=1,
                       start=date(2026, 5, 1), end=date(2026, 5, 10))
    ten = candidate(2, interests=["food"], created=9,
                    start=date(2026, 3, 1), end=date(2026, 3, 5))

    ranked = rank_candidates([ten, twelve], query)

    assert [(s.plan.id, s.match_score) for s in ranked] == [(1, 12), (2, 10)]


def test_ranking_is_deterministic():
    plans = [candidate(i, interests=["food"] if i % 3 else [], created=i % 4) for i in range(1, 13)]
    query = MatchQuery(interests=["food"])

    first = [s.plan.id for s in rank_candidates(plans, query)]
    second = [s.plan.id for s in rank_candidates(list(reversed(plans)), query)]

    assert first == second


def test_page_two_matches_slice_of_full_ranking():
    plans = [candidate(i, interests=["food"] if i % 2 else [], created=i) for i in range(1, 26)]
    ranked = rank_candidates(plans, MatchQuery(interests=["food"]))

    page_two = paginate(ranked, page=2, limit=10)

    assert [s.plan.id for s in page_two] == [s.plan.id for s in ranked[10:20]]
    assert paginate(ranked, page=3, limit=10) == ranked[20:25]


def test_pagination_is_clamped():
    assert clamp_pagination(None, None) == (1, 10)
    assert clamp_pagination(0, 500) == (1, 50)
    assert clamp_pagination(-3, -1) == (1, 1)
    assert clamp_pagination(4, 25) == (4, 25)


def test_match_filters_candidates(db, make_user, make_plan):
    me = make_user(travel_interests=["Food"])
    host = make_user(travel_interests=["food", "Hiking"])

    kyoto = make_plan(host, country="Japan", city="Kyoto")
    make_plan(host, country="Japan", city="Tokyo", travel_type=TravelType.SOLO)
    make_plan(host, country="Japan", city="Kyoto", visibility=PlanVisibility.PRIVATE)
    make_plan(host, country="Japan", city="Kyoto", is_deleted=True)
    make_plan(host, country="Italy", city="Rome")
    make_plan(me, country="Japan", city="Kyoto")

    result = match_travel_plans(
        MatchQuery(country="japan", city="kyo", travel_type=TravelType.FRIENDS, requester_id=me.id),
        db
    )

    assert result["meta"] == {"page": 1, "limit": 10, "total": 1}
    assert [s.plan.id for s in result["data"]] == [kyoto.id]
    assert result["data"][0].match_score == 8


def test_exclude_self_can_be_disabled(db, make_user, make_plan):
    me = make_user()
    mine = make_plan(me)

    excluded = match_travel_plans(MatchQuery(requester_id=me.id), db)
    included = match_travel_plans(MatchQuery(requester_id=me.id, exclude_self=False), db)

    assert excluded["meta"]["total"] == 0
    assert [s.plan.id for s in included["data"]] == [mine.id]


def test_match_date_window_filter_and_ranking(db, make_user, make_plan):
    host = make_user(travel_interests=["food"])
    other_host = make_user(travel_interests=[])

    inside = make_plan(other_host, start_date=date(2026, 3, 1), end_date=date(2026, 3, 10))
    shared_interest = make_plan(host, start_date=date(2026, 3, 14), end_date=date(2026, 3, 20))
    make_plan(host, start_date=date(2026, 4, 1), end_date=date(2026, 4, 5))

    result = match_travel_plans(
        MatchQuery(interests=["FOOD"], date_from=date(2026, 3, 5), date_to=date(2026, 3, 15)),
        db
    )

    assert result["meta"]["total"] == 2
    assert [(s.plan.id, s.match_score) for s in result["data"]] == [
        (shared_interest.id, 6 + 1),
        (inside.id, 5),
    ]


def test_match_paginates_after_ranking(db, make_user, make_plan):
    host = make_user()
    for _ in range(25):
        make_plan(host)

    full = match_travel_plans(MatchQuery(limit=50), db)
    page_two = match_travel_plans(MatchQuery(page=2, limit=10), db)

    assert page_two["meta"] == {"page": 2, "limit": 10, "total": 25}
    assert [s.plan.id for s in page_two["data"]] == [s.plan.id for s in full["data"][10:20]]
