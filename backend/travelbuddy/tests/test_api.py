"""
Tests for the HTTP endpoints.
"""
from datetime import date, timedelta
from travelbuddy.models.travel_plan import PlanVisibility


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_protected_routes_need_a_token(client):
    assert client.get("/api/plans/mine").status_code == 401
    assert client.get("/api/plans/mine", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_join_flow(client, make_user, auth_headers):
    host = make_user(full_name="Host", travel_interests=["Food", "Hiking"])
    guest = make_user(full_name="Guest")
    today = date.today()

    response = client.post(
        "/api/plans",
        json={
            "destination": {"country": "Japan", "city": "Kyoto"},
            "start_date": str(today + timedelta(days=10)),
            "end_date": str(today + timedelta(days=15)),
            "travel_type": "FRIENDS",
            "max_participants": 2,
        },
        headers=auth_headers(host)
    )
    assert response.status_code == 201
    plan_id = response.json()["id"]

    response = client.post(
        "/api/join-requests",
        json={"plan_id": plan_id, "message": "Hi!"},
        headers=auth_headers(guest)
    )
    assert response.status_code == 201
    request_id = response.json()["id"]
    assert response.json()["status"] == "PENDING"

    duplicate = client.post("/api/join-requests", json={"plan_id": plan_id}, headers=auth_headers(guest))
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"] == "You already requested to join this plan."

    incoming = client.get("/api/join-requests/incoming", headers=auth_headers(host)).json()
    assert [r["requester"]["full_name"] for r in incoming] == ["Guest"]

    forbidden = client.patch(
        f"/api/join-requests/{request_id}/status", json={"status": "ACCEPTED"}, headers=auth_headers(guest)
    )
    assert forbidden.status_code == 403

    accepted = client.patch(
        f"/api/join-requests/{request_id}/status", json={"status": "ACCEPTED"}, headers=auth_headers(host)
    )
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "ACCEPTED"

    again = client.patch(f"/api/join-requests/{request_id}/cancel", headers=auth_headers(guest))
    assert again.status_code == 400
    assert again.json()["detail"] == "Only pending requests can be canceled."

    full = client.post("/api/join-requests", json={"plan_id": plan_id}, headers=auth_headers(make_user()))
    assert full.status_code == 400
    assert full.json()["detail"] == "This travel plan is already full."


def test_decision_body_is_validated(client, make_user, make_plan, make_join_request, auth_headers):
    host = make_user()
    join_request = make_join_request(make_plan(host), make_user())

    response = client.patch(
        f"/api/join-requests/{join_request.id}/status", json={"status": "CANCELED"}, headers=auth_headers(host)
    )
    assert response.status_code == 422


def test_match_endpoint(client, make_user, make_plan, auth_headers):
    me = make_user()
    host = make_user(travel_interests=["food"])
    make_plan(me)
    plan = make_plan(host, start_date=date(2026, 3, 1), end_date=date(2026, 3, 10))

    response = client.get(
        "/api/plans/match",
        params={"interests": "Food,Art", "country": "japan", "from": "2026-03-05", "to": "2026-03-15", "limit": 100},
        headers=auth_headers(me)
    )

    assert response.status_code == 200
    body = response.json()
    assert body["meta"] == {"page": 1, "limit": 50, "total": 1}
    assert body["data"][0]["id"] == plan.id
    assert body["data"][0]["match_score"] == 6 + 3 + 5
    assert body["data"][0]["match_meta"] == {"interest_match": 1, "overlap_days": 5}
    assert body["data"][0]["host"]["travel_interests"] == ["food"]


def test_review_and_profile(client, completed_trip, auth_headers):
    plan, host, first, second = completed_trip

    for reviewer, rating in ((first, 5), (second, 4)):
        response = client.post(
            "/api/reviews",
            json={"plan_id": plan.id, "reviewee_id": host.id, "rating": rating},
            headers=auth_headers(reviewer)
        )
        assert response.status_code == 201

    bad = client.post(
        "/api/reviews",
        json={"plan_id": plan.id, "reviewee_id": second.id, "rating": 6},
        headers=auth_headers(first)
    )
    assert bad.status_code == 422

    profile = client.get(f"/api/users/{host.id}").json()
    assert profile["rating_summary"] == {"average": 4.5, "count": 2}
    assert len(client.get(f"/api/reviews/user/{host.id}").json()) == 2


def test_private_plan_requires_owner(client, make_user, make_plan, auth_headers):
    host = make_user()
    plan = make_plan(host, visibility=PlanVisibility.PRIVATE)

    assert client.get(f"/api/plans/{plan.id}").status_code == 403
    assert client.get(f"/api/plans/{plan.id}", headers=auth_headers(make_user())).status_code == 403
    assert client.get(f"/api/plans/{plan.id}", headers=auth_headers(host)).status_code == 200
    assert client.get("/api/plans/9999").status_code == 404


def test_null_plan_fields_are_rejected(client, make_user, make_plan, auth_headers):
    host = make_user()
    plan = make_plan(host)

    for body in ({"status": None}, {"start_date": None}, {"destination": None}):
        response = client.patch(f"/api/plans/{plan.id}", json=body, headers=auth_headers(host))
        assert response.status_code == 422

    assert client.get(f"/api/plans/{plan.id}").json()["status"] == "UPCOMING"
