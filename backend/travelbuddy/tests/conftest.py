"""
Shared fixtures: an in-memory database per test and simple factories.
"""
from datetime import date, timedelta
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import travelbuddy.models  # noqa: F401  registers all tables
from travelbuddy.core.security import create_access_token
from travelbuddy.db.base import Base
from travelbuddy.db.session import get_db
from travelbuddy.main import app
from travelbuddy.models.user import User, UserRole
from travelbuddy.models.travel_plan import TravelPlan, TravelType
from travelbuddy.models.join_request import JoinRequest, JoinRequestStatus


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        fields = {
            "email": f"user{counter['n']}@example.com",
            "full_name": f"Traveller {counter['n']}",
            "travel_interests": [],
        }
        fields.update(overrides)
        user = User(**fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def admin(make_user):
    return make_user(role=UserRole.ADMIN, full_name="Admin")


@pytest.fixture
def make_plan(db):
    def _make(host, **overrides):
        today = date.today()
        fields = {
            "host_id": host.id,
            "country": "Japan",
            "city": "Kyoto",
            "start_date": today + timedelta(days=10),
            "end_date": today + timedelta(days=15),
            "travel_type": TravelType.FRIENDS,
        }
        fields.update(overrides)
        plan = TravelPlan(**fields)
        db.add(plan)
        db.commit()
        db.refresh(plan)
        return plan

    return _make


@pytest.fixture
def make_join_request(db):
    def _make(plan, requester, status=JoinRequestStatus.PENDING):
        join_request = JoinRequest(
            plan_id=plan.id,
            host_id=plan.host_id,
            requester_id=requester.id,
            status=status
        )
        db.add(join_request)
        db.commit()
        db.refresh(join_request)
        return join_request

    return _make


@pytest.fixture
def completed_trip(make_user, make_plan, make_join_request):
    """A finished plan with a host and two accepted participants."""
    host = make_user(full_name="Host")
    first = make_user(full_name="First")
    second = make_user(full_name="Second")
    today = date.today()
    plan = make_plan(
        host,
        start_date=today - timedelta(days=10),
        end_date=today - timedelta(days=3)
    )
    make_join_request(plan, first, JoinRequestStatus.ACCEPTED)
    make_join_request(plan, second, JoinRequestStatus.ACCEPTED)
    return plan, host, first, second


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user) -> dict:
        token = create_access_token({"sub": user.email, "user_id": user.id})
        return {"Authorization": f"Bearer {token}"}

    return _headers
