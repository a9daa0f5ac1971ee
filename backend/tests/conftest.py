from __future__ import annotations

from datetime import date, datetime

import httpx
import mongomock
import pytest
from fastapi.testclient import TestClient

from auth import create_token
from database import Database
from dependencies import get_today
from main import create_app
from models import RoutinePlan, RoutineTask
from services import plans
from services.plan_client import PlanGeneratorClient

USER_ID = "user-1"
TODAY = date(2024, 1, 3)  # Wednesday
ANCHOR = datetime(2023, 12, 31, 10, 0)  # Sunday

GENERATED = {
    "success": True,
    "plan": {
        "routine": [
            {"day": "Monday", "action": "Wash", "details": "Sulfate-free shampoo", "time": "19:00"},
            {"day": "Wednesday", "action": "Oil", "details": "Scalp massage"},
        ],
        "tips": ["Sleep on satin"],
        "recommendedProducts": ["Jojoba oil"],
    },
}


class GeneratorStub:
    """Stands in for the remote plan generator behind httpx.MockTransport."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.body = GENERATED
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, content=self.body)


@pytest.fixture
def db():
    database = Database(mongomock.MongoClient())
    database.ensure_indexes()
    return database


@pytest.fixture
def generator():
    return GeneratorStub()


@pytest.fixture
def plan_client(generator):
    return PlanGeneratorClient(
        generate_url="http://generator.test/createAIHairPlan",
        regenerate_url="http://generator.test/regenerateAIHairPlan",
        timeout=5,
        transport=httpx.MockTransport(generator.handler),
    )


@pytest.fixture
def app(db, plan_client):
    app = create_app(database=db, plan_client=plan_client)
    app.dependency_overrides[get_today] = lambda: TODAY
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {create_token(USER_ID)}"}


@pytest.fixture
def plan_factory(db):
    """Store a current plan made of (weekday, action) pairs anchored at ANCHOR."""

    def _create(*entries, created_at=ANCHOR, user_id=USER_ID):
        plan = RoutinePlan(
            tasks=[RoutineTask(weekday=weekday, action=action, details=f"{action} details")
                   for weekday, action in entries],
            created_at=created_at,
        )
        plans.store_plan(db, user_id, plan)
        return plan

    return _create
