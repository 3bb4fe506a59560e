import mongomock
import pytest
from fastapi.testclient import TestClient

import database
import ledger
import main
from database import create_document
from schemas import Reward, User


@pytest.fixture
def mongo(monkeypatch):
    test_db = mongomock.MongoClient()["ewaste_test"]
    for module in (database, ledger, main):
        monkeypatch.setattr(module, "db", test_db)
    return test_db


@pytest.fixture
def client(mongo):
    return TestClient(main.app)


@pytest.fixture
def make_user(mongo):
    def _make(email="alice@ecomail.com", points=0, role="customer", status="active"):
        user = User(
            email=email,
            password_hash=main.hash_password("secret123"),
            role=role,
            points=points,
            status=status,
        )
        user_id = create_document("user", user)
        return mongo["user"].find_one({"email": email}), user_id

    return _make


@pytest.fixture
def auth_headers(mongo):
    def _headers(user_id):
        return {"Authorization": f"Bearer {main.create_session(user_id)}"}

    return _headers


@pytest.fixture
def admin_headers(make_user, auth_headers):
    _, admin_id = make_user(email="admin@ecomail.com", role="admin")
    return auth_headers(admin_id)


@pytest.fixture
def make_reward(mongo):
    def _make(points_cost=300, stock=5, **overrides):
        data = dict(
            title="20% Off on Flipkart",
            description="Discount on your next purchase",
            type="discount",
            points_cost=points_cost,
            value=20,
            value_type="percentage",
            stock=stock,
            status="active",
        )
        data.update(overrides)
        return create_document("reward", Reward(**data))

    return _make
