import os

# Must be set before the app (and its cached settings) is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.database import get_session
from app.main import app

PASSWORD = "secret123"

NYC_PICKUP = {"lat": 40.7128, "lng": -74.0060}
NYC_DELIVERY = {"lat": 40.7580, "lng": -73.9855}


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(session):
    def _get_session():
        return session

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(client, email, role, name=None, password=PASSWORD, phone=None):
    body = {
        "name": name or email.split("@")[0],
        "email": email,
        "password": password,
        "role": role,
    }
    if phone is not None:
        body["phone"] = phone
    response = client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.json()
    return response.json()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def order_payload(**overrides):
    payload = {
        "customerName": "Jane Customer",
        "customerPhone": "+1-555-0100",
        "pickupAddress": "1 Centre St, New York",
        "pickupLocation": dict(NYC_PICKUP),
        "deliveryAddress": "Times Square, New York",
        "deliveryLocation": dict(NYC_DELIVERY),
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def admin(client):
    data = register(client, "a@x.com", "admin", name="Admin")
    return {"id": data["user"]["id"], "headers": auth_header(data["token"])}


@pytest.fixture()
def partner(client):
    data = register(client, "p@x.com", "partner", name="Pat Partner", phone="555-0001")
    return {"id": data["user"]["id"], "headers": auth_header(data["token"])}


@pytest.fixture()
def other_partner(client):
    data = register(client, "q@x.com", "partner", name="Quinn Partner")
    return {"id": data["user"]["id"], "headers": auth_header(data["token"])}


@pytest.fixture()
def create_order(client, admin):
    def _create(**overrides):
        response = client.post(
            "/api/orders", json=order_payload(**overrides), headers=admin["headers"]
        )
        assert response.status_code == 201, response.json()
        return response.json()["order"]

    return _create
