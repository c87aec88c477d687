from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from neurovia.database import get_session
from neurovia.dependencies import get_current_admin
from neurovia.enums import AdminRole
from neurovia.main import app
from neurovia.models import Admin
from neurovia.services.seed import seed_catalog

# Answer key of the seeded quiz, in delivery order.
ANSWER_KEY = [0, 1, 1, 1, 0, 1, 1, 2, 2, 1, 1, 1]

ESSENTIALS = [
    "DHT22 Temperature & Humidity Sensor",
    "LM358 Op-Amp",
    "ESP32 Microcontroller",
    "ESP8266 WiFi Module",
    "ThingSpeak Cloud Platform",
    "Relay Module",
]


@pytest.fixture
def session_factory(tmp_path):
    """A seeded SQLite file per test; NullPool so every event loop gets fresh connections."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def prepare():
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        async with factory() as session:
            await seed_catalog(session)

    asyncio.run(prepare())
    yield factory
    asyncio.run(engine.dispose())


@pytest.fixture
def client(session_factory) -> TestClient:
    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def _admin(role: AdminRole) -> Admin:
    return Admin(id=f"{role.value}-id", username=role.value, hashed_password="-", role=role)


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    app.dependency_overrides[get_current_admin] = lambda: _admin(AdminRole.SUPER_ADMIN)
    return client


@pytest.fixture
def plain_admin_client(client: TestClient) -> TestClient:
    app.dependency_overrides[get_current_admin] = lambda: _admin(AdminRole.ADMIN)
    return client


def register_team(client: TestClient, name: str = "Circuit Breakers") -> str:
    resp = client.post(
        "/api/teams/register",
        json={
            "team_name": name,
            "members": [
                {"name": "Ada Lovelace", "email": "ada@neurovia.dev"},
                {"name": "Alan Turing", "email": "alan@neurovia.dev"},
            ],
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["team_id"]


def component_ids(client: TestClient, names: list[str]) -> list[str]:
    resp = client.get("/api/round1/components")
    assert resp.status_code == 200, resp.text
    by_name = {component["name"]: component["id"] for component in resp.json()["components"]}
    return [by_name[name] for name in names]


def submit_quiz(client: TestClient, team_id: str, correct: int = 12) -> dict:
    answers = [
        answer if index < correct else (answer + 1) % 4
        for index, answer in enumerate(ANSWER_KEY)
    ]
    resp = client.post("/api/round1/quiz/submit", json={"team_id": team_id, "answers": answers})
    assert resp.status_code == 200, resp.text
    return resp.json()


def complete_round1(client: TestClient, team_id: str, correct: int = 12) -> dict:
    submit_quiz(client, team_id, correct)
    resp = client.post(
        "/api/round1/purchase",
        json={"team_id": team_id, "component_ids": component_ids(client, ESSENTIALS)},
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


def complete_round2(client: TestClient, team_id: str, time_taken: float = 3) -> dict:
    purchased = client.get(f"/api/round1/team/{team_id}").json()["purchased_components"]
    by_type = {component["type"]: component["component_id"] for component in purchased}
    flow = client.get("/api/round2/correct-flow").json()["flow"]
    schematic = [{"component_id": by_type[component_type]} for component_type in flow]
    resp = client.post(
        "/api/round2/submit",
        json={"team_id": team_id, "schematic": schematic, "time_taken": time_taken},
    )
    assert resp.status_code == 200, resp.text
    return resp.json()
