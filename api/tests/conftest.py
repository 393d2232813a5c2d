"""
Shared fixtures: an in-memory database, an API client bound to it and a
manual scheduler for driving delayed advances by hand.
"""
import os

# Configure before the app reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADVANCE_DELAY_SECONDS"] = "0"
os.environ["OPENAI_API_KEY"] = ""

from dataclasses import dataclass, field
from typing import Callable, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.core.database import get_session
from app.main import app
from app.models import models  # noqa: F401
from app.services.exercise_service import seed_sample_exercises
from app.services.folder_service import ensure_default_folder
from app.services.session_service import registry


@dataclass
class FakeExercise:
    """Plain exercise record for the pure services."""
    id: str
    expected_answer: str = "await page.click('button');"
    alternative_answers: List[str] = field(default_factory=list)
    hints: List[str] = field(default_factory=list)
    difficulty: int = 1
    category: str = "Actions"
    folder_id: str = "default"


class ManualHandle:
    def __init__(self, callback: Callable[[], None]):
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Records scheduled callbacks; run_pending fires those not cancelled."""

    def __init__(self):
        self.handles: List[ManualHandle] = []
        self.delays: List[float] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(callback)
        self.handles.append(handle)
        self.delays.append(delay)
        return handle

    def run_pending(self) -> int:
        pending, self.handles = self.handles, []
        fired = 0
        for handle in pending:
            if not handle.cancelled:
                handle.callback()
                fired += 1
        return fired


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        ensure_default_folder(session)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def seeded_session(session):
    seed_sample_exercises(session)
    return session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    registry.clear()
    yield TestClient(app)
    registry.clear()
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_client(client, engine):
    with Session(engine) as session:
        seed_sample_exercises(session)
    return client


def exercise_payload(**overrides) -> dict:
    payload = {
        "title": "Click a button",
        "description": "Click the button element on the page.",
        "expected_answer": "await page.locator('button').click();",
        "alternative_answers": ["await page.click('button');"],
        "hints": ["Use page.locator()", "Pass 'button' as the selector"],
        "difficulty": 1,
        "category": "Actions",
    }
    payload.update(overrides)
    return payload
