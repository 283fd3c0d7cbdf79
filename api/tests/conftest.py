import os

# Settings are read at import time, so configure before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_SAMPLE_CARDS", "false")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from app.core.database import build_engine, get_session
from app.main import app
from app.models import Card, CardProgress


NOW = datetime(2026, 1, 15, 12, 0, 0)


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_card(session):
    counter = {"n": 0}

    def _make_card(question=None, answer="Answer", category="general"):
        counter["n"] += 1
        card = Card(
            question=question or f"Question {counter['n']}?",
            answer=answer,
            category=category
        )
        session.add(card)
        session.commit()
        session.refresh(card)
        return card

    return _make_card


@pytest.fixture
def make_progress(session):
    def _make_progress(card, next_review_at, interval=1, ease_factor=2.5, review_count=1):
        progress = CardProgress(
            card_id=card.id,
            interval=interval,
            ease_factor=ease_factor,
            review_count=review_count,
            next_review_at=next_review_at,
            last_reviewed_at=next_review_at - timedelta(days=interval)
        )
        session.add(progress)
        session.commit()
        session.refresh(progress)
        return progress

    return _make_progress
