"""Fixtures compartidas: SQLite en memoria, store, fábricas de agentes y cliente HTTP."""
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import Base, enable_sqlite_pragmas, get_db
from app.deps import get_current_identity
from app.domain.store import RecordStore
from app.models import (  # noqa: F401
    agent, checklist_item, badge, alert, document, license, carrier_appointment, contract,
)
from app.models.agent import Agent
from tests.factories import ACTING, NOW


@pytest.fixture
def engine():
    eng = enable_sqlite_pragmas(create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    ))
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def file_engine(tmp_path):
    """SQLite en archivo: cada sesión tiene su propia conexión (para pasadas concurrentes)."""
    eng = enable_sqlite_pragmas(create_engine(
        f"sqlite:///{tmp_path / 'onboarding.db'}",
        connect_args={"check_same_thread": False},
    ))
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db) -> RecordStore:
    return RecordStore(db)


@pytest.fixture
def make_agent(db):
    """Crea un agente; `age_days` indica hace cuántos días (respecto a NOW) empezó el onboarding."""
    counter = {"n": 0}

    def _make(age_days: float = 0, **fields) -> Agent:
        counter["n"] += 1
        values = {
            "first_name": "Agent",
            "last_name": str(counter["n"]),
            "email": f"agent{counter['n']}@example.com",
            "onboarding_status": "in_progress",
            "created_date": NOW - timedelta(days=age_days),
        }
        values.update(fields)
        row = Agent(**values)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row

    return _make


@pytest.fixture
def client(db):
    from app.main import app

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_current_identity] = lambda: ACTING
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
