"""Test configuration and fixtures."""

import os

# Must be set before csa_market reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite://")

from collections.abc import Callable, Generator
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from csa_market.core.db import Base, get_db_session
from csa_market.core.security import create_access_token
from csa_market.main import app
from csa_market.models.schema import Farm

FARMER_ID = "user_farmer"
OTHER_FARMER_ID = "user_other"
BASE_TIME = datetime(2025, 6, 1, 12, 0, 0, 123456)


@pytest.fixture
def test_db():
    """Create an in-memory test database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(test_db) -> Generator[Session]:
    """Create a test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_db)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient]:
    """Create a test client with database override."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(FARMER_ID)}"}


@pytest.fixture
def other_auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(OTHER_FARMER_ID)}"}


@pytest.fixture
def make_farm(db_session: Session) -> Callable[..., Farm]:
    """Factory that inserts a farm; each call is one minute newer than the last."""
    counter = {"n": 0}

    def _make(name: str | None = None, **kwargs) -> Farm:
        n = counter["n"]
        counter["n"] += 1
        kwargs.setdefault("id", f"farm_{n:03d}")
        kwargs.setdefault("user_id", FARMER_ID)
        kwargs.setdefault("created_at", BASE_TIME + timedelta(minutes=n))
        farm = Farm(name=name or f"Farm {n:03d}", **kwargs)
        db_session.add(farm)
        db_session.commit()
        db_session.refresh(farm)
        return farm

    return _make


@pytest.fixture
def base_time() -> datetime:
    """Creation time of the first farm made by ``make_farm``."""
    return BASE_TIME
