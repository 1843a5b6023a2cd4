import os

# Keep app.database off the default PostgreSQL URL during tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401  registers tables on Base.metadata
from app.config import settings
from app.database import Base, get_db
from app.main import app as fastapi_app
from app.schemas.product import ProductCreate
from app.services import catalog_service

OWNER = "user-1"
OTHER_OWNER = "user-2"


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fastapi_app) as test_client:
        yield test_client
    fastapi_app.dependency_overrides.clear()


def auth(owner_id: str = OWNER) -> dict:
    """Headers the upstream gateway would forward for owner_id"""
    return {settings.owner_header: owner_id}


@pytest.fixture
def make_product(db):
    def _make(name: str, price="10.00", owner_id: str = OWNER, description: str = None):
        return catalog_service.create_product(
            db,
            owner_id,
            ProductCreate(name=name, description=description or f"{name} description", price=Decimal(str(price))),
        )
    return _make
