# tests/conftest.py

"""
Shared fixtures for the Product Service tests.
Tests run against an in-memory SQLite database unless DATABASE_URL is already
set. Each test runs within its own database transaction for isolation,
which is rolled back after the test completes.
"""

import logging
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from product_api.db import Base, SessionLocal, engine, get_db  # noqa: E402
from product_api.main import app  # noqa: E402

# Suppress noisy logs from SQLAlchemy/FastAPI during tests for cleaner output
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.WARNING)
logging.getLogger("fastapi").setLevel(logging.WARNING)
logging.getLogger("product_api.main").setLevel(logging.WARNING)


@pytest.fixture(scope="session", autouse=True)
def setup_database_for_tests():
    # Drop first so data left by an earlier run against a real database is gone
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """
    Provides a transactional database session for each test function and
    overrides the app's `get_db` dependency to use it. Everything the test
    writes, through the API or directly, is rolled back afterwards.
    """
    connection = engine.connect()
    transaction = connection.begin()
    db = SessionLocal(bind=connection)

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    try:
        yield db
    finally:
        db.close()
        transaction.rollback()
        connection.close()
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def client(db_session):
    """
    Provides a TestClient bound to the per-test transaction.
    The TestClient runs the app's lifespan (table creation) on entry.
    """
    with TestClient(app) as test_client:
        yield test_client
