# tests/test_db.py

"""
Tests for the startup table creation and its connection retries.
"""

import pytest
from sqlalchemy.exc import OperationalError

from product_api import db


def connection_refused():
    return OperationalError("CREATE TABLE products", {}, Exception("connection refused"))


@pytest.fixture
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr(db.time, "sleep", calls.append)
    return calls


def test_init_db_retries_until_database_is_up(monkeypatch, sleeps):
    attempts = []

    def create_all(bind):
        attempts.append(bind)
        if len(attempts) < 3:
            raise connection_refused()

    monkeypatch.setattr(db.Base.metadata, "create_all", create_all)

    db.init_db(max_retries=5, retry_delay_seconds=2)

    assert len(attempts) == 3
    assert attempts[-1] is db.engine
    assert sleeps == [2, 2]


def test_init_db_gives_up_after_max_retries(monkeypatch, sleeps):
    def create_all(bind):
        raise connection_refused()

    monkeypatch.setattr(db.Base.metadata, "create_all", create_all)

    with pytest.raises(OperationalError):
        db.init_db(max_retries=3, retry_delay_seconds=1)

    assert sleeps == [1, 1]
