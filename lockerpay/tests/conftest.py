from __future__ import annotations

import pytest
from sqlalchemy import text
from starlette.testclient import TestClient

from lockerpay.infrastructure.config import settings
from lockerpay.infrastructure.database import SessionLocal
from lockerpay.main import app
from lockerpay.tests.config_tests import CALLBACK_SECRET, CLIENT_TOKEN


@pytest.fixture(autouse=True)
def _configure_secrets(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "xendit_secret_api_key", CALLBACK_SECRET)
    monkeypatch.setattr(settings, "client_api_token", CLIENT_TOKEN)


@pytest.fixture(autouse=True)
def _clear_tables_before_each_test() -> None:
    """
    Ensure tests don't leak records into each other via the shared in-memory database.
    """
    db = SessionLocal()
    try:
        db.execute(text("DELETE FROM payments"))
        db.execute(text("DELETE FROM commands"))
        db.execute(text("DELETE FROM lockers"))
        db.commit()
    finally:
        db.close()


@pytest.fixture()
def api() -> TestClient:
    return TestClient(app)
