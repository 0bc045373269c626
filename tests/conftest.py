"""
Pytest configuration and shared fixtures.
"""

import os
import uuid
from typing import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.dependencies import (
    get_billing_store,
    get_identity_client,
    get_invoice_client,
    get_task_store,
)
from app.main import app
from app.services.identity_client import IdentityClient
from app.services.invoice_client import InvoiceClient
from tests.fakes import InMemoryBillingStore, InMemoryTaskStore, identity_transport


ADMIN_ID = "admin-1"
WORKER_ID = "worker-1"
USERS = {
    ADMIN_ID: {"id": ADMIN_ID, "role": "admin"},
    WORKER_ID: {"id": WORKER_ID, "role": "user"},
}


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")
    config.addinivalue_line("markers", "db: requires database")
    config.addinivalue_line("markers", "server: requires running HTTP server")


def pytest_collection_modifyitems(config, items):
    run_db = os.environ.get("RUN_DB_TESTS") == "1"
    run_server = os.environ.get("RUN_SERVER_TESTS") == "1"

    skip_db = pytest.mark.skip(reason="db tests skipped by default; set RUN_DB_TESTS=1 to enable")
    skip_server = pytest.mark.skip(reason="server tests skipped by default; set RUN_SERVER_TESTS=1 to enable")

    for item in items:
        if "db" in item.keywords and not run_db:
            item.add_marker(skip_db)
        if "server" in item.keywords and not run_server:
            item.add_marker(skip_server)


@pytest.fixture
def task_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture
def billing_store() -> InMemoryBillingStore:
    return InMemoryBillingStore()


@pytest.fixture
def client(task_store, billing_store) -> Iterator[TestClient]:
    """
    TestClient wired to in-memory stores.

    Invoices are issued by calling this same app's billing intake over an
    in-process ASGI transport; roles come from the USERS table above.
    """
    secret = settings.TASK_SERVICE_SECRET

    def invoice_client() -> InvoiceClient:
        return InvoiceClient(
            "http://billing.test",
            secret,
            transport=httpx.ASGITransport(app=app),
        )

    def identity_client() -> IdentityClient:
        return IdentityClient("http://identity.test", transport=identity_transport(USERS))

    app.dependency_overrides[get_task_store] = lambda: task_store
    app.dependency_overrides[get_billing_store] = lambda: billing_store
    app.dependency_overrides[get_invoice_client] = invoice_client
    app.dependency_overrides[get_identity_client] = identity_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def new_id() -> uuid.UUID:
    return uuid.uuid4()
