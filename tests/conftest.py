import os

import pytest

os.environ.setdefault("ENVIRONMENT", "test")


@pytest.fixture()
def storage():
    from database import MemStorage

    return MemStorage()


@pytest.fixture()
def app(storage):
    from main import create_app

    return create_app(storage)


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture()
def coordinator(client):
    from cart import CartCoordinator

    coord = CartCoordinator(client, session_id="sess-test-001")
    coord.refresh()
    return coord
