"""Fixtures for route tests."""

import pytest
from fastapi.testclient import TestClient

from vidnest.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client backed by an all-mock container.

    Repositories are app-scoped in the mock container, so state persists
    across requests within one test.
    """
    app_instance = create_app(build_test_container())
    with TestClient(app_instance, raise_server_exceptions=False) as test_client:
        yield test_client
