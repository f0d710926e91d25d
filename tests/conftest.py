"""Shared pytest fixtures for adminrelay tests."""
import sys
sys.dont_write_bytecode = True

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from adminrelay.api.factory import create_app  # noqa: E402
from adminrelay.config import Settings  # noqa: E402

from .helpers import ADMIN_PHONE, FakeGraphClient  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(
        verify_token="test_verify_token",
        graph_api_token="test-graph-token",
        admin_phone_number=ADMIN_PHONE,
        graph_base_url="https://graph.example",
        graph_api_version="v18.0",
        http_timeout=5.0,
    )


@pytest.fixture
def fake_graph() -> FakeGraphClient:
    return FakeGraphClient()


@pytest.fixture
def client(settings, fake_graph) -> TestClient:
    """Test client wired to a fake Graph API gateway."""
    app = create_app(settings=settings, graph_client=fake_graph)
    return TestClient(app, raise_server_exceptions=False)
