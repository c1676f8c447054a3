"""Shared pytest fixtures."""

import pytest
from fastapi.testclient import TestClient

from uni_research.app import create_app
from uni_research.config import configuration


@pytest.fixture
def app():
    """Fresh application built from config/config.yml."""
    return create_app(configuration)


@pytest.fixture
def client(app):
    """Test client with the lifespan running.

    Server exceptions are not re-raised, so a response is asserted even if an
    error slips past the envelope handlers.
    """
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
