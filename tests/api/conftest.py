# tests/api/conftest.py
"""
Shared fixtures for API tests.
Uses FastAPI's TestClient with dependency overrides to inject a mock aggregator.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from kubesummary.api.app import create_app
from kubesummary.api.dependencies import get_aggregator
from kubesummary.core.aggregator import SummaryAggregator
from kubesummary.core.projector import project
from kubesummary.core.registry import MetricsRegistry


@pytest.fixture
def mock_aggregator():
    """Returns a mock SummaryAggregator with empty results."""
    aggregator = MagicMock(spec=SummaryAggregator)
    aggregator.collect_one = AsyncMock(return_value=MetricsRegistry())
    aggregator.collect_all = AsyncMock(return_value=MetricsRegistry())
    return aggregator


@pytest.fixture
def app(mock_aggregator):
    app = create_app()
    app.dependency_overrides[get_aggregator] = lambda: mock_aggregator
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Creates a TestClient with the aggregator dependency overridden."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def summary_registry(summary):
    """A registry holding the projected fixture summary."""
    registry = MetricsRegistry()
    registry.write(project(summary))
    return registry
