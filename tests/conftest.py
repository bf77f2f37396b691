"""
Shared test fixtures and utilities.
"""
import pytest
from mailing_dashboard.core import dependencies
from tests.helpers import FakeDataSource


@pytest.fixture
def fake_data_source():
    """Fresh FakeDataSource."""
    return FakeDataSource()


@pytest.fixture(autouse=True)
def clear_dependency_cache():
    """Give every test its own singletons."""
    dependencies.clear_caches()
    yield
    dependencies.clear_caches()
