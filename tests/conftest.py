"""
Shared test fixtures and pytest configuration.
"""

import pytest

from density_finder.correlation import CorrelationEngine
from density_finder.table_materializer import materialized_pages


@pytest.fixture
def engine():
    """Fresh engine on the built-in Table 53 grid."""
    return CorrelationEngine()


@pytest.fixture(scope="session")
def pages():
    """The default materialized table (~31k engine calls, so built once)."""
    return materialized_pages()
