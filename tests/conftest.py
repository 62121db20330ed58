"""Pytest configuration and fixtures."""

import os
import pytest

from core import create_container, get_settings
from builder import MemoryStorage, Page, PagePersistence, PageModelStore
from builder.themes import MODERN

from factories import node


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ['BUILDER_STORAGE_BACKEND'] = 'memory'


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    return get_settings()


@pytest.fixture
def di_container():
    """Dependency injection container for testing."""
    return create_container()


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
def storage():
    """Empty in-memory key-value storage."""
    return MemoryStorage()


@pytest.fixture
def persistence(storage):
    return PagePersistence(storage)


@pytest.fixture
def fixed_clock():
    """Millisecond clock frozen at a known instant."""
    return lambda: 1_700_000_000_000


@pytest.fixture
def store(persistence, fixed_clock):
    """Empty store with a frozen copy-id clock."""
    return PageModelStore(persistence=persistence, clock=fixed_clock)


@pytest.fixture
def sample_page():
    """Page with a nested tree.

    a
    b
      b1
        b1a
      b2
    c
    """
    return Page(
        id="landing",
        name="Landing",
        slug="landing",
        theme=MODERN,
        components=[
            node("a", type="hero", x=0, y=0, title="Hi"),
            node(
                "b",
                type="container",
                children=[
                    node("b1", type="container", children=[node("b1a", text="deep")]),
                    node("b2", x=5, y=5),
                ],
            ),
            node("c", type="newsletter"),
        ],
    )


@pytest.fixture
def loaded_store(store, sample_page):
    """Store whose current page is ``sample_page``."""
    store.set_current_page(sample_page)
    return store


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def sample_products():
    """Five products; exactly two match 'shirt' (one by name, one by category)."""
    return [
        {"id": "p1", "name": "Organic Cotton Shirt", "price": "39.99", "category": "Apparel",
         "description": "Soft and breathable"},
        {"id": "p2", "name": "Denim Jacket", "price": "189.99", "category": "Apparel",
         "description": "Sustainable denim"},
        {"id": "p3", "name": "Linen Tee", "price": "29.50", "category": "Shirts"},
        {"id": "p4", "name": "Coffee Mug", "price": "12", "category": "Kitchen"},
        {"id": "p5", "name": "Rose Face Mist", "price": "45.99", "category": "Skincare",
         "description": "Hydrating mist"},
    ]
