"""Pytest configuration and shared fixtures for ShopBoard tests.

Provides an isolated SQLite database per test, repository fixtures, record
factories and a Flask test client with a pinned clock.
"""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from shopboard import models  # noqa: F401
from shopboard.infra.database import create_session_factory
from shopboard.infra.repositories import (
    SQLModelProductRepository,
    SQLModelPurchaseRepository,
    SQLModelSaleRepository,
    SQLModelSalespersonRepository,
    SQLModelSettingsRepository,
)
from shopboard.models import Purchase, Sale, Salesperson

# "Now" used by tests that need a deterministic clock (a Friday).
FIXED_NOW = datetime(2024, 3, 15, 15, 0)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test."""

    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Transactional session factory matching the application's."""

    return create_session_factory(db_engine)


@pytest.fixture
def sale_repo(session_factory):
    return SQLModelSaleRepository(session_factory)


@pytest.fixture
def purchase_repo(session_factory):
    return SQLModelPurchaseRepository(session_factory)


@pytest.fixture
def product_repo(session_factory):
    return SQLModelProductRepository(session_factory)


@pytest.fixture
def salesperson_repo(session_factory):
    return SQLModelSalespersonRepository(session_factory)


@pytest.fixture
def settings_repo(session_factory):
    return SQLModelSettingsRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def salesperson_factory(salesperson_repo):
    """Factory for creating persisted salespersons."""

    def _create_salesperson(name: str = "佐藤", is_active: bool = True) -> Salesperson:
        return salesperson_repo.create(Salesperson(name=name, is_active=is_active))

    return _create_salesperson


@pytest.fixture
def sale_factory(sale_repo):
    """Factory for creating persisted sales.

    Returns:
        Callable: Function that creates and persists Sale instances
    """

    def _create_sale(
        amount: int = 1000,
        date: datetime | None = None,
        product_name: str = "CBDオイル",
        category: str = "CBD",
        quantity: int = 1,
        salesperson_id: int | None = None,
    ) -> Sale:
        return sale_repo.create(
            Sale(
                date=date or FIXED_NOW,
                product_name=product_name,
                category=category,
                quantity=quantity,
                amount=amount,
                salesperson_id=salesperson_id,
            )
        )

    return _create_sale


@pytest.fixture
def purchase_factory(purchase_repo):
    """Factory for creating persisted purchases."""

    def _create_purchase(
        amount: int = 500, date: datetime | None = None, product_name: str = "CBDオイル"
    ) -> Purchase:
        return purchase_repo.create(
            Purchase(date=date or FIXED_NOW, product_name=product_name, amount=amount)
        )

    return _create_purchase


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch):
    """Flask app backed by a throwaway data directory and a pinned clock."""

    monkeypatch.setenv("SHOPBOARD_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SHOPBOARD_DATABASE_URL", f"sqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setenv("SHOPBOARD_DEV_MODE", "true")
    monkeypatch.delenv("SHOPBOARD_WEEK_START", raising=False)

    from shopboard import create_app

    flask_app = create_app("testing")
    flask_app.extensions["shopboard"].clock = lambda: FIXED_NOW
    yield flask_app


@pytest.fixture
def ctx(app):
    return app.extensions["shopboard"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()
