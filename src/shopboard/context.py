"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from .config import BaseConfig
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database
from .infra.repositories import (
    SQLModelProductRepository,
    SQLModelPurchaseRepository,
    SQLModelSaleRepository,
    SQLModelSalespersonRepository,
    SQLModelSettingsRepository,
)
from .services import targets as targets_service
from .services.sales_calculator import SalesTargets


@dataclass
class AppContext:
    """Configuration, session factory and repositories shared by the web and CLI layers."""

    config: BaseConfig
    session_factory: SessionFactory

    sale_repo: SQLModelSaleRepository
    purchase_repo: SQLModelPurchaseRepository
    product_repo: SQLModelProductRepository
    salesperson_repo: SQLModelSalespersonRepository
    settings_repo: SQLModelSettingsRepository

    # Wall clock; replaced in tests to pin "today".
    clock: Callable[[], datetime] = field(default=datetime.now)

    @property
    def default_targets(self) -> SalesTargets:
        return SalesTargets.from_mapping(self.config.DEFAULT_SALES_TARGETS)

    def sales_targets(self) -> SalesTargets:
        return targets_service.load_targets(self.settings_repo, defaults=self.default_targets)

    def now(self) -> datetime:
        return self.clock()


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    return AppContext(
        config=config,
        session_factory=session_factory,
        sale_repo=SQLModelSaleRepository(session_factory),
        purchase_repo=SQLModelPurchaseRepository(session_factory),
        product_repo=SQLModelProductRepository(session_factory),
        salesperson_repo=SQLModelSalespersonRepository(session_factory),
        settings_repo=SQLModelSettingsRepository(session_factory),
    )
