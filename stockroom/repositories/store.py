import logging
from dataclasses import dataclass

from stockroom.core.config import Settings
from stockroom.repositories.base import (
    CategoryRepository,
    InventoryRepository,
    ProductRepository,
    SupplierRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class Store:
    """The repositories backing one running application."""
    users: UserRepository
    products: ProductRepository
    categories: CategoryRepository
    suppliers: SupplierRepository
    inventory: InventoryRepository

    def is_empty(self) -> bool:
        return not self.users.get_all()


def build_memory_store() -> Store:
    from stockroom.repositories.memory import (
        InMemoryCategoryRepository,
        InMemoryInventoryRepository,
        InMemoryProductRepository,
        InMemorySupplierRepository,
        InMemoryUserRepository,
    )

    return Store(
        users=InMemoryUserRepository(),
        products=InMemoryProductRepository(),
        categories=InMemoryCategoryRepository(),
        suppliers=InMemorySupplierRepository(),
        inventory=InMemoryInventoryRepository(),
    )


def build_sql_store(database_url: str) -> Store:
    from stockroom.database.base import create_tables
    from stockroom.database.session import build_engine, build_session_factory
    from stockroom.repositories.sql import (
        SqlCategoryRepository,
        SqlInventoryRepository,
        SqlProductRepository,
        SqlSupplierRepository,
        SqlUserRepository,
    )

    engine = build_engine(database_url)
    create_tables(engine)
    session_factory = build_session_factory(engine)

    return Store(
        users=SqlUserRepository(session_factory),
        products=SqlProductRepository(session_factory),
        categories=SqlCategoryRepository(session_factory),
        suppliers=SqlSupplierRepository(session_factory),
        inventory=SqlInventoryRepository(session_factory),
    )


def build_store(settings: Settings) -> Store:
    if settings.STORAGE_BACKEND == "sql":
        if not settings.DATABASE_URL:
            raise ValueError("DATABASE_URL is required for the sql storage backend")
        logger.info("Using SQL storage backend")
        return build_sql_store(settings.DATABASE_URL)
    logger.info("Using in-memory storage backend")
    return build_memory_store()
