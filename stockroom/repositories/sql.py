import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel
from sqlalchemy import func, inspect, or_
from sqlalchemy.orm import sessionmaker

from stockroom.models.category import Category
from stockroom.models.inventory import Inventory
from stockroom.models.product import Product
from stockroom.models.supplier import Supplier
from stockroom.models.transaction import Transaction
from stockroom.models.user import User
from stockroom.repositories.base import (
    CategoryRepository,
    InventoryRepository,
    ProductRepository,
    SupplierRepository,
    UserRepository,
    classify_stock_change,
)
from stockroom.schemas.category import CategoryInDB
from stockroom.schemas.common import RecordStatus, utcnow
from stockroom.schemas.inventory import InventoryItemInDB, TransactionInDB
from stockroom.schemas.product import ProductInDB
from stockroom.schemas.supplier import SupplierInDB
from stockroom.schemas.user import UserInDB

logger = logging.getLogger(__name__)


def _as_utc(value):
    # SQLite hands back naive datetimes
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _row_to_record(row, record_cls: Type[BaseModel]):
    values = {attr.key: _as_utc(getattr(row, attr.key)) for attr in inspect(type(row)).column_attrs}
    return record_cls.model_validate(values)


def _to_columns(data: Dict[str, Any]) -> Dict[str, Any]:
    # Plain string columns store the enum value; Enum columns take the member
    return {
        key: value.value if isinstance(value, RecordStatus) else value
        for key, value in data.items()
    }


def _like_pattern(query: str) -> str:
    """Substring pattern for ``ilike`` with the query's own wildcards escaped."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SqlRepository:
    """SQLAlchemy-backed storage; every call runs in its own session."""

    model: Type
    record_cls: Type[BaseModel]

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _to_record(self, row):
        return _row_to_record(row, self.record_cls)

    def add(self, data: Dict[str, Any]):
        now = utcnow()
        values = {"id": str(uuid.uuid4()), "created_at": now, "updated_at": now}
        values.update(self._prepare_new(data))
        row = self.model(**_to_columns(values))
        with self.session_factory() as db:
            db.add(row)
            db.commit()
            db.refresh(row)
            return self._to_record(row)

    def find_by_id(self, record_id: str):
        with self.session_factory() as db:
            row = db.get(self.model, record_id)
            return self._to_record(row) if row else None

    def update(self, record_id: str, updates: Dict[str, Any]):
        with self.session_factory() as db:
            row = db.get(self.model, record_id)
            if row is None:
                return None
            changes = self._allowed_updates(self._to_record(row), updates)
            for key, value in _to_columns(changes).items():
                setattr(row, key, value)
            row.updated_at = utcnow()
            db.commit()
            db.refresh(row)
            return self._to_record(row)

    def delete(self, record_id: str):
        with self.session_factory() as db:
            row = db.get(self.model, record_id)
            if row is None:
                return None
            removed = self._to_record(row)
            db.delete(row)
            db.commit()
            return removed

    def get_all(self) -> list:
        with self.session_factory() as db:
            rows = db.query(self.model).order_by(self.model.created_at).all()
            return [self._to_record(row) for row in rows]

    def _find_first(self, *criteria):
        with self.session_factory() as db:
            row = db.query(self.model).filter(*criteria).first()
            return self._to_record(row) if row else None


class SqlUserRepository(SqlRepository, UserRepository):
    model = User
    record_cls = UserInDB

    def find_by_email(self, email: str) -> Optional[UserInDB]:
        return self._find_first(func.lower(User.email) == email.lower())


class SqlProductRepository(SqlRepository, ProductRepository):
    model = Product
    record_cls = ProductInDB

    def find_by_sku(self, sku: str) -> Optional[ProductInDB]:
        return self._find_first(Product.sku == sku)

    def _filter(self, *criteria) -> List[ProductInDB]:
        with self.session_factory() as db:
            rows = db.query(Product).filter(*criteria).order_by(Product.created_at).all()
            return [self._to_record(row) for row in rows]

    def get_by_category(self, category_id: str) -> List[ProductInDB]:
        return self._filter(Product.category_id == category_id)

    def get_by_supplier(self, supplier_id: str) -> List[ProductInDB]:
        return self._filter(Product.supplier_id == supplier_id)

    def search(self, query: str) -> List[ProductInDB]:
        search_term = _like_pattern(query)
        return self._filter(or_(
            Product.name.ilike(search_term, escape="\\"),
            Product.sku.ilike(search_term, escape="\\"),
            Product.description.ilike(search_term, escape="\\"),
        ))


class SqlCategoryRepository(SqlRepository, CategoryRepository):
    model = Category
    record_cls = CategoryInDB


class SqlSupplierRepository(SqlRepository, SupplierRepository):
    model = Supplier
    record_cls = SupplierInDB

    def search(self, query: str) -> List[SupplierInDB]:
        search_term = _like_pattern(query)
        with self.session_factory() as db:
            rows = db.query(Supplier).filter(or_(
                Supplier.name.ilike(search_term, escape="\\"),
                Supplier.contact_person.ilike(search_term, escape="\\"),
                Supplier.email.ilike(search_term, escape="\\"),
            )).order_by(Supplier.created_at).all()
            return [self._to_record(row) for row in rows]


class SqlInventoryRepository(SqlRepository, InventoryRepository):
    model = Inventory
    record_cls = InventoryItemInDB

    def add(self, data: Dict[str, Any]) -> InventoryItemInDB:
        data = dict(data)
        data.setdefault("last_updated", utcnow())
        return super().add(data)

    def find_by_product_id(self, product_id: str) -> Optional[InventoryItemInDB]:
        return self._find_first(Inventory.product_id == product_id)

    def update_quantity(self, inventory_id: str, quantity: int, reason: str,
                        user_id: Optional[str]) -> Optional[InventoryItemInDB]:
        # The stock level and its ledger row commit together
        with self.session_factory() as db:
            item = db.get(Inventory, inventory_id)
            if item is None:
                return None

            old_quantity = item.quantity
            change = classify_stock_change(old_quantity, quantity)
            if change is None:
                return self._to_record(item)
            transaction_type, amount = change

            now = utcnow()
            item.quantity = quantity
            item.last_updated = now
            item.updated_at = now
            db.add(Transaction(
                id=str(uuid.uuid4()),
                inventory_id=inventory_id,
                type=transaction_type,
                quantity=amount,
                reason=reason,
                user_id=user_id,
                created_at=now,
            ))
            db.commit()
            db.refresh(item)
            updated = self._to_record(item)

        logger.info(f"Inventory {inventory_id}: {transaction_type.value} {amount} ({old_quantity} -> {quantity})")
        return updated

    def get_transactions(self, inventory_id: Optional[str] = None) -> List[TransactionInDB]:
        with self.session_factory() as db:
            query = db.query(Transaction)
            if inventory_id:
                query = query.filter(Transaction.inventory_id == inventory_id)
            rows = query.order_by(Transaction.created_at).all()
            return [_row_to_record(row, TransactionInDB) for row in rows]

    def add_transaction(self, data: Dict[str, Any]) -> TransactionInDB:
        values = {"id": str(uuid.uuid4()), "created_at": utcnow()}
        values.update(data)
        row = Transaction(**values)
        with self.session_factory() as db:
            db.add(row)
            db.commit()
            db.refresh(row)
            return _row_to_record(row, TransactionInDB)
