import logging
import threading
import uuid
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel

from stockroom.repositories.base import (
    CategoryRepository,
    InventoryRepository,
    ProductRepository,
    SupplierRepository,
    UserRepository,
    classify_stock_change,
)
from stockroom.schemas.category import CategoryInDB
from stockroom.schemas.common import utcnow
from stockroom.schemas.inventory import InventoryItemInDB, TransactionInDB
from stockroom.schemas.product import ProductInDB
from stockroom.schemas.supplier import SupplierInDB
from stockroom.schemas.user import UserInDB

logger = logging.getLogger(__name__)


class InMemoryRepository:
    """
    Dict-backed storage shared by the in-memory repositories.

    Records are kept in insertion order and handed out as copies, so callers
    cannot change stored state without going through the repository.
    """

    record_cls: Type[BaseModel]

    def __init__(self):
        self._records: Dict[str, BaseModel] = {}
        self._lock = threading.Lock()

    def add(self, data: Dict[str, Any]):
        now = utcnow()
        values = {"created_at": now, "updated_at": now}
        values.update(self._prepare_new(data))
        values.setdefault("id", str(uuid.uuid4()))
        record = self.record_cls(**values)
        with self._lock:
            self._records[record.id] = record
        return record.model_copy()

    def find_by_id(self, record_id: str):
        record = self._records.get(record_id)
        return record.model_copy() if record else None

    def update(self, record_id: str, updates: Dict[str, Any]):
        with self._lock:
            existing = self._records.get(record_id)
            if existing is None:
                return None
            changes = self._allowed_updates(existing, updates)
            changes["updated_at"] = utcnow()
            updated = existing.model_copy(update=changes)
            self._records[record_id] = updated
        return updated.model_copy()

    def delete(self, record_id: str):
        with self._lock:
            removed = self._records.pop(record_id, None)
        return removed

    def get_all(self) -> list:
        return [record.model_copy() for record in list(self._records.values())]

    def _find_first(self, **criteria):
        for record in list(self._records.values()):
            if all(getattr(record, key) == value for key, value in criteria.items()):
                return record.model_copy()
        return None


class InMemoryUserRepository(InMemoryRepository, UserRepository):
    record_cls = UserInDB

    def find_by_email(self, email: str) -> Optional[UserInDB]:
        return self._find_first(email=email.lower())


class InMemoryProductRepository(InMemoryRepository, ProductRepository):
    record_cls = ProductInDB

    def find_by_sku(self, sku: str) -> Optional[ProductInDB]:
        return self._find_first(sku=sku)


class InMemoryCategoryRepository(InMemoryRepository, CategoryRepository):
    record_cls = CategoryInDB


class InMemorySupplierRepository(InMemoryRepository, SupplierRepository):
    record_cls = SupplierInDB


class InMemoryInventoryRepository(InMemoryRepository, InventoryRepository):
    record_cls = InventoryItemInDB

    def __init__(self):
        super().__init__()
        self._transactions: List[TransactionInDB] = []

    def add(self, data: Dict[str, Any]) -> InventoryItemInDB:
        data = dict(data)
        data.setdefault("last_updated", utcnow())
        return super().add(data)

    def find_by_product_id(self, product_id: str) -> Optional[InventoryItemInDB]:
        return self._find_first(product_id=product_id)

    def update_quantity(self, inventory_id: str, quantity: int, reason: str,
                        user_id: Optional[str]) -> Optional[InventoryItemInDB]:
        with self._lock:
            item = self._records.get(inventory_id)
            if item is None:
                return None

            change = classify_stock_change(item.quantity, quantity)
            if change is None:
                return item.model_copy()
            transaction_type, amount = change

            now = utcnow()
            updated = item.model_copy(update={"quantity": quantity, "last_updated": now, "updated_at": now})
            self._records[inventory_id] = updated
            self._transactions.append(TransactionInDB(
                id=str(uuid.uuid4()),
                inventory_id=inventory_id,
                type=transaction_type,
                quantity=amount,
                reason=reason,
                user_id=user_id,
                created_at=now,
            ))

        logger.info(f"Inventory {inventory_id}: {transaction_type.value} {amount} ({item.quantity} -> {quantity})")
        return updated.model_copy()

    def get_transactions(self, inventory_id: Optional[str] = None) -> List[TransactionInDB]:
        transactions = list(self._transactions)
        if inventory_id:
            transactions = [t for t in transactions if t.inventory_id == inventory_id]
        return [t.model_copy() for t in transactions]

    def add_transaction(self, data: Dict[str, Any]) -> TransactionInDB:
        values = {"id": str(uuid.uuid4()), "created_at": utcnow()}
        values.update(data)
        transaction = TransactionInDB(**values)
        with self._lock:
            self._transactions.append(transaction)
        return transaction.model_copy()
