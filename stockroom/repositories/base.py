from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from stockroom.schemas.category import CategoryInDB
from stockroom.schemas.inventory import InventoryItemInDB, TransactionInDB, TransactionType
from stockroom.schemas.product import ProductInDB
from stockroom.schemas.supplier import SupplierInDB
from stockroom.schemas.user import UserInDB

T = TypeVar("T")


def classify_stock_change(old_quantity: int, new_quantity: int) -> Optional[Tuple[TransactionType, int]]:
    """
    Turn a quantity change into a ledger direction and magnitude.

    Returns None when the quantity does not change; no ledger entry is
    written for those.
    """
    delta = new_quantity - old_quantity
    if delta == 0:
        return None
    transaction_type = TransactionType.IN if delta > 0 else TransactionType.OUT
    return transaction_type, abs(delta)


def _contains(value: Optional[str], query: str) -> bool:
    return bool(value) and query in value.lower()


class Repository(ABC, Generic[T]):
    """
    Storage-agnostic accessor for one entity type.

    ``update`` only applies keys listed in ``updatable_fields``; anything
    else a caller passes is dropped.
    """

    updatable_fields: frozenset = frozenset()

    @abstractmethod
    def add(self, data: Dict[str, Any]) -> T:
        pass

    @abstractmethod
    def find_by_id(self, record_id: str) -> Optional[T]:
        pass

    @abstractmethod
    def update(self, record_id: str, updates: Dict[str, Any]) -> Optional[T]:
        pass

    @abstractmethod
    def delete(self, record_id: str) -> Optional[T]:
        pass

    @abstractmethod
    def get_all(self) -> List[T]:
        pass

    def _prepare_new(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return dict(data)

    def _allowed_updates(self, existing: T, updates: Dict[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in updates.items() if key in self.updatable_fields}


class UserRepository(Repository[UserInDB]):
    updatable_fields = frozenset({"first_name", "last_name", "email", "role", "password"})

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[UserInDB]:
        pass

    def _allowed_updates(self, existing: UserInDB, updates: Dict[str, Any]) -> Dict[str, Any]:
        allowed = super()._allowed_updates(existing, updates)
        if "email" in allowed:
            allowed["email"] = allowed["email"].lower()
        if "first_name" in allowed or "last_name" in allowed:
            first_name = allowed.get("first_name", existing.first_name)
            last_name = allowed.get("last_name", existing.last_name)
            allowed["name"] = f"{first_name} {last_name}"
        return allowed

    def _prepare_new(self, data: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(data, email=data["email"].lower())
        data.setdefault("name", f"{data['first_name']} {data['last_name']}")
        return data


class ProductRepository(Repository[ProductInDB]):
    updatable_fields = frozenset({
        "name", "sku", "description", "price", "cost", "category_id",
        "supplier_id", "min_stock", "max_stock", "unit", "status",
    })

    @abstractmethod
    def find_by_sku(self, sku: str) -> Optional[ProductInDB]:
        pass

    def get_by_category(self, category_id: str) -> List[ProductInDB]:
        return [p for p in self.get_all() if p.category_id == category_id]

    def get_by_supplier(self, supplier_id: str) -> List[ProductInDB]:
        return [p for p in self.get_all() if p.supplier_id == supplier_id]

    def search(self, query: str) -> List[ProductInDB]:
        """Case-insensitive substring match over name, sku and description."""
        query = query.lower()
        return [
            p for p in self.get_all()
            if _contains(p.name, query) or _contains(p.sku, query) or _contains(p.description, query)
        ]


class CategoryRepository(Repository[CategoryInDB]):
    updatable_fields = frozenset({"name", "description", "color", "status"})


class SupplierRepository(Repository[SupplierInDB]):
    updatable_fields = frozenset({"name", "contact_person", "email", "phone", "address", "status"})

    def search(self, query: str) -> List[SupplierInDB]:
        """Case-insensitive substring match over name, contact person and email."""
        query = query.lower()
        return [
            s for s in self.get_all()
            if _contains(s.name, query) or _contains(s.contact_person, query) or _contains(s.email, query)
        ]


class InventoryRepository(Repository[InventoryItemInDB]):
    # quantity only changes through update_quantity
    updatable_fields = frozenset({"location", "min_stock", "max_stock"})

    @abstractmethod
    def find_by_product_id(self, product_id: str) -> Optional[InventoryItemInDB]:
        pass

    @abstractmethod
    def update_quantity(self, inventory_id: str, quantity: int, reason: str,
                        user_id: Optional[str]) -> Optional[InventoryItemInDB]:
        """
        Set the stock level of an item and append the matching ledger entry.

        Returns the updated item, or None when the item does not exist (in
        which case nothing is written).
        """

    @abstractmethod
    def get_transactions(self, inventory_id: Optional[str] = None) -> List[TransactionInDB]:
        """Ledger entries in the order they were written, optionally for one item."""

    @abstractmethod
    def add_transaction(self, data: Dict[str, Any]) -> TransactionInDB:
        """Append a ledger entry as given, e.g. initial stock or seed history."""
