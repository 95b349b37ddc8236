from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import Field, model_validator

from stockroom.schemas.common import CamelModel, check_stock_range


class TransactionType(str, Enum):
    IN = "in"
    OUT = "out"


# Schema for creating an inventory item
class InventoryCreate(CamelModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=0)
    location: str = Field(min_length=1)
    min_stock: Optional[int] = Field(None, ge=0)
    max_stock: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_stock_levels(self):
        check_stock_range(self.min_stock, self.max_stock)
        return self


# Quantity is not part of the update schema; stock changes go through StockUpdate
class InventoryUpdate(CamelModel):
    location: Optional[str] = Field(None, min_length=1)
    min_stock: Optional[int] = Field(None, ge=0)
    max_stock: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_stock_levels(self):
        check_stock_range(self.min_stock, self.max_stock)
        return self


class StockUpdate(CamelModel):
    quantity: int = Field(ge=0)
    reason: str = Field(min_length=1)


class InventoryItemInDB(CamelModel):
    id: str
    product_id: str
    quantity: int = Field(ge=0)
    min_stock: Optional[int] = None
    max_stock: Optional[int] = None
    location: str
    last_updated: datetime
    created_at: datetime
    updated_at: datetime


class ProductSummary(CamelModel):
    id: str
    name: str
    sku: str
    price: float
    cost: float
    min_stock: int
    max_stock: int


# Inventory item with its product attached (null when the product is gone)
class InventoryItemWithProduct(InventoryItemInDB):
    product: Optional[ProductSummary] = None


class TransactionInDB(CamelModel):
    id: str
    inventory_id: str
    type: TransactionType
    quantity: int = Field(ge=0)
    reason: str
    user_id: Optional[str] = None
    created_at: datetime
