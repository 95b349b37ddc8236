from datetime import datetime
from typing import Optional
from pydantic import Field, model_validator

from stockroom.schemas.common import CamelModel, RecordStatus, check_stock_range

# Base schema for Product shared properties
class ProductBase(CamelModel):
    name: str = Field(min_length=1)
    sku: str = Field(min_length=1)
    description: str = ""
    price: float = Field(ge=0)
    cost: float = Field(ge=0)
    category_id: str = Field(min_length=1)
    supplier_id: str = Field(min_length=1)
    min_stock: int = Field(0, ge=0)
    max_stock: int = Field(0, ge=0)
    unit: str = "pcs"
    status: RecordStatus = RecordStatus.ACTIVE

# Schema for creating a new Product
class ProductCreate(ProductBase):
    @model_validator(mode="after")
    def check_stock_levels(self):
        check_stock_range(self.min_stock, self.max_stock)
        return self

# Schema for updating an existing Product; only these fields can change
class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    sku: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    cost: Optional[float] = Field(None, ge=0)
    category_id: Optional[str] = Field(None, min_length=1)
    supplier_id: Optional[str] = Field(None, min_length=1)
    min_stock: Optional[int] = Field(None, ge=0)
    max_stock: Optional[int] = Field(None, ge=0)
    unit: Optional[str] = None
    status: Optional[RecordStatus] = None

    @model_validator(mode="after")
    def check_stock_levels(self):
        check_stock_range(self.min_stock, self.max_stock)
        return self

# Schema for Product in storage (returned to client)
class ProductInDB(ProductBase):
    id: str
    created_at: datetime
    updated_at: datetime


class CategorySummary(CamelModel):
    id: str
    name: str
    color: str


class SupplierSummary(CamelModel):
    id: str
    name: str

# Schema for Product with its category and supplier attached
class ProductWithRelations(ProductInDB):
    category: Optional[CategorySummary] = None
    supplier: Optional[SupplierSummary] = None
