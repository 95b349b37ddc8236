from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from stockroom.schemas.common import CamelModel, RecordStatus


class SupplierBase(CamelModel):
    name: str = Field(min_length=1)
    contact_person: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)
    address: str = ""
    status: RecordStatus = RecordStatus.ACTIVE


class SupplierCreate(SupplierBase):
    pass


class SupplierUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    contact_person: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    status: Optional[RecordStatus] = None


class SupplierInDB(SupplierBase):
    id: str
    created_at: datetime
    updated_at: datetime
