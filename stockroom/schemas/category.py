from datetime import datetime
from typing import Optional
from pydantic import Field

from stockroom.schemas.common import CamelModel, RecordStatus

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


class CategoryBase(CamelModel):
    name: str = Field(min_length=1)
    description: str = ""
    color: str = Field(pattern=HEX_COLOR_PATTERN)
    status: RecordStatus = RecordStatus.ACTIVE


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    status: Optional[RecordStatus] = None


class CategoryInDB(CategoryBase):
    id: str
    created_at: datetime
    updated_at: datetime
