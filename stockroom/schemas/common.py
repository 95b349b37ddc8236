from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class CamelModel(BaseModel):
    """Base for every schema: snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
        allow_inf_nan=False,
    )


def check_stock_range(min_stock: Optional[int], max_stock: Optional[int]):
    """A maximum of 0 or None means no ceiling."""
    if min_stock is not None and max_stock and min_stock > max_stock:
        raise ValueError("minStock cannot be greater than maxStock")
