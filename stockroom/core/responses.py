import math
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(data: Any = None, message: str = "Success", status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": True,
            "message": message,
            "data": jsonable_encoder(data, by_alias=True),
        },
    )


def error_response(message: str = "Error occurred", status_code: int = 500, **extra: Any) -> JSONResponse:
    content = {"success": False, "error": message}
    content.update(jsonable_encoder(extra))
    return JSONResponse(status_code=status_code, content=content)


def paginate(items: list, page: int, limit: int) -> list:
    """Return the slice of ``items`` for a 1-based page."""
    start = (page - 1) * limit
    return items[start:start + limit]


def paginated_response(data: list, page: int, limit: int, total: int, message: Optional[str] = None) -> JSONResponse:
    total_pages = math.ceil(total / limit) if limit else 0
    content = {
        "success": True,
        "data": jsonable_encoder(data, by_alias=True),
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": total_pages,
            "hasNextPage": page < total_pages,
            "hasPrevPage": page > 1,
        },
    }
    if message:
        content["message"] = message
    return JSONResponse(content=content)
