import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from stockroom.core.responses import error_response

logger = logging.getLogger(__name__)


def _field_name(loc) -> str:
    # Drop the "body" / "query" / "path" source marker
    parts = [str(part) for part in loc[1:]] if len(loc) > 1 else [str(part) for part in loc]
    return ".".join(parts)


def _clean_message(msg: str) -> str:
    prefix = "Value error, "
    return msg[len(prefix):] if msg.startswith(prefix) else msg


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            message = f"Cannot {request.method} {request.url.path}"
            return error_response("Route not found", 404, message=message)
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = [
            {"field": _field_name(error.get("loc", ())), "message": _clean_message(error.get("msg", ""))}
            for error in exc.errors()
        ]
        return error_response("Validation failed", 400, details=details)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)

        settings = request.app.state.settings
        if settings.is_development:
            return error_response("Internal Server Error", 500, stack="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
        return error_response("Internal Server Error", 500)
