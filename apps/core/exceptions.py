"""
Centralized API error handling.

Every NinjaAPI in the project calls register_exception_handlers() so that
errors leave the service in one of three shapes:

    400 {"errors": [{"location": ..., "field": ..., "message": ...}]}
    4xx {"message": ...}
    500 {"error": "Something went wrong!"}

Internal details (tracebacks, SQL) are logged, never returned.
"""
import logging
from typing import List

from django.http import HttpRequest
from ninja import NinjaAPI
from ninja.errors import HttpError, ValidationError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"


class StorageError(Exception):
    """Raised by stores when the underlying database fails."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Storage failure during {operation}")


def format_validation_errors(errors: List[dict]) -> List[dict]:
    """
    Flatten pydantic error dicts into field-level entries.

    ``loc`` looks like ("body", "payload", "title") or ("query", "limit");
    the first element is where the value came from, the last is the field.
    """
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        formatted.append({
            "location": loc[0] if loc else "",
            "field": loc[-1] if len(loc) > 1 else "",
            "message": error.get("msg", "Invalid value"),
        })
    return formatted


def register_exception_handlers(api: NinjaAPI) -> None:
    @api.exception_handler(ValidationError)
    def on_validation_error(request: HttpRequest, exc: ValidationError):
        return api.create_response(
            request, {"errors": format_validation_errors(exc.errors)}, status=400
        )

    @api.exception_handler(HttpError)
    def on_http_error(request: HttpRequest, exc: HttpError):
        if exc.status_code == 400:
            # Raised by ninja when the request body cannot be decoded
            return api.create_response(
                request,
                {"errors": [{"location": "body", "field": "", "message": str(exc)}]},
                status=400,
            )
        return api.create_response(request, {"message": str(exc)}, status=exc.status_code)

    @api.exception_handler(StorageError)
    def on_storage_error(request: HttpRequest, exc: StorageError):
        logger.error(f"{exc} ({request.method} {request.path})", exc_info=exc)
        return api.create_response(request, {"error": GENERIC_ERROR_MESSAGE}, status=500)

    @api.exception_handler(Exception)
    def on_unhandled_error(request: HttpRequest, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.path}", exc_info=exc)
        return api.create_response(request, {"error": GENERIC_ERROR_MESSAGE}, status=500)
