"""
Error taxonomy for the user records API.

Every error carries the HTTP status it maps to; `register_exception_handlers`
renders them as {"status": "error", "message": ...}.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error."


class AppError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class ManagerInactiveOrMissing(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, manager_id: str):
        super().__init__(f"Manager with ID {manager_id} is not active or does not exist.")
        self.manager_id = manager_id


class DuplicateField(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str | None = None):
        if field:
            message = f"A user with this {field} already exists."
        else:
            message = "A user with this mob_num or pan_num already exists."
        super().__init__(message)
        self.field = field


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class UnsupportedBulkOperation(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Individual updates can only be performed on a single user."):
        super().__init__(message)


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE):
        super().__init__(message)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "message": message})


def _format_request_errors(exc: RequestValidationError) -> str:
    missing: list[str] = []
    invalid: list[str] = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        name = ".".join(loc) or "body"
        if err.get("type") == "missing":
            missing.append(name)
        else:
            invalid.append(f"{name} ({err.get('msg')})")

    if missing:
        return f"Missing required keys: {', '.join(missing)}"
    return f"Invalid request body: {'; '.join(invalid)}"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _format_request_errors(exc)
    logger.warning("%s %s rejected: %s", request.method, request.url.path, message)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # detail goes to the log only
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    err = InternalError()
    return error_response(err.status_code, err.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    err = InternalError()
    return error_response(err.status_code, err.message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
