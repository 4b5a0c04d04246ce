"""Application error definitions and FastAPI handlers."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from core.log import get_logger

log = get_logger("api")


class AppException(Exception):
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST, code: str = "error"):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class NotFoundException(AppException):
    def __init__(self, message: str = "Record not found"):
        super().__init__(message=message, status_code=status.HTTP_404_NOT_FOUND, code="not_found")


class ValidationAppException(AppException):
    def __init__(self, message: str = "Invalid data"):
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, code="validation_error")


class ConflictException(AppException):
    def __init__(self, message: str = "Record is referenced by other records"):
        super().__init__(message=message, status_code=status.HTTP_409_CONFLICT, code="conflict")


def _format_error(detail: str, code: str):
    return {"error": detail, "code": code}


def _describe_validation_errors(errors) -> str:
    fields = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        if loc:
            fields.append(".".join(loc))
    if not fields:
        return "Submitted data could not be validated"
    return "Missing or invalid fields: " + ", ".join(sorted(set(fields)))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        return JSONResponse(status_code=exc.status_code, content=_format_error(exc.message, exc.code))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_format_error(_describe_validation_errors(exc.errors()), "validation_error"),
        )

    @app.exception_handler(ValidationError)
    async def pydantic_validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_format_error(_describe_validation_errors(exc.errors()), "validation_error"),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        log.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_format_error("Database operation failed", "persistence_error"),
        )
