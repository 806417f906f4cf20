"""Application exception hierarchy and global FastAPI exception handlers."""

import traceback

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..messages import MessageCode, get_default_message
from pawmarket.utils.logger import get_logger

logger = get_logger(__name__)


class PawMarketException(Exception):
    """Base exception for the PawMarket API with unified message codes."""

    def __init__(
        self,
        message_code: MessageCode,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict | None = None,
        headers: dict | None = None,
        message: str | None = None,
    ):
        self.message_code = message_code
        self.status_code = status_code
        self.message: str = message or get_default_message(message_code)
        self.details = details or {}
        self.headers = headers or {}
        super().__init__(self.message)

    def to_response_dict(self) -> dict:
        """Convert exception to API response format."""
        return {
            "message_code": self.message_code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(PawMarketException):
    def __init__(
        self,
        message_code: MessageCode = MessageCode.NOT_FOUND,
        details: dict | None = None,
    ):
        super().__init__(message_code, status.HTTP_404_NOT_FOUND, details)


class InvalidStateError(PawMarketException):
    """Operation is not legal in the entity's current lifecycle state."""

    def __init__(
        self,
        message_code: MessageCode = MessageCode.INVALID_STATE,
        details: dict | None = None,
    ):
        super().__init__(message_code, status.HTTP_409_CONFLICT, details)


class NotAuthorizedError(PawMarketException):
    def __init__(
        self,
        message_code: MessageCode = MessageCode.NOT_AUTHORIZED,
        details: dict | None = None,
    ):
        super().__init__(message_code, status.HTTP_403_FORBIDDEN, details)


class DuplicateApplicationError(PawMarketException):
    def __init__(self, details: dict | None = None):
        super().__init__(
            MessageCode.DUPLICATE_APPLICATION, status.HTTP_409_CONFLICT, details
        )


class GatewayError(PawMarketException):
    """Payment processor call failed or timed out."""

    def __init__(self, reason: str, details: dict | None = None):
        self.reason = reason
        super().__init__(
            MessageCode.GATEWAY_ERROR,
            status.HTTP_502_BAD_GATEWAY,
            {"reason": reason, **(details or {})},
        )


class InputValidationError(PawMarketException):
    def __init__(
        self,
        message_code: MessageCode = MessageCode.VALIDATION_ERROR,
        details: dict | None = None,
        message: str | None = None,
    ):
        super().__init__(
            message_code, status.HTTP_400_BAD_REQUEST, details, message=message
        )


class PaymentVerificationFailed(PawMarketException):
    def __init__(self, details: dict | None = None):
        super().__init__(
            MessageCode.PAYMENT_VERIFICATION_FAILED,
            status.HTTP_400_BAD_REQUEST,
            details,
        )


def _serializable_errors(exc: RequestValidationError | ValidationError) -> list:
    serializable_errors = []
    for error in exc.errors():
        error_dict = dict(error)
        # ctx may carry the raw exception instance
        error_dict.pop("ctx", None)
        if "input" in error_dict and hasattr(error_dict["input"], "isoformat"):
            error_dict["input"] = error_dict["input"].isoformat()
        elif isinstance(error_dict.get("input"), bytes):
            error_dict["input"] = "<bytes>"
        serializable_errors.append(error_dict)
    return serializable_errors


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""

    @app.exception_handler(PawMarketException)
    async def pawmarket_exception_handler(
        request: Request, exc: PawMarketException
    ) -> JSONResponse:
        """Handle custom application exceptions."""
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            f"Application exception: {exc.message_code.value}",
            path=request.url.path,
            method=request.method,
            message_code=exc.message_code.value,
            details=exc.details,
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response_dict(),
            headers=exc.headers,
        )

    @app.exception_handler(HTTPException)
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle FastAPI and Starlette HTTP exceptions."""
        logger.warning(
            f"HTTP exception {exc.status_code}: {exc.detail}",
            path=request.url.path,
            method=request.method,
        )

        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message_code = MessageCode.NOT_FOUND
        elif exc.status_code == status.HTTP_401_UNAUTHORIZED:
            message_code = MessageCode.AUTH_REQUIRED
        elif exc.status_code < 500:
            message_code = MessageCode.BAD_REQUEST
        else:
            message_code = MessageCode.INTERNAL_ERROR

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "message_code": message_code,
                "message": str(exc.detail),
                "details": {"description": "HTTP exception occurred"},
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request validation errors."""
        logger.warning(
            "Validation error occurred",
            path=request.url.path,
            method=request.method,
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "message_code": MessageCode.INVALID_INPUT,
                "message": get_default_message(MessageCode.INVALID_INPUT),
                "details": {
                    "description": "Request validation failed",
                    "validation_errors": _serializable_errors(exc),
                },
            },
        )

    @app.exception_handler(ValidationError)
    async def pydantic_validation_exception_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        logger.warning(
            "Pydantic validation error occurred",
            path=request.url.path,
            method=request.method,
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "message_code": MessageCode.VALIDATION_ERROR,
                "message": get_default_message(MessageCode.VALIDATION_ERROR),
                "details": {"validation_errors": _serializable_errors(exc)},
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        """Handle SQLAlchemy database errors."""
        logger.error(
            f"Database error: {str(exc)}",
            path=request.url.path,
            method=request.method,
            exception_type=type(exc).__name__,
        )

        if isinstance(exc, IntegrityError):
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content={
                    "message_code": MessageCode.CONFLICT,
                    "message": get_default_message(MessageCode.CONFLICT),
                    "details": {"database_error": "Constraint violation"},
                },
            )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message_code": MessageCode.INTERNAL_ERROR,
                "message": "Database error occurred",
                "details": {"database_error": "Internal database error"},
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle all other unhandled exceptions."""
        if isinstance(exc, PawMarketException):
            return await pawmarket_exception_handler(request, exc)

        logger.error(
            f"Unhandled exception: {str(exc)}",
            path=request.url.path,
            method=request.method,
            exception_type=type(exc).__name__,
            traceback=traceback.format_exc(),
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message_code": MessageCode.INTERNAL_ERROR,
                "message": get_default_message(MessageCode.INTERNAL_ERROR),
                "details": {"error_type": type(exc).__name__},
            },
        )
