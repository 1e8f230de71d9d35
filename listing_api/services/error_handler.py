"""
Error response rendering for every failure that reaches the application boundary.

Bodies always have the shape::

    {"error": {"code", "message", "timestamp", "request_id", "details"?}}

so clients can branch on ``code`` without caring which layer raised.
"""

from typing import Dict, Any, Optional, List, Sequence, Tuple
from datetime import datetime, timezone
from fastapi import Request, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from listing_api.utils.exceptions import APIException, ValidationError
import logging
import uuid

logger = logging.getLogger(__name__)


# Substring of the driver message -> client-facing explanation
CONSTRAINT_HINTS: Tuple[Tuple[str, str], ...] = (
    ("users.email", "Email is already registered"),
    ("uq_users_email", "Email is already registered"),
    ("unique", "Duplicate value for unique field"),
    ("foreign key", "Referenced record does not exist"),
    ("not null", "Required field cannot be empty"),
    ("check constraint", "Value does not meet validation requirements"),
)


class ErrorHandlerService:
    """Turns exceptions into logged, uniformly shaped JSON responses."""

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build the error envelope.

        Args:
            error_code: Stable machine-readable code
            message: Human-readable message
            details: Optional per-field entries
            request_id: Id of the request being answered

        Returns:
            Error body dictionary
        """
        body: Dict[str, Any] = {
            "code": error_code,
            "message": message,
            "timestamp": ErrorHandlerService._get_current_timestamp(),
        }
        if details:
            body["details"] = details
        if request_id:
            body["request_id"] = request_id
        return {"error": body}

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Render a domain exception with its own status, code and headers."""
        details = None
        if isinstance(exception, ValidationError) and exception.field_errors:
            details = exception.field_errors

        return ErrorHandlerService._respond(
            request,
            status_code=exception.status_code,
            error_code=exception.error_code or "API_ERROR",
            message=exception.detail,
            details=details,
            headers=exception.headers,
        )

    @staticmethod
    def handle_validation_error(
        errors: Sequence[Any],
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Render request or model validation failures as a 422.

        Args:
            errors: Entries as returned by ``.errors()`` on the validation exception
            request: Request being answered, if any
        """
        details = [
            {
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
                "input": error.get("input"),
            }
            for error in errors
        ]

        return ErrorHandlerService._respond(
            request,
            status_code=422,
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            details=jsonable_encoder(details),
        )

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Render a database failure without leaking driver text.
        Integrity violations map to 409, everything else to 500.
        """
        if isinstance(exception, IntegrityError):
            hint = ErrorHandlerService._extract_constraint_info(exception)
            return ErrorHandlerService._respond(
                request,
                status_code=409,
                error_code="INTEGRITY_ERROR",
                message=f"Constraint violation: {hint}" if hint else "Data integrity constraint violation",
                exc_info=exception,
            )

        return ErrorHandlerService._respond(
            request,
            status_code=500,
            error_code="DATABASE_ERROR",
            message="Database operation failed",
            exc_info=exception,
        )

    @staticmethod
    def handle_http_exception(
        exception: HTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Render framework HTTP errors such as unknown routes or wrong methods."""
        return ErrorHandlerService._respond(
            request,
            status_code=exception.status_code,
            error_code=f"HTTP_{exception.status_code}",
            message=str(exception.detail),
            headers=getattr(exception, "headers", None),
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Log the traceback; the client only sees a generic 500."""
        return ErrorHandlerService._respond(
            request,
            status_code=500,
            error_code="INTERNAL_SERVER_ERROR",
            message="An unexpected error occurred. Please try again later.",
            exc_info=exception,
        )

    @staticmethod
    def _respond(
        request: Optional[Request],
        status_code: int,
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
        exc_info: Optional[BaseException] = None
    ) -> JSONResponse:
        request_id = ErrorHandlerService._get_request_id(request)
        path = request.url.path if request else None

        # Server faults get a traceback; client faults a single warning line
        if status_code >= 500 or exc_info is not None:
            logger.error(
                f"[{request_id}] {status_code} {error_code} on {path}: "
                f"{type(exc_info).__name__ if exc_info else message}",
                exc_info=exc_info,
            )
        else:
            logger.warning(f"[{request_id}] {status_code} {error_code} on {path}: {message}")

        return JSONResponse(
            status_code=status_code,
            content=ErrorHandlerService.format_error_response(
                error_code=error_code,
                message=message,
                details=details,
                request_id=request_id,
            ),
            headers=headers,
        )

    @staticmethod
    def _get_request_id(request: Optional[Request] = None) -> str:
        """Reuse the id assigned by the request middleware, or mint one."""
        if request is not None:
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                return request_id
        return uuid.uuid4().hex[:8]

    @staticmethod
    def _get_current_timestamp() -> str:
        return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")

    @staticmethod
    def _extract_constraint_info(exception: IntegrityError) -> Optional[str]:
        """Map the driver's constraint message to a client-facing hint, or None."""
        error_msg = str(exception.orig).lower()

        for needle, hint in CONSTRAINT_HINTS:
            if needle in error_msg:
                return hint

        return None
