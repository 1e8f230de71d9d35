"""
Tests for error handling.
Covers the exception taxonomy, the status mapping and error response formatting.
"""

import json
import pytest
from unittest.mock import Mock
from fastapi import HTTPException
from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, OperationalError

from listing_api.services.error_handler import ErrorHandlerService
from listing_api.utils.exceptions import (
    APIException,
    ConflictError,
    DuplicateResourceError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    InvalidProductKeyError,
    InvalidTokenError,
    ListingNotFoundError,
    ListingOwnershipError,
    NotFoundError,
    TokenExpiredError,
    UnauthorizedError,
    ValidationError
)


# One representative per error kind
ERROR_KINDS = {
    "not_found": NotFoundError("Listing", 1),
    "conflict": ConflictError("Duplicate"),
    "invalid_credentials": InvalidCredentialsError(),
    "unauthorized": UnauthorizedError(),
    "validation": ValidationError("Bad input"),
}


class TestExceptionTaxonomy:
    """Test exception classes and their status mapping."""

    def test_kind_to_status_mapping_is_injective(self):
        statuses = [error.status_code for error in ERROR_KINDS.values()]
        codes = [error.error_code for error in ERROR_KINDS.values()]

        assert len(set(statuses)) == len(ERROR_KINDS)
        assert len(set(codes)) == len(ERROR_KINDS)

    @pytest.mark.parametrize(
        "error, status_code, error_code",
        [
            (NotFoundError("Listing", 1), 404, "NOT_FOUND"),
            (ListingNotFoundError(1), 404, "NOT_FOUND"),
            (ConflictError("Duplicate"), 409, "CONFLICT"),
            (DuplicateResourceError("User", "a@example.com"), 409, "CONFLICT"),
            (InvalidCredentialsError(), 400, "INVALID_CREDENTIALS"),
            (UnauthorizedError(), 401, "UNAUTHORIZED"),
            (InsufficientPermissionsError("create listings"), 401, "UNAUTHORIZED"),
            (ListingOwnershipError(), 401, "UNAUTHORIZED"),
            (InvalidTokenError(), 401, "UNAUTHORIZED"),
            (TokenExpiredError(), 401, "UNAUTHORIZED"),
            (InvalidProductKeyError(), 401, "UNAUTHORIZED"),
            (ValidationError("Bad input"), 422, "VALIDATION_ERROR"),
        ]
    )
    def test_status_and_code(self, error: APIException, status_code: int, error_code: str):
        assert error.status_code == status_code
        assert error.error_code == error_code

    def test_not_found_message(self):
        assert ListingNotFoundError(7).detail == "Listing not found with ID: 7"
        assert NotFoundError("Listings").detail == "Listings not found"

    def test_unauthorized_carries_bearer_challenge(self):
        assert ListingOwnershipError().headers == {"WWW-Authenticate": "Bearer"}


class TestErrorHandlerService:
    """Test error handler service functionality."""

    def test_format_error_response(self):
        response = ErrorHandlerService.format_error_response(
            error_code="TEST_ERROR",
            message="Test error message",
            details=[{"field": "test", "message": "Test field error"}],
            request_id="test123"
        )

        assert response["error"]["code"] == "TEST_ERROR"
        assert response["error"]["message"] == "Test error message"
        assert response["error"]["request_id"] == "test123"
        assert response["error"]["details"][0]["field"] == "test"
        assert response["error"]["timestamp"].endswith("Z")

    def test_handle_api_exception(self):
        response = ErrorHandlerService.handle_api_exception(ListingNotFoundError(3))

        assert response.status_code == 404
        data = json.loads(response.body)
        assert data["error"]["code"] == "NOT_FOUND"
        assert data["error"]["message"] == "Listing not found with ID: 3"
        assert "request_id" in data["error"]

    def test_handle_api_exception_reuses_request_id(self):
        request = Mock()
        request.state.request_id = "req-42"
        request.url.path = "/api/v1/listings"

        response = ErrorHandlerService.handle_api_exception(UnauthorizedError(), request)

        data = json.loads(response.body)
        assert data["error"]["request_id"] == "req-42"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_validation_error_details(self):
        error = ValidationError("Bad range", field_errors=[{"field": "min_price", "message": "too big"}])

        data = json.loads(ErrorHandlerService.handle_api_exception(error).body)

        assert data["error"]["details"] == [{"field": "min_price", "message": "too big"}]

    def test_handle_validation_error(self):
        class Sample(BaseModel):
            price: float

        with pytest.raises(PydanticValidationError) as exc_info:
            Sample(price="not-a-number")

        response = ErrorHandlerService.handle_validation_error(exc_info.value.errors())

        assert response.status_code == 422
        data = json.loads(response.body)
        assert data["error"]["code"] == "VALIDATION_ERROR"
        assert data["error"]["details"][0]["field"] == "price"

    def test_handle_integrity_error(self):
        error = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))

        response = ErrorHandlerService.handle_database_error(error)

        assert response.status_code == 409
        data = json.loads(response.body)
        assert data["error"]["code"] == "INTEGRITY_ERROR"
        assert data["error"]["message"] == "Constraint violation: Email is already registered"

    def test_handle_other_database_error_hides_details(self):
        error = OperationalError("SELECT", {}, Exception("connection refused on 10.0.0.5"))

        response = ErrorHandlerService.handle_database_error(error)

        assert response.status_code == 500
        assert "10.0.0.5" not in response.body.decode()

    def test_handle_http_exception(self):
        response = ErrorHandlerService.handle_http_exception(HTTPException(status_code=405, detail="Method Not Allowed"))

        assert response.status_code == 405
        assert json.loads(response.body)["error"]["code"] == "HTTP_405"

    def test_handle_unexpected_error_is_generic(self):
        response = ErrorHandlerService.handle_unexpected_error(RuntimeError("secret internals"))

        assert response.status_code == 500
        body = response.body.decode()
        assert "secret internals" not in body
        assert json.loads(body)["error"]["code"] == "INTERNAL_SERVER_ERROR"
